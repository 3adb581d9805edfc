import logging

from django.db import DatabaseError, connection
from django.http import HttpResponse

logger = logging.getLogger(__name__)

def health(request):
    """
    Health check endpoint for Load Balancer.
    Reports unhealthy when the database cannot be reached, geocoding is not checked.
    """
    try:
        connection.ensure_connection()
    except DatabaseError as e:
        logger.error(f"Health check failed to reach the database: {e}")
        return HttpResponse("DATABASE UNAVAILABLE", status=503, content_type="text/plain")

    return HttpResponse("OK", content_type="text/plain")
