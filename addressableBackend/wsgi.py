"""
WSGI config for the addressableBackend project.
"""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "addressableBackend.settings")

application = get_wsgi_application()
