from django.contrib import admin
from django.urls import include, path

from .health_check_view import health

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/", include("api.urls")),
    path("health", health),
]
