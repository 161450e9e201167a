"""Root URL configuration for the workforce notification service."""

from django.urls import include, path

urlpatterns = [
    path("api/v1/notify/", include("core.urls")),
]
