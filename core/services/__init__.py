"""Services for the core app."""

from core.services.health_service import HealthService, health_service

# Note: services that touch the ORM are not exported here to avoid import
# cycles during Django app initialization. Import directly from the module.

__all__ = [
    "HealthService",
    "health_service",
]
