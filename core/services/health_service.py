"""Health check service with short-lived result caching."""

import logging
import time

from django.conf import settings
from django.db import connection
from django.db.utils import OperationalError

import django_rq

from core.enums import HealthStatus
from core.schemas.health import (
    DependencyHealth,
    LivenessResponse,
    ReadinessResponse,
)

logger = logging.getLogger(__name__)


class HealthService:
    """Service for performing health checks with caching."""

    def __init__(self, cache_ttl_seconds: float = 5.0) -> None:
        """Initialize the health service.

        Args:
            cache_ttl_seconds: Time to live for cached health check results
        """
        self.cache_ttl_seconds = cache_ttl_seconds
        self._cache: dict[str, tuple[float, DependencyHealth]] = {}

    def get_liveness_status(self) -> LivenessResponse:
        """Get liveness status (always returns alive)."""
        return LivenessResponse()

    def get_readiness_status(self) -> ReadinessResponse:
        """Get readiness status with database and Redis health checks.

        Returns degraded (ready=True, degraded=True) when a dependency is down.
        Notifications already written stay durable in the database and the
        queue catches up once Redis returns, so the service stays in rotation.
        """
        dependencies = {
            "database": self.check_database_health(),
            "redis": self.check_redis_health(),
        }
        all_healthy = all(health.healthy for health in dependencies.values())

        return ReadinessResponse(
            ready=True,
            status="ready" if all_healthy else "degraded",
            degraded=not all_healthy,
            dependencies=dependencies,
        )

    def check_database_health(self) -> DependencyHealth:
        """Check database connectivity without executing a query."""
        return self._cached("database", self._probe_database)

    def check_redis_health(self) -> DependencyHealth:
        """Check the Redis instance backing the delivery queue."""
        return self._cached("redis", self._probe_redis)

    def _cached(self, name, probe) -> DependencyHealth:
        current_time = time.time()
        cached = self._cache.get(name)
        if cached is not None and (current_time - cached[0]) < self.cache_ttl_seconds:
            return cached[1]

        health = probe()
        self._cache[name] = (current_time, health)
        return health

    def _probe_database(self) -> DependencyHealth:
        start_time = time.perf_counter()
        try:
            connection.ensure_connection()
        except OperationalError as e:
            logger.warning("Database health check failed: %s", e)
            return DependencyHealth(
                healthy=False,
                status=HealthStatus.UNHEALTHY,
                message=f"Database connection failed: {e!s}",
                response_time_ms=_elapsed_ms(start_time),
            )
        except Exception as e:
            logger.error("Unexpected error checking database: %s", e)
            return DependencyHealth(
                healthy=False,
                status=HealthStatus.ERROR,
                message=f"Unexpected error checking database: {e!s}",
                response_time_ms=_elapsed_ms(start_time),
            )

        return DependencyHealth(
            healthy=True,
            status=HealthStatus.HEALTHY,
            message="Database connection successful",
            response_time_ms=_elapsed_ms(start_time),
        )

    def _probe_redis(self) -> DependencyHealth:
        start_time = time.perf_counter()
        try:
            django_rq.get_connection(settings.NOTIFICATION_QUEUE_NAME).ping()
        except Exception as e:
            logger.warning("Redis health check failed: %s", e)
            return DependencyHealth(
                healthy=False,
                status=HealthStatus.ERROR,
                message=f"Redis connection failed: {e!s}",
                response_time_ms=_elapsed_ms(start_time),
            )

        return DependencyHealth(
            healthy=True,
            status=HealthStatus.HEALTHY,
            message="Redis connection successful",
            response_time_ms=_elapsed_ms(start_time),
        )


def _elapsed_ms(start_time: float) -> float:
    return (time.perf_counter() - start_time) * 1000


# Global health service instance
health_service = HealthService()
