"""Probe outcome for the database and the Redis delivery queue."""

from enum import Enum


class HealthStatus(str, Enum):
    """Result of a single dependency probe.

    ``UNHEALTHY`` means the dependency refused or dropped the connection;
    ``ERROR`` covers anything the probe did not anticipate.
    """

    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"
    ERROR = "error"
