"""Schemas for the liveness and readiness probes."""

from core.schemas.health.dependency_health import DependencyHealth
from core.schemas.health.response import LivenessResponse, ReadinessResponse

__all__ = ["DependencyHealth", "LivenessResponse", "ReadinessResponse"]
