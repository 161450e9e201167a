"""Readiness probe body."""

from typing import Literal

from pydantic import Field

from core.schemas.base_schema_model import BaseSchemaModel
from core.schemas.health.dependency_health import DependencyHealth


class ReadinessResponse(BaseSchemaModel):
    """Readiness of the API process.

    ``ready`` stays true while a dependency is down: notifications are durable
    rows, and queued deliveries resume once Redis is reachable again.
    """

    ready: bool = Field(True, description="Whether the pod should receive traffic")
    status: Literal["ready", "degraded"] = Field(
        ..., description="'degraded' when any dependency probe failed"
    )
    degraded: bool = Field(False, description="Whether a dependency probe failed")
    dependencies: dict[str, DependencyHealth] = Field(
        default_factory=dict, description="Probe results keyed by dependency name"
    )
