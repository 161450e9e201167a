"""Probe result for one backing service."""

from pydantic import Field

from core.enums.health_status import HealthStatus
from core.schemas.base_schema_model import BaseSchemaModel


class DependencyHealth(BaseSchemaModel):
    """Result of probing the database or the Redis instance behind the queue.

    Results are cached briefly by the health service, so ``response_time_ms``
    belongs to the probe that produced the cached value.
    """

    healthy: bool = Field(..., description="Whether the probe succeeded")
    status: HealthStatus = Field(..., description="Probe outcome")
    message: str = Field(..., description="Probe summary including any driver error")
    response_time_ms: float | None = Field(
        None, description="Probe duration in milliseconds"
    )
