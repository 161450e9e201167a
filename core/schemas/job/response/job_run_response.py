"""Scheduler job run response schema."""

from pydantic import Field

from core.schemas.base_schema_model import BaseSchemaModel


class JobRunResponse(BaseSchemaModel):
    """Result of running one scheduler job inline."""

    job: str = Field(..., description="Job name")
    created_count: int = Field(..., description="Notifications created by the run")
