"""Liveness probe body."""

from typing import Literal

from pydantic import Field

from core.schemas.base_schema_model import BaseSchemaModel


class LivenessResponse(BaseSchemaModel):
    """The process is up; no dependency is consulted."""

    status: Literal["alive"] = Field("alive", description="Always 'alive'")
