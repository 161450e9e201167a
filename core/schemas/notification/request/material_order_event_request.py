"""Request schema for material order events."""

from uuid import UUID

from pydantic import Field

from core.schemas.base_schema_model import BaseSchemaModel


class MaterialOrderEventRequest(BaseSchemaModel):
    """Request schema for material order created/updated notifications."""

    order_id: UUID = Field(..., description="Material order ID")
