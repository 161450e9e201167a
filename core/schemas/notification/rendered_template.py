"""Rendered template schema."""

from pydantic import Field

from core.schemas.base_schema_model import BaseSchemaModel


class RenderedTemplate(BaseSchemaModel):
    """Template fields with every placeholder substituted."""

    subject: str = Field(..., description="Rendered subject")
    email_html: str = Field(..., description="Rendered email HTML body")
    inapp_text: str = Field(..., description="Rendered in-app text")
