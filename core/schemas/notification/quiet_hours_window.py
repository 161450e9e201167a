"""Quiet hours window schema."""

from pydantic import Field

from core.schemas.base_schema_model import BaseSchemaModel


class QuietHoursWindow(BaseSchemaModel):
    """Daily window during which non-urgent notifications are suppressed.

    Boundaries are ``HH:mm`` wall-clock times in the user's timezone. A window
    whose end precedes its start spans midnight.
    """

    start: str | None = Field(None, description="Window start, HH:mm")
    end: str | None = Field(None, description="Window end, HH:mm")
