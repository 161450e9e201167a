"""Request schema for timesheet submission events."""

from uuid import UUID

from pydantic import Field

from core.schemas.base_schema_model import BaseSchemaModel


class TimesheetEventRequest(BaseSchemaModel):
    """Request schema for timesheet submitted/reviewed notifications.

    The main application posts the submission id after creating or reviewing
    a submission; everything else is read from the submission row.
    """

    submission_id: UUID = Field(..., description="Timesheet submission ID")
