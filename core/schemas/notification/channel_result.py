"""Per-channel delivery result schema."""

from pydantic import Field

from core.enums import Channel, ChannelResultStatus
from core.schemas.base_schema_model import BaseSchemaModel


class ChannelResult(BaseSchemaModel):
    """Outcome of dispatching one notification to one channel."""

    channel: Channel = Field(..., description="Channel that was attempted")
    status: ChannelResultStatus = Field(..., description="ok or error")
    provider: str | None = Field(None, description="Provider that handled it")
    message_id: str | None = Field(
        None, description="Provider message id (SMTP id, Twilio SID, inbox id)"
    )
    error: str | None = Field(None, description="Error message when failed")

    @property
    def ok(self) -> bool:
        """Whether the channel succeeded."""
        return self.status == ChannelResultStatus.OK.value
