"""WhatsApp integration configuration schema."""

from pydantic import Field

from core.schemas.base_schema_model import BaseSchemaModel


class WhatsAppConfig(BaseSchemaModel):
    """Twilio WhatsApp credentials edited by Super Admins."""

    enabled: bool = Field(False, description="Whether WhatsApp delivery is enabled")
    account_sid: str | None = Field(None, description="Twilio account SID")
    auth_token: str | None = Field(None, description="Twilio auth token")
    from_number: str | None = Field(
        None, description="Approved WhatsApp sender number in E.164"
    )

    @property
    def is_configured(self) -> bool:
        """Whether the WhatsApp channel can be dispatched with this config."""
        return bool(
            self.enabled and self.account_sid and self.auth_token and self.from_number
        )
