"""Integration settings schema."""

from pydantic import Field

from core.schemas.base_schema_model import BaseSchemaModel
from core.schemas.integration.smtp_config import SmtpConfig
from core.schemas.integration.whatsapp_config import WhatsAppConfig


class IntegrationSettings(BaseSchemaModel):
    """Snapshot of every third-party channel configuration."""

    smtp: SmtpConfig = Field(default_factory=SmtpConfig)
    whatsapp: WhatsAppConfig = Field(default_factory=WhatsAppConfig)
