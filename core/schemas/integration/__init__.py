"""Integration settings schemas."""

from core.schemas.integration.integration_settings import IntegrationSettings
from core.schemas.integration.request import SmtpTestRequest
from core.schemas.integration.smtp_config import SmtpConfig
from core.schemas.integration.whatsapp_config import WhatsAppConfig

__all__ = ["IntegrationSettings", "SmtpConfig", "SmtpTestRequest", "WhatsAppConfig"]
