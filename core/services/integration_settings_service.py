"""Loader for runtime integration credentials."""

import structlog

from core.models import INTEGRATIONS_SETTINGS_KEY, IntegrationSettingsRecord
from core.schemas.integration import IntegrationSettings

logger = structlog.get_logger(__name__)


def load_integration_settings() -> IntegrationSettings:
    """Return the current SMTP and WhatsApp configuration.

    A missing settings row means every integration is disabled.
    """
    record = IntegrationSettingsRecord.objects.filter(
        settings_key=INTEGRATIONS_SETTINGS_KEY
    ).first()
    if record is None:
        logger.debug("integration_settings_missing")
        return IntegrationSettings()

    return IntegrationSettings.model_validate(
        {"smtp": record.smtp or {}, "whatsapp": record.whatsapp or {}}
    )
