"""Channel providers used by the delivery worker."""

from core.services.providers.email_provider import EmailProvider, email_provider
from core.services.providers.inapp_provider import InAppProvider, inapp_provider
from core.services.providers.whatsapp_provider import (
    WhatsAppProvider,
    whatsapp_provider,
)

__all__ = [
    "EmailProvider",
    "InAppProvider",
    "WhatsAppProvider",
    "email_provider",
    "inapp_provider",
    "whatsapp_provider",
]
