"""WhatsApp channel provider backed by the Twilio Messages API."""

from typing import Any

from django.conf import settings

import requests
import structlog

from core.exceptions import ProviderNotConfiguredError, WhatsAppDeliveryError
from core.schemas.integration import WhatsAppConfig
from core.services.template_renderer import render_text

logger = structlog.get_logger(__name__)

_WHATSAPP_PREFIX = "whatsapp:"


class WhatsAppProvider:
    """Sends approved WhatsApp bodies through Twilio."""

    provider_name = "twilio-wa"

    def send(
        self,
        to_e164: str,
        template_body: str,
        variables: dict[str, Any],
        message_id: str,
        config: WhatsAppConfig,
    ) -> dict[str, Any]:
        """Render ``template_body`` with ``variables`` and send it.

        Args:
            to_e164: Recipient phone number in E.164 format
            template_body: Unrendered approved message body
            variables: Template variables
            message_id: Notification id, used for log correlation
            config: WhatsApp configuration

        Returns:
            ``{"provider": "twilio-wa", "sid": ..., "status": ...}``

        Raises:
            ProviderNotConfiguredError: If the configuration is incomplete
            WhatsAppDeliveryError: If Twilio rejects the message or is unreachable
        """
        if not config.is_configured:
            raise ProviderNotConfiguredError(self.provider_name)

        url = (
            f"{settings.TWILIO_API_BASE_URL.rstrip('/')}/2010-04-01/Accounts/"
            f"{config.account_sid}/Messages.json"
        )
        data = {
            "From": _whatsapp_address(config.from_number),
            "To": _whatsapp_address(to_e164),
            "Body": render_text(template_body, variables),
        }

        logger.info(
            "whatsapp_send_requested",
            notification_id=message_id,
            to=to_e164,
        )

        try:
            response = requests.post(
                url,
                data=data,
                auth=(config.account_sid, config.auth_token),
                timeout=settings.WHATSAPP_TIMEOUT_SECONDS,
            )
        except requests.RequestException as e:
            logger.error(
                "whatsapp_request_failed",
                notification_id=message_id,
                error=str(e),
            )
            raise WhatsAppDeliveryError(str(e)) from e

        if response.status_code >= 400:
            error_message = _error_message(response)
            logger.error(
                "whatsapp_send_rejected",
                notification_id=message_id,
                status_code=response.status_code,
                error=error_message,
            )
            raise WhatsAppDeliveryError(error_message, status_code=response.status_code)

        body = response.json()
        logger.info(
            "whatsapp_sent",
            notification_id=message_id,
            sid=body.get("sid"),
            status=body.get("status"),
        )
        return {
            "provider": self.provider_name,
            "sid": body.get("sid"),
            "status": body.get("status"),
        }


def _whatsapp_address(number: str) -> str:
    if number.startswith(_WHATSAPP_PREFIX):
        return number
    return f"{_WHATSAPP_PREFIX}{number}"


def _error_message(response: requests.Response) -> str:
    try:
        return response.json().get("message") or response.text
    except ValueError:
        return response.text or f"HTTP {response.status_code}"


whatsapp_provider = WhatsAppProvider()
