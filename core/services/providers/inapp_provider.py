"""In-app channel provider writing to the inbox table."""

from typing import Any
from uuid import UUID

import structlog

from core.models import InboxMessage

logger = structlog.get_logger(__name__)


class InAppProvider:
    """Stores the rendered in-app text as an unread inbox message."""

    provider_name = "inapp"

    def send(self, user_id: UUID, text: str, notification_id: UUID) -> dict[str, Any]:
        """Create the inbox message.

        Returns:
            ``{"provider": "inapp", "id": <inbox message id>}``
        """
        message = InboxMessage.objects.create(
            user_id=user_id,
            notification_id=notification_id,
            text=text,
            read=False,
        )
        logger.info(
            "inbox_message_created",
            message_id=str(message.message_id),
            notification_id=str(notification_id),
            user_id=str(user_id),
        )
        return {"provider": self.provider_name, "id": str(message.message_id)}


inapp_provider = InAppProvider()
