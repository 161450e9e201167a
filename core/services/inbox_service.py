"""Service for the caller's in-app inbox."""

from uuid import UUID

from django.core.exceptions import PermissionDenied
from django.db.models import QuerySet

import structlog

from core.auth.context import require_current_user
from core.exceptions import ResourceNotFoundError
from core.models import InboxMessage

logger = structlog.get_logger(__name__)


class InboxService:
    """Reads and updates the authenticated user's inbox messages.

    Every operation is scoped to the caller taken from the security context;
    messages of other users behave as if they did not exist.
    """

    def get_my_messages(self) -> QuerySet[InboxMessage]:
        """Return the caller's messages, newest first."""
        return self._my_messages().order_by("-created_at")

    def get_unread_count(self) -> int:
        """Return how many of the caller's messages are unread."""
        return self._my_messages().filter(read=False).count()

    def mark_read(self, message_id: UUID) -> int:
        """Mark one of the caller's messages as read.

        Returns:
            1 if the message changed from unread to read, else 0.

        Raises:
            ResourceNotFoundError: If the caller has no message with this id.
        """
        messages = self._my_messages().filter(message_id=message_id)
        if not messages.exists():
            raise ResourceNotFoundError("Inbox message", message_id)

        updated = messages.filter(read=False).update(read=True)
        logger.info("inbox_message_read", message_id=str(message_id), updated=updated)
        return updated

    def mark_all_read(self) -> int:
        """Mark every unread message of the caller as read.

        Returns:
            Number of messages updated.
        """
        updated = self._my_messages().filter(read=False).update(read=True)
        logger.info("inbox_marked_all_read", updated=updated)
        return updated

    @staticmethod
    def _my_messages() -> QuerySet[InboxMessage]:
        user = require_current_user()
        try:
            user_id = UUID(str(user.user_id))
        except ValueError as e:
            # Client-credential tokens carry a client id, not a user id
            raise PermissionDenied("Caller has no inbox") from e
        return InboxMessage.objects.filter(user_id=user_id)


inbox_service = InboxService()
