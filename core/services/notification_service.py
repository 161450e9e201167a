"""Notification service: durable fan-out of notification requests.

This module provides the NotificationService class which turns candidate
notification requests from scheduler jobs and event producers into durable
``Notification`` records and hands each one to the delivery queue:
- Candidates whose dedupe key already exists (or repeats in the batch) are dropped
- The rest are written in one transaction with status ``scheduled``
- After commit, one delivery job per record is enqueued (now or at ``schedule_at``)
"""

from collections.abc import Iterable
from uuid import UUID

from django.conf import settings
from django.db import transaction
from django.utils import timezone

import django_rq
import structlog

from core.enums import NotificationStatusEnum
from core.exceptions import NotificationNotFoundError
from core.models import Notification
from core.schemas.notification import NotificationRequest

logger = structlog.get_logger(__name__)

DELIVERY_JOB = "core.jobs.delivery_jobs.deliver_notification_job"


class NotificationService:
    """Service for creating notifications and queueing their delivery."""

    def __init__(self, queue_name: str | None = None) -> None:
        """Initialize notification service.

        Args:
            queue_name: RQ queue for delivery jobs (default:
                NOTIFICATION_QUEUE_NAME).
        """
        self.queue_name = queue_name or settings.NOTIFICATION_QUEUE_NAME

    def fanout_notifications(
        self,
        requests: Iterable[NotificationRequest],
    ) -> list[Notification]:
        """Persist every candidate that is not a duplicate.

        Duplicate detection happens twice: candidates are filtered against
        existing keys and each other up front, and the insert ignores rows
        that still collide on the unique ``dedupe_key`` (a concurrent run
        writing the same key in between).

        Args:
            requests: Candidate notifications.

        Returns:
            The records that were actually created, in input order.
        """
        candidates = list(requests)
        if not candidates:
            return []

        keys = {c.dedupe_key for c in candidates if c.dedupe_key}
        seen_keys = set()
        if keys:
            seen_keys = set(
                Notification.objects.filter(dedupe_key__in=keys).values_list(
                    "dedupe_key", flat=True
                )
            )

        records = []
        for candidate in candidates:
            if candidate.dedupe_key:
                if candidate.dedupe_key in seen_keys:
                    continue
                seen_keys.add(candidate.dedupe_key)
            records.append(self._build_record(candidate))

        if not records:
            logger.info(
                "notification_fanout_complete",
                candidate_count=len(candidates),
                created_count=0,
            )
            return []

        with transaction.atomic():
            Notification.objects.bulk_create(records, ignore_conflicts=True)
            persisted_ids = set(
                Notification.objects.filter(
                    notification_id__in=[record.notification_id for record in records]
                ).values_list("notification_id", flat=True)
            )
            created = [
                record for record in records if record.notification_id in persisted_ids
            ]

            if settings.NOTIFICATION_AUTO_QUEUE and created:
                transaction.on_commit(lambda: self._queue_all(created))

        logger.info(
            "notification_fanout_complete",
            candidate_count=len(candidates),
            created_count=len(created),
        )
        return created

    def dedupe_key_exists(self, key: str) -> bool:
        """Whether a notification with ``key`` has already been written."""
        return Notification.objects.filter(dedupe_key=key).exists()

    def queue_delivery(self, notification: Notification) -> None:
        """Enqueue the delivery job for one notification.

        Notifications scheduled in the future go through rq-scheduler; the
        rest are enqueued immediately.
        """
        notification_id = str(notification.notification_id)
        schedule_at = notification.schedule_at

        if schedule_at and schedule_at > timezone.now():
            scheduler = django_rq.get_scheduler(self.queue_name)
            scheduler.enqueue_at(schedule_at, DELIVERY_JOB, notification_id)
            logger.info(
                "notification_delivery_scheduled",
                notification_id=notification_id,
                schedule_at=schedule_at.isoformat(),
            )
            return

        django_rq.get_queue(self.queue_name).enqueue(DELIVERY_JOB, notification_id)
        logger.info("notification_delivery_queued", notification_id=notification_id)

    def get_notification(self, notification_id: UUID | str) -> Notification:
        """Get a notification by ID.

        Raises:
            NotificationNotFoundError: If no record exists. Malformed ids
                cannot match any record and raise the same error.
        """
        try:
            notification_uuid = UUID(str(notification_id))
        except ValueError as e:
            raise NotificationNotFoundError(notification_id) from e

        notification = Notification.objects.filter(
            notification_id=notification_uuid
        ).first()
        if notification is None:
            raise NotificationNotFoundError(notification_id)
        return notification

    def _queue_all(self, notifications: list[Notification]) -> None:
        for notification in notifications:
            self.queue_delivery(notification)

    @staticmethod
    def _build_record(candidate: NotificationRequest) -> Notification:
        return Notification(
            user_id=candidate.user_id,
            template_key=candidate.template_key,
            channels=list(candidate.channels),
            payload=candidate.payload,
            schedule_at=candidate.schedule_at,
            dedupe_key=candidate.dedupe_key,
            priority_high=candidate.priority_high,
            status=NotificationStatusEnum.SCHEDULED.value,
            attempts=0,
        )


notification_service = NotificationService()
