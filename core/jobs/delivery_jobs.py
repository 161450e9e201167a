"""Background job delivering one notification.

Enqueued by the fan-out writer once per created notification, either
immediately or at ``schedule_at`` through rq-scheduler. RQ delivers jobs at
least once; the delivery worker leaves terminal notifications untouched, so
re-running a job is harmless.
"""

import structlog

from core.exceptions import NotificationNotFoundError, TemplateNotFoundError
from core.logging import clear_request_id, set_request_id
from core.services.delivery_service import delivery_service

logger = structlog.get_logger(__name__)


def deliver_notification_job(notification_id: str) -> str | None:
    """Deliver a notification from an RQ worker.

    Args:
        notification_id: UUID of the notification to deliver.

    Returns:
        The notification's status after the attempt, or None when its
        template is missing.

    Raises:
        NotificationNotFoundError: If the notification does not exist; RQ
            records the job as failed.
    """
    set_request_id(f"job-{notification_id}")
    try:
        outcome = delivery_service.deliver(notification_id)
    except NotificationNotFoundError:
        logger.error("notification_not_found", notification_id=notification_id)
        raise
    except TemplateNotFoundError as e:
        # Permanent: the notification is already marked failed
        logger.error(
            "notification_template_missing",
            notification_id=notification_id,
            template_key=e.template_key,
        )
        return None
    finally:
        clear_request_id()

    logger.info(
        "delivery_job_complete",
        notification_id=notification_id,
        status=outcome.status,
        already_processed=outcome.already_processed,
    )
    return outcome.status
