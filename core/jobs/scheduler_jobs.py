"""RQ entry points for the periodic notification jobs.

Registered as cron jobs by the ``register_notification_schedules`` management
command.
"""

import structlog

from core.logging import clear_request_id, set_request_id
from core.services.scheduler_service import notification_scheduler

logger = structlog.get_logger(__name__)


def _run(job_name: str) -> int:
    set_request_id(f"job-{job_name}")
    try:
        created = notification_scheduler.run_job(job_name)
    finally:
        clear_request_id()

    logger.info("scheduled_job_complete", job=job_name, created_count=created)
    return created


def enqueue_daily_reminders_job() -> int:
    """Create today's timesheet reminders and draft expiry reminders."""
    return _run("daily-reminders")


def admin_morning_digest_job() -> int:
    """Create the admin digest of submissions waiting for approval."""
    return _run("admin-digest")


def certificate_expirations_job() -> int:
    """Create expiry alerts for certificates running out within 30 days."""
    return _run("certificate-expirations")


SCHEDULED_JOBS = {
    "daily-reminders": enqueue_daily_reminders_job,
    "admin-digest": admin_morning_digest_job,
    "certificate-expirations": certificate_expirations_job,
}
