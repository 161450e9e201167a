"""Register the periodic notification jobs with rq-scheduler."""

from django.conf import settings
from django.core.management.base import BaseCommand

import django_rq
import structlog

from core.jobs.scheduler_jobs import SCHEDULED_JOBS

logger = structlog.get_logger(__name__)


class Command(BaseCommand):
    """Replace the cron registrations of every periodic notification job.

    Cron strings come from ``NOTIFICATION_JOB_SCHEDULES``. Existing
    registrations of the same functions are cancelled first, so the command
    can run on every deploy.
    """

    help = "Register notification scheduler jobs as rq-scheduler cron jobs"

    def handle(self, *_args, **_options):
        """Cancel stale registrations and register every job."""
        queue_name = settings.NOTIFICATION_QUEUE_NAME
        scheduler = django_rq.get_scheduler(queue_name)
        job_funcs = {
            f"{func.__module__}.{func.__name__}" for func in SCHEDULED_JOBS.values()
        }

        for job in scheduler.get_jobs():
            if job.func_name in job_funcs:
                scheduler.cancel(job)

        for job_name, func in SCHEDULED_JOBS.items():
            cron_string = settings.NOTIFICATION_JOB_SCHEDULES[job_name]
            scheduler.cron(
                cron_string,
                func=func,
                queue_name=queue_name,
                use_local_timezone=False,
            )
            logger.info(
                "notification_job_registered",
                job=job_name,
                cron=cron_string,
                queue=queue_name,
            )
            self.stdout.write(f"Registered {job_name} ({cron_string})")

        self.stdout.write(self.style.SUCCESS("Notification schedules registered"))
