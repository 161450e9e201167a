"""Run one periodic notification job inline."""

from django.core.management.base import BaseCommand, CommandError

from core.exceptions import UnknownJobError
from core.services.scheduler_service import notification_scheduler


class Command(BaseCommand):
    """Run a scheduler job by name, e.g. ``run_notification_job admin-digest``."""

    help = "Run a notification scheduler job immediately"

    def add_arguments(self, parser):
        """Add the job name argument."""
        parser.add_argument(
            "job_name",
            choices=sorted(notification_scheduler.jobs()),
            help="Job to run",
        )

    def handle(self, *_args, **options):
        """Run the job and report how many notifications it created."""
        job_name = options["job_name"]
        try:
            created = notification_scheduler.run_job(job_name)
        except UnknownJobError as e:
            raise CommandError(str(e)) from e

        self.stdout.write(
            self.style.SUCCESS(f"{job_name}: created {created} notification(s)")
        )
