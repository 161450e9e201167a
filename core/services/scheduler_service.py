"""Periodic notification producers.

Each job scans business state, builds candidate notification requests and
writes them with one fan-out call. Jobs are stateless and safe to run
repeatedly; deduplication keys keep reminders and certificate alerts from
being sent twice for the same day or certificate.
"""

from collections.abc import Callable
from datetime import UTC, date, datetime, timedelta

from django.utils import timezone as django_timezone

import structlog

from core.constants import scheduling, templates
from core.enums import NotificationCategory, SubmissionStatus, UserRole
from core.exceptions import UnknownJobError
from core.models import EmployeeCertificate, TimesheetSubmission, User
from core.schemas.notification import NotificationRequest
from core.services.audit_service import audit
from core.services.channel_policy import pick_channels
from core.services.notification_service import NotificationService, notification_service
from core.services.quiet_hours import resolve_timezone

logger = structlog.get_logger(__name__)


def human_date(value: datetime, timezone: str | None) -> str:
    """Short date in the user's timezone, e.g. ``Oct 16, 2026``."""
    return value.astimezone(resolve_timezone(timezone)).strftime("%b %d, %Y")


def long_date(value: date) -> str:
    """Long date without zero padding, e.g. ``October 6, 2026``."""
    return f"{value:%B} {value.day}, {value.year}"


class NotificationScheduler:
    """Builds and writes the notifications of the periodic jobs."""

    def __init__(self, service: NotificationService = notification_service) -> None:
        """Initialize the scheduler.

        Args:
            service: Fan-out writer that persists the candidates.
        """
        self.service = service

    def enqueue_daily_reminders(self, now: datetime | None = None) -> int:
        """Remind foremen to submit today's timesheet and flag stale drafts.

        Each foreman with a timezone gets one reminder scheduled for 18:30
        local time, unless that time has already passed today. Every draft
        older than two days produces an expiry reminder for its foreman.

        Returns:
            Number of notifications created.
        """
        now = now or django_timezone.now()
        foremen = list(
            User.objects.filter(role=UserRole.FOREMAN.value).exclude(timezone="")
        )

        candidates = []
        for foreman in foremen:
            zone = resolve_timezone(foreman.timezone)
            local_today = now.astimezone(zone).date()
            target = datetime.combine(
                local_today, scheduling.DAILY_REMINDER_LOCAL_TIME, tzinfo=zone
            ).astimezone(UTC)
            if now > target:
                continue

            dedupe_key = f"ts:due:{foreman.user_id}:{local_today.isoformat()}"
            if self.service.dedupe_key_exists(dedupe_key):
                continue

            candidates.append(
                NotificationRequest(
                    user_id=foreman.user_id,
                    template_key=templates.TS_REMIND_DUE,
                    channels=pick_channels(foreman, NotificationCategory.TIMESHEET),
                    schedule_at=target,
                    dedupe_key=dedupe_key,
                    payload={
                        "date": human_date(now, foreman.timezone),
                        "deepLink": templates.DEEP_LINK_TIMESHEET,
                    },
                )
            )

        foremen_by_id = {foreman.user_id: foreman for foreman in foremen}
        drafts = TimesheetSubmission.objects.filter(
            status=SubmissionStatus.DRAFT.value,
            submitted_at__lte=now - scheduling.DRAFT_EXPIRY_AGE,
        )
        for draft in drafts:
            foreman = foremen_by_id.get(draft.foreman_id)
            if foreman is None:
                continue
            candidates.append(
                NotificationRequest(
                    user_id=foreman.user_id,
                    template_key=templates.TS_DRAFT_EXPIRED,
                    channels=pick_channels(foreman, NotificationCategory.TIMESHEET),
                    schedule_at=now,
                    dedupe_key=f"ts:draft-expired:{draft.submission_id}",
                    payload={
                        "jobName": draft.job_name,
                        "date": draft.date,
                        "deepLink": templates.DEEP_LINK_SUBMISSIONS,
                    },
                )
            )

        created = self.service.fanout_notifications(candidates)
        audit("notify.schedule.foreman", count=len(created))
        logger.info(
            "daily_reminders_scheduled",
            candidate_count=len(candidates),
            created_count=len(created),
        )
        return len(created)

    def send_admin_morning_digest(self, now: datetime | None = None) -> int:
        """Tell every admin how many submissions have waited over 24 hours.

        Returns:
            Number of notifications created.
        """
        now = now or django_timezone.now()
        pending_count = TimesheetSubmission.objects.filter(
            status=SubmissionStatus.SUBMITTED.value,
            submitted_at__lte=now - scheduling.ADMIN_DIGEST_PENDING_AGE,
        ).count()

        if not pending_count:
            audit(
                "notify.schedule.adminDigest",
                count=0,
                reason="no_pending_submissions",
            )
            logger.info("admin_digest_skipped", reason="no_pending_submissions")
            return 0

        admins = User.objects.filter(role__in=UserRole.admin_roles())
        candidates = [
            NotificationRequest(
                user_id=admin.user_id,
                template_key=templates.ADMIN_DIGEST,
                channels=pick_channels(admin, NotificationCategory.TIMESHEET),
                schedule_at=now,
                payload={
                    "count": pending_count,
                    "range": scheduling.ADMIN_DIGEST_RANGE_LABEL,
                },
            )
            for admin in admins
        ]

        created = self.service.fanout_notifications(candidates)
        audit("notify.schedule.adminDigest", count=len(created))
        logger.info(
            "admin_digest_scheduled",
            pending_count=pending_count,
            created_count=len(created),
        )
        return len(created)

    def check_certificate_expirations(self, now: datetime | None = None) -> int:
        """Warn holders, their supervisors and admins about expiring certificates.

        A certificate qualifies when it expires between today and 30 days from
        today (UTC dates, both inclusive).

        Returns:
            Number of notifications created.
        """
        now = now or django_timezone.now()
        today = now.astimezone(UTC).date()
        horizon = today + timedelta(days=scheduling.CERTIFICATE_EXPIRY_WINDOW_DAYS)

        certificates = EmployeeCertificate.objects.filter(
            valid_until__gte=today,
            valid_until__lte=horizon,
        ).select_related("holder", "holder__supervisor")
        admins = list(User.objects.filter(role__in=UserRole.admin_roles()))

        candidates = []
        for certificate in certificates:
            holder = certificate.holder
            payload = {
                "employeeName": holder.full_name,
                "certificateName": certificate.name,
                "expiryDate": long_date(certificate.valid_until),
                "daysUntilExpiry": str((certificate.valid_until - today).days),
            }

            cert_id = certificate.certificate_id
            recipients = [(holder, f"cert:{holder.user_id}:{cert_id}")]
            if holder.supervisor is not None:
                supervisor = holder.supervisor
                recipients.append(
                    (supervisor, f"cert:{supervisor.user_id}:{cert_id}")
                )
            recipients.extend(
                (admin, f"cert:admin:{admin.user_id}:{cert_id}")
                for admin in admins
            )

            candidates.extend(
                NotificationRequest(
                    user_id=recipient.user_id,
                    template_key=templates.CERT_EXPIRING,
                    channels=pick_channels(recipient, NotificationCategory.COMPLIANCE),
                    schedule_at=now,
                    dedupe_key=dedupe_key,
                    payload=payload,
                )
                for recipient, dedupe_key in recipients
            )

        created = self.service.fanout_notifications(candidates)
        audit("notify.schedule.certExpiry", count=len(created))
        logger.info(
            "certificate_expirations_scheduled",
            candidate_count=len(candidates),
            created_count=len(created),
        )
        return len(created)

    def jobs(self) -> dict[str, Callable[..., int]]:
        """Job names accepted by ``run_job``, mapped to their implementation."""
        return {
            "daily-reminders": self.enqueue_daily_reminders,
            "admin-digest": self.send_admin_morning_digest,
            "certificate-expirations": self.check_certificate_expirations,
        }

    def run_job(self, job_name: str, now: datetime | None = None) -> int:
        """Run one job by name.

        Raises:
            UnknownJobError: If ``job_name`` is not a registered job.
        """
        job = self.jobs().get(job_name)
        if job is None:
            raise UnknownJobError(job_name)
        logger.info("notification_job_started", job=job_name)
        return job(now=now)


notification_scheduler = NotificationScheduler()
