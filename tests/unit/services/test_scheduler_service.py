"""Tests for the periodic notification jobs."""

from datetime import UTC, date, datetime, timedelta
from unittest.mock import patch

import pytest

from core.constants import templates
from core.enums import SubmissionStatus, UserRole
from core.exceptions import UnknownJobError
from core.models import AuditEvent, Notification
from core.services.notification_service import NotificationService
from core.services.scheduler_service import (
    NotificationScheduler,
    human_date,
    long_date,
)
from tests.factories import (
    EmployeeCertificateFactory,
    NotificationFactory,
    TimesheetSubmissionFactory,
    UserFactory,
)

# 16:00 UTC is 12:00 in New York (EDT)
NOON_NEW_YORK = datetime(2026, 10, 16, 16, 0, tzinfo=UTC)


@pytest.fixture
def scheduler():
    """Create a scheduler writing through a fresh NotificationService."""
    return NotificationScheduler(service=NotificationService(queue_name="test"))


class TestDateFormatting:
    """Test suite for payload date helpers."""

    def test_human_date_uses_user_timezone(self):
        """Test 02:00 UTC is still the previous day in New York."""
        value = datetime(2026, 10, 17, 2, 0, tzinfo=UTC)
        assert human_date(value, "America/New_York") == "Oct 16, 2026"
        assert human_date(value, "UTC") == "Oct 17, 2026"

    def test_long_date_has_no_zero_padding(self):
        """Test the long format used in certificate alerts."""
        assert long_date(date(2026, 10, 6)) == "October 6, 2026"


@pytest.mark.django_db
class TestDailyReminders:
    """Test suite for enqueue_daily_reminders."""

    def test_schedules_reminder_at_local_evening(self, scheduler):
        """Test a foreman gets one reminder at 18:30 local time."""
        foreman = UserFactory(role=UserRole.FOREMAN.value, timezone="America/New_York")

        created = scheduler.enqueue_daily_reminders(now=NOON_NEW_YORK)

        assert created == 1
        notification = Notification.objects.get()
        assert notification.user_id == foreman.user_id
        assert notification.template_key == templates.TS_REMIND_DUE
        assert notification.schedule_at == datetime(2026, 10, 16, 22, 30, tzinfo=UTC)
        assert notification.dedupe_key == f"ts:due:{foreman.user_id}:2026-10-16"
        assert notification.payload == {
            "date": "Oct 16, 2026",
            "deepLink": "app://timesheet",
        }

    def test_each_foreman_uses_own_timezone(self, scheduler):
        """Test reminder instants follow each foreman's timezone."""
        UserFactory(role=UserRole.FOREMAN.value, timezone="America/Los_Angeles")
        UserFactory(role=UserRole.FOREMAN.value, timezone="America/Chicago")

        scheduler.enqueue_daily_reminders(now=NOON_NEW_YORK)

        assert sorted(Notification.objects.values_list("schedule_at", flat=True)) == [
            datetime(2026, 10, 16, 23, 30, tzinfo=UTC),
            datetime(2026, 10, 17, 1, 30, tzinfo=UTC),
        ]

    def test_skips_when_reminder_time_has_passed(self, scheduler):
        """Test no reminder is created after 18:30 local."""
        UserFactory(role=UserRole.FOREMAN.value, timezone="America/New_York")
        late = datetime(2026, 10, 16, 23, 0, tzinfo=UTC)

        assert scheduler.enqueue_daily_reminders(now=late) == 0

    def test_only_foremen_with_timezone(self, scheduler):
        """Test other roles and foremen without a timezone are ignored."""
        UserFactory(role=UserRole.FOREMAN.value, timezone="")
        UserFactory(role=UserRole.EMPLOYEE.value, timezone="UTC")
        UserFactory(role=UserRole.ADMIN.value, timezone="UTC")

        assert scheduler.enqueue_daily_reminders(now=NOON_NEW_YORK) == 0

    def test_hourly_runs_do_not_duplicate(self, scheduler):
        """Test the dedupe key keeps one reminder per foreman per local day."""
        UserFactory(role=UserRole.FOREMAN.value, timezone="America/New_York")

        assert scheduler.enqueue_daily_reminders(now=NOON_NEW_YORK) == 1
        later = NOON_NEW_YORK + timedelta(hours=1)
        assert scheduler.enqueue_daily_reminders(now=later) == 0
        assert Notification.objects.count() == 1

    def test_existing_reminder_is_not_a_candidate(self, scheduler):
        """Test a stored dedupe key drops the reminder before fan-out."""
        foreman = UserFactory(role=UserRole.FOREMAN.value, timezone="America/New_York")
        NotificationFactory(
            user=foreman, dedupe_key=f"ts:due:{foreman.user_id}:2026-10-16"
        )

        with patch.object(
            scheduler.service, "fanout_notifications", return_value=[]
        ) as mock_fanout:
            scheduler.enqueue_daily_reminders(now=NOON_NEW_YORK)

        assert mock_fanout.call_args[0][0] == []

    def test_reminds_about_stale_drafts(self, scheduler):
        """Test drafts older than two days produce an expiry reminder."""
        foreman = UserFactory(role=UserRole.FOREMAN.value, timezone="America/New_York")
        stale = TimesheetSubmissionFactory(
            foreman=foreman,
            job_name="Harbor Bridge",
            date="2026-10-13",
            status=SubmissionStatus.DRAFT.value,
            submitted_at=NOON_NEW_YORK - timedelta(days=3),
        )
        TimesheetSubmissionFactory(
            foreman=foreman,
            status=SubmissionStatus.DRAFT.value,
            submitted_at=NOON_NEW_YORK - timedelta(days=1),
        )
        TimesheetSubmissionFactory(
            foreman=foreman,
            status=SubmissionStatus.SUBMITTED.value,
            submitted_at=NOON_NEW_YORK - timedelta(days=5),
        )

        scheduler.enqueue_daily_reminders(now=NOON_NEW_YORK)

        expired = Notification.objects.get(template_key=templates.TS_DRAFT_EXPIRED)
        assert expired.user_id == foreman.user_id
        assert expired.dedupe_key == f"ts:draft-expired:{stale.submission_id}"
        assert expired.schedule_at == NOON_NEW_YORK
        assert expired.payload == {
            "jobName": "Harbor Bridge",
            "date": "2026-10-13",
            "deepLink": "app://submissions",
        }

    def test_audits_created_count(self, scheduler):
        """Test the job records how many notifications it wrote."""
        UserFactory(role=UserRole.FOREMAN.value, timezone="America/New_York")

        scheduler.enqueue_daily_reminders(now=NOON_NEW_YORK)

        event = AuditEvent.objects.get(event_name="notify.schedule.foreman")
        assert event.details == {"count": 1}


@pytest.mark.django_db
class TestAdminMorningDigest:
    """Test suite for send_admin_morning_digest."""

    def test_counts_submissions_waiting_over_a_day(self, scheduler):
        """Test every admin is told how many submissions are pending."""
        admin = UserFactory(role=UserRole.ADMIN.value)
        super_admin = UserFactory(role=UserRole.SUPER_ADMIN.value)
        UserFactory(role=UserRole.FOREMAN.value)
        for hours in (25, 48):
            TimesheetSubmissionFactory(
                status=SubmissionStatus.SUBMITTED.value,
                submitted_at=NOON_NEW_YORK - timedelta(hours=hours),
            )
        TimesheetSubmissionFactory(
            status=SubmissionStatus.SUBMITTED.value,
            submitted_at=NOON_NEW_YORK - timedelta(hours=2),
        )
        TimesheetSubmissionFactory(
            status=SubmissionStatus.APPROVED.value,
            submitted_at=NOON_NEW_YORK - timedelta(days=3),
        )

        created = scheduler.send_admin_morning_digest(now=NOON_NEW_YORK)

        assert created == 2
        notifications = Notification.objects.filter(
            template_key=templates.ADMIN_DIGEST
        )
        assert {n.user_id for n in notifications} == {
            admin.user_id,
            super_admin.user_id,
        }
        for notification in notifications:
            assert notification.payload == {
                "count": 2,
                "range": "older than 24 hours",
            }
            assert notification.dedupe_key is None

    def test_nothing_pending_sends_nothing(self, scheduler):
        """Test no digest is written when nothing is waiting."""
        UserFactory(role=UserRole.ADMIN.value)

        assert scheduler.send_admin_morning_digest(now=NOON_NEW_YORK) == 0
        assert Notification.objects.count() == 0
        event = AuditEvent.objects.get(event_name="notify.schedule.adminDigest")
        assert event.details["count"] == 0


@pytest.mark.django_db
class TestCertificateExpirations:
    """Test suite for check_certificate_expirations."""

    def test_notifies_holder_supervisor_and_admins(self, scheduler):
        """Test one alert per recipient with recipient-specific dedupe keys."""
        supervisor = UserFactory(role=UserRole.FOREMAN.value)
        holder = UserFactory(full_name="Luis Ortega", supervisor=supervisor)
        admin = UserFactory(role=UserRole.ADMIN.value)
        certificate = EmployeeCertificateFactory(
            holder=holder, name="Forklift", valid_until=date(2026, 10, 26)
        )

        created = scheduler.check_certificate_expirations(now=NOON_NEW_YORK)

        assert created == 3
        keys = set(Notification.objects.values_list("dedupe_key", flat=True))
        cert_id = certificate.certificate_id
        assert keys == {
            f"cert:{holder.user_id}:{cert_id}",
            f"cert:{supervisor.user_id}:{cert_id}",
            f"cert:admin:{admin.user_id}:{cert_id}",
        }
        payload = Notification.objects.filter(user=holder).get().payload
        assert payload == {
            "employeeName": "Luis Ortega",
            "certificateName": "Forklift",
            "expiryDate": "October 26, 2026",
            "daysUntilExpiry": "10",
        }

    @pytest.mark.parametrize(
        ("valid_until", "expected"),
        [
            (date(2026, 10, 15), 0),
            (date(2026, 10, 16), 1),
            (date(2026, 11, 15), 1),
            (date(2026, 11, 16), 0),
        ],
    )
    def test_window_is_today_through_thirty_days(
        self, scheduler, valid_until, expected
    ):
        """Test both window boundaries are inclusive."""
        EmployeeCertificateFactory(valid_until=valid_until)

        assert scheduler.check_certificate_expirations(now=NOON_NEW_YORK) == expected

    def test_second_run_is_deduplicated(self, scheduler):
        """Test the same certificate never alerts the same recipient twice."""
        EmployeeCertificateFactory(valid_until=date(2026, 10, 20))

        assert scheduler.check_certificate_expirations(now=NOON_NEW_YORK) == 1
        next_day = NOON_NEW_YORK + timedelta(days=1)
        assert scheduler.check_certificate_expirations(now=next_day) == 0


@pytest.mark.django_db
class TestRunJob:
    """Test suite for run_job."""

    def test_dispatches_by_name(self, scheduler):
        """Test job names map to their implementation."""
        with patch.object(
            scheduler, "send_admin_morning_digest", return_value=4
        ) as mock_job:
            assert scheduler.run_job("admin-digest", now=NOON_NEW_YORK) == 4

        mock_job.assert_called_once_with(now=NOON_NEW_YORK)

    def test_unknown_job(self, scheduler):
        """Test an unregistered name raises UnknownJobError."""
        with pytest.raises(UnknownJobError):
            scheduler.run_job("weekly-report")

    def test_registered_names(self, scheduler):
        """Test the three periodic jobs are registered."""
        assert set(scheduler.jobs()) == {
            "daily-reminders",
            "admin-digest",
            "certificate-expirations",
        }
