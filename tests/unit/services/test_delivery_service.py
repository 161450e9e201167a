"""Tests for DeliveryService."""

import threading
from unittest.mock import Mock, patch
from uuid import uuid4

from core.enums import NotificationStatusEnum
from core.exceptions import (
    EmailDeliveryError,
    NotificationNotFoundError,
    TemplateNotFoundError,
    WhatsAppDeliveryError,
)
from core.models import AuditEvent, InboxMessage, Notification
from core.schemas.integration import IntegrationSettings
from core.services.delivery_service import DeliveryService
from core.services.providers import InAppProvider
from tests.base import BaseUnitTest
from tests.factories import (
    IntegrationSettingsRecordFactory,
    NotificationFactory,
    NotificationTemplateFactory,
    UserFactory,
)

CONFIGURED = IntegrationSettings.model_validate(
    {
        "smtp": {
            "enabled": True,
            "host": "smtp.example.com",
            "port": 587,
            "username": "notify@example.com",
            "password": "secret",
        },
        "whatsapp": {
            "enabled": True,
            "accountSid": "AC123",
            "authToken": "token",
            "fromNumber": "+15550001111",
        },
    }
)


class TestDeliveryService(BaseUnitTest):
    """Test cases for DeliveryService.deliver."""

    def setUp(self):
        """Set up providers, a template and a reachable user."""
        self.email_provider = Mock(provider_name="smtp")
        self.email_provider.send.return_value = {
            "provider": "smtp",
            "id": "<abc@example.com>",
        }
        self.whatsapp_provider = Mock(provider_name="twilio-wa")
        self.whatsapp_provider.send.return_value = {
            "provider": "twilio-wa",
            "sid": "SM123",
            "status": "queued",
        }
        self.settings_loader = Mock(return_value=CONFIGURED)
        self.service = DeliveryService(
            email_provider=self.email_provider,
            whatsapp_provider=self.whatsapp_provider,
            inapp_provider=InAppProvider(),
            settings_loader=self.settings_loader,
        )

        self.template = NotificationTemplateFactory(
            template_key="TS_APPROVED_V1",
            subject="Approved: {{jobName}}",
            email_html="<p>{{jobName}} approved</p>",
            inapp_text="{{jobName}} was approved",
            whatsapp_body="WA {{jobName}}",
        )
        self.user = UserFactory(
            email="foreman@example.com",
            phone="+15551234567",
            whatsapp_opt_in=True,
            timezone="UTC",
        )

    def _notification(self, **overrides):
        fields = {
            "user": self.user,
            "template_key": self.template.template_key,
            "channels": ["email", "inapp"],
            "payload": {"jobName": "Harbor Bridge"},
        }
        fields.update(overrides)
        return NotificationFactory(**fields)

    def test_delivers_to_every_requested_channel(self):
        """Test a fully reachable user gets email and in-app, status sent."""
        notification = self._notification()

        outcome = self.service.deliver(notification.notification_id)

        self.assertEqual(outcome.status, NotificationStatusEnum.SENT.value)
        self.assertFalse(outcome.already_processed)
        self.assertEqual([r.channel for r in outcome.results], ["email", "inapp"])

        self.email_provider.send.assert_called_once_with(
            "foreman@example.com",
            "Approved: Harbor Bridge",
            "<p>Harbor Bridge approved</p>",
            CONFIGURED.smtp,
        )
        message = InboxMessage.objects.get(notification_id=notification.notification_id)
        self.assertEqual(message.text, "Harbor Bridge was approved")
        self.assertEqual(message.user_id, self.user.user_id)
        self.assertFalse(message.read)

        notification.refresh_from_db()
        self.assertEqual(notification.status, "sent")
        self.assertEqual(notification.attempts, 1)
        self.assertIsNone(notification.last_error)
        self.assertIsNotNone(notification.sent_at)
        self.assertEqual(
            notification.results,
            [
                {
                    "channel": "email",
                    "status": "ok",
                    "provider": "smtp",
                    "messageId": "<abc@example.com>",
                },
                {
                    "channel": "inapp",
                    "status": "ok",
                    "provider": "inapp",
                    "messageId": str(message.message_id),
                },
            ],
        )
        self.assertTrue(
            AuditEvent.objects.filter(event_name="notify.delivery.complete").exists()
        )

    def test_whatsapp_sid_is_recorded(self):
        """Test the Twilio SID lands on the notification."""
        notification = self._notification(channels=["whatsapp"])

        outcome = self.service.deliver(notification.notification_id)

        self.assertEqual(outcome.status, "sent")
        self.whatsapp_provider.send.assert_called_once_with(
            "+15551234567",
            "WA {{jobName}}",
            {"jobName": "Harbor Bridge"},
            str(notification.notification_id),
            CONFIGURED.whatsapp,
        )
        notification.refresh_from_db()
        self.assertEqual(notification.twilio_message_sid, "SM123")

    def test_whatsapp_requires_opt_in_and_phone(self):
        """Test WhatsApp is not attempted for users who cannot receive it."""
        self.user.whatsapp_opt_in = False
        self.user.save()
        notification = self._notification(channels=["whatsapp", "inapp"])

        outcome = self.service.deliver(notification.notification_id)

        self.whatsapp_provider.send.assert_not_called()
        self.assertEqual([r.channel for r in outcome.results], ["inapp"])
        self.assertEqual(outcome.status, "sent")

    def test_unconfigured_email_is_not_attempted(self):
        """Test the email channel is filtered out when SMTP is disabled."""
        notification = self._notification()
        disabled = IntegrationSettings()

        outcome = self.service.deliver(notification.notification_id, disabled)

        self.email_provider.send.assert_not_called()
        self.assertEqual([r.channel for r in outcome.results], ["inapp"])
        self.settings_loader.assert_not_called()

    def test_loads_settings_when_not_passed(self):
        """Test the settings loader supplies the configuration by default."""
        self.service.deliver(self._notification().notification_id)
        self.settings_loader.assert_called_once_with()

    def test_partial_failure(self):
        """Test one failing channel yields partially_failed."""
        self.email_provider.send.side_effect = EmailDeliveryError("550 rejected")
        notification = self._notification()

        outcome = self.service.deliver(notification.notification_id)

        self.assertEqual(outcome.status, "partially_failed")
        notification.refresh_from_db()
        self.assertEqual(notification.status, "partially_failed")
        self.assertEqual(notification.last_error, "email: SMTP error: 550 rejected")
        self.assertEqual(notification.results[0]["status"], "error")
        self.assertEqual(notification.results[0]["error"], "SMTP error: 550 rejected")
        self.assertEqual(notification.results[1]["status"], "ok")
        self.assertEqual(InboxMessage.objects.count(), 1)

    def test_mixed_outcomes_across_three_channels(self):
        """Test a rejected email beside delivered WhatsApp and in-app."""
        self.email_provider.send.side_effect = EmailDeliveryError("550 rejected")
        self.whatsapp_provider.send.return_value = {
            "provider": "twilio-wa",
            "sid": "SM1",
        }
        notification = self._notification(channels=["email", "whatsapp", "inapp"])

        outcome = self.service.deliver(notification.notification_id)

        self.assertEqual(outcome.status, "partially_failed")
        self.assertEqual(len(outcome.results), 3)
        self.assertEqual(
            [r.channel for r in outcome.results], ["email", "whatsapp", "inapp"]
        )
        self.assertEqual(
            [r.status for r in outcome.results], ["error", "ok", "ok"]
        )
        notification.refresh_from_db()
        self.assertEqual(notification.status, "partially_failed")
        self.assertEqual(
            [r["status"] for r in notification.results], ["error", "ok", "ok"]
        )
        self.assertEqual(notification.twilio_message_sid, "SM1")
        self.assertEqual(notification.last_error, "email: SMTP error: 550 rejected")
        self.assertEqual(InboxMessage.objects.count(), 1)

    def test_external_channels_are_sent_concurrently(self):
        """Test email and WhatsApp are in flight at the same time."""
        barrier = threading.Barrier(2)

        def email_send(*args):
            barrier.wait(timeout=5)
            return {"provider": "smtp", "id": "<abc@example.com>"}

        def whatsapp_send(*args):
            barrier.wait(timeout=5)
            return {"provider": "twilio-wa", "sid": "SM123"}

        self.email_provider.send.side_effect = email_send
        self.whatsapp_provider.send.side_effect = whatsapp_send
        notification = self._notification(channels=["email", "whatsapp"])

        outcome = self.service.deliver(notification.notification_id)

        self.assertEqual(outcome.status, "sent")
        self.assertEqual([r.status for r in outcome.results], ["ok", "ok"])
        self.assertFalse(barrier.broken)

    def test_outcome_written_by_another_worker_wins(self):
        """Test a notification concluded mid-delivery keeps the first outcome."""
        notification = self._notification()

        def conclude_elsewhere():
            Notification.objects.filter(pk=notification.pk).update(
                status="sent", attempts=1, results=[]
            )
            return CONFIGURED

        self.settings_loader.side_effect = conclude_elsewhere
        self.email_provider.send.side_effect = EmailDeliveryError("timeout")

        outcome = self.service.deliver(notification.notification_id)

        self.assertTrue(outcome.already_processed)
        self.assertEqual(outcome.status, "sent")
        notification.refresh_from_db()
        self.assertEqual(notification.status, "sent")
        self.assertEqual(notification.attempts, 1)
        self.assertEqual(notification.results, [])
        self.assertIsNone(notification.last_error)
        self.assertFalse(
            AuditEvent.objects.filter(event_name="notify.delivery.complete").exists()
        )

    @patch("core.services.delivery_service.is_quiet_now")
    def test_quiet_skip_after_another_worker_concluded(self, mock_quiet):
        """Test the quiet-hours skip does not overwrite a finished delivery."""
        notification = self._notification()

        def conclude_elsewhere(*args):
            Notification.objects.filter(pk=notification.pk).update(status="failed")
            return True

        mock_quiet.side_effect = conclude_elsewhere

        outcome = self.service.deliver(notification.notification_id)

        self.assertTrue(outcome.already_processed)
        self.assertEqual(outcome.status, "failed")
        self.assertFalse(AuditEvent.objects.filter(event_name="notify.skip").exists())

    def test_all_channels_failing(self):
        """Test every channel failing yields failed with all errors joined."""
        self.email_provider.send.side_effect = EmailDeliveryError("timeout")
        self.whatsapp_provider.send.side_effect = WhatsAppDeliveryError("21211")
        notification = self._notification(channels=["email", "whatsapp"])

        outcome = self.service.deliver(notification.notification_id)

        self.assertEqual(outcome.status, "failed")
        notification.refresh_from_db()
        self.assertEqual(
            notification.last_error,
            "email: SMTP error: timeout; whatsapp: Twilio error: 21211",
        )
        self.assertEqual(notification.attempts, 1)

    def test_unexpected_provider_exception_is_captured(self):
        """Test any exception from a provider becomes a channel error."""
        self.email_provider.send.side_effect = RuntimeError("socket closed")
        notification = self._notification()

        outcome = self.service.deliver(notification.notification_id)

        self.assertEqual(outcome.status, "partially_failed")
        self.assertEqual(outcome.results[0].error, "socket closed")

    def test_no_eligible_channel_fails(self):
        """Test a notification with nothing to dispatch is marked failed."""
        notification = self._notification(channels=["email"])

        outcome = self.service.deliver(
            notification.notification_id, IntegrationSettings()
        )

        self.assertEqual(outcome.status, "failed")
        self.assertEqual(outcome.results, [])
        notification.refresh_from_db()
        self.assertEqual(notification.status, "failed")
        self.assertEqual(notification.results, [])

    def test_unknown_channel_is_ignored(self):
        """Test unrecognised channel values are skipped."""
        notification = self._notification(channels=["sms", "inapp"])

        outcome = self.service.deliver(notification.notification_id)

        self.assertEqual([r.channel for r in outcome.results], ["inapp"])

    def test_repeated_channel_is_dispatched_once(self):
        """Test duplicate channel entries produce a single dispatch."""
        notification = self._notification(channels=["inapp", "inapp"])

        self.service.deliver(notification.notification_id)

        self.assertEqual(InboxMessage.objects.count(), 1)

    def test_terminal_notification_is_not_processed_again(self):
        """Test redelivery of a finished notification has no side effects."""
        notification = self._notification()
        self.service.deliver(notification.notification_id)
        self.email_provider.send.reset_mock()

        outcome = self.service.deliver(notification.notification_id)

        self.assertTrue(outcome.already_processed)
        self.assertEqual(outcome.status, "sent")
        self.assertEqual(outcome.results, [])
        self.email_provider.send.assert_not_called()
        notification.refresh_from_db()
        self.assertEqual(notification.attempts, 1)
        self.assertEqual(InboxMessage.objects.count(), 1)

    def test_every_terminal_status_is_idempotent(self):
        """Test all terminal statuses short-circuit."""
        for terminal in ("sent", "partially_failed", "failed", "skipped_quiet_hours"):
            notification = self._notification(status=terminal)

            outcome = self.service.deliver(notification.notification_id)

            self.assertTrue(outcome.already_processed)
            self.assertEqual(outcome.status, terminal)
        self.email_provider.send.assert_not_called()

    @patch("core.services.delivery_service.is_quiet_now", return_value=True)
    def test_quiet_hours_skip(self, mock_quiet):
        """Test a non-urgent notification during quiet hours is skipped."""
        self.user.notify_prefs = {"quietHours": {"start": "21:00", "end": "07:00"}}
        self.user.save()
        notification = self._notification()

        outcome = self.service.deliver(notification.notification_id)

        mock_quiet.assert_called_once_with(
            {"start": "21:00", "end": "07:00"}, "UTC"
        )
        self.assertEqual(outcome.status, "skipped_quiet_hours")
        self.email_provider.send.assert_not_called()
        notification.refresh_from_db()
        self.assertEqual(notification.status, "skipped_quiet_hours")
        self.assertEqual(notification.attempts, 0)
        self.assertEqual(InboxMessage.objects.count(), 0)
        self.assertTrue(AuditEvent.objects.filter(event_name="notify.skip").exists())

    @patch("core.services.delivery_service.is_quiet_now", return_value=True)
    def test_priority_high_bypasses_quiet_hours(self, mock_quiet):
        """Test urgent notifications are delivered during quiet hours."""
        notification = self._notification(priority_high=True)

        outcome = self.service.deliver(notification.notification_id)

        mock_quiet.assert_not_called()
        self.assertEqual(outcome.status, "sent")

    def test_missing_template_marks_failed_and_raises(self):
        """Test a missing template fails the notification permanently."""
        notification = self._notification(template_key="NOPE_V1")

        with self.assertRaises(TemplateNotFoundError):
            self.service.deliver(notification.notification_id)

        notification.refresh_from_db()
        self.assertEqual(notification.status, "failed")
        self.assertEqual(notification.last_error, "Template NOPE_V1 not found.")
        self.assertEqual(notification.attempts, 0)
        self.email_provider.send.assert_not_called()

    def test_missing_notification_raises(self):
        """Test an unknown id raises NotificationNotFoundError."""
        with self.assertRaises(NotificationNotFoundError):
            self.service.deliver(uuid4())

    def test_missing_user_still_gets_inapp(self):
        """Test a deleted user has no contacts but the inbox write proceeds."""
        notification = Notification.objects.create(
            user_id=uuid4(),
            template_key=self.template.template_key,
            channels=["email", "whatsapp", "inapp"],
            payload={"jobName": "Depot"},
        )

        outcome = self.service.deliver(notification.notification_id)

        self.email_provider.send.assert_not_called()
        self.whatsapp_provider.send.assert_not_called()
        self.assertEqual([r.channel for r in outcome.results], ["inapp"])
        self.assertEqual(outcome.status, "sent")

    def test_default_loader_reads_settings_table(self):
        """Test the module-level loader picks up the stored configuration."""
        IntegrationSettingsRecordFactory()
        service = DeliveryService(
            email_provider=self.email_provider,
            whatsapp_provider=self.whatsapp_provider,
            inapp_provider=InAppProvider(),
        )
        notification = self._notification(channels=["email", "whatsapp"])

        outcome = service.deliver(notification.notification_id)

        self.assertEqual(outcome.status, "sent")
        self.email_provider.send.assert_called_once()
        self.whatsapp_provider.send.assert_called_once()
