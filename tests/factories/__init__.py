"""Factory classes for test data generation."""

from datetime import timedelta

from django.utils import timezone

import factory
from factory.django import DjangoModelFactory
from faker import Faker

from core.enums import (
    Channel,
    MaterialOrderStatus,
    NotificationCategory,
    NotificationStatusEnum,
    SubmissionStatus,
    UserRole,
)
from core.models import (
    INTEGRATIONS_SETTINGS_KEY,
    EmployeeCertificate,
    InboxMessage,
    IntegrationSettingsRecord,
    MaterialOrder,
    Notification,
    NotificationTemplate,
    TimesheetSubmission,
    User,
)

fake = Faker()


class UserFactory(DjangoModelFactory):
    """Factory for workforce users reachable on email and in-app."""

    class Meta:
        model = User

    role = UserRole.EMPLOYEE.value
    full_name = factory.LazyAttribute(lambda _: fake.name())
    email = factory.Sequence(lambda n: f"worker{n}@example.com")
    phone = factory.Sequence(lambda n: f"+1555000{n:04d}")
    whatsapp_opt_in = False
    timezone = "America/New_York"
    notify_prefs = factory.LazyFunction(dict)


class NotificationTemplateFactory(DjangoModelFactory):
    """Factory for notification templates with placeholders."""

    class Meta:
        model = NotificationTemplate
        django_get_or_create = ("template_key",)

    template_key = factory.Sequence(lambda n: f"TEST_TEMPLATE_{n}_V1")
    category = NotificationCategory.SYSTEM.value
    subject = "Hello {{name}}"
    email_html = "<p>Hi {{name}}, see {{deepLink}}</p>"
    inapp_text = "Hi {{name}}"
    whatsapp_body = None


class NotificationFactory(DjangoModelFactory):
    """Factory for scheduled notifications."""

    class Meta:
        model = Notification

    user = factory.SubFactory(UserFactory)
    template_key = factory.LazyAttribute(
        lambda _: NotificationTemplateFactory().template_key
    )
    channels = factory.LazyFunction(
        lambda: [Channel.EMAIL.value, Channel.IN_APP.value]
    )
    payload = factory.LazyFunction(lambda: {"name": "Maria"})
    schedule_at = factory.LazyFunction(timezone.now)
    dedupe_key = None
    priority_high = False
    status = NotificationStatusEnum.SCHEDULED.value


class TimesheetSubmissionFactory(DjangoModelFactory):
    """Factory for timesheet submissions."""

    class Meta:
        model = TimesheetSubmission

    foreman = factory.SubFactory(UserFactory, role=UserRole.FOREMAN.value)
    foreman_name = factory.LazyAttribute(lambda o: o.foreman.full_name)
    job_name = factory.LazyAttribute(lambda _: f"{fake.city()} Tower")
    date = "2026-10-14"
    status = SubmissionStatus.SUBMITTED.value
    submitted_at = factory.LazyFunction(lambda: timezone.now() - timedelta(hours=1))


class MaterialOrderFactory(DjangoModelFactory):
    """Factory for material orders."""

    class Meta:
        model = MaterialOrder

    foreman = factory.SubFactory(UserFactory, role=UserRole.FOREMAN.value)
    foreman_name = factory.LazyAttribute(lambda o: o.foreman.full_name)
    job_name = factory.LazyAttribute(lambda _: f"{fake.city()} Depot")
    status = MaterialOrderStatus.PENDING.value


class EmployeeCertificateFactory(DjangoModelFactory):
    """Factory for employee certificates."""

    class Meta:
        model = EmployeeCertificate

    holder = factory.SubFactory(UserFactory)
    name = "OSHA 30"
    valid_until = factory.LazyFunction(
        lambda: timezone.now().date() + timedelta(days=10)
    )


class InboxMessageFactory(DjangoModelFactory):
    """Factory for unread inbox messages."""

    class Meta:
        model = InboxMessage

    user = factory.SubFactory(UserFactory)
    notification = factory.SubFactory(
        NotificationFactory, user=factory.SelfAttribute("..user")
    )
    text = factory.LazyAttribute(lambda _: fake.sentence())
    read = False


class IntegrationSettingsRecordFactory(DjangoModelFactory):
    """Factory for the integration settings row with both channels enabled."""

    class Meta:
        model = IntegrationSettingsRecord
        django_get_or_create = ("settings_key",)

    settings_key = INTEGRATIONS_SETTINGS_KEY
    smtp = factory.LazyFunction(
        lambda: {
            "enabled": True,
            "host": "smtp.example.com",
            "port": 587,
            "secure": False,
            "username": "notify@example.com",
            "password": "secret",
            "fromName": "Crossroads",
        }
    )
    whatsapp = factory.LazyFunction(
        lambda: {
            "enabled": True,
            "accountSid": "AC123",
            "authToken": "token",
            "fromNumber": "+15550001111",
        }
    )
