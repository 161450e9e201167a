"""URL routing configuration for core application."""

from django.urls import path

from .views import (
    DeliverNotificationView,
    InboxListView,
    InboxMessageReadView,
    InboxReadAllView,
    LivenessCheckView,
    MaterialOrderCreatedView,
    MaterialOrderUpdatedView,
    ReadinessCheckView,
    RunNotificationJobView,
    SmtpConnectionTestView,
    TimesheetReviewedView,
    TimesheetSubmittedView,
)

urlpatterns = [
    # Health check endpoints
    path("health/live", LivenessCheckView.as_view(), name="health-live"),
    path("health/ready", ReadinessCheckView.as_view(), name="health-ready"),
    # Delivery worker trigger
    path(
        "notifications/deliver",
        DeliverNotificationView.as_view(),
        name="deliver-notification",
    ),
    # Event notification endpoints
    path(
        "notifications/timesheet-submitted",
        TimesheetSubmittedView.as_view(),
        name="timesheet-submitted",
    ),
    path(
        "notifications/timesheet-reviewed",
        TimesheetReviewedView.as_view(),
        name="timesheet-reviewed",
    ),
    path(
        "notifications/material-order-created",
        MaterialOrderCreatedView.as_view(),
        name="material-order-created",
    ),
    path(
        "notifications/material-order-updated",
        MaterialOrderUpdatedView.as_view(),
        name="material-order-updated",
    ),
    # Admin endpoints
    path(
        "jobs/<str:job_name>/run",
        RunNotificationJobView.as_view(),
        name="run-notification-job",
    ),
    path(
        "integrations/smtp/test",
        SmtpConnectionTestView.as_view(),
        name="smtp-connection-test",
    ),
    # Inbox endpoints (specific routes before generic)
    path(
        "users/me/inbox/read-all",
        InboxReadAllView.as_view(),
        name="inbox-read-all",
    ),
    path(
        "users/me/inbox/<uuid:message_id>/read",
        InboxMessageReadView.as_view(),
        name="inbox-message-read",
    ),
    path("users/me/inbox", InboxListView.as_view(), name="inbox-list"),
]
