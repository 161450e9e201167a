"""Service for notifications triggered by timesheet and material order changes."""

from django.utils import timezone

import structlog

from core.auth.context import get_current_user
from core.constants import templates
from core.enums import (
    MaterialOrderStatus,
    NotificationCategory,
    SubmissionStatus,
    UserRole,
)
from core.exceptions import ResourceNotFoundError
from core.models import MaterialOrder, Notification, TimesheetSubmission, User
from core.schemas.notification import (
    BatchNotificationResponse,
    MaterialOrderEventRequest,
    NotificationCreated,
    NotificationRequest,
    TimesheetEventRequest,
)
from core.services.audit_service import audit
from core.services.channel_policy import pick_channels
from core.services.notification_service import notification_service

logger = structlog.get_logger(__name__)

_REVIEW_TEMPLATES = {
    SubmissionStatus.APPROVED.value: templates.TS_APPROVED,
    SubmissionStatus.REJECTED.value: templates.TS_REJECTED,
}


class EventNotificationService:
    """Fans out notifications when the main application reports a change."""

    def notify_timesheet_submitted(
        self, request: TimesheetEventRequest
    ) -> BatchNotificationResponse:
        """Ask every admin to approve a newly submitted timesheet.

        Drafts are ignored.

        Raises:
            ResourceNotFoundError: If the submission does not exist.
        """
        submission = self._get_submission(request)
        if submission.status == SubmissionStatus.DRAFT.value:
            logger.info(
                "timesheet_submitted_draft_ignored",
                submission_id=str(submission.submission_id),
            )
            return self._response([])

        admins = User.objects.filter(role__in=UserRole.admin_roles())
        now = timezone.now()
        created = notification_service.fanout_notifications(
            NotificationRequest(
                user_id=admin.user_id,
                template_key=templates.TS_NEEDS_APPROVAL,
                channels=pick_channels(admin, NotificationCategory.TIMESHEET),
                schedule_at=now,
                payload={
                    "foreman": submission.foreman_name,
                    "jobName": submission.job_name,
                    "date": submission.date,
                    "deepLink": templates.DEEP_LINK_SUBMISSION.format(
                        submission_id=submission.submission_id
                    ),
                },
            )
            for admin in admins
        )

        audit(
            "submission.create.success",
            id=str(submission.submission_id),
            count=len(created),
        )
        return self._response(created)

    def notify_timesheet_reviewed(
        self, request: TimesheetEventRequest
    ) -> BatchNotificationResponse:
        """Tell the foreman their timesheet was approved or rejected.

        Raises:
            ResourceNotFoundError: If the submission does not exist.
        """
        submission = self._get_submission(request)
        audit(
            "submission.status.change",
            id=str(submission.submission_id),
            status=submission.status,
        )

        template_key = _REVIEW_TEMPLATES.get(submission.status)
        foreman = self._get_user(submission.foreman_id)
        if template_key is None or foreman is None:
            logger.info(
                "timesheet_review_not_notified",
                submission_id=str(submission.submission_id),
                status=submission.status,
                foreman_found=foreman is not None,
            )
            return self._response([])

        created = notification_service.fanout_notifications(
            [
                NotificationRequest(
                    user_id=foreman.user_id,
                    template_key=template_key,
                    channels=pick_channels(foreman, NotificationCategory.TIMESHEET),
                    schedule_at=timezone.now(),
                    payload={
                        "jobName": submission.job_name,
                        "date": submission.date,
                        "deepLink": templates.DEEP_LINK_SUBMISSION.format(
                            submission_id=submission.submission_id
                        ),
                    },
                )
            ]
        )
        return self._response(created)

    def notify_material_order_created(
        self, request: MaterialOrderEventRequest
    ) -> BatchNotificationResponse:
        """Tell admins and warehouse staff about a new material order.

        Raises:
            ResourceNotFoundError: If the order does not exist.
        """
        order = self._get_order(request)
        audit("materialOrder.create", id=str(order.order_id))

        recipients = User.objects.filter(
            role__in=[*UserRole.admin_roles(), UserRole.WAREHOUSE.value]
        )
        now = timezone.now()
        created = notification_service.fanout_notifications(
            NotificationRequest(
                user_id=recipient.user_id,
                template_key=templates.MO_NEW_ORDER,
                channels=pick_channels(recipient, NotificationCategory.MATERIAL_ORDER),
                schedule_at=now,
                payload={
                    "foremanName": order.foreman_name,
                    "jobName": order.job_name,
                    "deepLink": templates.DEEP_LINK_ADMIN_MATERIAL_ORDER.format(
                        order_id=order.order_id
                    ),
                },
            )
            for recipient in recipients
        )
        return self._response(created)

    def notify_material_order_updated(
        self, request: MaterialOrderEventRequest
    ) -> BatchNotificationResponse:
        """Tell the ordering foreman that their order changed status.

        Raises:
            ResourceNotFoundError: If the order does not exist.
        """
        order = self._get_order(request)
        audit(
            "materialOrder.status.change",
            id=str(order.order_id),
            status=order.status,
        )

        foreman = self._get_user(order.foreman_id)
        if order.status == MaterialOrderStatus.PENDING.value or foreman is None:
            return self._response([])

        created = notification_service.fanout_notifications(
            [
                NotificationRequest(
                    user_id=foreman.user_id,
                    template_key=templates.MO_STATUS_UPDATE,
                    channels=pick_channels(
                        foreman, NotificationCategory.MATERIAL_ORDER
                    ),
                    schedule_at=timezone.now(),
                    payload={
                        "foremanName": order.foreman_name,
                        "jobName": order.job_name,
                        "status": order.status,
                        "deepLink": templates.DEEP_LINK_MATERIAL_ORDER.format(
                            order_id=order.order_id
                        ),
                    },
                )
            ]
        )
        return self._response(created)

    @staticmethod
    def _get_submission(request: TimesheetEventRequest) -> TimesheetSubmission:
        submission = TimesheetSubmission.objects.filter(
            submission_id=request.submission_id
        ).first()
        if submission is None:
            logger.warning(
                "submission_not_found", submission_id=str(request.submission_id)
            )
            raise ResourceNotFoundError("Submission", request.submission_id)
        return submission

    @staticmethod
    def _get_order(request: MaterialOrderEventRequest) -> MaterialOrder:
        order = MaterialOrder.objects.filter(order_id=request.order_id).first()
        if order is None:
            logger.warning("material_order_not_found", order_id=str(request.order_id))
            raise ResourceNotFoundError("Material order", request.order_id)
        return order

    @staticmethod
    def _get_user(user_id) -> User | None:
        if user_id is None:
            return None
        return User.objects.filter(user_id=user_id).first()

    @staticmethod
    def _response(created: list[Notification]) -> BatchNotificationResponse:
        caller = get_current_user()
        logger.info(
            "event_notifications_queued",
            queued_count=len(created),
            triggered_by=caller.user_id if caller else None,
        )
        return BatchNotificationResponse(
            notifications=[
                NotificationCreated(
                    notification_id=notification.notification_id,
                    recipient_id=notification.user_id,
                )
                for notification in created
            ],
            queued_count=len(created),
        )


event_notification_service = EventNotificationService()
