"""API views for core application."""

from uuid import UUID

import structlog
from pydantic import ValidationError
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from core.auth.context import set_current_user
from core.auth.oauth2 import ADMIN_SCOPE, USER_SCOPE, OAuth2Authentication
from core.exceptions import EmailDeliveryError
from core.pagination import InboxPageNumberPagination
from core.schemas.inbox import InboxListResponse, InboxMessageDetail, MarkReadResponse
from core.schemas.integration import SmtpConfig, SmtpTestRequest
from core.schemas.job import JobRunResponse
from core.schemas.notification import (
    DeliveryResponse,
    MaterialOrderEventRequest,
    TimesheetEventRequest,
)
from core.services.delivery_service import delivery_service
from core.services.event_notification_service import event_notification_service
from core.services.health_service import health_service
from core.services.inbox_service import inbox_service
from core.services.providers import email_provider
from core.services.scheduler_service import notification_scheduler

logger = structlog.get_logger(__name__)


def _dump(schema) -> dict:
    return schema.model_dump(mode="json", by_alias=True)


def _bad_request(message: str, errors=None) -> Response:
    body = {"error": "bad_request", "message": message}
    if errors is not None:
        body["errors"] = errors
    return Response(body, status=status.HTTP_400_BAD_REQUEST)


class LivenessCheckView(APIView):
    """Liveness probe endpoint for Kubernetes.

    Returns 200 if the service is alive and running.
    This should not check external dependencies.

    This endpoint is exempt from authentication to allow Kubernetes probes.
    """

    authentication_classes = ()
    permission_classes = (AllowAny,)

    def get(self, _request):
        """Handle GET request for liveness check."""
        liveness = health_service.get_liveness_status()
        return Response(_dump(liveness), status=status.HTTP_200_OK)


class ReadinessCheckView(APIView):
    """Readiness probe endpoint for Kubernetes.

    Returns 200 when ready, and also when degraded (database or Redis down):
    notifications are durable, so the service keeps accepting work while its
    dependencies recover.

    This endpoint is exempt from authentication to allow Kubernetes probes.
    """

    authentication_classes = ()
    permission_classes = (AllowAny,)

    def get(self, _request):
        """Handle GET request for readiness check."""
        readiness = health_service.get_readiness_status()
        return Response(_dump(readiness), status=status.HTTP_200_OK)


class AuthenticatedAPIView(APIView):
    """Base view for endpoints that require a Bearer token.

    Stores the authenticated caller in the security context so services can
    read it without the request object.
    """

    authentication_classes = (OAuth2Authentication,)
    permission_classes = (IsAuthenticated,)

    def initial(self, request, *args, **kwargs):
        """Authenticate, then publish the caller to the security context."""
        super().initial(request, *args, **kwargs)
        if request.user is not None and getattr(
            request.user, "is_authenticated", False
        ):
            set_current_user(request.user)

    def deny_without_scope(self, request, *scopes: str) -> Response | None:
        """Return a 403 response unless the caller holds one of ``scopes``."""
        if any(request.user.has_scope(scope) for scope in scopes):
            return None

        logger.warning(
            "Caller lacks required scope",
            view=type(self).__name__,
            user_id=request.user.user_id,
            scopes=request.user.scopes,
        )
        return Response(
            {
                "error": "forbidden",
                "message": "You do not have permission to perform this action",
                "detail": f"Requires {' or '.join(scopes)} scope",
            },
            status=status.HTTP_403_FORBIDDEN,
        )


class DeliverNotificationView(AuthenticatedAPIView):
    """API endpoint that runs the delivery worker for one notification.

    Safe to call repeatedly: notifications that already reached a terminal
    status are returned unchanged with ``alreadyProcessed`` set.
    Requires notification:admin scope.
    """

    def post(self, request):
        """Deliver the notification named by the ``id`` query parameter.

        Returns:
            200 OK with DeliveryResponse
            400 Bad Request if the id is missing or not a UUID
            403 Forbidden if the caller lacks the admin scope
            404 Not Found if the notification does not exist
            500 Internal Server Error if its template does not exist
        """
        forbidden = self.deny_without_scope(request, ADMIN_SCOPE)
        if forbidden:
            return forbidden

        raw_id = request.query_params.get("id")
        if not raw_id:
            return _bad_request("Missing notification id")
        try:
            notification_id = UUID(raw_id)
        except ValueError:
            return _bad_request("Invalid notification id")

        logger.info("Delivery requested", notification_id=str(notification_id))
        outcome = delivery_service.deliver(notification_id)

        message = (
            "Notification already processed"
            if outcome.already_processed
            else f"Notification delivery finished with status {outcome.status}"
        )
        response_data = DeliveryResponse(
            notification_id=outcome.notification_id,
            status=outcome.status,
            already_processed=outcome.already_processed,
            message=message,
        )
        return Response(_dump(response_data), status=status.HTTP_200_OK)


class _EventNotificationView(AuthenticatedAPIView):
    """Validates an event body and hands it to the event notification service.

    Subclasses set ``request_schema`` and the ``notify_method`` of the
    event notification service to call.
    """

    request_schema = None
    notify_method = None

    def post(self, request):
        """Fan out notifications for the reported change.

        Returns:
            202 Accepted with BatchNotificationResponse
            400 Bad Request if validation fails
            403 Forbidden if the caller lacks the admin scope
            404 Not Found if the submission or order does not exist
        """
        forbidden = self.deny_without_scope(request, ADMIN_SCOPE)
        if forbidden:
            return forbidden

        try:
            event_request = self.request_schema(**request.data)
        except ValidationError as e:
            logger.warning(
                "Invalid request body for event notification",
                view=type(self).__name__,
                validation_errors=e.errors(),
            )
            return _bad_request(
                "Invalid request parameters",
                e.errors(include_url=False, include_context=False),
            )

        notify = getattr(event_notification_service, self.notify_method)
        response_data = notify(event_request)
        return Response(_dump(response_data), status=status.HTTP_202_ACCEPTED)


class TimesheetSubmittedView(_EventNotificationView):
    """Notifies admins that a timesheet is waiting for approval."""

    request_schema = TimesheetEventRequest
    notify_method = "notify_timesheet_submitted"


class TimesheetReviewedView(_EventNotificationView):
    """Notifies the foreman that a timesheet was approved or rejected."""

    request_schema = TimesheetEventRequest
    notify_method = "notify_timesheet_reviewed"


class MaterialOrderCreatedView(_EventNotificationView):
    """Notifies admins and warehouse staff about a new material order."""

    request_schema = MaterialOrderEventRequest
    notify_method = "notify_material_order_created"


class MaterialOrderUpdatedView(_EventNotificationView):
    """Notifies the foreman that a material order changed status."""

    request_schema = MaterialOrderEventRequest
    notify_method = "notify_material_order_updated"


class RunNotificationJobView(AuthenticatedAPIView):
    """API endpoint that runs one periodic notification job immediately.

    Requires notification:admin scope.
    """

    def post(self, request, job_name):
        """Run ``job_name`` inline.

        Returns:
            200 OK with JobRunResponse
            403 Forbidden if the caller lacks the admin scope
            404 Not Found for an unknown job name
        """
        forbidden = self.deny_without_scope(request, ADMIN_SCOPE)
        if forbidden:
            return forbidden

        created = notification_scheduler.run_job(job_name)
        response_data = JobRunResponse(job=job_name, created_count=created)
        return Response(_dump(response_data), status=status.HTTP_200_OK)


class SmtpConnectionTestView(AuthenticatedAPIView):
    """API endpoint that checks unsaved SMTP settings before an admin stores them.

    Requires notification:admin scope.
    """

    def post(self, request):
        """Connect and authenticate with the submitted settings.

        Returns:
            200 OK when the server accepted the credentials
            400 Bad Request if a field is missing
            502 Bad Gateway when the connection or login failed
        """
        forbidden = self.deny_without_scope(request, ADMIN_SCOPE)
        if forbidden:
            return forbidden

        try:
            test_request = SmtpTestRequest(**request.data)
        except ValidationError as e:
            return _bad_request(
                "Missing required SMTP fields",
                e.errors(include_url=False, include_context=False),
            )

        config = SmtpConfig(enabled=True, **test_request.model_dump())
        try:
            email_provider.verify_connection(config)
        except EmailDeliveryError as e:
            return Response(
                {"error": "smtp_connection_failed", "message": str(e)},
                status=status.HTTP_502_BAD_GATEWAY,
            )

        return Response(
            {"success": True, "message": "Connection successful!"},
            status=status.HTTP_200_OK,
        )


class InboxListView(AuthenticatedAPIView):
    """API endpoint for the authenticated user's in-app inbox.

    Requires notification:user or notification:admin scope.
    """

    def get(self, request):
        """Retrieve a page of inbox messages, newest first.

        Query parameters:
        - page: Page number (default: 1)
        - page_size: Items per page (default: 20, max: 100)
        """
        forbidden = self.deny_without_scope(request, USER_SCOPE, ADMIN_SCOPE)
        if forbidden:
            return forbidden

        paginator = InboxPageNumberPagination()
        page = paginator.paginate_queryset(inbox_service.get_my_messages(), request)

        response_data = InboxListResponse(
            results=[InboxMessageDetail.model_validate(message) for message in page],
            count=paginator.page.paginator.count,
            unread_count=inbox_service.get_unread_count(),
            next=paginator.get_next_link(),
            previous=paginator.get_previous_link(),
        )
        return Response(_dump(response_data), status=status.HTTP_200_OK)


class InboxReadAllView(AuthenticatedAPIView):
    """API endpoint that marks every inbox message of the caller as read."""

    def post(self, request):
        """Mark all unread messages read and return how many changed."""
        forbidden = self.deny_without_scope(request, USER_SCOPE, ADMIN_SCOPE)
        if forbidden:
            return forbidden

        response_data = MarkReadResponse(updated_count=inbox_service.mark_all_read())
        return Response(_dump(response_data), status=status.HTTP_200_OK)


class InboxMessageReadView(AuthenticatedAPIView):
    """API endpoint that marks one inbox message as read."""

    def post(self, request, message_id: UUID):
        """Mark ``message_id`` read; 404 if it is not the caller's message."""
        forbidden = self.deny_without_scope(request, USER_SCOPE, ADMIN_SCOPE)
        if forbidden:
            return forbidden

        response_data = MarkReadResponse(
            updated_count=inbox_service.mark_read(message_id)
        )
        return Response(_dump(response_data), status=status.HTTP_200_OK)
