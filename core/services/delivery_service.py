"""Delivery worker: renders one notification and dispatches it to its channels.

Each invocation moves a ``scheduled`` notification to exactly one terminal
status. Channels are dispatched concurrently and settle independently, so a
failing provider never prevents the others from being attempted.
"""

import asyncio
from collections.abc import Callable
from typing import Any, NamedTuple
from uuid import UUID

import structlog
from asgiref.sync import async_to_sync, sync_to_async

from core.enums import Channel, ChannelResultStatus, NotificationStatusEnum
from core.exceptions import TemplateNotFoundError
from core.models import Notification, NotificationTemplate, User
from core.schemas.integration import IntegrationSettings
from core.schemas.notification import ChannelResult, DeliveryOutcome, RenderedTemplate
from core.services.audit_service import audit
from core.services.integration_settings_service import load_integration_settings
from core.services.notification_service import notification_service
from core.services.providers import email_provider, inapp_provider, whatsapp_provider
from core.services.quiet_hours import is_quiet_now
from core.services.template_renderer import render_template, whatsapp_body_for

logger = structlog.get_logger(__name__)


class _Dispatch(NamedTuple):
    channel: Channel
    provider_name: str
    send: Callable[[], dict[str, Any]]
    # ORM writes must stay on the calling thread (and its transaction)
    thread_sensitive: bool


class DeliveryService:
    """Delivers notifications through the email, WhatsApp and in-app providers.

    Providers and the integration settings loader are injectable so tests and
    alternative transports can replace them.
    """

    def __init__(
        self,
        email_provider=email_provider,
        whatsapp_provider=whatsapp_provider,
        inapp_provider=inapp_provider,
        settings_loader: Callable[[], IntegrationSettings] = load_integration_settings,
    ) -> None:
        """Initialize delivery service.

        Args:
            email_provider: Provider for the email channel.
            whatsapp_provider: Provider for the WhatsApp channel.
            inapp_provider: Provider for the in-app channel.
            settings_loader: Returns the integration settings when none are
                passed to ``deliver``.
        """
        self.email_provider = email_provider
        self.whatsapp_provider = whatsapp_provider
        self.inapp_provider = inapp_provider
        self.settings_loader = settings_loader

    def deliver(
        self,
        notification_id: UUID | str,
        integration_settings: IntegrationSettings | None = None,
    ) -> DeliveryOutcome:
        """Deliver one notification.

        Args:
            notification_id: Notification to deliver.
            integration_settings: Channel configuration snapshot; loaded from
                the settings store when omitted.

        Returns:
            Outcome with the final status and this attempt's channel results.

        Raises:
            NotificationNotFoundError: If the notification does not exist.
            TemplateNotFoundError: If its template does not exist; the
                notification is marked failed first.
        """
        notification = notification_service.get_notification(notification_id)
        log = logger.bind(notification_id=str(notification.notification_id))

        if notification.is_terminal:
            log.info("notification_already_processed", status=notification.status)
            return DeliveryOutcome(
                notification_id=notification.notification_id,
                status=notification.status,
                already_processed=True,
            )

        user = User.objects.filter(user_id=notification.user_id).first()
        if user is None:
            log.warning("notification_user_missing", user_id=str(notification.user_id))

        if (
            not notification.priority_high
            and user is not None
            and is_quiet_now(user.quiet_hours, user.timezone)
        ):
            if not notification.mark_skipped_quiet_hours():
                return self._concluded_elsewhere(notification, log)
            audit(
                "notify.skip",
                id=str(notification.notification_id),
                reason="quiet_hours",
            )
            log.info("notification_skipped_quiet_hours", user_id=str(user.user_id))
            return DeliveryOutcome(
                notification_id=notification.notification_id,
                status=NotificationStatusEnum.SKIPPED_QUIET_HOURS,
            )

        template = NotificationTemplate.objects.filter(
            template_key=notification.template_key
        ).first()
        if template is None:
            error = TemplateNotFoundError(notification.template_key)
            notification.mark_failed(str(error))
            log.error(
                "notification_template_missing",
                template_key=notification.template_key,
            )
            raise error

        config = integration_settings or self.settings_loader()
        rendered = render_template(template, notification.payload)

        dispatches = self._eligible_dispatches(
            notification, user, template, rendered, config
        )
        results = self._dispatch_all(dispatches)

        status = self._final_status(results)
        failures = [result for result in results if not result.ok]
        last_error = (
            "; ".join(f"{result.channel}: {result.error}" for result in failures)
            or None
        )
        twilio_sid = next(
            (
                result.message_id
                for result in results
                if result.ok and result.channel == Channel.WHATSAPP.value
            ),
            None,
        )

        stored_results = [
            result.model_dump(mode="json", by_alias=True, exclude_none=True)
            for result in results
        ]
        if not notification.record_delivery(
            status, stored_results, last_error, twilio_sid
        ):
            return self._concluded_elsewhere(notification, log)
        audit(
            "notify.delivery.complete",
            id=str(notification.notification_id),
            status=status.value,
            results=stored_results,
        )

        log.info(
            "notification_delivered",
            status=status.value,
            attempted=len(results),
            failed=len(failures),
            attempts=notification.attempts,
        )
        return DeliveryOutcome(
            notification_id=notification.notification_id,
            status=status,
            results=results,
        )

    def _eligible_dispatches(
        self,
        notification: Notification,
        user: User | None,
        template: NotificationTemplate,
        rendered: RenderedTemplate,
        config: IntegrationSettings,
    ) -> list[_Dispatch]:
        """Requested channels that have both a contact address and a configuration."""
        email = user.email if user else None
        phone = user.phone if user else None
        opted_in = bool(user and user.whatsapp_opt_in)

        dispatches = []
        for value in dict.fromkeys(notification.channels or []):
            if value == Channel.EMAIL.value:
                if email and config.smtp.is_configured:
                    dispatches.append(
                        _Dispatch(
                            Channel.EMAIL,
                            self.email_provider.provider_name,
                            lambda: self.email_provider.send(
                                email,
                                rendered.subject,
                                rendered.email_html,
                                config.smtp,
                            ),
                            False,
                        )
                    )
            elif value == Channel.WHATSAPP.value:
                if phone and opted_in and config.whatsapp.is_configured:
                    dispatches.append(
                        _Dispatch(
                            Channel.WHATSAPP,
                            self.whatsapp_provider.provider_name,
                            lambda: self.whatsapp_provider.send(
                                phone,
                                whatsapp_body_for(template),
                                notification.payload or {},
                                str(notification.notification_id),
                                config.whatsapp,
                            ),
                            False,
                        )
                    )
            elif value == Channel.IN_APP.value:
                dispatches.append(
                    _Dispatch(
                        Channel.IN_APP,
                        self.inapp_provider.provider_name,
                        lambda: self.inapp_provider.send(
                            notification.user_id,
                            rendered.inapp_text,
                            notification.notification_id,
                        ),
                        True,
                    )
                )
            else:
                logger.warning(
                    "unknown_channel_requested",
                    notification_id=str(notification.notification_id),
                    channel=value,
                )
        return dispatches

    @staticmethod
    def _concluded_elsewhere(notification: Notification, log) -> DeliveryOutcome:
        log.warning("notification_concluded_concurrently", status=notification.status)
        return DeliveryOutcome(
            notification_id=notification.notification_id,
            status=notification.status,
            already_processed=True,
        )

    def _dispatch_all(self, dispatches: list[_Dispatch]) -> list[ChannelResult]:
        if not dispatches:
            return []
        return async_to_sync(self._gather)(dispatches)

    async def _gather(self, dispatches: list[_Dispatch]) -> list[ChannelResult]:
        outcomes = await asyncio.gather(
            *(
                sync_to_async(
                    dispatch.send, thread_sensitive=dispatch.thread_sensitive
                )()
                for dispatch in dispatches
            ),
            return_exceptions=True,
        )
        return [
            self._to_result(dispatch, outcome)
            for dispatch, outcome in zip(dispatches, outcomes, strict=True)
        ]

    @staticmethod
    def _to_result(dispatch: _Dispatch, outcome: Any) -> ChannelResult:
        if isinstance(outcome, BaseException):
            logger.warning(
                "channel_dispatch_failed",
                channel=dispatch.channel.value,
                provider=dispatch.provider_name,
                error=str(outcome),
            )
            return ChannelResult(
                channel=dispatch.channel,
                status=ChannelResultStatus.ERROR,
                provider=dispatch.provider_name,
                error=str(outcome),
            )

        outcome = outcome or {}
        message_id = outcome.get("id") or outcome.get("sid")
        return ChannelResult(
            channel=dispatch.channel,
            status=ChannelResultStatus.OK,
            provider=outcome.get("provider", dispatch.provider_name),
            message_id=str(message_id) if message_id is not None else None,
        )

    @staticmethod
    def _final_status(results: list[ChannelResult]) -> NotificationStatusEnum:
        failed = [result for result in results if not result.ok]
        if not results or len(failed) == len(results):
            return NotificationStatusEnum.FAILED
        if failed:
            return NotificationStatusEnum.PARTIALLY_FAILED
        return NotificationStatusEnum.SENT


delivery_service = DeliveryService()
