"""Exception handling utilities for the notification service."""

from core.exceptions.channel_exceptions import (
    ChannelDispatchError,
    EmailDeliveryError,
    ProviderNotConfiguredError,
    WhatsAppDeliveryError,
)
from core.exceptions.handlers import custom_exception_handler
from core.exceptions.notification_exceptions import (
    NotificationError,
    NotificationNotFoundError,
    ResourceNotFoundError,
    TemplateNotFoundError,
    UnknownJobError,
)

__all__ = [
    "ChannelDispatchError",
    "EmailDeliveryError",
    "NotificationError",
    "NotificationNotFoundError",
    "ProviderNotConfiguredError",
    "ResourceNotFoundError",
    "TemplateNotFoundError",
    "UnknownJobError",
    "WhatsAppDeliveryError",
    "custom_exception_handler",
]
