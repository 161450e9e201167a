"""Exceptions raised by channel providers."""


class ChannelDispatchError(Exception):
    """Base exception for a failed dispatch to one channel."""

    def __init__(self, message: str, provider: str | None = None):
        """Initialize channel dispatch error.

        Args:
            message: Error message recorded on the channel result
            provider: Name of the provider that failed
        """
        self.provider = provider
        super().__init__(message)


class EmailDeliveryError(ChannelDispatchError):
    """SMTP transport or authentication failure."""

    def __init__(self, message: str):
        """Initialize email delivery error."""
        super().__init__(f"SMTP error: {message}", provider="smtp")


class WhatsAppDeliveryError(ChannelDispatchError):
    """Twilio API or transport failure."""

    def __init__(self, message: str, status_code: int | None = None):
        """Initialize WhatsApp delivery error.

        Args:
            message: Error description from Twilio or the transport
            status_code: HTTP status returned by Twilio, if any
        """
        self.status_code = status_code
        super().__init__(f"Twilio error: {message}", provider="twilio-wa")


class ProviderNotConfiguredError(ChannelDispatchError):
    """A provider was invoked without a complete configuration."""

    def __init__(self, provider: str):
        """Initialize provider not configured error."""
        super().__init__(f"{provider} not configured", provider=provider)
