"""Email channel provider sending through the configured SMTP server."""

import re
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr, make_msgid
from typing import Any

from django.conf import settings

import structlog

from core.exceptions import EmailDeliveryError, ProviderNotConfiguredError
from core.schemas.integration import SmtpConfig

logger = structlog.get_logger(__name__)

_EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")


class EmailProvider:
    """Sends rendered notifications as multipart HTML email.

    Connection settings come from the integration settings store on every
    call, so changes made by an administrator apply to the next delivery.
    """

    provider_name = "smtp"

    def send(
        self,
        to: str,
        subject: str,
        html: str,
        config: SmtpConfig,
    ) -> dict[str, Any]:
        """Send one email.

        Args:
            to: Recipient email address
            subject: Rendered subject line
            html: Rendered HTML body
            config: SMTP configuration

        Returns:
            ``{"provider": "smtp", "id": <Message-ID>}``

        Raises:
            ProviderNotConfiguredError: If the configuration is incomplete
            ValueError: If the recipient address is invalid
            EmailDeliveryError: If the SMTP conversation fails
        """
        if not config.is_configured:
            raise ProviderNotConfiguredError(self.provider_name)

        if not _EMAIL_PATTERN.match(to or ""):
            error_msg = f"Invalid email address: {to}"
            raise ValueError(error_msg)

        sender_address = config.from_email or config.username
        sender_name = config.from_name or settings.NOTIFICATION_DEFAULT_FROM_NAME
        domain = sender_address.split("@", 1)[1] if "@" in sender_address else None
        message_id = make_msgid(domain=domain)

        msg = MIMEMultipart("alternative")
        msg["Subject"] = subject
        msg["From"] = formataddr((sender_name, sender_address))
        msg["To"] = to
        msg["Message-ID"] = message_id

        # Plain text first so clients that cannot render HTML pick it
        msg.attach(MIMEText(self._html_to_plain(html), "plain"))
        msg.attach(MIMEText(html, "html"))

        try:
            with self._connect(config) as server:
                server.login(config.username, config.password)
                server.send_message(msg)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(
                "email_send_failed",
                to_email=to,
                smtp_host=config.host,
                error=str(e),
            )
            raise EmailDeliveryError(str(e)) from e

        logger.info("email_sent", to_email=to, message_id=message_id)
        return {"provider": self.provider_name, "id": message_id}

    def verify_connection(self, config: SmtpConfig) -> None:
        """Connect and authenticate without sending anything.

        Raises:
            EmailDeliveryError: If the server cannot be reached or rejects
                the credentials
        """
        try:
            with self._connect(config) as server:
                server.login(config.username, config.password)
        except (smtplib.SMTPException, OSError) as e:
            logger.warning(
                "smtp_connection_test_failed",
                smtp_host=config.host,
                smtp_port=config.port,
                error=str(e),
            )
            raise EmailDeliveryError(str(e)) from e

        logger.info(
            "smtp_connection_test_succeeded",
            smtp_host=config.host,
            smtp_port=config.port,
        )

    def _connect(self, config: SmtpConfig) -> smtplib.SMTP:
        """Open an SMTP connection; implicit TLS when ``secure``, else STARTTLS."""
        timeout = settings.SMTP_TIMEOUT_SECONDS
        if config.secure:
            return smtplib.SMTP_SSL(config.host, config.port, timeout=timeout)

        server = smtplib.SMTP(config.host, config.port, timeout=timeout)
        try:
            server.ehlo()
            if server.has_extn("starttls"):
                server.starttls()
                server.ehlo()
        except (smtplib.SMTPException, OSError):
            server.close()
            raise
        return server

    def _html_to_plain(self, html: str) -> str:
        """Convert HTML to plain text.

        Args:
            html: HTML content

        Returns:
            Plain text version of the HTML
        """
        text = re.sub(r"<br\s*/?>", "\n", html, flags=re.IGNORECASE)
        text = re.sub(r"</p\s*>", "\n\n", text, flags=re.IGNORECASE)
        text = re.sub(r"<[^>]+>", "", text)

        text = text.replace("&nbsp;", " ")
        text = text.replace("&lt;", "<")
        text = text.replace("&gt;", ">")
        text = text.replace("&quot;", '"')
        text = text.replace("&amp;", "&")

        text = re.sub(r"\n\s*\n", "\n\n", text)
        return text.strip()


email_provider = EmailProvider()
