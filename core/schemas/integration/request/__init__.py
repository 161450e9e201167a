"""Integration request schemas."""

from core.schemas.integration.request.smtp_test_request import SmtpTestRequest

__all__ = ["SmtpTestRequest"]
