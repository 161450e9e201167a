"""Request schema for the SMTP connection tester."""

from pydantic import Field

from core.schemas.base_schema_model import BaseSchemaModel


class SmtpTestRequest(BaseSchemaModel):
    """Unsaved SMTP settings an admin wants to verify."""

    host: str = Field(..., min_length=1, description="SMTP server host")
    port: int = Field(..., gt=0, le=65535, description="SMTP server port")
    secure: bool = Field(False, description="Use implicit TLS (SMTPS)")
    username: str = Field(..., min_length=1, description="Login username")
    password: str = Field(..., min_length=1, description="Login password")
