"""SMTP integration configuration schema."""

from pydantic import Field

from core.schemas.base_schema_model import BaseSchemaModel


class SmtpConfig(BaseSchemaModel):
    """SMTP server credentials edited by Super Admins.

    The email channel is only eligible when the configuration is enabled and
    every connection field is present.
    """

    enabled: bool = Field(False, description="Whether email delivery is enabled")
    host: str | None = Field(None, description="SMTP server host")
    port: int | None = Field(None, description="SMTP server port")
    secure: bool = Field(False, description="Use implicit TLS (SMTPS)")
    username: str | None = Field(None, description="Login username")
    password: str | None = Field(None, description="Login password")
    from_name: str | None = Field(None, description="Sender display name")
    from_email: str | None = Field(
        None, description="Sender address; defaults to the username"
    )

    @property
    def is_configured(self) -> bool:
        """Whether the email channel can be dispatched with this config."""
        return bool(
            self.enabled and self.host and self.port and self.username and self.password
        )
