"""OAuth2 Bearer authentication for Django REST Framework.

Access tokens are JWTs issued by the workforce application's auth service and
validated locally with the shared secret. Scopes decide what a caller may do:
``notification:admin`` for delivery and scheduling triggers,
``notification:user`` for a user's own inbox.
"""

from typing import Any

from django.conf import settings

import jwt
import structlog
from rest_framework import authentication, exceptions

logger = structlog.get_logger(__name__)

ADMIN_SCOPE = "notification:admin"
USER_SCOPE = "notification:user"


class OAuth2User:
    """Simple user object for OAuth2 authenticated requests.

    This is not a Django User model, just a container for token claims.
    """

    def __init__(self, user_id: str, client_id: str, scopes: list[str]):
        """Initialize OAuth2 user.

        Args:
            user_id: User ID from token (or client_id for client_credentials)
            client_id: OAuth2 client ID
            scopes: List of granted scopes
        """
        self.id = user_id
        self.user_id = user_id
        self.client_id = client_id
        self.scopes = scopes
        self.is_authenticated = True

    def has_scope(self, scope: str) -> bool:
        """Check if user has a specific scope."""
        return scope in self.scopes

    @property
    def is_admin(self) -> bool:
        """Whether the caller may trigger deliveries and scheduler jobs."""
        return self.has_scope(ADMIN_SCOPE)

    def __str__(self):
        """String representation."""
        return f"OAuth2User(user_id={self.user_id}, client_id={self.client_id})"


class OAuth2Authentication(authentication.BaseAuthentication):
    """OAuth2 Bearer token authentication backed by local JWT validation."""

    algorithms = ("HS256", "HS384", "HS512")

    def authenticate(self, request):
        """Authenticate the request using OAuth2 Bearer token.

        Args:
            request: Django request object

        Returns:
            Tuple of (user, token) or None if authentication not attempted

        Raises:
            AuthenticationFailed: If the header is malformed or the token invalid
        """
        if not settings.OAUTH2_SERVICE_ENABLED:
            return None

        auth_header = request.headers.get("authorization")
        if not auth_header:
            return None

        parts = auth_header.split()
        if len(parts) != 2 or parts[0].lower() != "bearer":
            raise exceptions.AuthenticationFailed("Invalid authorization header format")

        token = parts[1]
        claims = self._decode_token(token)

        user = OAuth2User(
            user_id=str(claims.get("user_id") or claims.get("sub") or "unknown"),
            client_id=claims.get("client_id", "unknown"),
            scopes=self._extract_scopes(claims),
        )
        return (user, token)

    def _decode_token(self, token: str) -> dict[str, Any]:
        """Verify the JWT signature and standard claims.

        Raises:
            AuthenticationFailed: If the token cannot be trusted
        """
        if not settings.JWT_SECRET:
            logger.error("jwt_secret_not_configured")
            raise exceptions.AuthenticationFailed("JWT validation not configured")

        try:
            payload = jwt.decode(
                token,
                settings.JWT_SECRET,
                algorithms=list(self.algorithms),
                options={"verify_signature": True, "verify_exp": True},
            )
        except jwt.ExpiredSignatureError as e:
            logger.info("jwt_expired")
            raise exceptions.AuthenticationFailed("Token has expired") from e
        except jwt.InvalidTokenError as e:
            logger.warning("jwt_invalid", error=str(e))
            raise exceptions.AuthenticationFailed("Invalid token") from e

        token_type = payload.get("type")
        if token_type != "access_token":
            logger.warning("jwt_wrong_type", token_type=token_type)
            raise exceptions.AuthenticationFailed(f"Invalid token type: {token_type}")

        return payload

    @staticmethod
    def _extract_scopes(claims: dict[str, Any]) -> list[str]:
        """Read scopes from either a ``scopes`` list or a space separated ``scope``."""
        scopes = claims.get("scopes")
        if isinstance(scopes, list):
            return [str(scope) for scope in scopes]
        scope = claims.get("scope")
        if isinstance(scope, str):
            return scope.split()
        return []

    def authenticate_header(self, _request):
        """Return WWW-Authenticate header value for 401 responses."""
        return "Bearer"
