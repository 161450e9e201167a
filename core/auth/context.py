"""Thread-local security context for the authenticated caller."""

import threading

from rest_framework.exceptions import AuthenticationFailed

from core.auth.oauth2 import OAuth2User

_security_context = threading.local()


def set_current_user(user: OAuth2User) -> None:
    """Store the authenticated caller for the rest of the request."""
    _security_context.user = user


def get_current_user() -> OAuth2User | None:
    """Return the authenticated caller, or None outside an authenticated request."""
    return getattr(_security_context, "user", None)


def require_current_user() -> OAuth2User:
    """Return the authenticated caller.

    Raises:
        AuthenticationFailed: If no caller is set in the security context.
    """
    user = get_current_user()
    if user is None:
        raise AuthenticationFailed("Authentication required")
    return user


def clear_current_user() -> None:
    """Forget the caller once the request is complete."""
    if hasattr(_security_context, "user"):
        delattr(_security_context, "user")
