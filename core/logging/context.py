"""Request correlation id shared between middleware, log processors and jobs."""

from contextvars import ContextVar

_request_id: ContextVar[str | None] = ContextVar("request_id", default=None)


def set_request_id(request_id: str) -> None:
    """Remember the correlation id of the request or job being processed."""
    _request_id.set(request_id)


def get_request_id() -> str | None:
    """Return the current correlation id, or None outside a request or job."""
    return _request_id.get()


def clear_request_id() -> None:
    """Forget the correlation id once the request or job is complete."""
    _request_id.set(None)
