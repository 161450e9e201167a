"""Security context middleware for authenticated caller access."""

from collections.abc import Callable

from django.http import HttpRequest, HttpResponse

from core.auth.context import clear_current_user


class SecurityContextMiddleware:
    """Clear the thread-local caller once each request is finished.

    DRF authenticates lazily inside the view, so the caller is stored by
    ``core.views.AuthenticatedAPIView.initial``; this middleware only
    guarantees the thread-local slot never leaks into the next request
    served by the same worker thread.
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        """Initialize the middleware.

        Args:
            get_response: The next middleware or view in the chain.
        """
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        """Process the request and always clear the security context."""
        try:
            return self.get_response(request)
        finally:
            clear_current_user()
