"""Pagination classes for API endpoints."""

from rest_framework.pagination import PageNumberPagination


class InboxPageNumberPagination(PageNumberPagination):
    """Pagination class for the in-app inbox endpoint.

    Provides page-number based pagination with configurable page size.
    """

    page_size = 20
    page_size_query_param = "page_size"
    max_page_size = 100
