"""Inbox response schemas."""

from core.schemas.inbox.response.inbox_list_response import InboxListResponse
from core.schemas.inbox.response.mark_read_response import MarkReadResponse

__all__ = ["InboxListResponse", "MarkReadResponse"]
