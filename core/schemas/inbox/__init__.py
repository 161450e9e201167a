"""In-app inbox schemas."""

from core.schemas.inbox.inbox_message_detail import InboxMessageDetail
from core.schemas.inbox.response import InboxListResponse, MarkReadResponse

__all__ = ["InboxListResponse", "InboxMessageDetail", "MarkReadResponse"]
