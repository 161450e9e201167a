"""Append-only audit log for pipeline events."""

import json
from typing import Any

from django.core.serializers.json import DjangoJSONEncoder
from django.db import transaction

import structlog

from core.models import AuditEvent

logger = structlog.get_logger(__name__)


def audit(event_name: str, **details: Any) -> None:
    """Record ``event_name`` with ``details``.

    Written in its own savepoint; failures are logged and never propagate to
    the operation being audited.
    """
    try:
        with transaction.atomic():
            AuditEvent.objects.create(
                event_name=event_name,
                details=_json_safe(details),
            )
    except Exception as e:
        logger.error("audit_write_failed", event_name=event_name, error=str(e))
        return

    logger.info("audit_recorded", event_name=event_name, **details)


def _json_safe(details: dict[str, Any]) -> dict[str, Any]:
    # UUIDs and datetimes become strings
    return json.loads(json.dumps(details, cls=DjangoJSONEncoder))
