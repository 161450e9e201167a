"""Quiet hours evaluation.

Decides whether the current wall-clock time in a user's timezone falls inside
their do-not-disturb window. Windows whose end precedes their start wrap
around midnight (``21:00``-``07:00``).
"""

from collections.abc import Mapping
from datetime import datetime, time
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from django.conf import settings
from django.utils import timezone as django_timezone

import structlog
from pydantic import ValidationError

from core.schemas.notification import QuietHoursWindow

logger = structlog.get_logger(__name__)

_TIME_FORMAT = "%H:%M"


def is_quiet_now(
    window: QuietHoursWindow | Mapping | None,
    timezone: str | None = None,
    now: datetime | None = None,
) -> bool:
    """Return True when ``now`` falls inside the quiet window.

    Args:
        window: Quiet hours window, or a mapping with ``start`` and ``end``.
        timezone: IANA timezone of the user; defaults to
            ``NOTIFICATION_DEFAULT_TIMEZONE``.
        now: Instant to evaluate; defaults to the current time.

    Returns:
        False when no complete window is configured.
    """
    window = _coerce_window(window)
    if window is None or not window.start or not window.end:
        return False

    start = _parse_time(window.start)
    end = _parse_time(window.end)
    if start is None or end is None:
        return False

    current = (now or django_timezone.now()).astimezone(resolve_timezone(timezone))
    local_time = current.time().replace(second=0, microsecond=0)

    if end >= start:
        return start <= local_time < end
    return local_time >= start or local_time < end


def resolve_timezone(name: str | None) -> ZoneInfo:
    """Return the zone for ``name``, falling back to the default timezone."""
    default_name = settings.NOTIFICATION_DEFAULT_TIMEZONE
    if not name:
        return ZoneInfo(default_name)
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning(
            "unknown_timezone",
            timezone=name,
            fallback=default_name,
        )
        return ZoneInfo(default_name)


def _coerce_window(
    window: QuietHoursWindow | Mapping | None,
) -> QuietHoursWindow | None:
    if window is None or isinstance(window, QuietHoursWindow):
        return window
    try:
        return QuietHoursWindow.model_validate(window)
    except ValidationError:
        logger.warning("invalid_quiet_hours_window", window=str(window))
        return None


def _parse_time(value: str) -> time | None:
    try:
        return datetime.strptime(value, _TIME_FORMAT).time()
    except ValueError:
        logger.warning("invalid_quiet_hours_time", value=value)
        return None
