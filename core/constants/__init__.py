"""Constants shared by the middleware, services and scheduled jobs.

Template keys and deep links live in ``core.constants.templates``; job
timings in ``core.constants.scheduling``.
"""

from core.constants import scheduling, templates
from core.constants.http import (
    PROCESS_TIME_HEADER,
    REQUEST_ID_HEADER,
    SLOW_REQUEST_THRESHOLD,
)

__all__ = [
    "PROCESS_TIME_HEADER",
    "REQUEST_ID_HEADER",
    "SLOW_REQUEST_THRESHOLD",
    "scheduling",
    "templates",
]
