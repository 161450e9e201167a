"""Scheduler job schemas."""

from core.schemas.job.response import JobRunResponse

__all__ = ["JobRunResponse"]
