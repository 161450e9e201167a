"""Scheduler job response schemas."""

from core.schemas.job.response.job_run_response import JobRunResponse

__all__ = ["JobRunResponse"]
