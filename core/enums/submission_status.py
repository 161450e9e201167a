"""Timesheet submission status enumeration."""

from enum import Enum


class SubmissionStatus(str, Enum):
    """Lifecycle of a foreman's daily timesheet submission."""

    DRAFT = "Draft"
    SUBMITTED = "Submitted"
    APPROVED = "Approved"
    REJECTED = "Rejected"
    FLAGGED = "Flagged"
    LOCKED = "Locked"
