"""Timing rules for the periodic notification jobs."""

from datetime import time, timedelta

# Foremen are reminded to submit their timesheet at this local time
DAILY_REMINDER_LOCAL_TIME = time(hour=18, minute=30)

# Drafts older than this get an expiry reminder
DRAFT_EXPIRY_AGE = timedelta(days=2)

# Submitted timesheets waiting longer than this appear in the admin digest
ADMIN_DIGEST_PENDING_AGE = timedelta(hours=24)
ADMIN_DIGEST_RANGE_LABEL = "older than 24 hours"

# Certificates expiring within this many days are reported
CERTIFICATE_EXPIRY_WINDOW_DAYS = 30
