"""Notification template keys and deep links.

Template content lives in the ``notification_templates`` table and is edited
by administrators; only the keys are fixed in code.
"""

# Timesheets
TS_REMIND_DUE = "TS_REMIND_DUE_V1"
TS_DRAFT_EXPIRED = "TS_DRAFT_EXPIRED_V1"
TS_NEEDS_APPROVAL = "TS_NEEDS_APPROVAL_V1"
TS_APPROVED = "TS_APPROVED_V1"
TS_REJECTED = "TS_REJECTED_V1"
ADMIN_DIGEST = "ADMIN_DIGEST_V1"

# Material orders
MO_NEW_ORDER = "MO_NEW_ORDER_V1"
MO_STATUS_UPDATE = "MO_STATUS_UPDATE_V1"

# Compliance
CERT_EXPIRING = "CERT_EXPIRING_V1"

DEEP_LINK_TIMESHEET = "app://timesheet"
DEEP_LINK_SUBMISSIONS = "app://submissions"
DEEP_LINK_SUBMISSION = "app://submissions/{submission_id}"
DEEP_LINK_ADMIN_MATERIAL_ORDER = "app://admin/material-orders/{order_id}"
DEEP_LINK_MATERIAL_ORDER = "app://dashboard/material-orders/{order_id}"
