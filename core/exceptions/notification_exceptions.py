"""Domain exceptions raised by the notification pipeline."""


class NotificationError(Exception):
    """Base exception for notification pipeline errors."""


class NotificationNotFoundError(NotificationError):
    """No notification record exists for the given id."""

    def __init__(self, notification_id):
        """Initialize notification not found error.

        Args:
            notification_id: ID of the notification that was not found
        """
        self.notification_id = notification_id
        super().__init__(f"Notification {notification_id} not found.")


class TemplateNotFoundError(NotificationError):
    """The template referenced by a notification does not exist.

    Permanent for that notification: the record is marked failed before this
    is raised.
    """

    def __init__(self, template_key: str):
        """Initialize template not found error.

        Args:
            template_key: Key of the missing template
        """
        self.template_key = template_key
        super().__init__(f"Template {template_key} not found.")


class ResourceNotFoundError(NotificationError):
    """A business entity referenced by an event request does not exist."""

    def __init__(self, resource: str, resource_id):
        """Initialize resource not found error.

        Args:
            resource: Human-readable resource name, e.g. ``Submission``
            resource_id: ID that was looked up
        """
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(f"{resource} {resource_id} not found.")


class UnknownJobError(NotificationError):
    """A scheduler job was requested by a name that is not registered."""

    def __init__(self, job_name: str):
        """Initialize unknown job error.

        Args:
            job_name: Requested job name
        """
        self.job_name = job_name
        super().__init__(f"Unknown notification job '{job_name}'.")
