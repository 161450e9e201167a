#!/usr/bin/env python
"""Run the notification API locally with Django's development server.

Extra arguments (for example ``0.0.0.0:8080``) are passed to ``runlocal``.
"""

import os
import sys

from django.core.management import execute_from_command_line


def main():
    """Start ``runlocal``, which skips the migration check.

    The schema belongs to the workforce application, so the server also
    starts (degraded) when the database is not reachable yet.
    """
    os.environ.setdefault("DJANGO_SETTINGS_MODULE", "workforce_notifications.settings")
    execute_from_command_line([sys.argv[0], "runlocal", *sys.argv[1:]])


if __name__ == "__main__":
    main()
