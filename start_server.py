"""Production entry point for the workforce notification API.

Starts the WSGI application under Gunicorn. RQ delivery workers run as
separate processes (``python manage.py rqworker``) and are not started here.
"""

import os
import sys

from gunicorn.app.wsgiapp import run


def main():
    """Start the API under Gunicorn.

    ``PORT`` and ``WEB_CONCURRENCY`` override the bind port and worker count.
    Synchronous delivery triggers wait on SMTP and Twilio, so the timeout
    leaves room for both provider timeouts to expire.
    """
    os.environ.setdefault("DJANGO_SETTINGS_MODULE", "workforce_notifications.settings")
    sys.argv = [
        "gunicorn",
        "workforce_notifications.wsgi:application",
        "--bind",
        f"0.0.0.0:{os.getenv('PORT', '8000')}",
        "--workers",
        os.getenv("WEB_CONCURRENCY", "4"),
        "--threads",
        "2",
        "--timeout",
        "60",
        "--access-logfile",
        "-",
        "--error-logfile",
        "-",
    ]
    run()


if __name__ == "__main__":
    main()
