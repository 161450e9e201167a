"""Django settings for the workforce notification service.

All values are read from environment variables so the same image can run
locally, in CI and in production. Integration credentials (SMTP, WhatsApp)
are not configured here: they are runtime data stored in the integration
settings table and loaded for every delivery.
"""

import os
from pathlib import Path


def _env_bool(name: str, default: bool) -> bool:
    """Read a boolean flag from the environment."""
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.getenv("DJANGO_SECRET_KEY", "insecure-dev-key-change-me")

DEBUG = _env_bool("DEBUG", False)

ALLOWED_HOSTS = [
    host.strip()
    for host in os.getenv("ALLOWED_HOSTS", "localhost,127.0.0.1").split(",")
    if host.strip()
]

INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "django.contrib.auth",
    "rest_framework",
    "django_rq",
    "core",
]

MIDDLEWARE = [
    "core.middleware.RequestIDMiddleware",
    "core.middleware.ProcessTimeMiddleware",
    "django.middleware.common.CommonMiddleware",
    "core.middleware.SecurityContextMiddleware",
]

ROOT_URLCONF = "workforce_notifications.urls"

WSGI_APPLICATION = "workforce_notifications.wsgi.application"

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.postgresql",
        "NAME": os.getenv("POSTGRES_DB", "workforce"),
        "USER": os.getenv("POSTGRES_USER", "workforce"),
        "PASSWORD": os.getenv("POSTGRES_PASSWORD", ""),
        "HOST": os.getenv("POSTGRES_HOST", "localhost"),
        "PORT": os.getenv("POSTGRES_PORT", "5432"),
        "OPTIONS": {
            "options": f"-c search_path={os.getenv('POSTGRES_SCHEMA', 'public')}",
        },
        "CONN_MAX_AGE": int(os.getenv("POSTGRES_CONN_MAX_AGE", "60")),
    }
}

REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379/0")

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.redis.RedisCache",
        "LOCATION": REDIS_URL,
    }
}

RQ_QUEUES = {
    "default": {
        "URL": REDIS_URL,
        "DEFAULT_TIMEOUT": int(os.getenv("RQ_DEFAULT_TIMEOUT", "300")),
    },
}

REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": [
        "core.auth.oauth2.OAuth2Authentication",
    ],
    "DEFAULT_PERMISSION_CLASSES": [
        "rest_framework.permissions.IsAuthenticated",
    ],
    "DEFAULT_RENDERER_CLASSES": [
        "rest_framework.renderers.JSONRenderer",
    ],
    "EXCEPTION_HANDLER": "core.exceptions.custom_exception_handler",
    "UNAUTHENTICATED_USER": None,
}

LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = False
USE_TZ = True

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# OAuth2 / JWT
OAUTH2_SERVICE_ENABLED = _env_bool("OAUTH2_SERVICE_ENABLED", True)
JWT_SECRET = os.getenv("JWT_SECRET", "")

# Notification delivery
NOTIFICATION_DEFAULT_TIMEZONE = os.getenv(
    "NOTIFICATION_DEFAULT_TIMEZONE", "America/New_York"
)
NOTIFICATION_AUTO_QUEUE = _env_bool("NOTIFICATION_AUTO_QUEUE", True)
NOTIFICATION_QUEUE_NAME = os.getenv("NOTIFICATION_QUEUE_NAME", "default")
NOTIFICATION_DEFAULT_FROM_NAME = os.getenv(
    "NOTIFICATION_DEFAULT_FROM_NAME", "Crossroads"
)
SMTP_TIMEOUT_SECONDS = int(os.getenv("SMTP_TIMEOUT_SECONDS", "30"))
WHATSAPP_TIMEOUT_SECONDS = int(os.getenv("WHATSAPP_TIMEOUT_SECONDS", "10"))
TWILIO_API_BASE_URL = os.getenv("TWILIO_API_BASE_URL", "https://api.twilio.com")

# Cron strings (UTC) used by register_notification_schedules
NOTIFICATION_JOB_SCHEDULES = {
    "daily-reminders": os.getenv("DAILY_REMINDERS_CRON", "0 * * * *"),
    "admin-digest": os.getenv("ADMIN_DIGEST_CRON", "0 13 * * 1-5"),
    "certificate-expirations": os.getenv("CERTIFICATE_EXPIRATIONS_CRON", "0 13 * * *"),
}
