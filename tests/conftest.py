"""Pytest configuration and shared fixtures."""

import os

import django
from django.test import Client

import pytest

# Configure Django settings for tests
os.environ.setdefault(
    "DJANGO_SETTINGS_MODULE", "workforce_notifications.settings_test"
)
django.setup()

from tests.auth import ADMIN_SCOPES, USER_SCOPES, bearer_header  # noqa: E402


@pytest.fixture
def api_client():
    """Provide Django test client."""
    return Client()


@pytest.fixture
def admin_client():
    """Provide a client whose requests carry an admin access token."""
    return Client(HTTP_AUTHORIZATION=bearer_header(scopes=ADMIN_SCOPES))


@pytest.fixture
def authenticated_client():
    """Provide a client whose requests carry a user access token."""
    return Client(HTTP_AUTHORIZATION=bearer_header(scopes=USER_SCOPES))
