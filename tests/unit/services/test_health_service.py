"""Unit tests for HealthService."""

import unittest
from unittest.mock import MagicMock, patch

from django.db.utils import OperationalError

from core.enums import HealthStatus
from core.services.health_service import HealthService


@patch("core.services.health_service.django_rq")
@patch("core.services.health_service.connection")
class TestHealthService(unittest.TestCase):
    """Test cases for HealthService."""

    def setUp(self):
        """Set up test fixtures."""
        self.service = HealthService(cache_ttl_seconds=60)

    def test_liveness_is_always_alive(self, _mock_connection, _mock_rq):
        """Test liveness never touches dependencies."""
        self.assertEqual(self.service.get_liveness_status().status, "alive")

    def test_ready_when_dependencies_healthy(self, _mock_connection, _mock_rq):
        """Test a healthy database and Redis report ready."""
        readiness = self.service.get_readiness_status()

        self.assertTrue(readiness.ready)
        self.assertFalse(readiness.degraded)
        self.assertEqual(readiness.status, "ready")
        self.assertEqual(
            readiness.dependencies["database"].status, HealthStatus.HEALTHY.value
        )
        self.assertEqual(
            readiness.dependencies["redis"].status, HealthStatus.HEALTHY.value
        )

    def test_redis_down_reports_degraded_but_ready(self, _mock_connection, mock_rq):
        """Test a Redis outage keeps the service in rotation."""
        mock_rq.get_connection.return_value.ping.side_effect = ConnectionError("down")

        readiness = self.service.get_readiness_status()

        self.assertTrue(readiness.ready)
        self.assertTrue(readiness.degraded)
        self.assertEqual(readiness.status, "degraded")
        redis = readiness.dependencies["redis"]
        self.assertFalse(redis.healthy)
        self.assertIn("down", redis.message)

    def test_database_operational_error_is_unhealthy(self, mock_connection, _mock_rq):
        """Test a refused database connection reports unhealthy."""
        mock_connection.ensure_connection.side_effect = OperationalError("refused")

        health = self.service.check_database_health()

        self.assertFalse(health.healthy)
        self.assertEqual(health.status, HealthStatus.UNHEALTHY.value)
        self.assertIn("refused", health.message)

    def test_unexpected_database_error(self, mock_connection, _mock_rq):
        """Test other database errors are reported as errors."""
        mock_connection.ensure_connection.side_effect = RuntimeError("odd")

        health = self.service.check_database_health()

        self.assertEqual(health.status, HealthStatus.ERROR.value)

    def test_results_are_cached(self, mock_connection, mock_rq):
        """Test probes are not repeated within the cache TTL."""
        redis = MagicMock()
        mock_rq.get_connection.return_value = redis

        self.service.get_readiness_status()
        self.service.get_readiness_status()

        mock_connection.ensure_connection.assert_called_once()
        redis.ping.assert_called_once()

    def test_expired_cache_probes_again(self, mock_connection, _mock_rq):
        """Test a zero TTL re-probes on every call."""
        service = HealthService(cache_ttl_seconds=0)

        service.check_database_health()
        service.check_database_health()

        self.assertEqual(mock_connection.ensure_connection.call_count, 2)
