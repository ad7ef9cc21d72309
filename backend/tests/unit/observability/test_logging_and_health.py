"""Unit tests for JSON logging and health checks"""

import json
import logging

import pytest

from matching.registry import MatcherRegistry
from observability.health import (
    ComponentHealth,
    HealthStatus,
    check_catalog_health,
    get_overall_health,
)
from observability.logging_config import JSONFormatter, RequestIDFilter, set_request_id
from fixtures.providers import StaticAliasProvider


class TestJSONFormatter:

    def make_record(self, **extra):
        record = logging.LogRecord(
            name="matching.engine",
            level=logging.INFO,
            pathname=__file__,
            lineno=1,
            msg="Mapped %d lines",
            args=(3,),
            exc_info=None,
        )
        for key, value in extra.items():
            setattr(record, key, value)
        return record

    def test_formats_record_as_json(self):
        set_request_id("req-123")
        record = self.make_record(line_count=3)
        RequestIDFilter().filter(record)

        payload = json.loads(JSONFormatter().format(record))

        assert payload["level"] == "INFO"
        assert payload["logger"] == "matching.engine"
        assert payload["message"] == "Mapped 3 lines"
        assert payload["request_id"] == "req-123"
        assert payload["line_count"] == 3

    def test_unknown_extras_are_not_copied(self):
        payload = json.loads(JSONFormatter().format(self.make_record(secret="x")))

        assert "secret" not in payload


class TestCatalogHealth:

    def test_not_loaded_is_unhealthy(self, catalog_provider):
        health = check_catalog_health(MatcherRegistry(catalog_provider))

        assert health.status == HealthStatus.UNHEALTHY

    def test_loaded_is_healthy(self, registry):
        assert check_catalog_health(registry).status == HealthStatus.HEALTHY

    def test_seed_aliases_are_degraded(self, catalog_provider):
        registry = MatcherRegistry(catalog_provider, StaticAliasProvider(fail=True))
        registry.reload()

        assert check_catalog_health(registry).status == HealthStatus.DEGRADED


class TestOverallHealth:

    @pytest.mark.parametrize("statuses,expected", [
        ([HealthStatus.HEALTHY, HealthStatus.HEALTHY], HealthStatus.HEALTHY),
        ([HealthStatus.HEALTHY, HealthStatus.DEGRADED], HealthStatus.DEGRADED),
        ([HealthStatus.DEGRADED, HealthStatus.UNHEALTHY], HealthStatus.UNHEALTHY),
    ])
    def test_overall(self, statuses, expected):
        components = {f"c{i}": ComponentHealth(status=s) for i, s in enumerate(statuses)}

        assert get_overall_health(components) == expected
