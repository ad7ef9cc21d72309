"""Integration tests for the mapping, catalog and observability endpoints

Tests the HTTP layer over a registry loaded from in-memory providers:
- Batch mapping with summary
- Single description test endpoint
- Config and reload endpoints
- Catalog listing
- 503 responses while no catalog is loaded
"""

import pytest
from fastapi.testclient import TestClient

from config import Settings, get_settings
from main import create_app
from matching.registry import MatcherRegistry


@pytest.fixture
def app(registry):
    app = create_app(registry=registry)
    app.dependency_overrides[get_settings] = lambda: Settings(MAPPING_CONFIG_PATH=None, CATALOG_SOURCE="csv")
    return app


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def unloaded_client(catalog_provider):
    catalog_provider.fail = True
    app = create_app(registry=MatcherRegistry(catalog_provider))
    app.dependency_overrides[get_settings] = lambda: Settings(MAPPING_CONFIG_PATH=None, CATALOG_SOURCE="csv")
    return TestClient(app)


class TestMapEndpoint:
    """Tests for POST /api/v1/mappings/map"""

    def test_maps_batch_in_order(self, client):
        response = client.post("/api/v1/mappings/map", json={
            "lines": [
                {
                    "input_text": "25mm corrugated PP pipe",
                    "qty": 100,
                    "uom": "MTR",
                    "raw_tokens": {"size_token": "25mm", "material_token": "PP"},
                },
                {"input_text": "teflon hose", "raw_tokens": {"size_token": "8mm"}},
            ]
        })

        assert response.status_code == 200
        data = response.json()
        first, second = data["lines"]

        assert first["result"]["status"] == "auto_mapped"
        assert first["result"]["selected_sku"] == "NFC25"
        assert first["normalized"]["size_mm"] == 25.0
        assert first["normalized"]["material"] == "PP"
        assert first["qty"] == 100
        assert first["result"]["explanation"]["confidence"] == "high"
        assert first["result"]["candidates"][0]["reasons"][0]["kind"] == "fuzzy_match"

        assert second["result"]["status"] == "failed"
        assert second["result"]["selected_sku"] is None
        assert second["result"]["candidates"] == []

        assert data["summary"] == {
            "total_lines": 2,
            "auto_mapped": 1,
            "needs_review": 0,
            "failed": 1,
        }

    def test_response_carries_request_id(self, client):
        response = client.post(
            "/api/v1/mappings/map",
            json={"lines": []},
            headers={"X-Request-ID": "rfq-42"},
        )

        assert response.status_code == 200
        assert response.headers["X-Request-ID"] == "rfq-42"
        assert response.json()["summary"]["total_lines"] == 0

    def test_blank_input_text_is_rejected(self, client):
        response = client.post("/api/v1/mappings/map", json={"lines": [{"input_text": ""}]})

        assert response.status_code == 422
        assert response.json()["error"] == "validation_error"

    def test_unloaded_catalog_returns_503(self, unloaded_client):
        response = unloaded_client.post("/api/v1/mappings/map", json={"lines": []})

        assert response.status_code == 503


class TestTestEndpoint:
    """Tests for POST /api/v1/mappings/test"""

    def test_returns_candidate_details(self, client):
        response = client.post("/api/v1/mappings/test", json={
            "description": "25mm corrugated PP pipe",
            "size_od_mm": 25,
            "material": "PP",
        })

        assert response.status_code == 200
        data = response.json()
        assert data["result"]["selected_sku"] == "NFC25"
        assert data["normalized"]["size_mm"] == 25.0
        assert data["candidate_skus"][0]["sku_code"] == "NFC25"
        assert data["candidate_skus"][0]["product_family"] == "Corrugated Flexible Pipe"

    def test_blank_description_returns_400(self, client):
        response = client.post("/api/v1/mappings/test", json={"description": "   "})

        assert response.status_code == 400

    def test_no_match_returns_failed(self, client):
        response = client.post("/api/v1/mappings/test", json={"description": "teflon hose", "size_od_mm": 8})

        assert response.status_code == 200
        data = response.json()
        assert data["result"]["status"] == "failed"
        assert data["candidate_skus"] == []
        assert data["result"]["explanation"]["assumptions"] == [
            "No suitable SKU candidates found",
            "Consider checking product catalog or input format",
        ]


class TestConfigAndReload:

    def test_get_config(self, client):
        response = client.get("/api/v1/mappings/config")

        assert response.status_code == 200
        assert response.json()["auto_map_threshold"] == 0.85
        assert response.json()["confidence_delta"] == 0.12

    def test_reload_swaps_snapshot(self, client, registry, catalog_provider, catalog_entries):
        before = registry.current()
        catalog_provider.entries = catalog_entries[:3]

        response = client.post("/api/v1/mappings/reload")

        assert response.status_code == 200
        assert response.json()["sku_count"] == 3
        assert response.json()["alias_source"] == "provider"
        assert registry.current() is not before

    def test_reload_failure_returns_503_and_keeps_snapshot(self, client, registry, catalog_provider):
        before = registry.current()
        catalog_provider.fail = True

        response = client.post("/api/v1/mappings/reload")

        assert response.status_code == 503
        assert registry.current() is before


class TestCatalogEndpoint:
    """Tests for GET /api/v1/catalog/skus"""

    def test_lists_snapshot_skus(self, client):
        response = client.get("/api/v1/catalog/skus")

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 5
        assert [item["sku_code"] for item in data["items"]][:2] == ["NFC25", "NFC32"]

    def test_filters_by_family(self, client):
        response = client.get("/api/v1/catalog/skus", params={"family": "rigid pvc conduit"})

        assert [item["sku_code"] for item in response.json()["items"]] == ["PVC25M", "PVC25H"]

    def test_pagination(self, client):
        data = client.get("/api/v1/catalog/skus", params={"limit": 2, "offset": 4}).json()

        assert data["total"] == 5
        assert [item["sku_code"] for item in data["items"]] == ["GFB3OCT"]


class TestObservabilityEndpoints:

    def test_health_reports_catalog(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["components"]["catalog"]["status"] == "healthy"

    def test_health_unhealthy_without_catalog(self, unloaded_client):
        response = unloaded_client.get("/health")

        assert response.status_code == 503
        assert response.json()["status"] == "unhealthy"

    def test_ready(self, client, unloaded_client):
        assert client.get("/ready").status_code == 200
        assert unloaded_client.get("/ready").status_code == 503

    def test_metrics_exposes_mapping_counters(self, client):
        client.post("/api/v1/mappings/test", json={"description": "25mm corrugated PP pipe"})

        response = client.get("/metrics")

        assert response.status_code == 200
        assert "quoteflow_mapping_lines_total" in response.text
