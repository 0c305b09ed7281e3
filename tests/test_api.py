"""Tests for the HTTP surface."""

import dataclasses

import pytest
from fastapi.testclient import TestClient

from researcher_finder.api.app import create_app
from researcher_finder.core.exceptions import ConfigurationMissing
from researcher_finder.vectorstore.client import reset_qdrant_client
from tests.conftest import FakeReasoner, FakeStore


@pytest.fixture
def make_client(settings):
    """Build a TestClient whose app uses the given pipeline."""

    def _make(pipeline=None, app_settings=None):
        app = create_app(app_settings or settings)
        app.state.pipeline = pipeline
        return TestClient(app)

    return _make


class TestServiceEndpoints:
    """Descriptor, health and configuration endpoints."""

    def test_root_descriptor(self, make_client):
        response = make_client().get("/")
        assert response.status_code == 200
        body = response.json()
        assert body["service"] == "Researcher Finder API"
        assert "search" in body["endpoints"]

    def test_api_health(self, make_client):
        response = make_client().get("/api/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["index"] == "test-index"
        assert "timestamp" in body

    def test_plain_health(self, make_client):
        response = make_client().get("/health")
        assert response.status_code == 200
        assert response.text == "OK"

    def test_env_check_never_exposes_values(self, make_client, settings):
        configured = dataclasses.replace(settings, GROQ_API_KEY="gsk-secret-value")
        response = make_client(app_settings=configured).get("/api/env-check")
        assert response.status_code == 200
        body = response.json()
        assert body["GROQ_API_KEY"] == "SET"
        assert body["QDRANT_ENDPOINT"] == "MISSING"
        assert "gsk-secret-value" not in response.text
        assert set(body.values()) <= {"SET", "MISSING"}

    def test_index_info_without_qdrant(self, make_client):
        reset_qdrant_client()
        response = make_client().get("/api/index-info")
        assert response.status_code == 500
        assert response.json() == {"error": "Failed to get index info"}

    def test_unknown_route_is_json_404(self, make_client):
        response = make_client().get("/api/nope")
        assert response.status_code == 404
        assert response.json() == {"error": "Not Found", "path": "/api/nope"}


class TestSearchEndpoint:
    """POST /api/search."""

    def test_groups_results_by_author(self, make_client, build_pipeline, scenario_rows):
        client = make_client(build_pipeline(store=FakeStore(scenario_rows)))

        response = client.post("/api/search", json={"query": "AI in healthcare"})

        assert response.status_code == 200
        results = response.json()
        assert [r["name"] for r in results] == ["Dr. A", "Dr. B"]
        assert results[0]["paper_count"] == 3
        assert results[0]["cited_by_count"] == 60
        assert results[0]["h_index"] == 8
        assert results[1]["paper_count"] == 1
        assert results[1]["cited_by_count"] == 100
        assert results[1]["h_index"] == 20

    @pytest.mark.parametrize("body", [{"query": ""}, {"query": "   "}, {}, {"university": "MIT"}])
    def test_blank_query_is_rejected_without_calls(
        self, make_client, build_pipeline, translator, embedder, reasoner, body
    ):
        store = FakeStore([])
        client = make_client(build_pipeline(store=store))

        response = client.post("/api/search", json=body)

        assert response.status_code == 400
        assert "error" in response.json()
        assert translator.calls == []
        assert embedder.calls == []
        assert store.calls == []
        assert reasoner.calls == []

    def test_missing_query_message_is_localized(self, make_client, build_pipeline):
        client = make_client(build_pipeline(store=FakeStore([])))

        english = client.post("/api/search", json={"query": "", "language": "en"})
        japanese = client.post("/api/search", json={"query": ""})

        assert english.json()["error"] == "Missing 'query' in request body."
        assert japanese.json()["error"] != english.json()["error"]

    def test_malformed_body_is_400(self, make_client, build_pipeline):
        client = make_client(build_pipeline(store=FakeStore([])))

        response = client.post(
            "/api/search",
            content=b"not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert "error" in response.json()

    def test_zero_rows_is_empty_array(self, make_client, build_pipeline, reasoner):
        client = make_client(build_pipeline(store=FakeStore([])))

        response = client.post("/api/search", json={"query": "quantum biology"})

        assert response.status_code == 200
        assert response.json() == []
        assert reasoner.calls == []

    def test_reason_timeout_degrades_one_entry(self, make_client, build_pipeline, scenario_rows):
        reasoner = FakeReasoner(slow_authors={"Dr. A"})
        client = make_client(build_pipeline(store=FakeStore(scenario_rows), reasoner=reasoner))

        response = client.post("/api/search", json={"query": "AI in healthcare", "language": "en"})

        assert response.status_code == 200
        dr_a, dr_b = response.json()
        assert dr_a["reason_title_1"] == "Relevant research field"
        assert dr_b["reason_title_1"] == "Why Dr. B"

    def test_search_failure_is_500_with_details_outside_production(
        self, make_client, build_pipeline
    ):
        client = make_client(build_pipeline(store=FakeStore(fail=True)))

        response = client.post("/api/search", json={"query": "robots"})

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "Internal server error."
        assert "search" in body["details"]

    def test_search_failure_hides_details_in_production(
        self, make_client, build_pipeline, settings
    ):
        production = dataclasses.replace(settings, ENVIRONMENT="production")
        client = make_client(
            build_pipeline(store=FakeStore(fail=True), settings=production),
            app_settings=production,
        )

        response = client.post("/api/search", json={"query": "robots"})

        assert response.status_code == 500
        assert "details" not in response.json()


class TestStartupMode:
    """Strict vs permissive handling of missing configuration."""

    def test_permissive_mode_starts(self, settings):
        app = create_app(settings)
        assert app.state.settings is settings

    def test_strict_mode_refuses_to_start(self, settings):
        strict = dataclasses.replace(settings, STARTUP_MODE="strict")
        with pytest.raises(ConfigurationMissing) as exc_info:
            create_app(strict)
        assert "GROQ_API_KEY" in exc_info.value.missing_keys

    def test_strict_mode_with_full_config(self, settings):
        strict = dataclasses.replace(
            settings,
            STARTUP_MODE="strict",
            GROQ_API_KEY="key",
            QDRANT_ENDPOINT="http://localhost:6333",
            QDRANT_API_KEY="key",
            EMBEDDING_MODEL="sentence-transformers/all-MiniLM-L6-v2",
        )
        assert create_app(strict).state.settings is strict
