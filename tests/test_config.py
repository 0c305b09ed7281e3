"""Tests for settings loading."""

import pytest

from researcher_finder.core.config import REQUIRED_KEYS, Settings


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every Settings key from the environment."""
    for name in Settings.__dataclass_fields__:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestFromEnv:
    """Settings.from_env."""

    def test_defaults(self, clean_env):
        settings = Settings.from_env(dotenv=False)
        assert settings.GROQ_API_KEY is None
        assert settings.QDRANT_COLLECTION == "researcher-index"
        assert settings.TOP_AUTHORS == 10
        assert settings.AGGREGATE_BY_AUTHOR is True
        assert settings.STARTUP_MODE == "permissive"

    def test_reads_typed_values(self, clean_env):
        clean_env.setenv("GROQ_API_KEY", "gsk-test")
        clean_env.setenv("TOP_AUTHORS", "5")
        clean_env.setenv("REASON_TIMEOUT", "2.5")
        clean_env.setenv("AGGREGATE_BY_AUTHOR", "false")
        clean_env.setenv("SEARCH_FALLBACK_TO_MOCK", "yes")

        settings = Settings.from_env(dotenv=False)

        assert settings.GROQ_API_KEY == "gsk-test"
        assert settings.TOP_AUTHORS == 5
        assert settings.REASON_TIMEOUT == 2.5
        assert settings.AGGREGATE_BY_AUTHOR is False
        assert settings.SEARCH_FALLBACK_TO_MOCK is True

    def test_invalid_numbers_keep_defaults(self, clean_env):
        clean_env.setenv("PORT", "not-a-port")
        clean_env.setenv("SEARCH_TIMEOUT", "soon")
        settings = Settings.from_env(dotenv=False)
        assert settings.PORT == 3000
        assert settings.SEARCH_TIMEOUT == 30.0


class TestDerivedValues:
    """Properties computed from settings."""

    def test_search_limit_overfetches(self):
        assert Settings(TOP_AUTHORS=10, OVERFETCH_FACTOR=20).search_limit == 200

    def test_search_limit_without_aggregation(self):
        assert Settings(TOP_AUTHORS=10, AGGREGATE_BY_AUTHOR=False).search_limit == 10

    def test_missing_required(self):
        settings = Settings(GROQ_API_KEY="k", QDRANT_ENDPOINT="http://q", QDRANT_API_KEY=None)
        assert settings.missing_required() == ["QDRANT_API_KEY"]

    def test_env_status_reports_all_required_keys(self):
        status = Settings(GROQ_API_KEY="secret").env_status()
        assert set(REQUIRED_KEYS) <= set(status)
        assert status["GROQ_API_KEY"] == "SET"
        assert status["QDRANT_ENDPOINT"] == "MISSING"

    def test_modes(self):
        assert Settings(STARTUP_MODE="Strict").is_strict
        assert not Settings().is_strict
        assert Settings().is_production
        assert not Settings(ENVIRONMENT="development").is_production

    def test_cors_origins(self):
        assert Settings(CORS_ORIGINS="http://a.test, http://b.test").cors_origins == [
            "http://a.test",
            "http://b.test",
        ]


class TestDefaultedKeys:
    """Keys with built-in defaults."""

    def test_defaulted_keys_are_not_required(self, clean_env):
        settings = Settings.from_env(dotenv=False)
        missing = settings.missing_required()
        assert "QDRANT_COLLECTION" not in missing
        assert "EMBEDDING_MODEL" not in missing
        assert missing == list(REQUIRED_KEYS)

    def test_empty_embedding_model_disables_the_model(self, clean_env):
        clean_env.setenv("EMBEDDING_MODEL", "")
        settings = Settings.from_env(dotenv=False)
        assert settings.EMBEDDING_MODEL is None
        assert not settings.embedding_configured
        assert settings.env_status()["EMBEDDING_MODEL"] == "MISSING"

    def test_empty_collection_keeps_default(self, clean_env):
        clean_env.setenv("QDRANT_COLLECTION", "")
        assert Settings.from_env(dotenv=False).QDRANT_COLLECTION == "researcher-index"
