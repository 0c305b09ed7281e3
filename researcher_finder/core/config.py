"""
Application configuration management.

This module centralizes all configuration settings for the application,
loading values from environment variables with sensible defaults.

Configuration categories:
- LLM settings (API keys, model names)
- Vector database connection settings
- Embedding model configuration
- Retrieval parameters and per-call timeouts
- Server and startup policy

A Settings instance is built once at process entry (see `Settings.from_env`)
and passed explicitly to the application and its collaborators.
"""

from dataclasses import dataclass, fields
from typing import Dict, List, Optional
import os

from dotenv import load_dotenv

STARTUP_STRICT = "strict"
STARTUP_PERMISSIVE = "permissive"

# Keys without a default that must be present to reach the real backends
REQUIRED_KEYS = (
    "GROQ_API_KEY",
    "QDRANT_ENDPOINT",
    "QDRANT_API_KEY",
)

# Keys reported by the env-check endpoint
SERVICE_KEYS = REQUIRED_KEYS + ("QDRANT_COLLECTION", "EMBEDDING_MODEL", "GROQ_MODEL")

# Keys an explicitly empty variable switches off instead of defaulting
DISABLEABLE_KEYS = ("EMBEDDING_MODEL",)

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip().lower() in _TRUE_VALUES


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    try:
        return int(value) if value else default
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    try:
        return float(value) if value else default
    except ValueError:
        return default


@dataclass
class Settings:
    """
    Central configuration for the Researcher Finder service.

    Attributes:
        GROQ_API_KEY: API key for the Groq LLM service (translation, reasons).
        GROQ_MODEL: Groq chat model name.
        QDRANT_ENDPOINT: URL of the Qdrant instance holding the paper index.
        QDRANT_API_KEY: API key for Qdrant.
        QDRANT_COLLECTION: Name of the collection to search.
        EMBEDDING_MODEL: sentence-transformers model used for query embeddings.
            Set it to an empty value to use placeholder vectors.
        EMBEDDING_DIMENSION: Length of the embedding (and placeholder) vectors.
        TOP_AUTHORS: Number of authors returned per request.
        OVERFETCH_FACTOR: Raw rows requested per desired author.
        AGGREGATE_BY_AUTHOR: Group rows by author (False returns rows as-is).
        SEARCH_SERVER_SIDE_FILTER: Send institution/field filters to Qdrant.
        SEARCH_FALLBACK_TO_MOCK: Substitute mock rows when the search call fails.
        STARTUP_MODE: "strict" refuses to start with missing keys,
            "permissive" falls back to stub behaviour.
        ENVIRONMENT: "production" hides error details in 500 responses.
    """

    # LLM
    GROQ_API_KEY: Optional[str] = None
    GROQ_MODEL: str = "llama-3.1-8b-instant"
    LLM_MAX_TOKENS: int = 2048
    TRANSLATION_TEMPERATURE: float = 0.3
    REASON_TEMPERATURE: float = 0.7

    # Vector database
    QDRANT_ENDPOINT: Optional[str] = None
    QDRANT_API_KEY: Optional[str] = None
    QDRANT_COLLECTION: Optional[str] = "researcher-index"
    QDRANT_TIMEOUT: float = 30.0

    # Embeddings
    EMBEDDING_MODEL: Optional[str] = "sentence-transformers/all-MiniLM-L6-v2"
    EMBEDDING_DIMENSION: int = 384

    # Retrieval
    TOP_AUTHORS: int = 10
    OVERFETCH_FACTOR: int = 20
    AGGREGATE_BY_AUTHOR: bool = True
    SEARCH_SERVER_SIDE_FILTER: bool = True
    SEARCH_FALLBACK_TO_MOCK: bool = False

    # Per-call timeouts (seconds)
    TRANSLATION_TIMEOUT: float = 15.0
    EMBEDDING_TIMEOUT: float = 30.0
    SEARCH_TIMEOUT: float = 30.0
    REASON_TIMEOUT: float = 60.0

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    STARTUP_MODE: str = STARTUP_PERMISSIVE
    ENVIRONMENT: str = "production"
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: str = "*"

    @classmethod
    def from_env(cls, dotenv: bool = True) -> "Settings":
        """
        Build settings from the process environment.

        Args:
            dotenv: Load a `.env` file first (values already in the
                environment take precedence)

        Returns:
            A fully populated Settings instance
        """
        if dotenv:
            load_dotenv()

        defaults = cls()
        values = {}
        for f in fields(cls):
            default = getattr(defaults, f.name)
            if isinstance(default, bool):
                values[f.name] = _env_bool(f.name, default)
            elif isinstance(default, int):
                values[f.name] = _env_int(f.name, default)
            elif isinstance(default, float):
                values[f.name] = _env_float(f.name, default)
            else:
                value = os.getenv(f.name)
                if value is not None and not value.strip() and f.name in DISABLEABLE_KEYS:
                    values[f.name] = None
                else:
                    values[f.name] = value if value else default
        return cls(**values)

    @property
    def is_strict(self) -> bool:
        return (self.STARTUP_MODE or "").strip().lower() == STARTUP_STRICT

    @property
    def is_production(self) -> bool:
        return (self.ENVIRONMENT or "").strip().lower() == "production"

    @property
    def llm_configured(self) -> bool:
        return bool(self.GROQ_API_KEY)

    @property
    def search_configured(self) -> bool:
        return bool(self.QDRANT_ENDPOINT and self.QDRANT_COLLECTION)

    @property
    def embedding_configured(self) -> bool:
        return bool(self.EMBEDDING_MODEL)

    @property
    def search_limit(self) -> int:
        """Raw rows to request from the vector index for one search."""
        if not self.AGGREGATE_BY_AUTHOR:
            return max(self.TOP_AUTHORS, 1)
        return max(self.TOP_AUTHORS * self.OVERFETCH_FACTOR, 1)

    @property
    def cors_origins(self) -> List[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

    def missing_required(self) -> List[str]:
        """Names of required keys that are absent or empty."""
        return [key for key in REQUIRED_KEYS if not getattr(self, key)]

    def env_status(self) -> Dict[str, str]:
        """Report which service keys are set without exposing their values."""
        return {
            key: "SET" if getattr(self, key) else "MISSING" for key in SERVICE_KEYS
        }
