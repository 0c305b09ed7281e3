"""Shared fixtures and in-process fakes for the external collaborators."""

import asyncio
from typing import List, Optional

import pytest

from researcher_finder.core.config import Settings
from researcher_finder.core.schemas import Justification, RawRecord
from researcher_finder.retrieval.pipeline import RetrievalPipeline


def make_record(author_name: Optional[str] = "Dr. A", **kwargs) -> RawRecord:
    data = {
        "author_name": author_name,
        "institution": "Harvard University",
        "orcid_filled": "https://orcid.org/0000-0000-0000-0000",
        "classified_field": "Computer Science",
        "cited_by_count": 0,
        "h_index": 0,
        "title": f"Paper by {author_name}",
        "abstract": f"Abstract by {author_name}",
    }
    data.update(kwargs)
    return RawRecord(**data)


class FakeTranslator:
    def __init__(self, result: Optional[str] = "translated query"):
        self.result = result
        self.calls: List[str] = []

    async def translate(self, text: str) -> Optional[str]:
        self.calls.append(text)
        return self.result


class FakeEmbedder:
    def __init__(self, fail: bool = False):
        self.fail = fail
        self.calls: List[str] = []

    def embed(self, text: str) -> List[float]:
        self.calls.append(text)
        if self.fail:
            raise RuntimeError("embedding model unavailable")
        return [0.1, 0.2, 0.3, 0.4]


class FakeStore:
    def __init__(self, rows: Optional[List[RawRecord]] = None, fail: bool = False):
        self.rows = rows or []
        self.fail = fail
        self.calls = []

    def search(self, embedding, query_filter=None, limit=100) -> List[RawRecord]:
        self.calls.append({"embedding": embedding, "filter": query_filter, "limit": limit})
        if self.fail:
            raise ConnectionError("qdrant unreachable")
        return list(self.rows)


class FakeReasoner:
    def __init__(self, slow_authors=(), delay: float = 2.0):
        self.slow_authors = set(slow_authors)
        self.delay = delay
        self.calls = []

    async def generate(self, query, author, language="ja") -> Optional[Justification]:
        self.calls.append((query, author.author_name, language))
        if author.author_name in self.slow_authors:
            await asyncio.sleep(self.delay)
        return Justification(
            reason_title_1=f"Why {author.author_name}",
            reason_body_1=f"{author.author_name} fits {query}",
            reason_title_2="Track record",
            reason_body_2="Strong publications",
            reason_title_3="Applicability",
            reason_body_3="Practical results",
        )


@pytest.fixture
def settings():
    """Settings with no external services and short timeouts."""
    return Settings(
        GROQ_API_KEY=None,
        QDRANT_ENDPOINT=None,
        QDRANT_API_KEY=None,
        QDRANT_COLLECTION="test-index",
        EMBEDDING_MODEL=None,
        EMBEDDING_DIMENSION=8,
        TOP_AUTHORS=10,
        OVERFETCH_FACTOR=20,
        TRANSLATION_TIMEOUT=0.5,
        EMBEDDING_TIMEOUT=0.5,
        SEARCH_TIMEOUT=0.5,
        REASON_TIMEOUT=0.2,
        ENVIRONMENT="development",
    )


@pytest.fixture
def translator():
    return FakeTranslator()


@pytest.fixture
def embedder():
    return FakeEmbedder()


@pytest.fixture
def reasoner():
    return FakeReasoner()


@pytest.fixture
def scenario_rows():
    """Three rows for Dr. A and one for Dr. B."""
    return [
        make_record("Dr. A", cited_by_count=10, h_index=5),
        make_record("Dr. B", cited_by_count=100, h_index=20),
        make_record("Dr. A", cited_by_count=20, h_index=8),
        make_record("Dr. A", cited_by_count=30, h_index=2),
    ]


@pytest.fixture
def build_pipeline(settings, translator, embedder, reasoner):
    """Factory for a pipeline wired to fakes."""

    def _build(store=None, **overrides):
        return RetrievalPipeline(
            overrides.pop("settings", settings),
            translator=overrides.pop("translator", translator),
            embedder=overrides.pop("embedder", embedder),
            store=store,
            reasoner=overrides.pop("reasoner", reasoner),
        )

    return _build
