"""
Retrieval pipeline orchestration.

This module coordinates the full query processing workflow:
Query → Translation → Embedding → Vector Search → Filter → Aggregation
→ Formatting → Recommendation reasons

Every external call runs under its own timeout. Translation, embedding and
reason generation fall back to a substitute value on failure; the vector
search is the only call whose failure aborts the request (unless mock
fallback is enabled).
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional, TypeVar

from researcher_finder.core.config import Settings
from researcher_finder.core.exceptions import UpstreamCallFailure
from researcher_finder.core.schemas import (
    AggregatedAuthor,
    Justification,
    RawRecord,
    SearchRequest,
)
from researcher_finder.llm.reasoner import ReasonGenerator, default_justification
from researcher_finder.llm.translator import Translator, needs_translation
from researcher_finder.retrieval.aggregator import AuthorAggregator, author_from_record
from researcher_finder.retrieval.embedding import Embedder, placeholder_vector
from researcher_finder.retrieval.filter_builder import QdrantFilterBuilder, get_filter_builder
from researcher_finder.retrieval.formatter import expand_legacy_fields, format_result
from researcher_finder.retrieval.mock_data import mock_records
from researcher_finder.retrieval.qdrant_store import QdrantStore
from researcher_finder.retrieval.result_filter import filter_results

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RetrievalPipeline:
    """
    Main search pipeline for researcher recommendations.

    Collaborators can be injected; by default they are built from the
    settings. A store of None means the vector index is not configured and
    the stub rows from `mock_data` are served instead.
    """

    def __init__(
        self,
        settings: Settings,
        translator: Optional[Translator] = None,
        embedder: Optional[Embedder] = None,
        store: Optional[QdrantStore] = None,
        reasoner: Optional[ReasonGenerator] = None,
        filter_builder: Optional[QdrantFilterBuilder] = None,
        aggregator: Optional[AuthorAggregator] = None,
    ):
        self.settings = settings
        self.translator = translator or Translator(settings)
        self.embedder = embedder or Embedder(settings)
        if store is None and settings.search_configured:
            store = QdrantStore(settings)
        self.store = store
        self.reasoner = reasoner or ReasonGenerator(settings)
        self.filter_builder = filter_builder or get_filter_builder()
        self.aggregator = aggregator or AuthorAggregator()

        if self.store is None:
            logger.warning("Vector index not configured, searches will return mock data")

    async def _call(
        self,
        step: str,
        call: Callable[[], Awaitable[T]],
        timeout: float,
    ) -> T:
        """Run one external call under a timeout, wrapping any failure."""
        try:
            return await asyncio.wait_for(call(), timeout=timeout)
        except asyncio.TimeoutError as e:
            raise UpstreamCallFailure(step, e) from e
        except UpstreamCallFailure:
            raise
        except Exception as e:
            raise UpstreamCallFailure(step, e) from e

    async def translate(self, query: str) -> str:
        """English version of the query, or the query itself."""
        if not needs_translation(query):
            return query

        try:
            translated = await self._call(
                "translation",
                lambda: self.translator.translate(query),
                self.settings.TRANSLATION_TIMEOUT,
            )
        except UpstreamCallFailure as e:
            logger.warning(f"{e}; using original query")
            return query

        if not translated:
            return query

        logger.info(f"Translated query: {translated!r}")
        return translated

    async def embed(self, text: str) -> List[float]:
        try:
            return await self._call(
                "embedding",
                lambda: asyncio.to_thread(self.embedder.embed, text),
                self.settings.EMBEDDING_TIMEOUT,
            )
        except UpstreamCallFailure as e:
            logger.warning(f"{e}; using placeholder vector")
            return placeholder_vector(text, self.settings.EMBEDDING_DIMENSION)

    async def retrieve(self, vector: List[float], request: SearchRequest) -> List[RawRecord]:
        """
        Fetch raw per-paper rows from the vector index.

        Raises:
            UpstreamCallFailure: If the search fails and mock fallback is off
        """
        if self.store is None:
            return mock_records()

        query_filter = None
        if self.settings.SEARCH_SERVER_SIDE_FILTER:
            query_filter = self.filter_builder.build(request.university, request.research_field)

        try:
            return await self._call(
                "search",
                lambda: asyncio.to_thread(
                    self.store.search, vector, query_filter, self.settings.search_limit
                ),
                self.settings.SEARCH_TIMEOUT,
            )
        except UpstreamCallFailure as e:
            if not self.settings.SEARCH_FALLBACK_TO_MOCK:
                raise
            logger.warning(f"{e}; using mock data")
            return mock_records()

    def rank(self, records: List[RawRecord], request: SearchRequest) -> List[AggregatedAuthor]:
        """Filter rows to the requested scope, then group and truncate."""
        records = filter_results(records, request.university, request.research_field)

        if self.settings.AGGREGATE_BY_AUTHOR:
            authors = self.aggregator.aggregate(records)
        else:
            authors = [author_from_record(record) for record in records]

        return authors[: self.settings.TOP_AUTHORS]

    async def justify(
        self,
        query: str,
        author: AggregatedAuthor,
        language: str,
    ) -> Justification:
        try:
            justification = await self._call(
                "justification",
                lambda: self.reasoner.generate(query, author, language),
                self.settings.REASON_TIMEOUT,
            )
        except UpstreamCallFailure as e:
            logger.warning(f"{e}; using default reasons for {author.author_name}")
            justification = None

        if justification is None or justification.is_empty():
            return default_justification(author, language)
        return justification

    async def search(self, request: SearchRequest) -> List[Dict[str, Any]]:
        """
        Execute one researcher search.

        Args:
            request: Validated search request with a non-blank query

        Returns:
            Formatted results (with legacy alias keys), possibly empty

        Raises:
            UpstreamCallFailure: If the vector search fails (see `retrieve`)
        """
        query = request.query.strip()
        logger.info(
            f"Search started: {query!r}, institution={request.university or 'All'!r}, "
            f"field={request.research_field or 'All'!r}"
        )

        search_text = await self.translate(query)
        vector = await self.embed(search_text)
        logger.info(f"Embedding ready: {len(vector)} dimensions")

        records = await self.retrieve(vector, request)
        logger.info(f"Search returned {len(records)} rows")
        if not records:
            return []

        authors = self.rank(records, request)
        if not authors:
            return []

        justifications = await asyncio.gather(
            *(self.justify(query, author, request.language) for author in authors)
        )

        results = [
            expand_legacy_fields(format_result(author, justification))
            for author, justification in zip(authors, justifications)
        ]
        logger.info(f"Response ready: {len(results)} researchers")
        return results
