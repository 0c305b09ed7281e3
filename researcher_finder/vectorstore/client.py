"""
Vector database client.

This module provides the interface to the Qdrant vector database that
stores the paper embeddings. It handles connection management and
collection inspection.
"""

import logging
from typing import Any, Dict, Optional

from qdrant_client import QdrantClient

from researcher_finder.core.config import Settings
from researcher_finder.core.exceptions import ConfigurationMissing

logger = logging.getLogger(__name__)

_client: Optional[QdrantClient] = None


def get_qdrant_client(settings: Settings) -> QdrantClient:
    """
    Get or create the process-wide Qdrant client.

    Args:
        settings: Application settings with the Qdrant endpoint and key

    Raises:
        ConfigurationMissing: If no Qdrant endpoint is configured
    """
    global _client
    if _client is None:
        if not settings.QDRANT_ENDPOINT:
            raise ConfigurationMissing(["QDRANT_ENDPOINT"])
        logger.info("Connecting to Qdrant...")
        _client = QdrantClient(
            url=settings.QDRANT_ENDPOINT,
            api_key=settings.QDRANT_API_KEY,
            timeout=int(settings.QDRANT_TIMEOUT),
        )
    return _client


def reset_qdrant_client() -> None:
    """Drop the cached client (used when settings change, e.g. in tests)."""
    global _client
    _client = None


def describe_collection(client: QdrantClient, collection_name: str) -> Dict[str, Any]:
    """
    Summarize a collection for the index-info endpoint.

    Returns:
        Dict with name, points_count, vector_size and payload_fields
    """
    info = client.get_collection(collection_name)

    vectors = info.config.params.vectors
    vector_size = getattr(vectors, "size", None)
    if vector_size is None and isinstance(vectors, dict):
        # Named vectors: report the first one
        first = next(iter(vectors.values()), None)
        vector_size = getattr(first, "size", None)

    return {
        "name": collection_name,
        "points_count": info.points_count or 0,
        "vector_size": vector_size,
        "payload_fields": sorted((info.payload_schema or {}).keys()),
    }
