import logging
from typing import List, Optional

from pydantic import ValidationError
from qdrant_client.models import Filter

from researcher_finder.core.config import Settings
from researcher_finder.core.schemas import RawRecord
from researcher_finder.vectorstore.client import get_qdrant_client

logger = logging.getLogger(__name__)


class QdrantStore:
    """Vector similarity search over the per-paper collection."""

    def __init__(self, settings: Settings):
        self.settings = settings
        self.collection = settings.QDRANT_COLLECTION

    def search(
        self,
        embedding: List[float],
        query_filter: Optional[Filter] = None,
        limit: int = 100,
    ) -> List[RawRecord]:
        client = get_qdrant_client(self.settings)

        response = client.query_points(
            collection_name=self.collection,
            query=embedding,
            query_filter=query_filter,
            limit=limit,
            with_payload=True,
            with_vectors=False,
        )

        records = []
        for hit in response.points:
            try:
                records.append(RawRecord.model_validate(hit.payload or {}))
            except ValidationError as e:
                logger.warning(f"Skipping malformed payload for point {hit.id}: {e}")

        return records
