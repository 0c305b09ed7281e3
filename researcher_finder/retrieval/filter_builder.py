"""
Qdrant filter construction from request scope.

This module converts the optional institution / research field of a search
request into a Qdrant Filter for server-side payload filtering.
"""

import logging
from typing import List, Optional

from qdrant_client.models import FieldCondition, Filter, MatchValue

from researcher_finder.retrieval.result_filter import is_active

logger = logging.getLogger(__name__)


class QdrantFilterBuilder:
    """
    Builds Qdrant Filter objects for query_points.

    Supported filters:
    - institution: Exact match on the institution payload field
    - research field: Exact match on the classified_field payload field

    Both require a KEYWORD payload index (see scripts/setup_indexes.py).
    """

    def build(
        self,
        institution: Optional[str] = None,
        field: Optional[str] = None,
    ) -> Optional[Filter]:
        """
        Build a Qdrant Filter from the request scope.

        Args:
            institution: Institution to restrict to ("All"/empty for any)
            field: Research field to restrict to ("All"/empty for any)

        Returns:
            Qdrant Filter object, or None if no dimension is restricted
        """
        must_conditions: List[FieldCondition] = []

        if is_active(institution):
            must_conditions.append(
                FieldCondition(
                    key="institution",
                    match=MatchValue(value=institution),
                )
            )

        if is_active(field):
            must_conditions.append(
                FieldCondition(
                    key="classified_field",
                    match=MatchValue(value=field),
                )
            )

        if not must_conditions:
            return None

        logger.debug(f"Built server-side filter with {len(must_conditions)} conditions")
        return Filter(must=must_conditions)


# Module-level singleton
_filter_builder: Optional[QdrantFilterBuilder] = None


def get_filter_builder() -> QdrantFilterBuilder:
    """Get or create the singleton QdrantFilterBuilder instance."""
    global _filter_builder
    if _filter_builder is None:
        _filter_builder = QdrantFilterBuilder()
    return _filter_builder
