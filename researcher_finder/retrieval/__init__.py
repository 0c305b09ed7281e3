"""
Retrieval module for researcher search over the paper index.

This module handles the query-time retrieval workflow:
- Query embedding
- Qdrant filter construction for institution / field scoping
- Vector search over per-paper rows
- Client-side filtering, author aggregation and ranking
- Formatting of the response records
"""

from researcher_finder.retrieval.aggregator import AuthorAggregator, aggregate_by_author
from researcher_finder.retrieval.filter_builder import QdrantFilterBuilder, get_filter_builder
from researcher_finder.retrieval.formatter import expand_legacy_fields, format_result
from researcher_finder.retrieval.result_filter import filter_results

__all__ = [
    "AuthorAggregator",
    "aggregate_by_author",
    "QdrantFilterBuilder",
    "get_filter_builder",
    "filter_results",
    "format_result",
    "expand_legacy_fields",
]
