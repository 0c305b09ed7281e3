"""
Result formatting for the search response.

Maps author records to the output shape the frontend reads. Older clients
read the paper count under several historical names; those aliases are
added in exactly one place, `expand_legacy_fields`.
"""

from typing import Any, Dict, Optional, Union

from researcher_finder.core.coercion import to_non_negative_int
from researcher_finder.core.schemas import (
    AggregatedAuthor,
    FormattedResult,
    Justification,
    RawRecord,
)
from researcher_finder.retrieval.aggregator import author_from_record

UNKNOWN_NAME = "Unknown Researcher"
UNKNOWN_INSTITUTION = "Unknown Institution"
UNKNOWN_FIELD = "Unknown"
NOT_AVAILABLE = "N/A"

# Output keys that mirror paper_count for older clients
LEGACY_COUNT_ALIASES = (
    "works_count",
    "works_titles_count",
    "works_concepts_count",
    "paper_data_count",
)


def _text(value: Optional[str], fallback: str) -> str:
    if value is None or not str(value).strip():
        return fallback
    return str(value)


def format_result(
    item: Union[AggregatedAuthor, RawRecord],
    justification: Optional[Justification] = None,
) -> FormattedResult:
    """
    Build the canonical output record for one author (or unaggregated row).

    Args:
        item: Aggregated author, or a raw row in unaggregated mode
        justification: Recommendation reasons to attach (empty if None)

    Returns:
        FormattedResult with sentinel strings for missing text fields
    """
    if isinstance(item, RawRecord):
        item = author_from_record(item)

    reasons = justification or Justification.empty()

    return FormattedResult(
        name=_text(item.author_name, UNKNOWN_NAME),
        institution=_text(item.institution, UNKNOWN_INSTITUTION),
        orcid=_text(item.orcid_filled, NOT_AVAILABLE),
        paper_count=to_non_negative_int(item.paper_count, "paper_count"),
        cited_by_count=to_non_negative_int(item.cited_by_count, "cited_by_count"),
        h_index=to_non_negative_int(item.h_index, "h_index"),
        classified_field=_text(item.classified_field, UNKNOWN_FIELD),
        **reasons.model_dump(),
    )


def expand_legacy_fields(result: FormattedResult) -> Dict[str, Any]:
    """Serialize a result, duplicating paper_count under every legacy key."""
    data = result.model_dump()
    for alias in LEGACY_COUNT_ALIASES:
        data[alias] = result.paper_count
    return data
