"""
Client-side institution / research field filtering.

Applied to raw rows before author aggregation, so paper counts only reflect
rows inside the requested scope. The same filter may also be sent to the
vector index (see filter_builder); applying it here as well keeps results
identical whether or not the backend honoured it.
"""

from typing import Iterable, List, Optional, TypeVar

ALL_SENTINEL = "All"

T = TypeVar("T")


def is_active(value: Optional[str]) -> bool:
    """Whether a filter value restricts anything ("", None and "All" do not)."""
    if value is None:
        return False
    value = value.strip()
    return bool(value) and value != ALL_SENTINEL


def filter_results(
    items: Iterable[T],
    institution: Optional[str] = None,
    field: Optional[str] = None,
) -> List[T]:
    """
    Keep items whose institution / classified_field equal the given values.

    Matching is exact and case-sensitive. Works on RawRecord and
    AggregatedAuthor alike.

    Args:
        items: Records exposing `institution` and `classified_field`
        institution: Required institution, or None/""/"All" for any
        field: Required research field, or None/""/"All" for any

    Returns:
        The matching items in input order
    """
    items = list(items)
    if is_active(institution):
        items = [item for item in items if item.institution == institution]
    if is_active(field):
        items = [item for item in items if item.classified_field == field]
    return items
