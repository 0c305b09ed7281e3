"""
Author-level aggregation and ranking.

The vector index stores one row per paper, so a single researcher usually
appears many times in one result set. This module groups those rows by
author, reduces each group to one AggregatedAuthor and ranks the authors by
the number of matching papers.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from researcher_finder.core.coercion import to_non_negative_int
from researcher_finder.core.schemas import AggregatedAuthor, RawRecord

logger = logging.getLogger(__name__)

UNKNOWN_KEY_PREFIX = "Unknown_"


@dataclass
class AuthorGroup:
    """Rows collected for one author during a single aggregation pass."""

    key: str
    author_name: Optional[str] = None
    institution: Optional[str] = None
    classified_field: Optional[str] = None
    orcid_filled: Optional[str] = None
    rows: List[RawRecord] = field(default_factory=list)
    citations: List[int] = field(default_factory=list)
    h_indices: List[int] = field(default_factory=list)
    titles: List[str] = field(default_factory=list)
    abstracts: List[str] = field(default_factory=list)

    @classmethod
    def open(cls, key: str, record: RawRecord) -> "AuthorGroup":
        """Seed a group from the first record seen for its key."""
        return cls(
            key=key,
            author_name=record.author_name,
            institution=record.institution,
            classified_field=record.classified_field,
            orcid_filled=record.orcid_filled,
        )

    def add(self, record: RawRecord) -> None:
        self.rows.append(record)
        self.citations.append(to_non_negative_int(record.cited_by_count, "cited_by_count"))
        self.h_indices.append(to_non_negative_int(record.h_index, "h_index"))
        if record.title and record.title.strip():
            self.titles.append(record.title)
        if record.abstract and record.abstract.strip():
            self.abstracts.append(record.abstract)

    def reduce(self) -> AggregatedAuthor:
        return AggregatedAuthor(
            author_name=self.author_name,
            institution=self.institution,
            classified_field=self.classified_field,
            orcid_filled=self.orcid_filled,
            paper_count=len(self.rows),
            cited_by_count=sum(self.citations),
            h_index=max(self.h_indices, default=0),
            title=self.titles[0] if self.titles else None,
            abstract=self.abstracts[0] if self.abstracts else None,
        )


def author_key(record: RawRecord, index: int) -> str:
    """
    Grouping key for a record.

    Rows without an author name get a key unique to their position, so two
    unlabeled rows are never merged into one author.
    """
    name = record.author_name
    if name and name.strip():
        return name
    return f"{UNKNOWN_KEY_PREFIX}{index}"


class AuthorAggregator:
    """
    Groups per-paper rows into ranked author-level records.

    For each author:
    - paper_count is the number of rows (the per-row count fields are stale)
    - cited_by_count is the sum of the rows' citation counts
    - h_index is the maximum of the rows' h-indices
    - title/abstract are the first non-empty values seen
    - institution, field and ORCID come from the first row (first-seen wins)

    Authors are sorted by paper_count descending; ties keep discovery order.
    """

    def aggregate(self, records: Iterable[RawRecord]) -> List[AggregatedAuthor]:
        groups: Dict[str, AuthorGroup] = {}
        row_count = 0

        for index, record in enumerate(records):
            row_count += 1
            key = author_key(record, index)
            group = groups.get(key)
            if group is None:
                group = groups[key] = AuthorGroup.open(key, record)
            group.add(record)

        authors = [group.reduce() for group in groups.values()]
        # sorted() is stable, so equal paper counts stay in discovery order
        authors = sorted(authors, key=lambda a: a.paper_count, reverse=True)

        logger.debug(f"Aggregated {row_count} rows into {len(authors)} authors")
        return authors


def author_from_record(record: RawRecord) -> AggregatedAuthor:
    """
    Treat a single row as its own author record (unaggregated mode).

    paper_count comes from the row's own count field, checked in the order
    works_count, paper_count, paper_data_count.
    """
    count = record.works_count
    if count is None:
        count = record.paper_count
    if count is None:
        count = record.paper_data_count

    return AggregatedAuthor(
        author_name=record.author_name,
        institution=record.institution,
        classified_field=record.classified_field,
        orcid_filled=record.orcid_filled,
        paper_count=to_non_negative_int(count, "paper_count"),
        cited_by_count=to_non_negative_int(record.cited_by_count, "cited_by_count"),
        h_index=to_non_negative_int(record.h_index, "h_index"),
        title=record.title or None,
        abstract=record.abstract or None,
    )


def aggregate_by_author(records: Iterable[RawRecord]) -> List[AggregatedAuthor]:
    """Convenience wrapper around AuthorAggregator.aggregate."""
    return AuthorAggregator().aggregate(records)
