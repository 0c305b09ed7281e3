"""
Pydantic schemas for request/response validation and data models.

This module defines the data structures used throughout the application
for type safety and API documentation. Schemas include:
- Raw per-paper records as stored in the vector index
- Author-level aggregates
- Recommendation justifications
- Search request and formatted result models
"""

from numbers import Number
from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

REASON_KEYS = (
    "reason_title_1",
    "reason_body_1",
    "reason_title_2",
    "reason_body_2",
    "reason_title_3",
    "reason_body_3",
)


class RawRecord(BaseModel):
    """
    One per-paper hit as returned by the vector index.

    Numeric fields are left untyped: the index stores them as numbers or
    strings depending on how the row was ingested. Text fields accept
    scalars (stored as their string form) and drop containers, so one odd
    field never discards the row. Unknown payload keys are preserved as
    extras.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    author_name: Optional[str] = None
    institution: Optional[str] = None
    orcid_filled: Optional[str] = None
    classified_field: Optional[str] = None
    cited_by_count: Any = None
    h_index: Any = None
    paper_count: Any = None
    works_count: Any = None
    paper_data_count: Any = None
    title: Optional[str] = None
    abstract: Optional[str] = None

    @field_validator(
        "author_name",
        "institution",
        "orcid_filled",
        "classified_field",
        "title",
        "abstract",
        mode="before",
    )
    @classmethod
    def coerce_text(cls, value: Any) -> Optional[str]:
        if value is None or isinstance(value, str):
            return value
        if isinstance(value, Number):
            return str(value)
        return None


class AggregatedAuthor(BaseModel):
    """Author-level reduction of one or more RawRecords."""

    model_config = ConfigDict(frozen=True)

    author_name: Optional[str] = None
    institution: Optional[str] = None
    classified_field: Optional[str] = None
    orcid_filled: Optional[str] = None
    paper_count: int = Field(ge=0)
    cited_by_count: int = Field(0, ge=0)
    h_index: int = Field(0, ge=0)
    title: Optional[str] = None
    abstract: Optional[str] = None


class Justification(BaseModel):
    """Three (title, body) recommendation reasons for one result."""

    reason_title_1: str = ""
    reason_body_1: str = ""
    reason_title_2: str = ""
    reason_body_2: str = ""
    reason_title_3: str = ""
    reason_body_3: str = ""

    @classmethod
    def empty(cls) -> "Justification":
        return cls()

    def is_empty(self) -> bool:
        return not any(getattr(self, key) for key in REASON_KEYS)


class SearchRequest(BaseModel):
    """
    Body of POST /api/search.

    `query` is optional here so that a missing or blank query can be
    reported as a 400 with a localized message instead of a 422.
    """

    query: Optional[str] = None
    university: Optional[str] = None
    research_field: Optional[str] = None
    language: Literal["ja", "en"] = "ja"


class FormattedResult(BaseModel):
    """
    Canonical output record for one recommended researcher.

    Legacy alias keys (works_count, paper_data_count, ...) are not part of
    this model; they are added by `expand_legacy_fields` at the response
    boundary.
    """

    name: str
    institution: str
    orcid: str
    paper_count: int
    cited_by_count: int
    h_index: int
    classified_field: str
    reason_title_1: str = ""
    reason_body_1: str = ""
    reason_title_2: str = ""
    reason_body_2: str = ""
    reason_title_3: str = ""
    reason_body_3: str = ""


class ErrorResponse(BaseModel):
    error: str
    details: Optional[str] = None


class ServiceInfo(BaseModel):
    service: str
    version: str
    endpoints: Dict[str, str]
