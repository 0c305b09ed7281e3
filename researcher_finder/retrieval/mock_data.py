"""
Fixed stub rows used when the vector index is unavailable.

Served in permissive startup mode when Qdrant is not configured, and when
SEARCH_FALLBACK_TO_MOCK is enabled and a search call fails.
"""

from typing import List

from researcher_finder.core.schemas import RawRecord

_MOCK_ROWS = [
    {
        "author_name": "Sample Researcher A",
        "institution": "Harvard University",
        "orcid_filled": "https://orcid.org/0000-0000-0000-0001",
        "classified_field": "Computer Science",
        "cited_by_count": 1200,
        "h_index": 18,
        "works_count": 45,
        "title": "Machine Learning Methods for Clinical Decision Support",
        "abstract": "We study supervised learning approaches for predicting patient outcomes from electronic health records.",
    },
    {
        "author_name": "Sample Researcher A",
        "institution": "Harvard University",
        "orcid_filled": "https://orcid.org/0000-0000-0000-0001",
        "classified_field": "Computer Science",
        "cited_by_count": 340,
        "h_index": 18,
        "works_count": 45,
        "title": "Interpretable Models for Medical Imaging",
        "abstract": "An evaluation of saliency-based explanation methods on radiology benchmarks.",
    },
    {
        "author_name": "Sample Researcher B",
        "institution": "Harvard University",
        "orcid_filled": "N/A",
        "classified_field": "Medicine",
        "cited_by_count": "860",
        "h_index": "22",
        "works_count": "60",
        "title": "Population Health Analytics at Scale",
        "abstract": "Large-scale cohort analysis of chronic disease risk factors.",
    },
    {
        "author_name": "Sample Researcher C",
        "institution": "Massachusetts Institute of Technology",
        "orcid_filled": "https://orcid.org/0000-0000-0000-0003",
        "classified_field": "Engineering",
        "cited_by_count": 410,
        "h_index": 12,
        "works_count": 30,
        "title": "Soft Robotics for Minimally Invasive Surgery",
        "abstract": "Design and control of compliant actuators for surgical tools.",
    },
]


def mock_records() -> List[RawRecord]:
    """Return a fresh copy of the stub rows."""
    return [RawRecord.model_validate(row) for row in _MOCK_ROWS]
