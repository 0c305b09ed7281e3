"""
Researcher Finder.

Semantic researcher recommendation service: a research-topic query is
embedded, matched against a vector index of papers, grouped by author and
returned with LLM-generated recommendation reasons.
"""

__version__ = "0.1.0"
