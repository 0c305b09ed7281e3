"""
Vector store module for the paper index.

This module provides an abstraction layer over the vector database
(Qdrant) that holds one embedded row per paper, with the author's
institution, research field and citation statistics as payload.

Key operations:
- Client construction from Settings
- Collection inspection
"""

from researcher_finder.vectorstore.client import get_qdrant_client, reset_qdrant_client

__all__ = ["get_qdrant_client", "reset_qdrant_client"]
