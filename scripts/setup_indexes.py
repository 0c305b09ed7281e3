"""
Setup Qdrant payload indexes for efficient filtering.

This script creates payload indexes on the researcher collection so that
searches scoped by institution or research field can be filtered
server-side.

Run this once after collection creation or when adding new filter capabilities.

Usage:
    python -m scripts.setup_indexes [--force]
"""

import argparse
import logging
import sys

from qdrant_client import QdrantClient
from qdrant_client.models import PayloadSchemaType

from researcher_finder.core.config import Settings

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Exact-match fields used by the server-side filter and lookups
KEYWORD_FIELDS = ["institution", "classified_field", "author_name", "orcid_filled"]


def setup_indexes(client: QdrantClient, collection_name: str, force: bool = False) -> None:
    """
    Create payload indexes for efficient filtering.

    Args:
        client: Qdrant client instance
        collection_name: Name of the collection to index
        force: If True, delete and recreate existing indexes
    """
    logger.info(f"Setting up indexes for collection: {collection_name}")

    for field in KEYWORD_FIELDS:
        if force:
            try:
                client.delete_payload_index(
                    collection_name=collection_name,
                    field_name=field,
                )
                logger.info(f"Deleted existing index for '{field}'")
            except Exception as e:
                logger.info(f"No existing index for '{field}' to delete: {e}")

        try:
            client.create_payload_index(
                collection_name=collection_name,
                field_name=field,
                field_schema=PayloadSchemaType.KEYWORD,
            )
            logger.info(f"Created keyword index for '{field}'")
        except Exception as e:
            if "already exists" in str(e).lower():
                logger.info(f"Index for '{field}' already exists")
            else:
                logger.error(f"Failed to create index for '{field}': {e}")

    logger.info("Index setup complete")


def main():
    """Main entry point for index setup."""
    parser = argparse.ArgumentParser(description="Setup Qdrant payload indexes")
    parser.add_argument(
        "--force",
        action="store_true",
        help="Force recreate indexes (delete existing first)",
    )
    args = parser.parse_args()

    settings = Settings.from_env()
    if not settings.search_configured:
        logger.error("QDRANT_ENDPOINT and QDRANT_COLLECTION must be set")
        sys.exit(1)

    logger.info("Connecting to Qdrant...")

    client = QdrantClient(
        url=settings.QDRANT_ENDPOINT,
        api_key=settings.QDRANT_API_KEY,
        timeout=int(settings.QDRANT_TIMEOUT),
    )

    # Verify collection exists
    collection_name = settings.QDRANT_COLLECTION
    try:
        collection_info = client.get_collection(collection_name)
        logger.info(
            f"Collection '{collection_name}' found with "
            f"{collection_info.points_count} points"
        )
    except Exception as e:
        logger.error(f"Collection '{collection_name}' not found: {e}")
        sys.exit(1)

    setup_indexes(client, collection_name, force=args.force)


if __name__ == "__main__":
    main()
