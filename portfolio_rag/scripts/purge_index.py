"""
Delete every vector from the knowledge base index.

Run: python -m portfolio_rag.scripts.purge_index --force

Refuses to run without --force unless the CI environment variable is set.

Dependencies: portfolio_rag.boundary.vdb, portfolio_rag.configs
"""

import logging
import os
import sys

from dotenv import load_dotenv

from portfolio_rag.boundary.vdb.vector_schemas import VectorStore
from portfolio_rag.boundary.vdb.vector_store_factory import get_vector_store
from portfolio_rag.configs import get_settings
from portfolio_rag.core.exceptions import VectorStoreError
from portfolio_rag.observability.logger import configure_logging

logger = logging.getLogger(__name__)


def purge(store: VectorStore, force: bool) -> int:
    """
    Wipe the index after reporting its size.

    Args:
        store: Vector store to purge
        force: Skip the confirmation guard

    Returns:
        int: Process exit code
    """
    before = store.stats()
    logger.info(f"Index currently holds {before.total_record_count} vectors")

    if before.total_record_count == 0:
        logger.info("Index is already empty")
        return 0

    if not force and not os.environ.get("CI"):
        logger.warning("Refusing to delete all vectors without --force")
        return 1

    store.delete_all()
    after = store.stats()
    logger.info(f"Purge complete, {after.total_record_count} vectors remaining")
    return 0


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    argv = sys.argv[1:] if argv is None else argv
    load_dotenv()
    settings = get_settings()
    configure_logging(settings.log_level)

    try:
        return purge(get_vector_store(settings.vector_store), force="--force" in argv)
    except VectorStoreError as e:
        logger.error(f"Purge failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
