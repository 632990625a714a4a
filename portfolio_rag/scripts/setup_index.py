"""
Create the S3 Vectors bucket and index.

Run: python -m portfolio_rag.scripts.setup_index

Dependencies: portfolio_rag.boundary.vdb, portfolio_rag.configs
"""

import logging
import sys

from dotenv import load_dotenv

from portfolio_rag.boundary.vdb.s3_vectors_store import S3VectorsStore
from portfolio_rag.configs import get_settings
from portfolio_rag.core.exceptions import VectorStoreError
from portfolio_rag.observability.logger import configure_logging

logger = logging.getLogger(__name__)


def main() -> int:
    """CLI entry point."""
    load_dotenv()
    settings = get_settings()
    configure_logging(settings.log_level)

    vs = settings.vector_store
    if vs.store_type.lower() != "s3":
        logger.info(f"Vector store type is '{vs.store_type}'; nothing to set up")
        return 0

    store = S3VectorsStore(
        vectors_bucket=vs.vectors_bucket,
        index_name=vs.index_name,
        region=vs.aws_region,
        dimension=vs.embedding_dimension,
        connect_timeout=vs.connect_timeout,
        read_timeout=vs.read_timeout,
    )

    try:
        created = store.ensure_index()
    except VectorStoreError as e:
        logger.error(f"Index setup failed: {e}")
        return 1

    if created:
        logger.info(
            f"Created index {vs.index_name} in {vs.vectors_bucket} "
            f"(dimension={vs.embedding_dimension}, metric=cosine)"
        )
    else:
        logger.info(f"Index {vs.index_name} already exists")
    return 0


if __name__ == "__main__":
    sys.exit(main())
