"""
Vector store factory for selecting between in-memory (dev) and S3 Vectors (prod).

Depends on the VECTOR_STORE_STORE_TYPE environment variable.
Provides consistent interface regardless of underlying implementation.

Dependencies: portfolio_rag.boundary.vdb, portfolio_rag.configs
System role: Vector store instantiation and selection
"""

import logging

from portfolio_rag.boundary.vdb.memory_store import InMemoryVectorStore
from portfolio_rag.boundary.vdb.s3_vectors_store import S3VectorsStore
from portfolio_rag.boundary.vdb.vector_schemas import VectorStore
from portfolio_rag.configs.vector_store import VectorStoreSettings

logger = logging.getLogger(__name__)


def get_vector_store(settings: VectorStoreSettings) -> VectorStore:
    """
    Build the vector store selected by configuration.

    Args:
        settings: Vector store settings

    Returns:
        InMemoryVectorStore or S3VectorsStore: Configured vector store instance

    Raises:
        ValueError: If store_type is invalid
    """
    store_type = settings.store_type.lower()

    if store_type == "memory":
        logger.info(f"{__name__}:get_vector_store - Creating in-memory vector store (local dev mode)")
        return InMemoryVectorStore(
            dimension=settings.embedding_dimension,
            namespace=settings.index_name,
        )

    if store_type == "s3":
        logger.info(f"{__name__}:get_vector_store - Creating S3 Vectors store (production mode)")
        return S3VectorsStore(
            vectors_bucket=settings.vectors_bucket,
            index_name=settings.index_name,
            region=settings.aws_region,
            dimension=settings.embedding_dimension,
            connect_timeout=settings.connect_timeout,
            read_timeout=settings.read_timeout,
        )

    raise ValueError(
        f"Invalid VECTOR_STORE_STORE_TYPE: {store_type}. "
        f"Must be 'memory' (dev) or 's3' (production)."
    )
