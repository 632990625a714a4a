"""
Vector database boundary layer.

Provides vector store clients for storage and retrieval operations.
- InMemoryVectorStore: numpy-backed store for local development
- S3VectorsStore: Production Amazon S3 Vectors client

Dependencies: boto3, numpy
System role: Vector store adapter for RAG retrieval
"""

from portfolio_rag.boundary.vdb.vector_schemas import (
    IndexStats,
    VectorMatch,
    VectorMetadata,
    VectorRecord,
    VectorStore,
)

__all__ = [
    "IndexStats",
    "VectorMatch",
    "VectorMetadata",
    "VectorRecord",
    "VectorStore",
]
