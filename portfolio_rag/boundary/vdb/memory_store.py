"""
In-memory vector store for local development.

Provides the same interface as S3VectorsStore but keeps vectors in process
memory and ranks them with numpy cosine similarity. Nothing is persisted.

Dependencies: numpy, portfolio_rag.boundary.vdb.vector_schemas
System role: Local vector store for development RAG and tests
"""

import logging
from typing import Any

import numpy as np

from portfolio_rag.boundary.vdb.vector_schemas import (
    IndexStats,
    VectorMatch,
    VectorMetadata,
    VectorRecord,
    matches_filter,
)
from portfolio_rag.core.exceptions import VectorStoreError

logger = logging.getLogger(__name__)


class InMemoryVectorStore:
    """
    Vector store backed by a dict of numpy arrays.

    Scores are cosine similarities mapped to [0, 1]. A zero-norm query
    vector scores every record 0, so a zero-vector query returns records
    in insertion order up to top_k.
    """

    def __init__(self, dimension: int, namespace: str = "default") -> None:
        """
        Initialize an empty store.

        Args:
            dimension: Required length of every stored and queried vector
            namespace: Name reported by stats()
        """
        self._dimension = dimension
        self._namespace = namespace
        self._vectors: dict[str, np.ndarray] = {}
        self._metadata: dict[str, dict[str, Any]] = {}

    def _as_array(self, vector: list[float], operation: str) -> np.ndarray:
        array = np.asarray(vector, dtype=np.float32)
        if array.shape != (self._dimension,):
            raise VectorStoreError(
                message=f"Vector dimension {array.size} does not match index dimension {self._dimension}",
                operation=operation,
            )
        return array

    def upsert(self, records: list[VectorRecord]) -> None:
        """Insert or overwrite records by id."""
        for record in records:
            self._vectors[record.id] = self._as_array(record.embedding, "upsert")
            self._metadata[record.id] = record.metadata.to_store()
        logger.info(
            f"{__name__}:upsert - Upserted {len(records)} records",
            extra={"total": len(self._vectors)},
        )

    def query(
        self,
        vector: list[float],
        top_k: int,
        filter: dict[str, Any] | None = None,
    ) -> list[VectorMatch]:
        """
        Return the top_k most similar records matching the filter.

        Args:
            vector: Query embedding
            top_k: Maximum number of matches
            filter: Metadata field equalities, combined with AND

        Returns:
            list[VectorMatch]: Matches sorted by descending score
        """
        query = self._as_array(vector, "query")
        query_norm = float(np.linalg.norm(query))

        scored: list[tuple[float, str]] = []
        for record_id, stored in self._vectors.items():
            if not matches_filter(self._metadata[record_id], filter):
                continue
            stored_norm = float(np.linalg.norm(stored))
            if query_norm == 0.0 or stored_norm == 0.0:
                score = 0.0
            else:
                cosine = float(np.dot(query, stored)) / (query_norm * stored_norm)
                score = min(max(cosine, 0.0), 1.0)
            scored.append((score, record_id))

        # sorted() is stable, so equal scores keep insertion order
        scored = sorted(scored, key=lambda item: item[0], reverse=True)[:top_k]
        return [
            VectorMatch(
                id=record_id,
                score=score,
                metadata=VectorMetadata.model_validate(self._metadata[record_id]),
            )
            for score, record_id in scored
        ]

    def delete_by_ids(self, ids: list[str]) -> None:
        """Delete records by id; unknown ids are ignored."""
        for record_id in ids:
            self._vectors.pop(record_id, None)
            self._metadata.pop(record_id, None)

    def delete_all(self) -> None:
        """Remove every record."""
        self._vectors.clear()
        self._metadata.clear()

    def stats(self) -> IndexStats:
        """Return record counts."""
        count = len(self._vectors)
        return IndexStats(
            total_record_count=count,
            namespaces={self._namespace: count} if count else {},
        )
