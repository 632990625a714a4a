"""
S3 Vectors store for production retrieval.

Wraps the boto3 `s3vectors` client with the vector store interface used by
the document and retrieval services.

Metadata keys (matching the index definition):
- Filterable: source, fileName, fileType, chunkIndex, contentType,
  category, importance
- Non-filterable: content, tags, uploadedAt

Dependencies: boto3, botocore, portfolio_rag.boundary.vdb.vector_schemas
System role: Production vector store (S3 Vectors)
"""

import logging
from collections.abc import Iterator
from typing import Any

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from portfolio_rag.boundary.vdb.vector_schemas import (
    IndexStats,
    VectorMatch,
    VectorMetadata,
    VectorRecord,
    matches_filter,
)
from portfolio_rag.core.exceptions import VectorStoreError

logger = logging.getLogger(__name__)

# Service limits for a single PutVectors / DeleteVectors / ListVectors call
WRITE_BATCH_SIZE = 500
LIST_PAGE_SIZE = 1000

NON_FILTERABLE_METADATA_KEYS = ["content", "tags", "uploadedAt"]


class S3VectorsStore:
    """
    S3 Vectors client for vector operations.

    Provides methods for upserting vectors, querying by similarity with
    metadata filtering, deleting vectors and reporting index size.
    """

    def __init__(
        self,
        vectors_bucket: str,
        index_name: str,
        region: str = "us-east-1",
        dimension: int = 1024,
        connect_timeout: float = 5.0,
        read_timeout: float = 30.0,
        client: Any | None = None,
    ) -> None:
        """
        Initialize S3 Vectors client.

        Args:
            vectors_bucket: S3 Vectors bucket name
            index_name: Index name within the bucket
            region: AWS region for S3 Vectors
            dimension: Embedding dimension of the index
            connect_timeout: Connect timeout in seconds
            read_timeout: Read timeout in seconds
            client: Preconfigured boto3 client (tests)
        """
        if not vectors_bucket:
            raise ValueError("vectors_bucket cannot be empty")
        if not index_name:
            raise ValueError("index_name cannot be empty")

        self._vectors_bucket = vectors_bucket
        self._index_name = index_name
        self._dimension = dimension

        # One attempt per call: failures surface to the caller
        self.client = client or boto3.client(
            "s3vectors",
            region_name=region,
            config=Config(
                connect_timeout=connect_timeout,
                read_timeout=read_timeout,
                retries={"mode": "standard", "total_max_attempts": 1},
            ),
        )

    @property
    def _location(self) -> dict[str, str]:
        return {"vectorBucketName": self._vectors_bucket, "indexName": self._index_name}

    def upsert(self, records: list[VectorRecord]) -> None:
        """
        Upsert vectors with metadata into the index.

        Record ids are deterministic, so re-uploads overwrite in place.

        Args:
            records: Records to write

        Raises:
            VectorStoreError: If a put operation fails
        """
        try:
            for start in range(0, len(records), WRITE_BATCH_SIZE):
                batch = records[start:start + WRITE_BATCH_SIZE]
                self.client.put_vectors(
                    **self._location,
                    vectors=[
                        {
                            "key": record.id,
                            "data": {"float32": [float(x) for x in record.embedding]},
                            "metadata": record.metadata.to_store(),
                        }
                        for record in batch
                    ],
                )
        except (ClientError, BotoCoreError) as e:
            raise VectorStoreError(
                message=f"Failed to upsert vectors to S3 Vectors: {e}",
                operation="upsert",
                details={"vector_count": len(records)},
            ) from e

        logger.info(
            f"{__name__}:upsert - Upserted {len(records)} vectors",
            extra={"index": self._index_name},
        )

    def query(
        self,
        vector: list[float],
        top_k: int,
        filter: dict[str, Any] | None = None,
    ) -> list[VectorMatch]:
        """
        Query vectors by similarity with optional metadata filtering.

        A zero-norm vector cannot be ranked by a cosine index; such queries
        are answered by scanning the index instead, returning up to top_k
        filtered records with score 0.

        Args:
            vector: Query embedding
            top_k: Maximum number of results
            filter: Metadata field equalities, combined with AND

        Returns:
            list[VectorMatch]: Matches sorted by descending score

        Raises:
            VectorStoreError: If the query fails
        """
        if not any(vector):
            return self._scan(top_k, filter)

        request: dict[str, Any] = {
            **self._location,
            "topK": top_k,
            "queryVector": {"float32": [float(x) for x in vector]},
            "returnMetadata": True,
            "returnDistance": True,
        }
        if filter:
            request["filter"] = build_filter_expression(filter)

        try:
            response = self.client.query_vectors(**request)
        except (ClientError, BotoCoreError) as e:
            raise VectorStoreError(
                message=f"Failed to query vectors from S3 Vectors: {e}",
                operation="query",
                details={"top_k": top_k, "filter": filter},
            ) from e

        metric = str(response.get("distanceMetric", "cosine")).lower()
        matches = [
            VectorMatch(
                id=item["key"],
                score=distance_to_score(item.get("distance", 1.0), metric),
                metadata=VectorMetadata.model_validate(item.get("metadata") or {}),
            )
            for item in response.get("vectors", [])
        ]
        return sorted(matches, key=lambda match: match.score, reverse=True)

    def _iter_vectors(self, return_metadata: bool) -> Iterator[dict[str, Any]]:
        """Page through every vector in the index."""
        next_token: str | None = None
        while True:
            request: dict[str, Any] = {
                **self._location,
                "maxResults": LIST_PAGE_SIZE,
                "returnMetadata": return_metadata,
            }
            if next_token:
                request["nextToken"] = next_token
            response = self.client.list_vectors(**request)
            yield from response.get("vectors", [])
            next_token = response.get("nextToken")
            if not next_token:
                return

    def _scan(self, top_k: int, filter: dict[str, Any] | None) -> list[VectorMatch]:
        matches: list[VectorMatch] = []
        try:
            for item in self._iter_vectors(return_metadata=True):
                metadata = item.get("metadata") or {}
                if not matches_filter(metadata, filter):
                    continue
                matches.append(
                    VectorMatch(
                        id=item["key"],
                        score=0.0,
                        metadata=VectorMetadata.model_validate(metadata),
                    )
                )
                if len(matches) >= top_k:
                    break
        except (ClientError, BotoCoreError) as e:
            raise VectorStoreError(
                message=f"Failed to list vectors from S3 Vectors: {e}",
                operation="query",
                details={"top_k": top_k, "filter": filter},
            ) from e
        return matches

    def delete_by_ids(self, ids: list[str]) -> None:
        """
        Delete vectors by id.

        Args:
            ids: Record identifiers to delete

        Raises:
            VectorStoreError: If a delete operation fails
        """
        try:
            for start in range(0, len(ids), WRITE_BATCH_SIZE):
                self.client.delete_vectors(
                    **self._location,
                    keys=ids[start:start + WRITE_BATCH_SIZE],
                )
        except (ClientError, BotoCoreError) as e:
            raise VectorStoreError(
                message=f"Failed to delete vectors from S3 Vectors: {e}",
                operation="delete",
                details={"id_count": len(ids)},
            ) from e

    def delete_all(self) -> None:
        """Delete every vector in the index."""
        try:
            keys = [item["key"] for item in self._iter_vectors(return_metadata=False)]
        except (ClientError, BotoCoreError) as e:
            raise VectorStoreError(
                message=f"Failed to list vectors from S3 Vectors: {e}",
                operation="delete_all",
            ) from e

        self.delete_by_ids(keys)
        logger.info(
            f"{__name__}:delete_all - Deleted {len(keys)} vectors",
            extra={"index": self._index_name},
        )

    def stats(self) -> IndexStats:
        """Count vectors in the index; the index is the only namespace."""
        try:
            count = sum(1 for _ in self._iter_vectors(return_metadata=False))
        except (ClientError, BotoCoreError) as e:
            raise VectorStoreError(
                message=f"Failed to read S3 Vectors index stats: {e}",
                operation="stats",
            ) from e
        return IndexStats(
            total_record_count=count,
            namespaces={self._index_name: count} if count else {},
        )

    def ensure_index(self) -> bool:
        """
        Create the vector bucket and index when missing.

        Returns:
            bool: True if the index was created, False if it already existed

        Raises:
            VectorStoreError: If the bucket or index cannot be created
        """
        try:
            if not self._exists(self.client.get_vector_bucket, vectorBucketName=self._vectors_bucket):
                self.client.create_vector_bucket(vectorBucketName=self._vectors_bucket)
                logger.info(f"{__name__}:ensure_index - Created bucket {self._vectors_bucket}")

            if self._exists(self.client.get_index, **self._location):
                return False

            self.client.create_index(
                **self._location,
                dataType="float32",
                dimension=self._dimension,
                distanceMetric="cosine",
                metadataConfiguration={"nonFilterableMetadataKeys": NON_FILTERABLE_METADATA_KEYS},
            )
        except (ClientError, BotoCoreError) as e:
            raise VectorStoreError(
                message=f"Failed to create S3 Vectors index: {e}",
                operation="ensure_index",
            ) from e

        logger.info(
            f"{__name__}:ensure_index - Created index {self._index_name}",
            extra={"dimension": self._dimension},
        )
        return True

    @staticmethod
    def _exists(getter, **kwargs: Any) -> bool:
        try:
            getter(**kwargs)
            return True
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") in {"NotFoundException", "ResourceNotFoundException"}:
                return False
            raise


def build_filter_expression(filter: dict[str, Any]) -> dict[str, Any]:
    """Translate field equalities into an S3 Vectors filter document."""
    clauses = [{key: {"$eq": value}} for key, value in filter.items()]
    if len(clauses) == 1:
        return clauses[0]
    return {"$and": clauses}


def distance_to_score(distance: float, metric: str = "cosine") -> float:
    """Map an S3 Vectors distance onto a similarity score in [0, 1]."""
    if metric == "euclidean":
        return 1.0 / (1.0 + max(float(distance), 0.0))
    return min(max(1.0 - float(distance), 0.0), 1.0)
