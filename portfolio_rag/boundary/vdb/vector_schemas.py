"""
Vector database schemas.

Pydantic models for vector operations (records, metadata, matches, stats).
Used for type-safe vector store interactions.

Metadata is stored with camelCase keys (content, source, fileName,
fileType, chunkIndex, uploadedAt, contentType, category, importance, tags).

Dependencies: pydantic
System role: Type definitions for vector operations
"""

from typing import Any, Protocol

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class VectorMetadata(BaseModel):
    """
    Metadata attached to each vector.

    `content` duplicates the chunk text so matches can be displayed
    without a second lookup.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    content: str = Field(default="", description="Chunk text")
    source: str = Field(default="unknown", description="Upload source label")
    file_name: str = Field(default="", description="Original file name")
    file_type: str = Field(default="text/plain", description="MIME type of the upload")
    chunk_index: int = Field(default=0, ge=0, description="Chunk position in the document")
    uploaded_at: str = Field(default="", description="ISO-8601 upload timestamp")
    content_type: str = Field(default="general")
    category: str = Field(default="general")
    importance: str = Field(default="medium")
    tags: list[str] = Field(default_factory=list)

    def to_store(self) -> dict[str, Any]:
        """Serialize with the camelCase keys used inside the index."""
        return self.model_dump(by_alias=True, mode="json")


class VectorRecord(BaseModel):
    """Vector with its deterministic id and metadata."""

    id: str = Field(min_length=1, description="Deterministic record identifier")
    embedding: list[float] = Field(description="Embedding vector")
    metadata: VectorMetadata


class VectorMatch(BaseModel):
    """Single result from vector search."""

    id: str
    score: float = Field(ge=0.0, le=1.0, description="Similarity score (0.0-1.0)")
    metadata: VectorMetadata


class IndexStats(BaseModel):
    """Record counts for the index."""

    total_record_count: int = 0
    namespaces: dict[str, int] = Field(default_factory=dict)


class VectorStore(Protocol):
    """Operations every vector store backend provides."""

    def upsert(self, records: list[VectorRecord]) -> None: ...

    def query(
        self,
        vector: list[float],
        top_k: int,
        filter: dict[str, Any] | None = None,
    ) -> list[VectorMatch]: ...

    def delete_by_ids(self, ids: list[str]) -> None: ...

    def delete_all(self) -> None: ...

    def stats(self) -> IndexStats: ...


def matches_filter(metadata: dict[str, Any], filter: dict[str, Any] | None) -> bool:
    """Return True when every filter field equals the stored metadata value."""
    if not filter:
        return True
    return all(metadata.get(key) == value for key, value in filter.items())
