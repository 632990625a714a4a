"""
Document domain models and schemas.

Request/response schemas for document upload, listing and deletion.

Dependencies: pydantic
System role: Document API contracts
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Response model serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class UploadResult(CamelModel):
    """Result of indexing one uploaded file."""

    chunks_processed: int
    file_name: str
    source: str


class UploadResponse(UploadResult):
    """Response schema for POST /documents."""

    success: bool = True
    message: str


class DocumentSummary(CamelModel):
    """Document aggregated from the vector records sharing (source, fileName)."""

    source: str
    file_name: str
    file_type: str | None = None
    uploaded_at: str | None = None
    chunk_count: int = 0
    word_count: int = 0
    tags: list[str] = Field(default_factory=list)
    content_types: list[str] = Field(default_factory=list)
    categories: list[str] = Field(default_factory=list)


class DocumentListResponse(CamelModel):
    """Response schema for GET /documents."""

    documents: list[DocumentSummary]


class DeleteResponse(CamelModel):
    """Response schema for a filtered delete."""

    success: bool = True
    message: str
    deleted_chunks: int


class DeleteAllResponse(CamelModel):
    """Response schema for a delete-all request."""

    success: bool = True
    action: str = "deleteAll"
