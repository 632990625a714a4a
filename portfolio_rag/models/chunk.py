"""
Chunk domain model.

Represents a window of document text, the unit of embedding and retrieval.

Dependencies: pydantic
System role: Document chunk data structure
"""

from pydantic import BaseModel, Field


class Chunk(BaseModel):
    """Document chunk model."""

    text: str = Field(description="Chunk text content")
    index: int = Field(ge=0, description="Position of the chunk within its document")
    source_doc_id: str = Field(description="Identifier of the document the chunk came from")
    start: int = Field(ge=0, description="Offset of the first character in the document text")
    end: int = Field(ge=0, description="Offset one past the last character")
