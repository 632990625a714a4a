"""
Vector store configuration settings.

Selects the vector store backend (in-memory for local development,
Amazon S3 Vectors for production) and carries index and timeout settings.

Dependencies: pydantic, pydantic_settings
System role: Vector database configuration for RAG retrieval
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class VectorStoreSettings(BaseSettings):
    """Vector store configuration (memory for dev, S3 Vectors for prod)."""

    model_config = SettingsConfigDict(
        env_prefix="VECTOR_STORE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    store_type: str = Field(
        default="memory",
        description="Vector store type: 'memory' for local dev, 's3' for production",
    )
    vectors_bucket: str = Field(
        default="portfolio-assistant-vectors",
        description="S3 Vectors bucket name",
    )
    index_name: str = Field(default="portfolio", description="Vector index name")
    aws_region: str = Field(default="us-east-1", description="AWS region for S3 Vectors")

    embedding_dimension: int = Field(
        default=1024,
        description="Embedding vector dimension (must match the index definition)",
    )
    list_top_k: int = Field(
        default=1000,
        ge=1,
        description="Record cap used when listing documents through a zero-vector query",
    )
    delete_top_k: int = Field(
        default=10000,
        ge=1,
        description="Record cap per filtered query when deleting one document; also the chunk limit per upload",
    )

    connect_timeout: float = Field(default=5.0, description="Connect timeout in seconds")
    read_timeout: float = Field(default=30.0, description="Read timeout in seconds")
