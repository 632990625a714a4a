"""
Assistant behaviour settings.

Persona name, retrieval depth, identity-question fallback and chunking.

Dependencies: pydantic, pydantic_settings
System role: RAG pipeline tuning
"""

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AssistantSettings(BaseSettings):
    """Retrieval, chunking and persona configuration."""

    model_config = SettingsConfigDict(
        env_prefix="ASSISTANT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    display_name: str = Field(
        default="the portfolio owner",
        description="Name substituted into prompts and identity fallback queries",
    )

    retrieval_top_k: int = Field(default=3, ge=1, le=100)
    fallback_score_threshold: float = Field(default=0.5, ge=0.0, le=1.0)
    fallback_keywords: str = Field(
        default="background experience skills projects education summary",
        description="Keywords appended to the display name for the fallback query",
    )

    chunk_size: int = Field(default=1000, ge=1)
    chunk_overlap: int = Field(default=200, ge=0)
    max_upload_bytes: int = Field(default=5 * 1024 * 1024, ge=1)

    @model_validator(mode="after")
    def _check_overlap(self) -> "AssistantSettings":
        if self.chunk_overlap >= self.chunk_size:
            raise ValueError("chunk_overlap must be smaller than chunk_size")
        return self
