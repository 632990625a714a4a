"""
Language model configuration settings.

Google Gemini chat and embedding model settings.

Dependencies: pydantic, pydantic_settings
System role: LLM and embedding provider configuration
"""

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LLMSettings(BaseSettings):
    """Chat completion and embedding model configuration."""

    model_config = SettingsConfigDict(
        env_prefix="LLM_",
        populate_by_name=True,
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    google_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("LLM_GOOGLE_API_KEY", "GOOGLE_API_KEY"),
        description="Google Generative AI API key",
    )
    chat_model: str = Field(default="gemini-2.0-flash", description="Chat model ID")
    embedding_model: str = Field(
        default="models/gemini-embedding-001",
        description="Embedding model ID (gemini-embedding-001 supports reduced dimensions)",
    )

    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    max_output_tokens: int = Field(default=1000, ge=1)
    request_timeout: float = Field(
        default=60.0,
        description="Timeout in seconds for a single chat or embedding request",
    )
