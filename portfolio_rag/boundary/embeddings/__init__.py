"""
Embedding boundary layer.

Dependencies: langchain_google_genai
System role: Embedding provider adapter
"""

from portfolio_rag.boundary.embeddings.embedding_client import EmbeddingClient


def build_embedding_client(
    model: str,
    dimension: int,
    google_api_key: str | None = None,
    timeout: float | None = None,
) -> EmbeddingClient:
    """Create an EmbeddingClient backed by Google Generative AI embeddings."""
    from portfolio_rag.boundary.embeddings.embeddings_wrapper import RetrievalEmbeddings

    kwargs: dict = {}
    if google_api_key:
        kwargs["google_api_key"] = google_api_key
    if timeout:
        kwargs["request_options"] = {"timeout": timeout}

    embeddings = RetrievalEmbeddings(
        model=model,
        output_dimension=dimension,
        **kwargs,
    )
    return EmbeddingClient(embeddings=embeddings, dimension=dimension)


__all__ = ["EmbeddingClient", "build_embedding_client"]
