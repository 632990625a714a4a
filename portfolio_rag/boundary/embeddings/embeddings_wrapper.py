"""
Gemini embeddings tuned for portfolio retrieval.

Knowledge base chunks and visitor questions are embedded with different
Gemini task types (RETRIEVAL_DOCUMENT and RETRIEVAL_QUERY), and both are
truncated to the index dimension. The base class does not apply
output_dimensionality from its constructor, so it is passed on every call.

Dependencies: langchain_google_genai
System role: Embedding provider configuration for the vector index
"""

import logging

from langchain_google_genai import GoogleGenerativeAIEmbeddings

logger = logging.getLogger(__name__)

DOCUMENT_TASK_TYPE = "RETRIEVAL_DOCUMENT"
QUERY_TASK_TYPE = "RETRIEVAL_QUERY"


class RetrievalEmbeddings(GoogleGenerativeAIEmbeddings):
    """Gemini embeddings with per-side task types and a fixed dimension."""

    model: str = "models/gemini-embedding-001"
    output_dimension: int = 1024
    document_task_type: str = DOCUMENT_TASK_TYPE
    query_task_type: str = QUERY_TASK_TYPE

    def embed_documents(
        self,
        texts: list[str],
        *,
        batch_size: int = 100,
        task_type: str | None = None,
        titles: list[str] | None = None,
        output_dimensionality: int | None = None,
    ) -> list[list[float]]:
        logger.debug(f"Embedding {len(texts)} chunks at dimension {self.output_dimension}")
        return super().embed_documents(
            texts,
            batch_size=batch_size,
            task_type=task_type or self.document_task_type,
            titles=titles,
            output_dimensionality=output_dimensionality or self.output_dimension,
        )

    def embed_query(
        self,
        text: str,
        task_type: str | None = None,
        title: str | None = None,
        output_dimensionality: int | None = None,
    ) -> list[float]:
        return super().embed_query(
            text,
            task_type=task_type or self.query_task_type,
            title=title,
            output_dimensionality=output_dimensionality or self.output_dimension,
        )
