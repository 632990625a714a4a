"""
Embedding client.

Turns text into fixed-length vectors through a LangChain Embeddings
model and validates what comes back.

Dependencies: langchain_core, portfolio_rag.core.exceptions
System role: Embedding generation adapter
"""

import logging
import math

from langchain_core.embeddings import Embeddings

from portfolio_rag.core.exceptions import EmbeddingError

logger = logging.getLogger(__name__)


class EmbeddingClient:
    """Embedding generator with response validation and no retries."""

    def __init__(self, embeddings: Embeddings, dimension: int) -> None:
        """
        Initialize embedding client.

        Args:
            embeddings: LangChain embeddings model
            dimension: Expected vector length
        """
        self._embeddings = embeddings
        self.dimension = dimension

    def embed(self, text: str) -> list[float]:
        """
        Generate embedding for a query.

        Args:
            text: Query text

        Returns:
            list[float]: Query embedding vector

        Raises:
            EmbeddingError: If the upstream call fails or the vector is malformed
        """
        try:
            vector = self._embeddings.embed_query(text)
        except Exception as e:
            logger.error(f"{__name__}:embed - {type(e).__name__}: {e}")
            raise EmbeddingError(f"Embedding request failed: {e}") from e
        return self._validate(vector, position=0)

    def embed_batch(self, texts: list[str]) -> list[list[float]]:
        """
        Generate embeddings for documents, preserving input order.

        Args:
            texts: Texts to embed

        Returns:
            list[list[float]]: One vector per input text

        Raises:
            EmbeddingError: If the upstream call fails or a vector is malformed
        """
        if not texts:
            return []

        try:
            vectors = self._embeddings.embed_documents(texts)
        except Exception as e:
            logger.error(f"{__name__}:embed_batch - {type(e).__name__}: {e}")
            raise EmbeddingError(
                f"Embedding request failed: {e}",
                details={"text_count": len(texts)},
            ) from e

        if vectors is None or len(vectors) != len(texts):
            raise EmbeddingError(
                "Embedding response did not contain one vector per input",
                details={
                    "text_count": len(texts),
                    "vector_count": 0 if vectors is None else len(vectors),
                },
            )
        return [self._validate(vector, position=i) for i, vector in enumerate(vectors)]

    def _validate(self, vector: list[float] | None, position: int) -> list[float]:
        if not vector:
            raise EmbeddingError(
                "Invalid embedding response: missing vector",
                details={"position": position},
            )
        if len(vector) != self.dimension:
            raise EmbeddingError(
                f"Invalid embedding response: expected {self.dimension} dimensions, got {len(vector)}",
                details={"position": position},
            )
        values = [float(x) for x in vector]
        if not all(math.isfinite(x) for x in values):
            raise EmbeddingError(
                "Invalid embedding response: non-finite values",
                details={"position": position},
            )
        return values
