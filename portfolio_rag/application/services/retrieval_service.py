"""
Retrieval service.

Embeds a question, queries the vector store and maps matches to context
items. Identity questions ("who is ...", "tell me about ...") often score
poorly against resume-style chunks, so when the best match is weak they are
retried with a query built from the persona name and profile keywords.

Dependencies: portfolio_rag.boundary.embeddings, portfolio_rag.boundary.vdb
System role: Context retrieval for chat
"""

import logging
import re
from collections.abc import Sequence

from portfolio_rag.boundary.embeddings import EmbeddingClient
from portfolio_rag.boundary.vdb.vector_schemas import VectorMatch, VectorStore
from portfolio_rag.core.prompt_builder import format_context
from portfolio_rag.models.chat import RetrievedContext
from portfolio_rag.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)

IDENTITY_PATTERNS = (
    r"\bwho\s+is\b",
    r"\bwho\s+are\s+you\b",
    r"\bwho'?s\b",
    r"\btell\s+me\s+about\b",
    r"\bintroduce\b",
    r"\babout\s+(him|her|them)\b",
)


class RetrievalService:
    """Vector retrieval with an identity-question fallback."""

    def __init__(
        self,
        vector_store: VectorStore,
        embedding_client: EmbeddingClient,
        display_name: str,
        fallback_keywords: str,
        fallback_score_threshold: float = 0.5,
    ) -> None:
        self.vector_store = vector_store
        self.embedding_client = embedding_client
        self.display_name = display_name
        self.fallback_keywords = fallback_keywords
        self.fallback_score_threshold = fallback_score_threshold

        patterns = list(IDENTITY_PATTERNS)
        name_words = display_name.split()
        if name_words:
            # Match the whole name, not its individual words
            patterns.append(r"\b" + r"\s+".join(re.escape(word) for word in name_words) + r"\b")
        self._identity_re = re.compile("|".join(patterns), re.IGNORECASE)

    def is_identity_question(self, query: str) -> bool:
        return bool(self._identity_re.search(query))

    def retrieve(self, query: str, top_k: int = 3) -> list[RetrievedContext]:
        """
        Retrieve context passages for a question.

        Failures are logged and produce an empty list so chat can still
        answer without context.

        Args:
            query: User question
            top_k: Maximum passages to return

        Returns:
            list[RetrievedContext]: Passages ordered by descending score
        """
        if not query or not query.strip():
            return []

        try:
            matches = self._search(query, top_k)

            best = matches[0].score if matches else 0.0
            if best < self.fallback_score_threshold and self.is_identity_question(query):
                fallback_query = f"{self.display_name} {self.fallback_keywords}".strip()
                logger.info(
                    f"Weak match ({best:.2f}) for identity question, retrying with profile query",
                    extra={"best_score": best},
                )
                fallback = self._search(fallback_query, top_k)
                if fallback:
                    matches = fallback
        except Exception as e:
            log_exception_with_context(
                logger, "Retrieval failed, answering without context", e, query=query, top_k=top_k
            )
            return []

        return [self._to_context(match) for match in matches]

    def _search(self, query: str, top_k: int) -> list[VectorMatch]:
        vector = self.embedding_client.embed(query)
        matches = self.vector_store.query(vector, top_k=top_k)
        return sorted(matches, key=lambda m: m.score, reverse=True)

    @staticmethod
    def _to_context(match: VectorMatch) -> RetrievedContext:
        return RetrievedContext(
            content=match.metadata.content,
            score=match.score,
            source=match.metadata.source or "unknown",
            file_name=match.metadata.file_name or None,
        )

    @staticmethod
    def format_context(items: Sequence[RetrievedContext]) -> str:
        """Render passages as the ranked context block used in prompts."""
        return format_context(items)
