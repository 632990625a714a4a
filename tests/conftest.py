"""
Shared test fixtures and configuration for entire test suite.

Provides: deterministic fake embeddings, in-memory vector store, service
instances wired to fakes, and a scripted streaming chat model.
Dependencies: pytest, langchain_core
System role: Test infrastructure and fixture management
"""

from collections.abc import AsyncIterator

import pytest
from langchain_core.embeddings import DeterministicFakeEmbedding
from langchain_core.messages import AIMessageChunk, BaseMessage

from portfolio_rag.application.services import ChatService, DocumentService, RetrievalService
from portfolio_rag.boundary.embeddings import EmbeddingClient
from portfolio_rag.boundary.vdb.memory_store import InMemoryVectorStore
from portfolio_rag.core.chunker import TextChunker

TEST_DIMENSION = 8


class ScriptedChatModel:
    """
    Chat model double that streams a fixed list of tokens.

    Records the messages it was called with. When fail_after is set, raises
    after that many tokens have been yielded.
    """

    def __init__(self, tokens: list[str], fail_after: int | None = None) -> None:
        self.tokens = tokens
        self.fail_after = fail_after
        self.calls: list[list[BaseMessage]] = []
        self.closed = False

    async def astream(self, messages: list[BaseMessage]) -> AsyncIterator[AIMessageChunk]:
        self.calls.append(messages)
        try:
            for i, token in enumerate(self.tokens):
                if self.fail_after is not None and i >= self.fail_after:
                    raise RuntimeError("provider unavailable")
                yield AIMessageChunk(content=token)
            if self.fail_after is not None and self.fail_after >= len(self.tokens):
                raise RuntimeError("provider unavailable")
        finally:
            self.closed = True


@pytest.fixture
def fake_embeddings() -> DeterministicFakeEmbedding:
    """Provide hash-seeded fake embeddings (same text, same vector)."""
    return DeterministicFakeEmbedding(size=TEST_DIMENSION)


@pytest.fixture
def embedding_client(fake_embeddings: DeterministicFakeEmbedding) -> EmbeddingClient:
    return EmbeddingClient(embeddings=fake_embeddings, dimension=TEST_DIMENSION)


@pytest.fixture
def memory_store() -> InMemoryVectorStore:
    return InMemoryVectorStore(dimension=TEST_DIMENSION, namespace="portfolio")


@pytest.fixture
def document_service(
    memory_store: InMemoryVectorStore, embedding_client: EmbeddingClient
) -> DocumentService:
    """Provide DocumentService over the in-memory store."""
    return DocumentService(
        vector_store=memory_store,
        embedding_client=embedding_client,
        chunker=TextChunker(chunk_size=1000, overlap=200),
        dimension=TEST_DIMENSION,
        list_top_k=1000,
        max_upload_bytes=64 * 1024,
    )


@pytest.fixture
def retrieval_service(
    memory_store: InMemoryVectorStore, embedding_client: EmbeddingClient
) -> RetrievalService:
    return RetrievalService(
        vector_store=memory_store,
        embedding_client=embedding_client,
        display_name="Jane Doe",
        fallback_keywords="background experience skills",
        fallback_score_threshold=0.5,
    )


@pytest.fixture
def chat_model() -> ScriptedChatModel:
    return ScriptedChatModel(["Jane ", "builds ", "web apps."])


@pytest.fixture
def chat_service(chat_model: ScriptedChatModel, retrieval_service: RetrievalService) -> ChatService:
    return ChatService(
        chat_model=chat_model,
        retrieval_service=retrieval_service,
        display_name="Jane Doe",
        top_k=3,
    )


@pytest.fixture
def make_chat_model():
    """Provide the ScriptedChatModel class for tests that need custom scripts."""
    return ScriptedChatModel
