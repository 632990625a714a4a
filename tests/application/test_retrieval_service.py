"""
Test suite for RetrievalService.

Covers match mapping, failure degradation and the identity-question
fallback query.

System role: Verification of context retrieval
"""

from unittest.mock import MagicMock

import pytest

from portfolio_rag.application.services.retrieval_service import RetrievalService
from portfolio_rag.boundary.vdb.vector_schemas import VectorMatch, VectorMetadata
from portfolio_rag.core.exceptions import EmbeddingError, VectorStoreError


def _match(record_id: str, score: float, content: str = "text") -> VectorMatch:
    return VectorMatch(
        id=record_id,
        score=score,
        metadata=VectorMetadata(content=content, source="resume", file_name="cv.md"),
    )


@pytest.fixture
def mock_store() -> MagicMock:
    return MagicMock()


@pytest.fixture
def mock_embedding_client() -> MagicMock:
    client = MagicMock()
    client.embed.return_value = [0.1, 0.2, 0.3]
    return client


@pytest.fixture
def service(mock_store: MagicMock, mock_embedding_client: MagicMock) -> RetrievalService:
    return RetrievalService(
        vector_store=mock_store,
        embedding_client=mock_embedding_client,
        display_name="Jane Doe",
        fallback_keywords="background experience skills",
        fallback_score_threshold=0.5,
    )


class TestRetrievalServiceRetrieve:
    """Test suite for RetrievalService.retrieve."""

    def test_retrieve_should_map_matches_in_score_order(
        self, service: RetrievalService, mock_store: MagicMock
    ) -> None:
        mock_store.query.return_value = [_match("b", 0.6, "second"), _match("a", 0.9, "first")]

        items = service.retrieve("What databases has she used?", top_k=3)

        assert [i.content for i in items] == ["first", "second"]
        assert items[0].score == 0.9
        assert items[0].source == "resume"
        assert items[0].file_name == "cv.md"
        mock_store.query.assert_called_once_with([0.1, 0.2, 0.3], top_k=3)

    def test_retrieve_should_return_empty_on_embedding_failure(
        self, service: RetrievalService, mock_embedding_client: MagicMock
    ) -> None:
        mock_embedding_client.embed.side_effect = EmbeddingError("Embedding request failed: boom")

        assert service.retrieve("What does she do?") == []

    def test_retrieve_should_return_empty_on_store_failure(
        self, service: RetrievalService, mock_store: MagicMock
    ) -> None:
        mock_store.query.side_effect = VectorStoreError("down", operation="query")

        assert service.retrieve("What does she do?") == []

    def test_retrieve_should_skip_blank_query(
        self, service: RetrievalService, mock_embedding_client: MagicMock
    ) -> None:
        assert service.retrieve("   ") == []
        mock_embedding_client.embed.assert_not_called()


class TestRetrievalServiceFallback:
    """Test suite for the identity-question fallback."""

    def test_weak_identity_match_should_trigger_profile_query(
        self,
        service: RetrievalService,
        mock_store: MagicMock,
        mock_embedding_client: MagicMock,
    ) -> None:
        mock_store.query.side_effect = [[_match("weak", 0.2)], [_match("profile", 0.7, "About Jane")]]

        items = service.retrieve("Who is Jane?")

        assert [i.content for i in items] == ["About Jane"]
        assert mock_store.query.call_count == 2
        assert mock_embedding_client.embed.call_args_list[1].args == (
            "Jane Doe background experience skills",
        )

    def test_identity_question_without_matches_should_trigger_fallback(
        self, service: RetrievalService, mock_store: MagicMock
    ) -> None:
        mock_store.query.side_effect = [[], [_match("profile", 0.4)]]

        items = service.retrieve("Tell me about yourself")

        assert len(items) == 1

    def test_empty_fallback_should_keep_original_matches(
        self, service: RetrievalService, mock_store: MagicMock
    ) -> None:
        mock_store.query.side_effect = [[_match("weak", 0.2, "original")], []]

        items = service.retrieve("Who are you?")

        assert [i.content for i in items] == ["original"]

    def test_strong_identity_match_should_not_trigger_fallback(
        self, service: RetrievalService, mock_store: MagicMock
    ) -> None:
        mock_store.query.return_value = [_match("good", 0.8)]

        service.retrieve("Who is Jane Doe?")

        assert mock_store.query.call_count == 1

    def test_weak_non_identity_match_should_not_trigger_fallback(
        self, service: RetrievalService, mock_store: MagicMock
    ) -> None:
        mock_store.query.return_value = [_match("weak", 0.1)]

        service.retrieve("What is the capital of France?")

        assert mock_store.query.call_count == 1

    @pytest.mark.parametrize(
        "question",
        ["Who is she?", "who are you", "Tell me about her work", "Introduce Jane", "What does jane  doe do?"],
    )
    def test_is_identity_question_should_match_identity_phrasings(
        self, service: RetrievalService, question: str
    ) -> None:
        assert service.is_identity_question(question) is True

    @pytest.mark.parametrize("question", ["Show me a portfolio project", "Who owns the repo?", "Is the owner available?"])
    def test_single_name_words_should_not_count_as_identity(
        self, mock_store: MagicMock, mock_embedding_client: MagicMock, question: str
    ) -> None:
        generic = RetrievalService(
            vector_store=mock_store,
            embedding_client=mock_embedding_client,
            display_name="the portfolio owner",
            fallback_keywords="background",
        )
        assert generic.is_identity_question(question) is False

    def test_surname_alone_should_not_count_as_identity(self, service: RetrievalService) -> None:
        assert service.is_identity_question("What does Doe do?") is False


class TestRetrievalServiceEndToEnd:
    """Retrieval against the in-memory store with fake embeddings."""

    def test_exact_text_should_be_top_match(self, document_service, retrieval_service) -> None:
        document_service.upload("a.txt", "text/plain", b"Alpha project notes", "s")
        document_service.upload("b.txt", "text/plain", b"Beta project notes", "s")

        items = retrieval_service.retrieve("Beta project notes", top_k=1)

        assert items[0].content == "Beta project notes"
        assert items[0].score == pytest.approx(1.0, abs=1e-5)

    def test_format_context_should_render_items(self, retrieval_service) -> None:
        assert retrieval_service.format_context([]) == "No relevant context found in knowledge base."
