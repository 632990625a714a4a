"""
Test suite for EmbeddingClient.

System role: Verification of embedding response validation
"""

from unittest.mock import MagicMock

import pytest
from langchain_google_genai import GoogleGenerativeAIEmbeddings

from portfolio_rag.boundary.embeddings import EmbeddingClient
from portfolio_rag.boundary.embeddings.embeddings_wrapper import (
    DOCUMENT_TASK_TYPE,
    QUERY_TASK_TYPE,
    RetrievalEmbeddings,
)
from portfolio_rag.core.exceptions import EmbeddingError


@pytest.fixture
def mock_embeddings() -> MagicMock:
    return MagicMock()


class TestEmbeddingClient:
    """Test suite for embed and embed_batch."""

    def test_embed_should_return_query_vector(self, mock_embeddings: MagicMock) -> None:
        mock_embeddings.embed_query.return_value = [0.1, 0.2, 0.3]

        vector = EmbeddingClient(mock_embeddings, dimension=3).embed("hello")

        assert vector == [0.1, 0.2, 0.3]
        mock_embeddings.embed_query.assert_called_once_with("hello")

    def test_embed_batch_should_preserve_order(self, mock_embeddings: MagicMock) -> None:
        mock_embeddings.embed_documents.return_value = [[1.0, 0.0], [0.0, 1.0]]

        vectors = EmbeddingClient(mock_embeddings, dimension=2).embed_batch(["a", "b"])

        assert vectors == [[1.0, 0.0], [0.0, 1.0]]

    def test_embed_batch_should_skip_call_for_empty_input(self, mock_embeddings: MagicMock) -> None:
        assert EmbeddingClient(mock_embeddings, dimension=2).embed_batch([]) == []
        mock_embeddings.embed_documents.assert_not_called()

    def test_embed_batch_should_reject_count_mismatch(self, mock_embeddings: MagicMock) -> None:
        mock_embeddings.embed_documents.return_value = [[1.0, 0.0]]

        with pytest.raises(EmbeddingError):
            EmbeddingClient(mock_embeddings, dimension=2).embed_batch(["a", "b"])

    def test_embed_should_reject_wrong_dimension(self, mock_embeddings: MagicMock) -> None:
        mock_embeddings.embed_query.return_value = [0.1, 0.2]

        with pytest.raises(EmbeddingError):
            EmbeddingClient(mock_embeddings, dimension=3).embed("hello")

    def test_embed_should_reject_non_finite_values(self, mock_embeddings: MagicMock) -> None:
        mock_embeddings.embed_query.return_value = [0.1, float("nan")]

        with pytest.raises(EmbeddingError):
            EmbeddingClient(mock_embeddings, dimension=2).embed("hello")

    def test_embed_should_wrap_provider_errors(self, mock_embeddings: MagicMock) -> None:
        mock_embeddings.embed_query.side_effect = RuntimeError("quota exceeded")

        with pytest.raises(EmbeddingError) as exc_info:
            EmbeddingClient(mock_embeddings, dimension=2).embed("hello")

        assert "quota exceeded" in exc_info.value.message
        assert isinstance(exc_info.value.__cause__, RuntimeError)


class TestRetrievalEmbeddings:
    """Test suite for the Gemini task type and dimension defaults."""

    @pytest.fixture
    def captured(self, monkeypatch) -> dict:
        calls: dict = {}

        def fake_embed_documents(self, texts, **kwargs):
            calls["documents"] = kwargs
            return [[0.0] * 4 for _ in texts]

        def fake_embed_query(self, text, **kwargs):
            calls["query"] = kwargs
            return [0.0] * 4

        monkeypatch.setattr(GoogleGenerativeAIEmbeddings, "embed_documents", fake_embed_documents)
        monkeypatch.setattr(GoogleGenerativeAIEmbeddings, "embed_query", fake_embed_query)
        return calls

    def test_documents_should_use_document_task_type(self, captured: dict) -> None:
        embeddings = RetrievalEmbeddings(google_api_key="test-key", output_dimension=4)

        embeddings.embed_documents(["Jane led the platform team."])

        assert captured["documents"]["task_type"] == DOCUMENT_TASK_TYPE
        assert captured["documents"]["output_dimensionality"] == 4

    def test_query_should_use_query_task_type(self, captured: dict) -> None:
        embeddings = RetrievalEmbeddings(google_api_key="test-key", output_dimension=4)

        embeddings.embed_query("Who is Jane?")

        assert captured["query"]["task_type"] == QUERY_TASK_TYPE
        assert captured["query"]["output_dimensionality"] == 4
