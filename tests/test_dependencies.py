"""
Test suite for dependency injection container.

Verifies ServiceContainer builds services once from settings and that the
FastAPI dependency functions hand them out.

System role: Verification of DI container
"""

from unittest.mock import MagicMock, patch

import pytest

from portfolio_rag.api.deps import (
    ServiceContainer,
    get_auth_gate,
    get_chat_service,
    get_document_service,
)
from portfolio_rag.application.services import ChatService, DocumentService
from portfolio_rag.boundary.vdb.memory_store import InMemoryVectorStore
from portfolio_rag.configs.assistant import AssistantSettings
from portfolio_rag.configs.security import SecuritySettings
from portfolio_rag.configs.settings import Settings
from portfolio_rag.configs.vector_store import VectorStoreSettings


@pytest.fixture
def settings() -> Settings:
    return Settings(
        vector_store=VectorStoreSettings(store_type="memory", embedding_dimension=8),
        assistant=AssistantSettings(display_name="Jane Doe", chunk_size=500, chunk_overlap=50),
        security=SecuritySettings(admin_password="s3cret"),
    )


@pytest.fixture
def container(settings: Settings):
    with patch("portfolio_rag.boundary.embeddings.build_embedding_client") as build_embeddings, patch(
        "portfolio_rag.application.services.chat_service.build_chat_model"
    ) as build_model:
        build_embeddings.return_value = MagicMock()
        build_model.return_value = MagicMock()
        yield ServiceContainer(settings)


class TestServiceContainer:
    """Test suite for ServiceContainer."""

    def test_vector_store_should_follow_store_type(self, container: ServiceContainer) -> None:
        assert isinstance(container.vector_store, InMemoryVectorStore)

    def test_services_should_be_cached(self, container: ServiceContainer) -> None:
        assert container.document_service is container.document_service
        assert container.chat_service is container.chat_service

    def test_document_service_should_use_assistant_settings(self, container: ServiceContainer) -> None:
        service = container.document_service

        assert isinstance(service, DocumentService)
        assert service.chunker.chunk_size == 500
        assert service.chunker.overlap == 50
        assert service.dimension == 8

    def test_chat_service_should_share_vector_store(self, container: ServiceContainer) -> None:
        service = container.chat_service

        assert isinstance(service, ChatService)
        assert service.display_name == "Jane Doe"
        assert service.retrieval_service.vector_store is container.vector_store

    def test_clear_should_drop_instances(self, container: ServiceContainer) -> None:
        store = container.vector_store

        container.clear()

        assert container.vector_store is not store

    def test_dependency_functions_should_read_container(self, container: ServiceContainer) -> None:
        assert get_document_service(container) is container.document_service
        assert get_chat_service(container) is container.chat_service
        assert get_auth_gate(container).enabled is True
