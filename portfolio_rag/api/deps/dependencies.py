"""
Dependency injection container.

Services are built once at application startup from settings, stored on
app.state and handed to request handlers through FastAPI dependencies.
Tests replace them with app.dependency_overrides.

Dependencies: portfolio_rag.configs, portfolio_rag.application, portfolio_rag.boundary
System role: DI container for service injection
"""

from fastapi import Depends, Request

from portfolio_rag.application.services import ChatService, DocumentService, RetrievalService
from portfolio_rag.boundary.vdb.vector_schemas import VectorStore
from portfolio_rag.configs import Settings, get_settings
from portfolio_rag.core.auth_gate import AdminAuthGate
from portfolio_rag.core.chunker import TextChunker


class ServiceContainer:
    """Lazily constructed, process-wide service instances."""

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings
        self._vector_store = None
        self._embedding_client = None
        self._chat_model = None
        self._document_service = None
        self._retrieval_service = None
        self._chat_service = None
        self._auth_gate = None

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def vector_store(self) -> VectorStore:
        if self._vector_store is None:
            from portfolio_rag.boundary.vdb.vector_store_factory import get_vector_store

            self._vector_store = get_vector_store(self.settings.vector_store)
        return self._vector_store

    @property
    def embedding_client(self):
        if self._embedding_client is None:
            from portfolio_rag.boundary.embeddings import build_embedding_client

            llm = self.settings.llm
            self._embedding_client = build_embedding_client(
                model=llm.embedding_model,
                dimension=self.settings.vector_store.embedding_dimension,
                google_api_key=llm.google_api_key,
                timeout=llm.request_timeout,
            )
        return self._embedding_client

    @property
    def chat_model(self):
        if self._chat_model is None:
            from portfolio_rag.application.services.chat_service import build_chat_model

            self._chat_model = build_chat_model(self.settings.llm)
        return self._chat_model

    @property
    def document_service(self) -> DocumentService:
        if self._document_service is None:
            assistant = self.settings.assistant
            self._document_service = DocumentService(
                vector_store=self.vector_store,
                embedding_client=self.embedding_client,
                chunker=TextChunker(assistant.chunk_size, assistant.chunk_overlap),
                dimension=self.settings.vector_store.embedding_dimension,
                list_top_k=self.settings.vector_store.list_top_k,
                delete_top_k=self.settings.vector_store.delete_top_k,
                max_upload_bytes=assistant.max_upload_bytes,
            )
        return self._document_service

    @property
    def retrieval_service(self) -> RetrievalService:
        if self._retrieval_service is None:
            assistant = self.settings.assistant
            self._retrieval_service = RetrievalService(
                vector_store=self.vector_store,
                embedding_client=self.embedding_client,
                display_name=assistant.display_name,
                fallback_keywords=assistant.fallback_keywords,
                fallback_score_threshold=assistant.fallback_score_threshold,
            )
        return self._retrieval_service

    @property
    def chat_service(self) -> ChatService:
        if self._chat_service is None:
            assistant = self.settings.assistant
            self._chat_service = ChatService(
                chat_model=self.chat_model,
                retrieval_service=self.retrieval_service,
                display_name=assistant.display_name,
                top_k=assistant.retrieval_top_k,
            )
        return self._chat_service

    @property
    def auth_gate(self) -> AdminAuthGate:
        if self._auth_gate is None:
            self._auth_gate = AdminAuthGate(self.settings.security.admin_password)
        return self._auth_gate

    def clear(self) -> None:
        """Drop all cached instances."""
        self.__init__(self._settings)


def get_service_container(request: Request) -> ServiceContainer:
    """Get the service container built by the application lifespan."""
    return request.app.state.services


def get_settings_dependency() -> Settings:
    return get_settings()


def get_document_service(
    container: ServiceContainer = Depends(get_service_container),
) -> DocumentService:
    return container.document_service


def get_chat_service(
    container: ServiceContainer = Depends(get_service_container),
) -> ChatService:
    return container.chat_service


def get_auth_gate(
    container: ServiceContainer = Depends(get_service_container),
) -> AdminAuthGate:
    return container.auth_gate


def get_vector_store_dependency(
    container: ServiceContainer = Depends(get_service_container),
) -> VectorStore:
    return container.vector_store
