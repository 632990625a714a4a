"""
Fixtures for HTTP API tests.

Builds the application without its lifespan and swaps every service
dependency for an in-memory or scripted instance.
"""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from portfolio_rag.api.deps import (
    get_auth_gate,
    get_chat_service,
    get_document_service,
    get_vector_store_dependency,
)
from portfolio_rag.api.main import create_app
from portfolio_rag.configs.security import SecuritySettings
from portfolio_rag.configs.settings import Settings
from portfolio_rag.core.auth_gate import AdminAuthGate

ALLOWED_ORIGIN = "https://portfolio.example.com"


@pytest.fixture
def app(document_service, chat_service, memory_store) -> FastAPI:
    """Create application with in-memory services."""
    settings = Settings(security=SecuritySettings(admin_password="s3cret", allowed_origins=[ALLOWED_ORIGIN]))
    app = create_app(settings=settings, use_lifespan=False)
    app.dependency_overrides[get_document_service] = lambda: document_service
    app.dependency_overrides[get_chat_service] = lambda: chat_service
    app.dependency_overrides[get_vector_store_dependency] = lambda: memory_store
    app.dependency_overrides[get_auth_gate] = lambda: AdminAuthGate("s3cret")
    return app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Provide TestClient for the FastAPI app."""
    return TestClient(app)
