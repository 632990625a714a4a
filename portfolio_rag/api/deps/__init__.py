"""API-specific dependencies."""

from .dependencies import (
    ServiceContainer,
    get_auth_gate,
    get_chat_service,
    get_document_service,
    get_service_container,
    get_settings_dependency,
    get_vector_store_dependency,
)

__all__ = [
    "ServiceContainer",
    "get_auth_gate",
    "get_chat_service",
    "get_document_service",
    "get_service_container",
    "get_settings_dependency",
    "get_vector_store_dependency",
]
