"""
Boundary layer.

Adapters for external services: embeddings provider and vector store.
"""
