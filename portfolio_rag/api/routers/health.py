"""
Health check API endpoints.

Routes: GET /health, GET /health/vector-store

Dependencies: portfolio_rag.boundary.vdb
System role: Health check HTTP API
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from starlette.concurrency import run_in_threadpool

from portfolio_rag.api.deps import get_vector_store_dependency
from portfolio_rag.boundary.vdb.vector_schemas import IndexStats, VectorStore


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    message: str


class VectorStoreHealthResponse(HealthResponse):
    stats: IndexStats


router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Basic health check."""
    return HealthResponse(status="healthy", message="Server Healthy")


@router.get("/vector-store", response_model=VectorStoreHealthResponse)
async def health_check_vector_store(
    vector_store: VectorStore = Depends(get_vector_store_dependency),
) -> VectorStoreHealthResponse:
    """Vector store health check with record counts."""
    stats = await run_in_threadpool(vector_store.stats)
    return VectorStoreHealthResponse(status="healthy", message="Vector store accessible", stats=stats)
