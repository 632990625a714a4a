"""
Document API endpoints.

Routes:
- POST /documents - Upload and index a text or markdown file
- GET /documents - List indexed documents
- DELETE /documents?source=&fileName= - Delete one document
- DELETE /documents?deleteAll=true - Delete every document

Dependencies: portfolio_rag.application.services, portfolio_rag.models
System role: Document HTTP API
"""

import logging

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from starlette.concurrency import run_in_threadpool

from portfolio_rag.api.deps import get_document_service
from portfolio_rag.application.services.document_service import DocumentService
from portfolio_rag.core.exceptions import ValidationError
from portfolio_rag.models.document import (
    DeleteAllResponse,
    DeleteResponse,
    DocumentListResponse,
    UploadResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/documents", tags=["documents"])


@router.post("", response_model=UploadResponse)
async def upload_document(
    file: UploadFile | None = File(None),
    source: str | None = Form(None),
    document_service: DocumentService = Depends(get_document_service),
) -> UploadResponse:
    """
    Upload a .txt or .md file and index its chunks.

    Args:
        file: Multipart file field
        source: Optional source label
        document_service: Injected DocumentService

    Returns:
        UploadResponse: Chunk count, file name and source

    Raises:
        ValidationError(400): Missing, unsupported, oversize or empty file
        UpstreamError(500): Embedding or vector store failure
    """
    if file is None:
        raise ValidationError("No file provided", field="file")

    try:
        data = await file.read()
    finally:
        await file.close()

    result = await run_in_threadpool(
        document_service.upload,
        file.filename,
        file.content_type,
        data,
        source,
    )

    logger.info(
        f"Uploaded {result.file_name} ({result.chunks_processed} chunks)",
        extra={"source": result.source, "file_name": result.file_name},
    )
    return UploadResponse(
        **result.model_dump(),
        message=f"Successfully processed {result.file_name}",
    )


@router.get("", response_model=DocumentListResponse)
async def list_documents(
    document_service: DocumentService = Depends(get_document_service),
) -> DocumentListResponse:
    """List documents grouped from the indexed chunks."""
    documents = await run_in_threadpool(document_service.list_documents)
    return DocumentListResponse(documents=documents)


@router.delete("", response_model=DeleteResponse | DeleteAllResponse)
async def delete_documents(
    source: str | None = Query(None),
    file_name: str | None = Query(None, alias="fileName"),
    delete_all: bool = Query(False, alias="deleteAll"),
    document_service: DocumentService = Depends(get_document_service),
) -> DeleteResponse | DeleteAllResponse:
    """
    Delete one document, or everything when deleteAll=true.

    Raises:
        ValidationError(400): Missing source or fileName
        NotFoundError(404): No chunks match
    """
    if delete_all:
        await run_in_threadpool(document_service.delete_all)
        return DeleteAllResponse()

    deleted = await run_in_threadpool(document_service.delete_document, source, file_name)
    return DeleteResponse(
        message=f"Deleted {deleted} chunks from {file_name}",
        deleted_chunks=deleted,
    )
