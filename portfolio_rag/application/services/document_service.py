"""
Document service orchestrator.

Coordinates upload, listing and deletion of knowledge base documents.
A document is the set of vector records sharing (source, fileName); there
is no separate registry, so listing groups the records returned by a
zero-vector query.

Dependencies: portfolio_rag.boundary.vdb, portfolio_rag.boundary.embeddings, portfolio_rag.core
System role: Document management orchestration
"""

import logging
from datetime import datetime, timezone
from pathlib import PurePath

from portfolio_rag.boundary.embeddings import EmbeddingClient
from portfolio_rag.boundary.vdb.vector_schemas import (
    IndexStats,
    VectorMatch,
    VectorMetadata,
    VectorRecord,
    VectorStore,
)
from portfolio_rag.core.chunker import TextChunker
from portfolio_rag.core.classifier import classify
from portfolio_rag.core.exceptions import (
    EmptyContentError,
    NotFoundError,
    UnsupportedFileTypeError,
    ValidationError,
)
from portfolio_rag.models.document import DocumentSummary, UploadResult

logger = logging.getLogger(__name__)

DEFAULT_SOURCE = "uploaded-document"

SUPPORTED_EXTENSIONS = {
    ".txt": "text/plain",
    ".md": "text/markdown",
    ".markdown": "text/markdown",
}
SUPPORTED_CONTENT_TYPES = {"text/plain", "text/markdown", "text/x-markdown"}


def chunk_id(source: str, file_name: str, index: int) -> str:
    """Deterministic record id, so re-uploading a file overwrites its chunks."""
    return f"{source}-{file_name}-chunk-{index}"


class DocumentService:
    """
    Document service orchestrator.

    Handles the document lifecycle: validate, chunk, classify, embed,
    upsert, list and delete.
    """

    def __init__(
        self,
        vector_store: VectorStore,
        embedding_client: EmbeddingClient,
        chunker: TextChunker | None = None,
        dimension: int = 1024,
        list_top_k: int = 1000,
        delete_top_k: int = 10000,
        max_upload_bytes: int = 5 * 1024 * 1024,
    ) -> None:
        """
        Initialize document service.

        Args:
            vector_store: Vector store backend
            embedding_client: Embedding client for chunk vectors
            chunker: Text chunker (defaults to 1000/200 windows)
            dimension: Embedding dimension, used for zero-vector queries
            list_top_k: Maximum records fetched when listing documents
            delete_top_k: Records fetched per filtered query when deleting,
                and the most chunks a single upload may produce
            max_upload_bytes: Upload size limit
        """
        self.vector_store = vector_store
        self.embedding_client = embedding_client
        self.chunker = chunker or TextChunker()
        self.dimension = dimension
        self.list_top_k = list_top_k
        self.delete_top_k = delete_top_k
        self.max_upload_bytes = max_upload_bytes

    def upload(
        self,
        file_name: str | None,
        content_type: str | None,
        data: bytes,
        source: str | None = None,
    ) -> UploadResult:
        """
        Index an uploaded text document.

        Steps:
        1. Validate file type, size and encoding
        2. Chunk and classify the text
        3. Embed all chunks in one batch call
        4. Upsert records with deterministic ids
        5. Remove chunks left over from a longer previous upload

        Args:
            file_name: Original file name
            content_type: MIME type reported by the client
            data: Raw file bytes
            source: Source label (defaults to "uploaded-document")

        Returns:
            UploadResult: Number of chunks indexed

        Raises:
            ValidationError: Missing name, oversize or non-UTF-8 file
            UnsupportedFileTypeError: File is not .txt or .md
            EmptyContentError: File has no text
            EmbeddingError: Embedding provider failed
            VectorStoreError: Upsert failed
        """
        if not file_name or not file_name.strip():
            raise ValidationError("No file uploaded", field="file")
        file_name = PurePath(file_name.strip()).name
        source = (source or "").strip() or DEFAULT_SOURCE

        file_type = self._resolve_file_type(file_name, content_type)

        if len(data) > self.max_upload_bytes:
            raise ValidationError(
                f"File too large. Maximum size is {self.max_upload_bytes // (1024 * 1024)}MB",
                field="file",
                details={"size": len(data), "limit": self.max_upload_bytes},
            )

        try:
            text = data.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise ValidationError(
                "File is not valid UTF-8 text",
                field="file",
                details={"file_name": file_name, "position": e.start},
            ) from e

        if not text.strip():
            raise EmptyContentError(file_name)

        doc_id = f"{source}-{file_name}"
        chunks = self.chunker.chunk(text, source_doc_id=doc_id)
        # A document must fit in one filtered query so it can be pruned and deleted
        if len(chunks) > self.delete_top_k:
            raise ValidationError(
                f"Document too large: {len(chunks)} chunks exceeds the limit of {self.delete_top_k}",
                field="file",
                details={"chunk_count": len(chunks), "limit": self.delete_top_k},
            )
        logger.info(
            f"Indexing {file_name}: {len(chunks)} chunks",
            extra={"source": source, "file_name": file_name, "chunk_count": len(chunks)},
        )

        embeddings = self.embedding_client.embed_batch([chunk.text for chunk in chunks])
        uploaded_at = datetime.now(timezone.utc).isoformat()

        records: list[VectorRecord] = []
        for chunk, embedding in zip(chunks, embeddings):
            classification = classify(file_name, chunk.text)
            metadata = VectorMetadata(
                content=chunk.text,
                source=source,
                file_name=file_name,
                file_type=file_type,
                chunk_index=chunk.index,
                uploaded_at=uploaded_at,
                content_type=classification.content_type.value,
                category=classification.category.value,
                importance=classification.importance.value,
                tags=classification.tags,
            )
            records.append(
                VectorRecord(
                    id=chunk_id(source, file_name, chunk.index),
                    embedding=embedding,
                    metadata=metadata,
                )
            )

        self.vector_store.upsert(records)
        self._prune_stale_chunks(source, file_name, len(records))

        return UploadResult(chunks_processed=len(records), file_name=file_name, source=source)

    @staticmethod
    def _resolve_file_type(file_name: str, content_type: str | None) -> str:
        suffix = PurePath(file_name).suffix.lower()
        declared = (content_type or "").split(";")[0].strip().lower()

        if suffix == ".pdf" or declared == "application/pdf":
            raise UnsupportedFileTypeError(file_name, "application/pdf")
        if suffix in SUPPORTED_EXTENSIONS:
            return SUPPORTED_EXTENSIONS[suffix]
        # Extensionless uploads are accepted when the client says they are text
        if not suffix and declared in SUPPORTED_CONTENT_TYPES:
            return declared
        raise UnsupportedFileTypeError(file_name, declared or None)

    def _prune_stale_chunks(self, source: str, file_name: str, chunk_count: int) -> None:
        removed = self._delete_matching(source, file_name, min_chunk_index=chunk_count)
        if removed:
            logger.info(
                f"Removed {removed} stale chunks of {file_name}",
                extra={"source": source, "file_name": file_name},
            )

    def _zero_vector(self) -> list[float]:
        return [0.0] * self.dimension

    def _matching_records(self, source: str, file_name: str) -> list[VectorMatch]:
        return self.vector_store.query(
            self._zero_vector(),
            top_k=self.delete_top_k,
            filter={"source": source, "fileName": file_name},
        )

    def _delete_matching(self, source: str, file_name: str, min_chunk_index: int = 0) -> int:
        """
        Delete a document's chunks with index >= min_chunk_index.

        Queries again after each delete until a query returns nothing new,
        so documents larger than delete_top_k are still removed completely.

        Returns:
            int: Number of chunks deleted
        """
        deleted: set[str] = set()
        while True:
            ids = [
                m.id
                for m in self._matching_records(source, file_name)
                if m.metadata.chunk_index >= min_chunk_index and m.id not in deleted
            ]
            if not ids:
                return len(deleted)
            self.vector_store.delete_by_ids(ids)
            deleted.update(ids)

    def list_documents(self) -> list[DocumentSummary]:
        """
        List uploaded documents.

        Records beyond list_top_k are not seen, so very large indexes may
        be listed incompletely.

        Returns:
            list[DocumentSummary]: Documents sorted by source then file name
        """
        matches = self.vector_store.query(self._zero_vector(), top_k=self.list_top_k)

        grouped: dict[tuple[str, str], DocumentSummary] = {}
        for match in matches:
            meta = match.metadata
            key = (meta.source, meta.file_name)
            summary = grouped.get(key)
            if summary is None:
                summary = DocumentSummary(
                    source=meta.source,
                    file_name=meta.file_name,
                    file_type=meta.file_type,
                    uploaded_at=meta.uploaded_at or None,
                )
                grouped[key] = summary

            summary.chunk_count += 1
            summary.word_count += len(meta.content.split())
            if meta.uploaded_at and (summary.uploaded_at is None or meta.uploaded_at > summary.uploaded_at):
                summary.uploaded_at = meta.uploaded_at
            for tag in meta.tags:
                if tag not in summary.tags:
                    summary.tags.append(tag)
            if meta.content_type not in summary.content_types:
                summary.content_types.append(meta.content_type)
            if meta.category not in summary.categories:
                summary.categories.append(meta.category)

        return [grouped[key] for key in sorted(grouped)]

    def delete_document(self, source: str | None, file_name: str | None) -> int:
        """
        Delete every chunk of one document.

        Args:
            source: Source label
            file_name: File name

        Returns:
            int: Number of chunks deleted

        Raises:
            ValidationError: Missing source or file name
            NotFoundError: No chunks match
        """
        if not source or not source.strip() or not file_name or not file_name.strip():
            raise ValidationError("Source and fileName parameters required")

        deleted = self._delete_matching(source.strip(), file_name.strip())
        if not deleted:
            raise NotFoundError(
                "Document not found",
                details={"source": source, "file_name": file_name},
            )

        logger.info(
            f"Deleted {deleted} chunks of {file_name}",
            extra={"source": source, "file_name": file_name},
        )
        return deleted

    def delete_all(self) -> None:
        """Delete every record in the index."""
        logger.warning("Deleting all documents from the knowledge base")
        self.vector_store.delete_all()

    def stats(self) -> IndexStats:
        return self.vector_store.stats()
