"""
Fixed-window text chunker.

Splits document text into overlapping character windows.

Dependencies: portfolio_rag.models.chunk
System role: First stage of document ingestion
"""

from portfolio_rag.models.chunk import Chunk


class TextChunker:
    """Sliding-window chunker with constructor-configured size and overlap."""

    def __init__(self, chunk_size: int = 1000, overlap: int = 200) -> None:
        """
        Initialize chunker.

        Args:
            chunk_size: Maximum chunk length in characters
            overlap: Characters shared by consecutive chunks

        Raises:
            ValueError: When overlap is negative or not smaller than chunk_size
        """
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        if overlap < 0 or overlap >= chunk_size:
            raise ValueError("overlap must satisfy 0 <= overlap < chunk_size")

        self.chunk_size = chunk_size
        self.overlap = overlap

    @property
    def step(self) -> int:
        """Distance between the starts of consecutive chunks."""
        return self.chunk_size - self.overlap

    def chunk(self, text: str, source_doc_id: str = "") -> list[Chunk]:
        """
        Split text into windows.

        Windows start every `step` characters and are clamped to the end of
        the text, so only the final window may be shorter than chunk_size.

        Args:
            text: Document text
            source_doc_id: Identifier stored on every chunk

        Returns:
            list[Chunk]: Chunks in document order, empty for empty text
        """
        chunks: list[Chunk] = []
        length = len(text)
        start = 0

        while start < length:
            end = min(start + self.chunk_size, length)
            chunks.append(
                Chunk(
                    text=text[start:end],
                    index=len(chunks),
                    source_doc_id=source_doc_id,
                    start=start,
                    end=end,
                )
            )
            start += self.step

        return chunks
