"""
Chunking strategies for resumable uploads.

Implements Strategy Pattern for chunk boundary calculation.
"""
from abc import ABC, abstractmethod
from typing import List

from ..models import ChunkInfo
from ...api.config import CHUNK_ALIGNMENT, RESUMABLE_CHUNK_SIZE


class BaseChunkingStrategy(ABC):
    """Abstract base class for chunking strategies."""

    @abstractmethod
    def next_chunk(self, index: int, offset: int, total: int) -> ChunkInfo:
        """Return the chunk starting at offset."""
        pass

    def calculate_chunks(self, file_size: int) -> List[ChunkInfo]:
        """
        Calculate every chunk for a payload.

        Args:
            file_size: Total payload size in bytes

        Returns:
            Contiguous chunks covering [0, file_size)
        """
        chunks = []
        offset = 0
        while offset < file_size:
            chunk = self.next_chunk(len(chunks), offset, file_size)
            chunks.append(chunk)
            offset = chunk.end
        return chunks


class AlignedChunkingStrategy(BaseChunkingStrategy):
    """
    Fixed-size chunking aligned to Graph's 320 KiB framing rule.

    Every chunk except the last is exactly chunk_size bytes.
    """

    DEFAULT_CHUNK_SIZE = RESUMABLE_CHUNK_SIZE

    def __init__(self, chunk_size: int = DEFAULT_CHUNK_SIZE):
        """
        Initialize with chunk size.

        Args:
            chunk_size: Size of each chunk in bytes (multiple of 320 KiB)
        """
        if chunk_size <= 0:
            raise ValueError("Chunk size must be positive")
        if chunk_size % CHUNK_ALIGNMENT:
            raise ValueError(
                f"Chunk size must be a multiple of {CHUNK_ALIGNMENT} bytes, got {chunk_size}"
            )
        self.chunk_size = chunk_size

    def next_chunk(self, index: int, offset: int, total: int) -> ChunkInfo:
        if not 0 <= offset < total:
            raise ValueError(f"Offset {offset} outside payload of {total} bytes")
        end = min(offset + self.chunk_size, total)
        return ChunkInfo(index=index, start=offset, end=end, total=total)
