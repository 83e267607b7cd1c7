"""Upload strategies module."""
from .chunking import BaseChunkingStrategy, AlignedChunkingStrategy
from .selector import select_upload_strategy

__all__ = [
    'BaseChunkingStrategy',
    'AlignedChunkingStrategy',
    'select_upload_strategy',
]
