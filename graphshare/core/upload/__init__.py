"""
Upload module for Graph drive uploads.

Small payloads use a single PUT, larger ones a resumable upload session
with 320 KiB-aligned chunks.
"""
from .coordinator import UploadCoordinator
from .models import (
    UploadStrategy,
    UploadTarget,
    UploadSession,
    ChunkInfo,
    UploadResult,
    UploadProgress,
    ShareResult
)
from .services import (
    SimpleUploader,
    ResumableSessionUploader,
    SessionState,
    ChunkUploader,
    FileValidator,
    AsyncFileReader
)
from .strategies import AlignedChunkingStrategy, select_upload_strategy

__all__ = [
    # Main classes
    'UploadCoordinator',
    'SimpleUploader',
    'ResumableSessionUploader',
    'SessionState',
    'ChunkUploader',
    'FileValidator',
    'AsyncFileReader',

    # Strategies
    'AlignedChunkingStrategy',
    'select_upload_strategy',

    # Models
    'UploadStrategy',
    'UploadTarget',
    'UploadSession',
    'ChunkInfo',
    'UploadResult',
    'UploadProgress',
    'ShareResult',
]
