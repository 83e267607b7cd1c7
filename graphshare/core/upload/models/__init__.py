"""Upload models."""
from .upload_models import (
    UploadStrategy,
    UploadTarget,
    UploadSession,
    ChunkInfo,
    UploadResult,
    UploadProgress,
    ShareResult,
    missing_fields
)

__all__ = [
    'UploadStrategy',
    'UploadTarget',
    'UploadSession',
    'ChunkInfo',
    'UploadResult',
    'UploadProgress',
    'ShareResult',
    'missing_fields'
]
