"""Upload services module."""
from .file_service import FileValidator, AsyncFileReader
from .chunk_service import ChunkUploader
from .simple_service import SimpleUploader, DEFAULT_CONTENT_TYPE
from .session_service import ResumableSessionUploader, SessionState

__all__ = [
    'FileValidator',
    'AsyncFileReader',
    'ChunkUploader',
    'SimpleUploader',
    'DEFAULT_CONTENT_TYPE',
    'ResumableSessionUploader',
    'SessionState',
]
