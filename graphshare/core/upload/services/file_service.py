"""
Local file services for the file-path upload helpers.

The uploaders themselves only see bytes; these classes turn a path into a
name, a content type and a payload.
"""
from pathlib import Path
from typing import Tuple, Union
import mimetypes

import aiofiles

from ...logging import get_logger

FALLBACK_CONTENT_TYPE = 'application/octet-stream'


class FileValidator:
    """Checks that a path names a readable regular file."""

    def validate(self, file_path: Union[str, Path]) -> Tuple[Path, int]:
        """
        Resolve a path and return it with its size.

        Raises:
            FileNotFoundError: If nothing exists at the path
            ValueError: If the path is a directory or other non-regular file
        """
        path = Path(file_path)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")
        if not path.is_file():
            raise ValueError(f"Not a regular file: {path}")
        return path, path.stat().st_size

    @staticmethod
    def guess_content_type(path: Path) -> str:
        """MIME type from the file extension, octet-stream when unknown."""
        content_type, _ = mimetypes.guess_type(path.name)
        return content_type or FALLBACK_CONTENT_TYPE


class AsyncFileReader:
    """Reads whole files without blocking the event loop (aiofiles)."""

    def __init__(self):
        self._logger = get_logger('graphshare.upload.file')

    async def read_file(self, file_path: Path) -> bytes:
        """
        Read a file into memory.

        Raises:
            OSError: If the file cannot be opened or read
        """
        async with aiofiles.open(file_path, 'rb') as handle:
            payload = await handle.read()
        self._logger.debug(f"Read {len(payload)} bytes from {file_path}")
        return payload
