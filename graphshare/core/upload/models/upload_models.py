"""
Upload data models.

Drive targets, session and chunk framing, progress and the drive item
returned on completion.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Any, Optional, Iterable, List

from ...exceptions import ValidationError


def missing_fields(data: Optional[Dict[str, Any]], names: Iterable[str]) -> List[str]:
    """Return the names whose values are absent or empty in data."""
    data = data if isinstance(data, dict) else {}
    return [name for name in names if not data.get(name)]


class UploadStrategy(str, Enum):
    """Transfer mode chosen for a payload."""
    SIMPLE = 'simple'
    RESUMABLE = 'resumable'


@dataclass(frozen=True)
class UploadTarget:
    """
    Drive root addressed by an upload.

    Attributes:
        site_id: SharePoint site ID, or None for the caller's personal drive

    Example:
        >>> UploadTarget.site("contoso.sharepoint.com,guid1,guid2").drive_path
        '/sites/contoso.sharepoint.com,guid1,guid2/drive'
    """
    site_id: Optional[str] = None

    def __post_init__(self):
        if self.site_id is not None and not self.site_id:
            raise ValueError("Site ID must not be empty")

    @classmethod
    def personal(cls) -> 'UploadTarget':
        """Target the signed-in user's OneDrive."""
        return cls()

    @classmethod
    def site(cls, site_id: str) -> 'UploadTarget':
        """Target the default drive of a SharePoint site."""
        return cls(site_id=site_id)

    @property
    def is_personal(self) -> bool:
        return self.site_id is None

    @property
    def drive_path(self) -> str:
        """Drive path relative to the API root."""
        if self.site_id is None:
            return '/me/drive'
        return f'/sites/{self.site_id}/drive'

    @property
    def label(self) -> str:
        """Human readable store name used in log and error messages."""
        return 'OneDrive' if self.site_id is None else 'SharePoint'


@dataclass(frozen=True)
class UploadSession:
    """
    Resumable upload session.

    Attributes:
        upload_url: Pre-authorized URL that accepts byte ranges
        total_size: Declared payload size in bytes
    """
    upload_url: str
    total_size: int


@dataclass(frozen=True)
class ChunkInfo:
    """
    Byte range of one chunk within a payload.

    Attributes:
        index: Chunk index
        start: Start position in bytes (inclusive)
        end: End position in bytes (exclusive)
        total: Total payload size
    """
    index: int
    start: int
    end: int
    total: int

    @property
    def size(self) -> int:
        """Returns chunk size."""
        return self.end - self.start

    @property
    def content_range(self) -> str:
        """Content-Range header value (inclusive end)."""
        return f"bytes {self.start}-{self.end - 1}/{self.total}"


@dataclass(frozen=True)
class UploadResult:
    """
    Identity of a stored drive item.

    Attributes:
        id: Drive item ID
        web_url: Browsable URL of the item
        name: Stored file name
    """
    id: str
    web_url: str
    name: str

    @classmethod
    def from_response(cls, data: Any, phase: str) -> 'UploadResult':
        """
        Build from a drive item response.

        Accepts 'url' when 'webUrl' is absent, as some session completion
        responses use it.

        Args:
            data: Parsed JSON response
            phase: Operation phase for error reporting

        Returns:
            UploadResult

        Raises:
            ValidationError: If id, webUrl or name is missing
        """
        data = dict(data) if isinstance(data, dict) else {}
        if not data.get('webUrl') and data.get('url'):
            data['webUrl'] = data['url']

        missing = missing_fields(data, ('id', 'webUrl', 'name'))
        if missing:
            raise ValidationError(phase, missing)

        return cls(id=data['id'], web_url=data['webUrl'], name=data['name'])


@dataclass
class UploadProgress:
    """
    Byte progress of a transfer.

    The offset only moves forward and never passes total_bytes.

    Attributes:
        total_bytes: Total payload size
        offset: Bytes confirmed by the server so far
        chunks_sent: Number of chunks the server accepted
    """
    total_bytes: int
    offset: int = 0
    chunks_sent: int = 0

    def advance(self, end: int) -> None:
        """
        Move the offset to end after a server-confirmed chunk.

        Raises:
            ValueError: If end is behind the current offset or past total
        """
        if end < self.offset or end > self.total_bytes:
            raise ValueError(
                f"Invalid progress offset {end} (current {self.offset}, total {self.total_bytes})"
            )
        self.offset = end
        self.chunks_sent += 1

    @property
    def percentage(self) -> float:
        """Returns upload progress as percentage."""
        if self.total_bytes == 0:
            return 100.0 if self.chunks_sent else 0.0
        return (self.offset / self.total_bytes) * 100

    @property
    def is_complete(self) -> bool:
        """Returns True once every byte is confirmed."""
        return self.offset >= self.total_bytes and self.chunks_sent > 0


@dataclass(frozen=True)
class ShareResult:
    """
    Combined result of upload-and-share.

    Attributes:
        item_id: Drive item ID
        web_url: Browsable URL of the item
        share_url: Sharing link URL
        name: Stored file name
    """
    item_id: str
    web_url: str
    share_url: str
    name: str
