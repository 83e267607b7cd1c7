"""Data models for sharing links and chat membership."""
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class SharingScope(str, Enum):
    """
    Visibility of a sharing link.

    USERS is the per-recipient scope; "users" is the value the link API
    expects on the wire.
    """
    ORGANIZATION = 'organization'
    ANONYMOUS = 'anonymous'
    USERS = 'users'


@dataclass(frozen=True)
class SharingLink:
    """
    View link for a drive item.

    Attributes:
        web_url: Link URL
        scope: Scope the link was created with
    """
    web_url: str
    scope: SharingScope


@dataclass(frozen=True)
class ChatMember:
    """
    Directory identity of a chat participant.

    Attributes:
        aad_object_id: Directory object ID (used as sharing recipient)
        display_name: Display name if the API returned one
    """
    aad_object_id: str
    display_name: Optional[str] = None


@dataclass(frozen=True)
class DriveItemProperties:
    """
    Item properties needed for native Teams file cards.

    The eTag serves as attachment ID and the WebDAV URL as content URL.
    """
    etag: str
    webdav_url: str
    name: str


@dataclass(frozen=True)
class MemberResolution:
    """
    Outcome of an attempt to resolve sharing recipients for a chat.

    Either members were found, none were, or the lookup failed (error set).
    """
    members: Tuple[ChatMember, ...] = ()
    error: Optional[Exception] = None

    @property
    def has_recipients(self) -> bool:
        return self.error is None and len(self.members) > 0

    @property
    def recipient_ids(self) -> Tuple[str, ...]:
        return tuple(member.aad_object_id for member in self.members)
