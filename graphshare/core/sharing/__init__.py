"""Sharing module: links, chat members and item properties."""
from .models import (
    SharingScope,
    SharingLink,
    ChatMember,
    DriveItemProperties,
    MemberResolution
)
from .link_service import SharingLinkService
from .members import ChatMemberResolver
from .properties import DriveItemPropertyFetcher

__all__ = [
    'SharingScope',
    'SharingLink',
    'ChatMember',
    'DriveItemProperties',
    'MemberResolution',
    'SharingLinkService',
    'ChatMemberResolver',
    'DriveItemPropertyFetcher',
]
