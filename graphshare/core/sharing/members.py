"""
Chat member resolution.

Looks up the directory identities of chat participants so links can be
scoped to exactly those users.
"""
from typing import List

from .models import ChatMember, MemberResolution
from ..api.async_client import GraphApiClient
from ..logging import get_logger


class ChatMemberResolver:
    """Fetches chat members; needs the Chat.Read.All permission."""

    def __init__(self, api: GraphApiClient):
        self._api = api
        self._logger = get_logger('graphshare.sharing.members')

    async def get_members(self, chat_id: str) -> List[ChatMember]:
        """
        List chat members with a directory object ID.

        Entries without a userId are dropped.

        Args:
            chat_id: Teams chat ID

        Returns:
            Members (empty if none resolvable)

        Raises:
            HttpError: If the lookup fails (e.g. missing permission)
        """
        data = await self._api.request_json(
            'GET',
            self._api.url(f"/chats/{chat_id}/members"),
            'Get chat members'
        )

        entries = data.get('value') or []
        members = [
            ChatMember(aad_object_id=entry['userId'], display_name=entry.get('displayName'))
            for entry in entries
            if isinstance(entry, dict) and entry.get('userId')
        ]
        self._logger.debug(f"Chat {chat_id}: {len(members)} of {len(entries)} members resolvable")
        return members

    async def resolve(self, chat_id: str) -> MemberResolution:
        """
        Resolve sharing recipients, reporting failure as a value.

        Any failure (HTTP status, network, timeout, token provider) ends up
        in the resolution instead of being raised.

        Args:
            chat_id: Teams chat ID

        Returns:
            MemberResolution with members, or with the error that stopped the lookup
        """
        try:
            members = await self.get_members(chat_id)
        except Exception as e:
            self._logger.debug(f"Member lookup for chat {chat_id} failed: {e!r}")
            return MemberResolution(error=e)
        return MemberResolution(members=tuple(members))
