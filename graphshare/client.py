"""
High-level graphshare client.

Bundles the API client and the transfer facade behind one async context
manager.
"""
from pathlib import Path
from typing import Callable, List, Optional, Union

from .core.api import GraphApiClient, GraphConfig, HttpTransport, StaticTokenProvider, TokenProvider
from .core.facade import TransferFacade
from .core.sharing import ChatMember, ChatMemberResolver, DriveItemProperties, SharingScope
from .core.upload import ShareResult, UploadProgress


class GraphShareClient:
    """
    Upload-and-share client.

    Example:
        >>> async with GraphShareClient(token="eyJ...") as client:
        ...     result = await client.upload_file("report.pdf", site_id=site_id)
        ...     print(result.share_url)
    """

    def __init__(
        self,
        token_provider: Optional[TokenProvider] = None,
        *,
        token: Optional[str] = None,
        config: Optional[GraphConfig] = None,
        transport: Optional[HttpTransport] = None,
        progress_callback: Optional[Callable[[UploadProgress], None]] = None
    ):
        """
        Initialize client.

        Args:
            token_provider: Source of bearer tokens
            token: Fixed token (shortcut for StaticTokenProvider)
            config: Graph configuration
            transport: HTTP transport (aiohttp-backed if not provided)
            progress_callback: Optional callback for upload progress
        """
        if token_provider is None:
            if not token:
                raise ValueError("Either token_provider or token is required")
            token_provider = StaticTokenProvider(token)

        self._api = GraphApiClient(token_provider, config, transport)
        self._facade = TransferFacade(self._api, progress_callback=progress_callback)

    @property
    def api(self) -> GraphApiClient:
        return self._api

    @property
    def facade(self) -> TransferFacade:
        return self._facade

    async def __aenter__(self) -> 'GraphShareClient':
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self):
        await self._api.close()

    async def upload(
        self,
        data: bytes,
        filename: str,
        site_id: Optional[str] = None,
        content_type: Optional[str] = None,
        chat_id: Optional[str] = None,
        per_user_sharing: bool = False,
        scope: Union[SharingScope, str] = SharingScope.ORGANIZATION
    ) -> ShareResult:
        """
        Upload bytes and share them.

        With site_id the SharePoint variant is used (scope is then decided by
        chat membership), otherwise the personal OneDrive variant with scope.
        """
        if site_id:
            return await self._facade.upload_and_share_site(
                data, filename, site_id,
                content_type=content_type,
                chat_id=chat_id,
                per_user_sharing=per_user_sharing
            )
        return await self._facade.upload_and_share_personal(
            data, filename, content_type=content_type, scope=scope
        )

    async def upload_file(
        self,
        file_path: Union[str, Path],
        site_id: Optional[str] = None,
        name: Optional[str] = None,
        chat_id: Optional[str] = None,
        per_user_sharing: bool = False,
        scope: Union[SharingScope, str] = SharingScope.ORGANIZATION
    ) -> ShareResult:
        """Upload a local file and share it (see upload())."""
        if site_id:
            return await self._facade.upload_file_and_share_site(
                file_path, site_id,
                name=name,
                chat_id=chat_id,
                per_user_sharing=per_user_sharing
            )
        return await self._facade.upload_file_and_share_personal(file_path, name=name, scope=scope)

    async def get_chat_members(self, chat_id: str) -> List[ChatMember]:
        """List resolvable members of a chat."""
        return await ChatMemberResolver(self._api).get_members(chat_id)

    async def get_item_properties(self, site_id: str, item_id: str) -> DriveItemProperties:
        """Fetch file card properties of a SharePoint item."""
        return await self._facade.get_item_properties(site_id, item_id)
