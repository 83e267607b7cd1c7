"""
Transfer facade.

Provides the upload-and-share entry points.
Follows Facade Pattern - hides upload mode selection, sessions and link scopes.
"""
from pathlib import Path
from typing import Callable, Optional, Union

from .api.async_client import GraphApiClient
from .logging import get_logger
from .sharing import (
    SharingScope,
    SharingLinkService,
    ChatMemberResolver,
    DriveItemPropertyFetcher,
    DriveItemProperties,
    MemberResolution
)
from .upload import (
    UploadCoordinator,
    UploadTarget,
    UploadProgress,
    ShareResult,
    FileValidator,
    AsyncFileReader
)
from .upload.strategies import BaseChunkingStrategy


class TransferFacade:
    """
    Upload a payload and return a shareable link.

    Example:
        >>> async with GraphApiClient(StaticTokenProvider(token)) as api:
        ...     facade = TransferFacade(api)
        ...     result = await facade.upload_and_share_site(
        ...         data, "report.pdf", site_id, chat_id=chat_id, per_user_sharing=True
        ...     )
        ...     print(result.share_url)
    """

    def __init__(
        self,
        api: GraphApiClient,
        chunking_strategy: Optional[BaseChunkingStrategy] = None,
        progress_callback: Optional[Callable[[UploadProgress], None]] = None
    ):
        """
        Initialize transfer facade.

        Args:
            api: Graph API client
            chunking_strategy: Optional custom chunking for resumable uploads
            progress_callback: Optional callback for upload progress
        """
        self._api = api
        self._logger = get_logger('graphshare.transfer')
        self._coordinator = UploadCoordinator(
            api,
            chunking_strategy=chunking_strategy,
            progress_callback=progress_callback
        )
        self._links = SharingLinkService(api)
        self._members = ChatMemberResolver(api)
        self._properties = DriveItemPropertyFetcher(api)
        self._validator = FileValidator()
        self._reader = AsyncFileReader()

    async def upload_and_share_personal(
        self,
        data: bytes,
        filename: str,
        content_type: Optional[str] = None,
        scope: Union[SharingScope, str] = SharingScope.ORGANIZATION
    ) -> ShareResult:
        """
        Upload to the user's OneDrive and create a sharing link.

        Args:
            data: Payload bytes
            filename: Stored file name
            content_type: MIME type
            scope: ORGANIZATION (default) or ANONYMOUS

        Returns:
            ShareResult
        """
        scope = SharingScope(scope)
        if scope is SharingScope.USERS:
            raise ValueError("Per-user sharing is only available for SharePoint uploads")

        target = UploadTarget.personal()
        uploaded = await self._coordinator.upload(target, filename, data, content_type)
        link = await self._links.create_link(target, uploaded.id, scope)

        return ShareResult(
            item_id=uploaded.id,
            web_url=uploaded.web_url,
            share_url=link.web_url,
            name=uploaded.name
        )

    async def upload_and_share_site(
        self,
        data: bytes,
        filename: str,
        site_id: str,
        content_type: Optional[str] = None,
        chat_id: Optional[str] = None,
        per_user_sharing: bool = False
    ) -> ShareResult:
        """
        Upload to a SharePoint site and create a sharing link.

        Group chats get a link scoped to the chat members when per-user
        sharing is requested; channels get an organization-wide link. If the
        members cannot be resolved or there are none, the link falls back to
        organization scope without raising.

        Args:
            data: Payload bytes
            filename: Stored file name
            site_id: SharePoint site ID
            content_type: MIME type
            chat_id: Chat whose members become recipients
            per_user_sharing: Request a per-user link (needs Chat.Read.All)

        Returns:
            ShareResult
        """
        target = UploadTarget.site(site_id)
        uploaded = await self._coordinator.upload(target, filename, data, content_type)

        scope = SharingScope.ORGANIZATION
        recipients = None
        if per_user_sharing and chat_id:
            resolution = await self._members.resolve(chat_id)
            if resolution.has_recipients:
                scope = SharingScope.USERS
                recipients = list(resolution.recipient_ids)
            else:
                self._log_scope_downgrade(chat_id, resolution)

        link = await self._links.create_link(target, uploaded.id, scope, recipients)

        return ShareResult(
            item_id=uploaded.id,
            web_url=uploaded.web_url,
            share_url=link.web_url,
            name=uploaded.name
        )

    async def upload_file_and_share_personal(
        self,
        file_path: Union[str, Path],
        name: Optional[str] = None,
        scope: Union[SharingScope, str] = SharingScope.ORGANIZATION
    ) -> ShareResult:
        """Read a local file and run upload_and_share_personal()."""
        path, data = await self._read(file_path)
        return await self.upload_and_share_personal(
            data,
            name or path.name,
            content_type=FileValidator.guess_content_type(path),
            scope=scope
        )

    async def upload_file_and_share_site(
        self,
        file_path: Union[str, Path],
        site_id: str,
        name: Optional[str] = None,
        chat_id: Optional[str] = None,
        per_user_sharing: bool = False
    ) -> ShareResult:
        """Read a local file and run upload_and_share_site()."""
        path, data = await self._read(file_path)
        return await self.upload_and_share_site(
            data,
            name or path.name,
            site_id,
            content_type=FileValidator.guess_content_type(path),
            chat_id=chat_id,
            per_user_sharing=per_user_sharing
        )

    async def get_item_properties(self, site_id: str, item_id: str) -> DriveItemProperties:
        """Fetch the file card properties of an uploaded SharePoint item."""
        return await self._properties.get_site_item_properties(site_id, item_id)

    async def _read(self, file_path: Union[str, Path]):
        path, size = self._validator.validate(file_path)
        self._logger.debug(f"Reading {path} ({size} bytes)")
        return path, await self._reader.read_file(path)

    def _log_scope_downgrade(self, chat_id: str, resolution: MemberResolution) -> None:
        if resolution.error is not None:
            self._logger.warning(
                f"Could not resolve members of chat {chat_id}, using organization scope: {resolution.error}"
            )
        else:
            self._logger.info(f"Chat {chat_id} has no resolvable members, using organization scope")
