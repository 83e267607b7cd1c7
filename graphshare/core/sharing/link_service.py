"""
Sharing link service.

Creates view links for uploaded drive items. Organization and anonymous
links use the v1.0 API; per-user links need the beta API with recipients.
"""
from typing import Dict, Any, Optional, Sequence, Union

from .models import SharingScope, SharingLink
from ..api.async_client import GraphApiClient
from ..exceptions import ValidationError
from ..logging import get_logger
from ..upload.models import UploadTarget


class SharingLinkService:
    """Creates sharing links under a requested scope."""

    def __init__(self, api: GraphApiClient):
        self._api = api
        self._logger = get_logger('graphshare.sharing')

    async def create_link(
        self,
        target: UploadTarget,
        item_id: str,
        scope: Union[SharingScope, str] = SharingScope.ORGANIZATION,
        recipients: Optional[Sequence[str]] = None
    ) -> SharingLink:
        """
        Create a view link for a drive item.

        Args:
            target: Drive holding the item
            item_id: Drive item ID
            scope: Link scope
            recipients: Directory object IDs, required for SharingScope.USERS

        Returns:
            SharingLink

        Raises:
            ValueError: If USERS scope is requested without recipients
            HttpError: If the server rejects the request
            ValidationError: If the response lacks link.webUrl
        """
        scope = SharingScope(scope)
        if scope is SharingScope.USERS and not recipients:
            raise ValueError("Per-user sharing requires at least one recipient")

        phase = f"Create {target.label} sharing link"
        url = self._api.item_url(
            target,
            item_id,
            'createLink',
            beta=scope is SharingScope.USERS
        )

        body: Dict[str, Any] = {'type': 'view', 'scope': scope.value}
        if scope is SharingScope.USERS:
            body['recipients'] = [{'objectId': object_id} for object_id in recipients]

        self._logger.info(f"Creating {scope.value} sharing link for item {item_id}")
        data = await self._api.request_json('POST', url, phase, json_body=body)

        link = data.get('link')
        web_url = link.get('webUrl') if isinstance(link, dict) else None
        if not web_url:
            raise ValidationError(phase, ['link.webUrl'])

        return SharingLink(web_url=web_url, scope=scope)
