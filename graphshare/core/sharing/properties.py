"""Drive item property lookup for file card rendering."""
from .models import DriveItemProperties
from ..api.async_client import GraphApiClient
from ..exceptions import ValidationError
from ..upload.models import UploadTarget, missing_fields


class DriveItemPropertyFetcher:
    """Fetches eTag, WebDAV URL and name of a drive item."""

    SELECT = 'eTag,webDavUrl,name'

    def __init__(self, api: GraphApiClient):
        self._api = api

    async def get_properties(self, target: UploadTarget, item_id: str) -> DriveItemProperties:
        """
        Fetch card properties of an uploaded item.

        Args:
            target: Drive holding the item (usually a SharePoint site)
            item_id: Drive item ID returned by the upload

        Returns:
            DriveItemProperties

        Raises:
            HttpError: If the lookup fails
            ValidationError: If eTag, webDavUrl or name is missing
        """
        phase = 'Get driveItem properties'
        url = f"{self._api.item_url(target, item_id)}?$select={self.SELECT}"
        data = await self._api.request_json('GET', url, phase)

        missing = missing_fields(data, ('eTag', 'webDavUrl', 'name'))
        if missing:
            raise ValidationError(phase, missing)

        return DriveItemProperties(
            etag=data['eTag'],
            webdav_url=data['webDavUrl'],
            name=data['name']
        )

    async def get_site_item_properties(self, site_id: str, item_id: str) -> DriveItemProperties:
        """Fetch properties of an item in a SharePoint site drive."""
        return await self.get_properties(UploadTarget.site(site_id), item_id)
