"""
Simple upload service.

Sends small payloads in a single PUT to the drive content endpoint.
"""
from typing import Optional

from ..models import UploadTarget, UploadResult
from ...api.async_client import GraphApiClient
from ...logging import get_logger

DEFAULT_CONTENT_TYPE = 'application/octet-stream'


class SimpleUploader:
    """One-shot uploader for payloads up to the simple upload limit."""

    def __init__(self, api: GraphApiClient):
        self._api = api
        self._logger = get_logger('graphshare.upload.simple')

    async def upload(
        self,
        target: UploadTarget,
        filename: str,
        data: bytes,
        content_type: Optional[str] = None
    ) -> UploadResult:
        """
        Upload a payload with one request.

        Args:
            target: Drive receiving the file
            filename: Stored file name
            data: Payload bytes
            content_type: MIME type (application/octet-stream if not provided)

        Returns:
            UploadResult for the stored item

        Raises:
            HttpError: If the server rejects the upload
            ValidationError: If the response lacks id, webUrl or name
        """
        phase = f"{target.label} upload"
        url = self._api.upload_path_url(target, filename, 'content')
        self._logger.debug(f"Simple upload of {filename} ({len(data)} bytes)")

        response = await self._api.request_json(
            'PUT',
            url,
            phase,
            data=data,
            headers={'Content-Type': content_type or DEFAULT_CONTENT_TYPE}
        )
        return UploadResult.from_response(response, phase)
