"""
Chunk upload service.

Handles submitting one byte range to a resumable upload session URL.
"""
import time
import asyncio

from ..models import ChunkInfo, UploadSession
from ...api.async_client import GraphApiClient
from ...api.transport import HttpResponse
from ...logging import get_logger


class ChunkUploader:
    """
    Sends byte ranges to an upload session.

    The session URL is pre-authorized, so no bearer token is attached.
    Status interpretation is left to the caller.
    """

    def __init__(self, api: GraphApiClient, session: UploadSession):
        """
        Initialize chunk uploader.

        Args:
            api: Graph API client (provides the transport)
            session: Upload session receiving the chunks
        """
        self._api = api
        self._session = session
        self._logger = get_logger('graphshare.upload.chunk')

    @property
    def upload_url(self) -> str:
        """Returns the session URL."""
        return self._session.upload_url

    async def upload_chunk(self, chunk: ChunkInfo, data: bytes) -> HttpResponse:
        """
        Submit a single chunk.

        Args:
            chunk: Byte range being sent
            data: Chunk bytes (len(data) == chunk.size)

        Returns:
            Buffered server response

        Raises:
            ValueError: If chunk is empty or does not match its range
            aiohttp.ClientError: If network error occurs
        """
        if not data:
            raise ValueError(f"Cannot upload empty chunk {chunk.index}")
        if len(data) != chunk.size:
            raise ValueError(
                f"Chunk {chunk.index} has {len(data)} bytes but range {chunk.content_range}"
            )

        chunk_size_kb = chunk.size / 1024
        headers = {
            'Content-Length': str(chunk.size),
            'Content-Range': chunk.content_range,
        }

        upload_start = time.time()
        self._logger.debug(f"Uploading chunk {chunk.index} ({chunk.content_range}, {chunk_size_kb:.1f} KB)")

        try:
            response = await self._api.request(
                'PUT',
                self._session.upload_url,
                data=data,
                headers=headers,
                authenticated=False
            )
        except asyncio.TimeoutError:
            upload_time = time.time() - upload_start
            self._logger.error(f"Chunk {chunk.index} upload timeout after {upload_time:.2f}s")
            raise

        upload_time = time.time() - upload_start
        speed_kbps = (chunk_size_kb / upload_time) if upload_time > 0 else 0
        self._logger.debug(
            f"Chunk {chunk.index} answered {response.status} in {upload_time:.2f}s ({speed_kbps:.1f} KB/s)"
        )
        return response
