"""
Upload coordinator.

Chooses the transfer mode for a payload and runs the matching uploader.
"""
from typing import Callable, Optional

from .models import UploadTarget, UploadResult, UploadProgress, UploadStrategy
from .services import SimpleUploader, ResumableSessionUploader
from .strategies import BaseChunkingStrategy, select_upload_strategy
from ..api.async_client import GraphApiClient
from ..logging import get_logger

logger = get_logger('graphshare.upload.coordinator')


class UploadCoordinator:
    """
    Coordinates a single upload.

    Payloads up to the simple upload limit go out in one PUT; larger ones
    through a fresh resumable session per call.
    """

    def __init__(
        self,
        api: GraphApiClient,
        chunking_strategy: Optional[BaseChunkingStrategy] = None,
        progress_callback: Optional[Callable[[UploadProgress], None]] = None
    ):
        """
        Initialize upload coordinator.

        Args:
            api: Graph API client
            chunking_strategy: Strategy for resumable chunk boundaries
            progress_callback: Optional callback for progress updates
        """
        self._api = api
        self._chunking = chunking_strategy
        self._progress_callback = progress_callback
        self._simple = SimpleUploader(api)

    def select_strategy(self, size: int) -> UploadStrategy:
        return select_upload_strategy(size, self._api.config.simple_upload_limit)

    async def upload(
        self,
        target: UploadTarget,
        filename: str,
        data: bytes,
        content_type: Optional[str] = None
    ) -> UploadResult:
        """
        Upload a payload to a drive.

        Args:
            target: Drive receiving the file
            filename: Stored file name
            data: Payload bytes
            content_type: MIME type for simple uploads

        Returns:
            UploadResult for the stored item
        """
        if not filename:
            raise ValueError("Filename must not be empty")

        size = len(data)
        strategy = self.select_strategy(size)
        size_mb = size / (1024 * 1024)
        logger.info(f"Uploading {filename} to {target.label} ({size_mb:.2f} MB, {strategy.value})")

        if strategy is UploadStrategy.SIMPLE:
            result = await self._simple.upload(target, filename, data, content_type)
            if self._progress_callback:
                self._progress_callback(UploadProgress(total_bytes=size, offset=size, chunks_sent=1))
        else:
            # One uploader per call: session state is never shared
            uploader = ResumableSessionUploader(
                self._api,
                chunking=self._chunking,
                progress_callback=self._progress_callback
            )
            result = await uploader.upload(target, filename, data)

        logger.info(f"Uploaded {result.name} as item {result.id}")
        return result
