"""
Resumable upload session service.

Drives a Graph upload session: create the session, then submit contiguous
byte ranges one at a time until the server reports completion.
"""
from enum import Enum
from typing import Callable, Optional

from .chunk_service import ChunkUploader
from ..models import UploadTarget, UploadSession, UploadResult, UploadProgress, missing_fields
from ..strategies import AlignedChunkingStrategy, BaseChunkingStrategy
from ...api.async_client import GraphApiClient
from ...exceptions import ProtocolError, ValidationError
from ...logging import get_logger


class SessionState(str, Enum):
    """Lifecycle of one resumable upload."""
    CREATED = 'created'
    TRANSFERRING = 'transferring'
    COMPLETED = 'completed'
    FAILED = 'failed'


class ResumableSessionUploader:
    """
    Uploads one payload through a resumable session.

    One instance serves one upload; the session URL and offset never leave
    it. Chunks go out strictly in order and never concurrently, since the
    server only accepts the range that follows the last accepted one.

    Status handling per chunk:
    - 200/201: upload complete, body is the drive item
    - 202: range accepted, continue with the next one
    - anything else: ProtocolError, no further chunks
    """

    COMPLETE_STATUSES = (200, 201)
    CONTINUE_STATUS = 202

    def __init__(
        self,
        api: GraphApiClient,
        chunking: Optional[BaseChunkingStrategy] = None,
        progress_callback: Optional[Callable[[UploadProgress], None]] = None
    ):
        """
        Initialize session uploader.

        Args:
            api: Graph API client
            chunking: Chunk boundary strategy (config chunk size if not provided)
            progress_callback: Optional callback after each accepted chunk
        """
        self._api = api
        self._chunking = chunking or AlignedChunkingStrategy(api.config.chunk_size)
        self._progress_callback = progress_callback
        self._state: Optional[SessionState] = None
        self._progress: Optional[UploadProgress] = None
        self._logger = get_logger('graphshare.upload.session')

    @property
    def state(self) -> Optional[SessionState]:
        """Current state (None before a session is requested)."""
        return self._state

    @property
    def progress(self) -> Optional[UploadProgress]:
        return self._progress

    async def upload(
        self,
        target: UploadTarget,
        filename: str,
        data: bytes
    ) -> UploadResult:
        """
        Create a session and transfer the whole payload.

        Args:
            target: Drive receiving the file
            filename: Stored file name
            data: Payload bytes

        Returns:
            UploadResult from the completion response

        Raises:
            HttpError: If session creation fails
            ValidationError: If a success response lacks required fields
            ProtocolError: If a chunk gets an unexpected status or the payload
                runs out without a completion response
        """
        session = await self.create_session(target, filename, len(data))
        return await self.transfer(session, data)

    async def create_session(
        self,
        target: UploadTarget,
        filename: str,
        total_size: int
    ) -> UploadSession:
        """
        Request an upload session URL.

        Returns:
            UploadSession for the payload
        """
        phase = f"{target.label} create upload session"
        url = self._api.upload_path_url(target, filename, 'createUploadSession')
        self._logger.info(f"Creating upload session for {filename} ({total_size} bytes)")

        try:
            data = await self._api.request_json(
                'POST',
                url,
                phase,
                json_body={'item': {'name': filename}}
            )
            missing = missing_fields(data, ('uploadUrl',))
            if missing:
                raise ValidationError(phase, missing)
        except Exception:
            self._state = SessionState.FAILED
            raise

        self._state = SessionState.CREATED
        return UploadSession(upload_url=data['uploadUrl'], total_size=total_size)

    async def transfer(self, session: UploadSession, data: bytes) -> UploadResult:
        """
        Submit the payload chunk by chunk.

        Args:
            session: Session from create_session()
            data: Payload bytes (len(data) == session.total_size)

        Returns:
            UploadResult from the completion response
        """
        if len(data) != session.total_size:
            raise ValueError(
                f"Payload has {len(data)} bytes but session declared {session.total_size}"
            )

        try:
            return await self._transfer(session, memoryview(data))
        except Exception:
            self._state = SessionState.FAILED
            raise

    async def _transfer(self, session: UploadSession, view: memoryview) -> UploadResult:
        total = session.total_size
        uploader = ChunkUploader(self._api, session)
        progress = UploadProgress(total_bytes=total)
        self._progress = progress
        self._state = SessionState.TRANSFERRING

        while progress.offset < total:
            chunk = self._chunking.next_chunk(progress.chunks_sent, progress.offset, total)
            response = await uploader.upload_chunk(chunk, bytes(view[chunk.start:chunk.end]))

            if response.status in self.COMPLETE_STATUSES:
                result = UploadResult.from_response(response.json(), 'resumable upload completion')
                progress.advance(chunk.end)
                self._notify(progress)
                self._state = SessionState.COMPLETED
                self._logger.info(
                    f"Upload session completed after {progress.chunks_sent} chunks: {result.name}"
                )
                return result

            if response.status != self.CONTINUE_STATUS:
                body = response.text()
                self._logger.error(
                    f"Resumable upload failed at byte {chunk.start}: HTTP {response.status}"
                )
                raise ProtocolError(
                    f"Resumable upload failed at byte {chunk.start}: "
                    f"{response.status} {response.reason} - {body}",
                    offset=chunk.start,
                    status=response.status,
                    reason=response.reason,
                    body=body
                )

            progress.advance(chunk.end)
            self._notify(progress)

        self._logger.error(f"Upload session exhausted {total} bytes without completion")
        raise ProtocolError(
            "Resumable upload session exhausted without completion",
            offset=progress.offset
        )

    def _notify(self, progress: UploadProgress) -> None:
        if self._progress_callback:
            self._progress_callback(progress)
