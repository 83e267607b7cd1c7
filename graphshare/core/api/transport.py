"""
HTTP transport layer.

Every component talks to the network through an object satisfying
HttpTransport, passed in by the caller. AiohttpTransport is the default.
"""
import json
from dataclasses import dataclass, field
from typing import Protocol, Dict, Any, Optional, Union, runtime_checkable

import aiohttp

from .config import GraphConfig
from ..logging import get_logger


@dataclass(frozen=True)
class HttpResponse:
    """
    Buffered HTTP response.

    Attributes:
        status: HTTP status code
        reason: HTTP status text
        body: Raw response body (empty if unreadable)
        headers: Response headers
    """
    status: int
    reason: str = ''
    body: bytes = b''
    headers: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        """Returns True for 2xx statuses."""
        return 200 <= self.status < 300

    def text(self) -> str:
        """Returns the body decoded as UTF-8 (lossy)."""
        return self.body.decode('utf-8', errors='replace')

    def json(self) -> Any:
        """
        Parse body as JSON.

        Returns:
            Parsed JSON value, or None if the body is empty or not JSON
        """
        if not self.body:
            return None
        try:
            return json.loads(self.body)
        except ValueError:
            return None


@runtime_checkable
class HttpTransport(Protocol):
    """Protocol for the object that performs HTTP requests."""

    async def request(
        self,
        method: str,
        url: str,
        *,
        headers: Optional[Dict[str, str]] = None,
        data: Optional[Union[bytes, str]] = None
    ) -> HttpResponse:
        """
        Perform one HTTP request and buffer the response.

        Args:
            method: HTTP method
            url: Absolute URL
            headers: Request headers
            data: Request body

        Returns:
            Buffered response
        """
        ...

    async def close(self) -> None:
        """Release transport resources."""
        ...


class AiohttpTransport:
    """
    aiohttp-backed transport.

    Reuses one ClientSession for all requests. The session is created lazily
    and closed by close() only when this transport created it.
    """

    def __init__(
        self,
        config: Optional[GraphConfig] = None,
        session: Optional[aiohttp.ClientSession] = None
    ):
        """
        Initialize transport.

        Args:
            config: Graph configuration (uses defaults if not provided)
            session: Optional shared session owned by the caller
        """
        self._config = config or GraphConfig.default()
        self._session = session
        self._owns_session = False
        self._logger = get_logger('graphshare.api.transport')

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create HTTP session."""
        if self._session is None or self._session.closed:
            connector = aiohttp.TCPConnector(**self._config.get_connector_kwargs())
            self._session = aiohttp.ClientSession(
                connector=connector,
                **self._config.get_session_kwargs()
            )
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        """Close session if we own it."""
        if self._owns_session and self._session and not self._session.closed:
            await self._session.close()
        self._session = None
        self._owns_session = False

    async def request(
        self,
        method: str,
        url: str,
        *,
        headers: Optional[Dict[str, str]] = None,
        data: Optional[Union[bytes, str]] = None
    ) -> HttpResponse:
        session = await self._get_session()
        proxy = self._config.proxy.to_aiohttp_proxy() if self._config.proxy else None

        self._logger.debug(f"{method} {url}")

        async with session.request(
            method,
            url,
            headers=headers,
            data=data,
            proxy=proxy
        ) as response:
            try:
                body = await response.read()
            except aiohttp.ClientPayloadError as e:
                # Body is best-effort; the status is what callers act on
                self._logger.debug(f"Could not read body of {method} {url}: {e}")
                body = b''

            return HttpResponse(
                status=response.status,
                reason=response.reason or '',
                body=body,
                headers=dict(response.headers)
            )
