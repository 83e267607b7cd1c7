"""
Async Microsoft Graph API client.

Thin client over an injected HttpTransport: builds drive URLs, attaches the
bearer token and turns non-success responses into HttpError.
"""
import json
from typing import Dict, Optional, Any, Union, TYPE_CHECKING
from urllib.parse import quote

from .auth import TokenProvider, resolve_token
from .config import GraphConfig
from .transport import HttpTransport, HttpResponse, AiohttpTransport
from ..exceptions import HttpError
from ..logging import get_logger

if TYPE_CHECKING:
    from ..upload.models import UploadTarget


class GraphApiClient:
    """
    Asynchronous Graph API client.

    Example:
        >>> config = GraphConfig.default()
        >>> async with GraphApiClient(StaticTokenProvider(token), config) as api:
        ...     data = await api.request_json('GET', api.url('/me/drive'), 'get drive')
    """

    def __init__(
        self,
        token_provider: TokenProvider,
        config: Optional[GraphConfig] = None,
        transport: Optional[HttpTransport] = None
    ):
        """
        Initialize Graph API client.

        Args:
            token_provider: Source of bearer tokens
            config: Graph configuration (uses defaults if not provided)
            transport: HTTP transport (aiohttp-backed if not provided)
        """
        self._config = config or GraphConfig.default()
        self._token_provider = token_provider
        self._owns_transport = transport is None
        self._transport = transport or AiohttpTransport(self._config)
        self._logger = get_logger('graphshare.api')

    @property
    def config(self) -> GraphConfig:
        """Get current configuration."""
        return self._config

    @property
    def transport(self) -> HttpTransport:
        return self._transport

    async def __aenter__(self) -> 'GraphApiClient':
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self):
        """Close the transport if this client created it."""
        if self._owns_transport:
            await self._transport.close()

    # URL building

    def url(self, path: str, beta: bool = False) -> str:
        """Build an absolute URL from an API-relative path."""
        root = self._config.graph_beta_root if beta else self._config.graph_root
        return f"{root}{path}"

    def upload_path_url(self, target: "UploadTarget", filename: str, action: str) -> str:
        """
        URL addressing a file in the upload folder by path.

        Args:
            target: Drive to address
            filename: Stored file name (URL-quoted here)
            action: Trailing action segment ('content' or 'createUploadSession')
        """
        folder = self._config.upload_folder
        item_path = f"/{folder}/{quote(filename, safe='')}" if folder else f"/{quote(filename, safe='')}"
        return self.url(f"{target.drive_path}/root:{item_path}:/{action}")

    def item_url(
        self,
        target: "UploadTarget",
        item_id: str,
        action: Optional[str] = None,
        beta: bool = False
    ) -> str:
        """URL addressing a drive item by ID."""
        path = f"{target.drive_path}/items/{item_id}"
        if action:
            path += f"/{action}"
        return self.url(path, beta=beta)

    # Requests

    async def get_token(self) -> str:
        """Request a token for the configured audience."""
        return await resolve_token(self._token_provider, self._config.token_scope)

    async def request(
        self,
        method: str,
        url: str,
        *,
        json_body: Optional[Dict[str, Any]] = None,
        data: Optional[Union[bytes, str]] = None,
        headers: Optional[Dict[str, str]] = None,
        authenticated: bool = True
    ) -> HttpResponse:
        """
        Perform a request and return the buffered response, whatever its status.

        Args:
            method: HTTP method
            url: Absolute URL
            json_body: JSON body (sets Content-Type)
            data: Raw body
            headers: Extra headers
            authenticated: Attach the bearer token

        Returns:
            Buffered response
        """
        request_headers = dict(headers or {})
        if authenticated:
            token = await self.get_token()
            request_headers['Authorization'] = f"Bearer {token}"
        if json_body is not None:
            request_headers['Content-Type'] = 'application/json'
            data = json.dumps(json_body)

        return await self._transport.request(
            method,
            url,
            headers=request_headers,
            data=data
        )

    async def request_json(
        self,
        method: str,
        url: str,
        phase: str,
        **kwargs
    ) -> Dict[str, Any]:
        """
        Perform a request that must succeed and return its JSON object.

        Args:
            method: HTTP method
            url: Absolute URL
            phase: Operation phase for error reporting
            **kwargs: Passed to request()

        Returns:
            Parsed JSON object ({} when the body is not an object)

        Raises:
            HttpError: If the response status is not 2xx
        """
        response = await self.request(method, url, **kwargs)
        if not response.ok:
            self._logger.error(f"{phase} failed: HTTP {response.status} {response.reason}")
            raise HttpError(phase, response.status, response.reason, response.text())

        data = response.json()
        return data if isinstance(data, dict) else {}
