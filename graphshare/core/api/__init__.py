"""Graph API module."""
from .config import (
    GraphConfig,
    ProxyConfig,
    SSLConfig,
    TimeoutConfig,
    GRAPH_ROOT,
    GRAPH_BETA,
    GRAPH_SCOPE,
    SIMPLE_UPLOAD_LIMIT,
    RESUMABLE_CHUNK_SIZE,
    CHUNK_ALIGNMENT
)
from .auth import TokenProvider, StaticTokenProvider, resolve_token
from .transport import HttpTransport, HttpResponse, AiohttpTransport
from .async_client import GraphApiClient

__all__ = [
    # Client
    'GraphApiClient',

    # Transport
    'HttpTransport',
    'HttpResponse',
    'AiohttpTransport',

    # Auth
    'TokenProvider',
    'StaticTokenProvider',
    'resolve_token',

    # Configuration
    'GraphConfig',
    'ProxyConfig',
    'SSLConfig',
    'TimeoutConfig',
    'GRAPH_ROOT',
    'GRAPH_BETA',
    'GRAPH_SCOPE',
    'SIMPLE_UPLOAD_LIMIT',
    'RESUMABLE_CHUNK_SIZE',
    'CHUNK_ALIGNMENT',
]
