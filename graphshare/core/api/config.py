"""
Graph client configuration.

Endpoint roots, upload framing limits and aiohttp transport options.
"""
from dataclasses import dataclass, field
from typing import Optional, Dict, Any
from urllib.parse import quote, urlsplit, urlunsplit
import os
import ssl

import aiohttp


MIB = 1024 * 1024

# Graph requires resumable chunk sizes to be multiples of 320 KiB
CHUNK_ALIGNMENT = 320 * 1024

# Largest payload accepted by a single PUT to /content
SIMPLE_UPLOAD_LIMIT = 4 * MIB

# 3.75 MiB, 12 x 320 KiB
RESUMABLE_CHUNK_SIZE = 3_932_160

GRAPH_ROOT = 'https://graph.microsoft.com/v1.0'
GRAPH_BETA = 'https://graph.microsoft.com/beta'
GRAPH_SCOPE = 'https://graph.microsoft.com'


@dataclass
class ProxyConfig:
    """
    Outbound HTTP(S) proxy.

    Credentials, when given, are embedded into the proxy URL.
    """
    url: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None

    def to_aiohttp_proxy(self) -> Optional[str]:
        """Proxy URL as passed to aiohttp's proxy= argument."""
        if not self.url:
            return None
        if not (self.username and self.password):
            return self.url

        parts = urlsplit(self.url)
        if not parts.scheme:
            return self.url
        credentials = f"{quote(self.username, safe='')}:{quote(self.password, safe='')}"
        return urlunsplit(parts._replace(netloc=f"{credentials}@{parts.netloc}"))


@dataclass
class SSLConfig:
    """TLS verification settings for Graph and upload session hosts."""
    verify: bool = True
    ca_file: Optional[str] = None
    check_hostname: bool = True

    def create_ssl_context(self):
        """Build an SSLContext, or False to turn verification off."""
        if not self.verify:
            return False
        ssl_context = ssl.create_default_context(cafile=self.ca_file)
        ssl_context.check_hostname = self.check_hostname
        return ssl_context


@dataclass
class TimeoutConfig:
    """
    Request timeouts in seconds.

    Chunk PUTs can be slow; total covers a whole request including the body.
    """
    total: float = 300.0
    connect: float = 30.0
    sock_read: float = 120.0

    def to_aiohttp_timeout(self) -> aiohttp.ClientTimeout:
        return aiohttp.ClientTimeout(total=self.total, connect=self.connect, sock_read=self.sock_read)


@dataclass
class GraphConfig:
    """
    Settings shared by every Graph request of one client.

    Attributes:
        graph_root: v1.0 API root
        graph_beta_root: beta API root (per-user sharing links)
        token_scope: Audience passed to the token provider
        upload_folder: Folder under the drive root receiving uploads ('' for the root)
        simple_upload_limit: Largest payload sent in a single PUT
        chunk_size: Resumable chunk size, a multiple of 320 KiB
    """
    graph_root: str = GRAPH_ROOT
    graph_beta_root: str = GRAPH_BETA
    token_scope: str = GRAPH_SCOPE

    upload_folder: str = 'OpenClawShared'

    simple_upload_limit: int = SIMPLE_UPLOAD_LIMIT
    chunk_size: int = RESUMABLE_CHUNK_SIZE

    user_agent: str = 'graphshare/1.0.0'
    extra_headers: Dict[str, str] = field(default_factory=dict)

    proxy: Optional[ProxyConfig] = None
    ssl: SSLConfig = field(default_factory=SSLConfig)
    timeout: TimeoutConfig = field(default_factory=TimeoutConfig)

    # Connection pool
    max_connections: int = 100
    max_connections_per_host: int = 10

    def __post_init__(self):
        self.graph_root = self.graph_root.rstrip('/')
        self.graph_beta_root = self.graph_beta_root.rstrip('/')
        self.upload_folder = self.upload_folder.strip('/')

        if self.chunk_size <= 0 or self.chunk_size % CHUNK_ALIGNMENT:
            raise ValueError(
                f"Chunk size must be a positive multiple of {CHUNK_ALIGNMENT} bytes, "
                f"got {self.chunk_size}"
            )
        if self.simple_upload_limit < 0:
            raise ValueError("Simple upload limit must not be negative")

    @classmethod
    def default(cls) -> 'GraphConfig':
        return cls()

    @classmethod
    def with_proxy(cls, proxy_url: str, **kwargs) -> 'GraphConfig':
        """Configuration routing all requests through proxy_url."""
        return cls(proxy=ProxyConfig(url=proxy_url), **kwargs)

    @classmethod
    def insecure(cls, **kwargs) -> 'GraphConfig':
        """Configuration without TLS verification (test tenants, intercepting proxies)."""
        return cls(ssl=SSLConfig(verify=False, check_hostname=False), **kwargs)

    @classmethod
    def from_env(cls, prefix: str = 'GRAPHSHARE_', **kwargs) -> 'GraphConfig':
        """
        Create configuration from environment variables.

        Recognized variables (with prefix): GRAPH_ROOT, GRAPH_BETA_ROOT,
        UPLOAD_FOLDER, PROXY, TIMEOUT. Explicit kwargs win over the environment.

        Args:
            prefix: Environment variable prefix
            **kwargs: Explicit overrides

        Returns:
            GraphConfig instance
        """
        def env(name: str) -> Optional[str]:
            return os.environ.get(f'{prefix}{name}') or None

        values: Dict[str, Any] = {}
        for name, attr in (
            ('GRAPH_ROOT', 'graph_root'),
            ('GRAPH_BETA_ROOT', 'graph_beta_root'),
            ('UPLOAD_FOLDER', 'upload_folder'),
        ):
            if env(name):
                values[attr] = env(name)
        if env('PROXY'):
            values['proxy'] = ProxyConfig(url=env('PROXY'))
        if env('TIMEOUT'):
            values['timeout'] = TimeoutConfig(total=float(env('TIMEOUT')))

        values.update(kwargs)
        return cls(**values)

    def get_connector_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments for aiohttp.TCPConnector."""
        return {
            'limit': self.max_connections,
            'limit_per_host': self.max_connections_per_host,
            'ssl': self.ssl.create_ssl_context(),
        }

    def get_session_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments for aiohttp.ClientSession."""
        return {
            'headers': {'User-Agent': self.user_agent, **self.extra_headers},
            'timeout': self.timeout.to_aiohttp_timeout(),
        }
