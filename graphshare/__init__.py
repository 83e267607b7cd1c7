"""
graphshare - Async Python library for uploading and sharing files on
OneDrive and SharePoint through Microsoft Graph.

Usage:
    >>> from graphshare import GraphShareClient
    >>>
    >>> async with GraphShareClient(token=access_token) as client:
    ...     result = await client.upload_file("report.pdf", site_id=site_id)
    ...     print(result.share_url)
"""
import logging
from .client import GraphShareClient

from .core.api import (
    GraphConfig,
    ProxyConfig,
    SSLConfig,
    TimeoutConfig,
    GraphApiClient,
    HttpTransport,
    HttpResponse,
    AiohttpTransport,
    TokenProvider,
    StaticTokenProvider
)
from .core.exceptions import GraphShareError, HttpError, ValidationError, ProtocolError
from .core.facade import TransferFacade
from .core.sharing import (
    SharingScope,
    SharingLink,
    ChatMember,
    DriveItemProperties
)
from .core.upload import UploadTarget, UploadResult, UploadProgress, ShareResult

__version__ = '1.0.0'


def setup_logging(level=logging.INFO):
    """
    Configure logging for graphshare modules.

    Args:
        level: Logging level (default: logging.INFO)
    """
    loggers = [
        'graphshare',
        'graphshare.api',
        'graphshare.api.transport',
        'graphshare.transfer',
        'graphshare.upload.coordinator',
        'graphshare.upload.chunk',
        'graphshare.upload.session',
        'graphshare.upload.simple',
        'graphshare.upload.file',
        'graphshare.sharing',
        'graphshare.sharing.members',
    ]

    for logger_name in loggers:
        logger = logging.getLogger(logger_name)
        logger.setLevel(level)
        logger.propagate = True


__all__ = [
    'GraphShareClient',
    'TransferFacade',
    'GraphApiClient',

    # Transport and auth
    'HttpTransport',
    'HttpResponse',
    'AiohttpTransport',
    'TokenProvider',
    'StaticTokenProvider',

    # Configuration
    'GraphConfig',
    'ProxyConfig',
    'SSLConfig',
    'TimeoutConfig',

    # Models
    'UploadTarget',
    'UploadResult',
    'UploadProgress',
    'ShareResult',
    'SharingScope',
    'SharingLink',
    'ChatMember',
    'DriveItemProperties',

    # Errors
    'GraphShareError',
    'HttpError',
    'ValidationError',
    'ProtocolError',

    'setup_logging',
    '__version__',
]
