"""Core modules for graphshare."""
from .exceptions import GraphShareError, HttpError, ValidationError, ProtocolError
from .facade import TransferFacade

__all__ = [
    'TransferFacade',
    'GraphShareError',
    'HttpError',
    'ValidationError',
    'ProtocolError',
]
