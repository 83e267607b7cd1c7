"""
Access token providers.

Token acquisition lives outside this package; these types describe the
boundary and provide a fixed-token adapter for scripts and tests.
"""
import inspect
from typing import Protocol, Awaitable, Union, runtime_checkable


@runtime_checkable
class TokenProvider(Protocol):
    """
    Protocol for bearer token sources.

    Implementations may be sync or async and may cache as they see fit.
    """

    def get_access_token(self, scope: str) -> Union[str, Awaitable[str]]:
        """
        Return a valid access token for the given audience.

        Args:
            scope: Token audience (e.g. "https://graph.microsoft.com")

        Returns:
            Access token string (or awaitable resolving to one)
        """
        ...


class StaticTokenProvider:
    """Token provider that always returns the same token."""

    def __init__(self, token: str):
        if not token:
            raise ValueError("Token must not be empty")
        self._token = token

    async def get_access_token(self, scope: str) -> str:
        return self._token


async def resolve_token(provider: TokenProvider, scope: str) -> str:
    """
    Request a token, supporting both sync and async providers.

    Args:
        provider: Token provider
        scope: Token audience

    Returns:
        Access token string
    """
    token = provider.get_access_token(scope)
    if inspect.isawaitable(token):
        token = await token
    return token
