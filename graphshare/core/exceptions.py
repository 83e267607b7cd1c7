"""
Custom exceptions for Graph drive upload and sharing operations.

Every exception carries the phase that failed so callers can tell a
session-creation failure from a chunk or link failure.
"""
from typing import Optional, Sequence


class GraphShareError(Exception):
    """Base exception for all graphshare errors."""

    def __init__(self, message: str, phase: Optional[str] = None) -> None:
        """
        Initialize the exception.

        Args:
            message: Error message
            phase: Name of the operation phase that failed
        """
        self.phase = phase
        super().__init__(message)


class HttpError(GraphShareError):
    """Exception raised when a request returns a non-success status."""

    def __init__(
        self,
        phase: str,
        status: int,
        reason: str = "",
        body: str = ""
    ) -> None:
        """
        Initialize the exception.

        Args:
            phase: Operation phase (e.g. "create sharing link")
            status: HTTP status code
            reason: HTTP status text
            body: Response body text (empty if unreadable)
        """
        self.status = status
        self.reason = reason
        self.body = body
        super().__init__(f"{phase} failed: {status} {reason} - {body}", phase)


class ValidationError(GraphShareError):
    """Exception raised when a success response lacks required fields."""

    def __init__(self, phase: str, missing: Sequence[str]) -> None:
        """
        Initialize the exception.

        Args:
            phase: Operation phase whose response was malformed
            missing: Names of the missing fields
        """
        self.missing = tuple(missing)
        super().__init__(
            f"{phase} response missing required fields: {', '.join(self.missing)}",
            phase
        )


class ProtocolError(GraphShareError):
    """Exception raised when a resumable upload session misbehaves."""

    def __init__(
        self,
        message: str,
        offset: int,
        status: Optional[int] = None,
        reason: Optional[str] = None,
        body: Optional[str] = None
    ) -> None:
        """
        Initialize the exception.

        Args:
            message: Error message
            offset: Byte offset at which the session failed
            status: HTTP status of the offending response (if any)
            reason: HTTP status text (if any)
            body: Response body text (if any)
        """
        self.offset = offset
        self.status = status
        self.reason = reason
        self.body = body
        super().__init__(message, f"upload chunk at offset {offset}")
