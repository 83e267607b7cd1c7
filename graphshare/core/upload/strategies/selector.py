"""Transfer mode selection by payload size."""
from ..models import UploadStrategy
from ...api.config import SIMPLE_UPLOAD_LIMIT


def select_upload_strategy(
    size: int,
    threshold: int = SIMPLE_UPLOAD_LIMIT
) -> UploadStrategy:
    """
    Choose between a one-shot PUT and a resumable session.

    Args:
        size: Payload size in bytes
        threshold: Largest size sent with a simple upload

    Returns:
        UploadStrategy.SIMPLE if size <= threshold, else UploadStrategy.RESUMABLE
    """
    if size < 0:
        raise ValueError(f"Payload size must not be negative, got {size}")
    if size <= threshold:
        return UploadStrategy.SIMPLE
    return UploadStrategy.RESUMABLE
