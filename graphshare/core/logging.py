"""
Logger access for graphshare.

Every service logs under a dotted name below ``graphshare`` (for example
``graphshare.upload.session`` or ``graphshare.sharing.members``) so hosts can
tune upload chatter separately from sharing decisions. Nothing here installs
handlers; output goes wherever the host's root logger sends it.
"""

import logging


def get_logger(name: str) -> logging.Logger:
    """Return the named graphshare logger, propagating to the root logger.

    Until the host configures logging (no root handlers yet), the logger is
    held at WARNING so per-chunk DEBUG/INFO lines stay quiet. Once the root
    logger has handlers the level is left alone; use
    ``graphshare.setup_logging`` to change all graphshare levels at once.

    Args:
        name: Dotted logger name, e.g. 'graphshare.upload.chunk'
    """
    logger = logging.getLogger(name)
    logger.propagate = True

    if not logging.getLogger().handlers:
        logger.setLevel(logging.WARNING)

    return logger
