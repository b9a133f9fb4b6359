from __future__ import annotations

import logging


def configure_borg_logging(*, level: int = logging.INFO, fmt: str = "%(message)s") -> None:
    """
    Configure a minimal console logger for borgmoea.

    Notes:
        - This is opt-in (library code must not call logging.basicConfig()).
        - The handler is only attached if neither the root logger nor the "borgmoea" logger has handlers.
    """
    root = logging.getLogger()
    borg_logger = logging.getLogger("borgmoea")

    # If the user already configured logging, don't interfere.
    if root.handlers or borg_logger.handlers:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(fmt))
    borg_logger.addHandler(handler)
    borg_logger.setLevel(level)
    borg_logger.propagate = False


__all__ = ["configure_borg_logging"]
