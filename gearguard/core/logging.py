# gearguard/core/logging.py
import logging

from .config import LOG_LEVEL

_configured = False


def setup_logging() -> None:
    global _configured
    if _configured:
        return
    logging.basicConfig(
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        level=getattr(logging, LOG_LEVEL, logging.INFO),
    )
    _configured = True
