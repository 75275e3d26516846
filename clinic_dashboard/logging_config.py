"""
logging_config.py
=================
One-time logging setup. Every module logs through
logging.getLogger(__name__); this only wires the root handler.
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_configured = False


def configure_logging(level: str = "INFO") -> None:
    """Attach a stdout handler to the root logger (idempotent)."""
    global _configured
    if _configured:
        logging.getLogger().setLevel(level.upper())
        return

    logging.basicConfig(
        level=level.upper(),
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    _configured = True
