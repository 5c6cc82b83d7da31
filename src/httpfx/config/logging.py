"""Root logger setup for the command line entry point."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(*, level: int = logging.INFO, force: bool = False) -> None:
    """Configure the root logger through ``logging.basicConfig``.

    ``httpfx fetch`` passes ``WARNING`` so only transport failures reach
    stderr, and ``DEBUG`` with ``-v`` to also show launches, cancellations and
    dropped progress reports. Library users who call this directly get
    ``INFO``. ``force`` replaces handlers that are already installed.
    """

    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt="%H:%M:%S", force=force)
