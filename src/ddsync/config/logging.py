"""Shared logging helpers for ddsync."""

from __future__ import annotations

import logging

HTTP_LOGGERS = ("httpx", "httpcore")


def configure_logging(
    *,
    level: int = logging.INFO,
    force: bool = False,
    http_debug: bool = False,
) -> None:
    """Initialise the root logger once with sensible defaults.

    Parameters mirror ``logging.basicConfig`` with a simplified contract: we default
    to INFO level and a terse format suitable for CLI output. Pass ``force=True`` to
    reconfigure during tests or specialised entry points. ``http_debug`` lets the
    HTTP client libraries log their request/response traffic at DEBUG level;
    otherwise they are capped at WARNING so request URLs do not clutter the run.
    """

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
    http_level = logging.DEBUG if http_debug else logging.WARNING
    for name in HTTP_LOGGERS:
        logging.getLogger(name).setLevel(http_level)
