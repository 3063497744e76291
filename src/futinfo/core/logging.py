from __future__ import annotations

import logging

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str | int = "INFO") -> None:
    """Configure root logging for CLI runs.

    Library modules only create loggers; handlers are attached here so that
    embedding applications keep control of their own logging setup.
    """

    if isinstance(level, str):
        resolved = logging.getLevelName(level.strip().upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level: {level!r}")
        level = resolved

    root = logging.getLogger()
    if root.handlers:
        root.setLevel(level)
        return

    logging.basicConfig(level=level, format=_LOG_FORMAT)
    # httpx logs every request at INFO.
    logging.getLogger("httpx").setLevel(max(level, logging.WARNING))
