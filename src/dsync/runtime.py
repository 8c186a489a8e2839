from __future__ import annotations

import logging
import os

_DEFAULT_LEVEL = logging.INFO


def resolve_log_level(raw: str | None = None) -> int:
    value = (raw if raw is not None else os.getenv("DSYNC_LOG_LEVEL", "")).strip().upper()
    if not value:
        return _DEFAULT_LEVEL
    level = logging.getLevelName(value)
    if isinstance(level, int):
        return level
    return _DEFAULT_LEVEL


def configure_logging(level: int | None = None) -> None:
    level = resolve_log_level() if level is None else level
    root = logging.getLogger()
    if root.handlers:
        root.setLevel(level)
        return
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
