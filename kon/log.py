from __future__ import annotations

import logging
import os

_LOG = logging.getLogger("kon")

# Переменная окружения, принудительно включающая DEBUG
DEBUG_ENV = "KON_DEBUG"


def setup_logging(level: int = logging.WARNING) -> logging.Logger:
    """
    Настраивает логгер пакета один раз: один StreamHandler в stderr.

    Повторные вызовы только меняют уровень.
    """
    if os.environ.get(DEBUG_ENV):
        level = logging.DEBUG
    _LOG.setLevel(level)
    if not getattr(setup_logging, "_inited", False):
        setup_logging._inited = True  # type: ignore[attr-defined]
        if not _LOG.handlers:
            h = logging.StreamHandler()
            fmt = logging.Formatter("[%(levelname)s] %(message)s")
            h.setFormatter(fmt)
            _LOG.addHandler(h)
    return _LOG


__all__ = ["setup_logging", "DEBUG_ENV"]
