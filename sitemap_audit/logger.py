# === FILE: sitemap_audit/logger.py ===
"""Логгер SitemapAudit.

Все модули пишут в потомков логгера ``SitemapAudit`` (см. :func:`get_logger`),
поэтому уровень и обработчики задаются одним вызовом :func:`configure`.
Записи уходят в stderr: stdout занят отчётом.
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, Union

_DEFAULT_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_LOGGER_NAME: Final[str] = "SitemapAudit"
_MAX_LOG_BYTES: Final[int] = 5 * 1024 * 1024

_LevelT = Union[int, str]


def configure(
    *,
    level: _LevelT = "WARNING",
    log_file: str | Path | None = None,
    log_format: str = _DEFAULT_FORMAT,
    replace_handlers: bool = True,
) -> logging.Logger:
    """Настраивает логгер проекта: stderr и, если указан *log_file*, файл с ротацией."""
    formatter = logging.Formatter(log_format)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file is not None:
        handlers.append(
            RotatingFileHandler(str(log_file), maxBytes=_MAX_LOG_BYTES, backupCount=3, encoding="utf-8")
        )

    lg = logging.getLogger(_LOGGER_NAME)
    lg.setLevel(level)
    if replace_handlers:
        lg.handlers.clear()
    for handler in handlers:
        handler.setFormatter(formatter)
        lg.addHandler(handler)
    lg.propagate = False
    return lg


def init_logging(
    level: _LevelT = "WARNING", log_file: str | Path | None = None, log_format: str = _DEFAULT_FORMAT
) -> logging.Logger:
    return configure(level=level, log_file=log_file, log_format=log_format)


def get_logger(name: str | None = None) -> logging.Logger:
    """``SitemapAudit`` или его потомок ``SitemapAudit.<name>``."""
    if not name:
        return logging.getLogger(_LOGGER_NAME)
    return logging.getLogger(f"{_LOGGER_NAME}.{name}")


logger: logging.Logger = get_logger()

__all__ = ["logger", "configure", "init_logging", "get_logger"]
