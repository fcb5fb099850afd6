import logging
import sys
from typing import Optional

from .config import settings

_configured_loggers: set = set()


def _resolve_level() -> int:
    return getattr(logging, settings.log_level.upper(), logging.INFO)


def _console_handler() -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(settings.log_format))
    return handler


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Возвращает настроенный логгер модуля (stdout, уровень из настроек)."""
    logger_name = name or settings.app_name

    if logger_name in _configured_loggers:
        return logging.getLogger(logger_name)

    logger = logging.getLogger(logger_name)
    logger.setLevel(_resolve_level())

    if not logger.handlers:
        logger.addHandler(_console_handler())

    logger.propagate = False

    _configured_loggers.add(logger_name)
    return logger


def configure_root_logger() -> None:
    """Настраивает корневой логгер для точек входа (uvicorn, скрипты)."""
    root_logger = logging.getLogger()
    root_logger.setLevel(_resolve_level())

    root_logger.handlers.clear()
    root_logger.addHandler(_console_handler())
