from .config import Settings, settings
from .errors import (
    AccountNotFoundError,
    DatabaseConnectionError,
    LedgerError,
    ResourceReleaseError,
    StatementError,
)
from .logging import configure_root_logger, get_logger

__all__ = [
    "Settings",
    "settings",
    "get_logger",
    "configure_root_logger",
    "LedgerError",
    "DatabaseConnectionError",
    "StatementError",
    "AccountNotFoundError",
    "ResourceReleaseError",
]
