"""
Провайдер соединений со встроенным хранилищем (SQLite).

Одно соединение на операцию, без пула. Соединение открывается в режиме
автокоммита: каждое выражение фиксируется сразу, пока явно не открыта
транзакция (см. TransactionBoundary).
"""

import sqlite3
from pathlib import Path
from typing import Optional

from src.common import DatabaseConnectionError, get_logger, settings

logger = get_logger(__name__)


class ConnectionProvider:
    """Выдаёт соединения к хранилищу по фиксированному пути."""

    def __init__(self, db_path: Optional[Path] = None):
        self.db_path = Path(db_path or settings.database_path)

    def _uri(self, create: bool) -> str:
        mode = "rwc" if create else "rw"
        return f"{self.db_path.resolve().as_uri()}?mode={mode}"

    def acquire(self, create: bool = False) -> sqlite3.Connection:
        """
        Открывает новое соединение.

        Args:
            create: Создать файл БД, если его нет. По умолчанию отсутствующий
                файл считается ошибкой конфигурации.

        Raises:
            DatabaseConnectionError: хранилище недоступно или путь неверный.
        """
        try:
            conn = sqlite3.connect(self._uri(create), uri=True, isolation_level=None)
        except sqlite3.Error as e:
            logger.error(f"Не удалось подключиться к {self.db_path}: {e}")
            raise DatabaseConnectionError(
                f"Хранилище недоступно: {self.db_path}"
            ) from e

        logger.debug(f"Соединение открыто: {self.db_path}")
        return conn
