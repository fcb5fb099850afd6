"""
SQLite хранилище счетов.

Обеспечивает:
- Создание схемы таблицы accounts
- Начальное заполнение пары счетов
- Сброс и просмотр балансов (администрирование и тесты)
"""

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Optional

from src.common import StatementError, get_logger, settings

from .connection import ConnectionProvider
from .guards import guarded_connection, guarded_cursor
from .transaction import TransactionBoundary

logger = get_logger(__name__)


class LedgerDatabase:
    """SQLite база данных с двумя счетами."""

    def __init__(
        self,
        db_path: Optional[Path] = None,
        initial_balances: Optional[Dict[int, int]] = None,
    ):
        """
        Инициализация базы данных.

        Args:
            db_path: Путь к файлу БД. По умолчанию: settings.database_path
            initial_balances: Начальные балансы {id: balance}. Применяются
                только к отсутствующим счетам.
        """
        self.db_path = Path(db_path or settings.database_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self.initial_balances = initial_balances or settings.get_initial_balances()
        self.provider = ConnectionProvider(self.db_path)
        self._init_db()
        logger.info(f"База данных инициализирована: {self.db_path}")

    @contextmanager
    def _get_connection(self):
        """Соединение внутри одной транзакции."""
        with guarded_connection(self.provider, create=True) as conn:
            try:
                with TransactionBoundary(conn):
                    yield conn
            except sqlite3.Error as e:
                raise StatementError(str(e)) from e

    def _init_db(self):
        """Создание схемы и заполнение недостающих счетов."""
        with self._get_connection() as conn:
            with guarded_cursor(conn) as cursor:
                cursor.execute("""
                    CREATE TABLE IF NOT EXISTS accounts (
                        id INTEGER PRIMARY KEY,
                        balance INTEGER NOT NULL
                    )
                """)
                cursor.executemany(
                    "INSERT OR IGNORE INTO accounts (id, balance) VALUES (?, ?)",
                    list(self.initial_balances.items()),
                )
                if cursor.rowcount > 0:
                    logger.info(f"Созданы счета с начальными балансами: {self.initial_balances}")

            logger.debug("Схема БД инициализирована")

    def set_balances(self, balances: Dict[int, int]) -> None:
        """Атомарно перезаписывает балансы указанных счетов."""
        with self._get_connection() as conn:
            with guarded_cursor(conn) as cursor:
                cursor.executemany(
                    "INSERT OR REPLACE INTO accounts (id, balance) VALUES (?, ?)",
                    list(balances.items()),
                )
        logger.warning(f"Балансы перезаписаны: {balances}")

    def reset_balances(self) -> None:
        """Возвращает счета к начальным балансам."""
        self.set_balances(self.initial_balances)

    def get_balances(self) -> Dict[int, int]:
        """Текущие балансы всех счетов."""
        with self._get_connection() as conn:
            with guarded_cursor(conn) as cursor:
                cursor.execute("SELECT id, balance FROM accounts ORDER BY id")
                return {row[0]: row[1] for row in cursor.fetchall()}

    def total_balance(self) -> int:
        """Сумма балансов: инвариант сохранения для успешных переводов."""
        return sum(self.get_balances().values())
