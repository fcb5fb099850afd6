import sqlite3
from dataclasses import dataclass
from typing import List, Optional

from src.common import StatementError, get_logger
from src.database import ConnectionProvider, guarded_connection, guarded_cursor

logger = get_logger(__name__)


@dataclass(frozen=True)
class AccountRow:

    id: int
    balance: int


def format_report(rows: List[AccountRow]) -> str:
    return "".join(f"Account: {row.id}, Balance: {row.balance}\n" for row in rows)


class LedgerReport:
    """Отчёт по всем счетам. Только чтение, без транзакции."""

    def __init__(self, provider: Optional[ConnectionProvider] = None):
        self.provider = provider or ConnectionProvider()

    def fetch_accounts(self) -> List[AccountRow]:
        """Все строки таблицы accounts в порядке id."""
        with guarded_connection(self.provider) as conn:
            try:
                with guarded_cursor(conn) as cursor:
                    cursor.execute("SELECT id, balance FROM accounts ORDER BY id")
                    rows = [AccountRow(id=r[0], balance=r[1]) for r in cursor.fetchall()]
            except sqlite3.Error as e:
                logger.error(f"Ошибка чтения счетов: {e}")
                raise StatementError(f"Чтение счетов: {e}") from e

        logger.debug(f"Прочитано счетов: {len(rows)}")
        return rows

    def list_accounts(self) -> str:
        """Человекочитаемый отчёт: одна строка на счёт."""
        return format_report(self.fetch_accounts())
