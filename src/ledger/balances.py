import sqlite3

from src.common import AccountNotFoundError, StatementError, get_logger
from src.database import guarded_cursor

logger = get_logger(__name__)

_SELECT_BALANCE = "SELECT balance FROM accounts WHERE id = ?"
_UPDATE_BALANCE = "UPDATE accounts SET balance = ? WHERE id = ?"


def read_balance(conn: sqlite3.Connection, account_id: int) -> int:
    """
    Читает текущий баланс счёта.

    Ошибка чтения никогда не подменяется нулевым балансом: это нарушило бы
    сохранение суммы при переводе.

    Raises:
        AccountNotFoundError: строка с таким id отсутствует.
        StatementError: запрос не выполнен.
    """
    try:
        with guarded_cursor(conn) as cursor:
            cursor.execute(_SELECT_BALANCE, (account_id,))
            row = cursor.fetchone()
    except (sqlite3.Error, OverflowError) as e:
        logger.error(f"Ошибка чтения баланса счёта {account_id}: {e}")
        raise StatementError(f"Чтение баланса счёта {account_id}: {e}") from e

    if row is None:
        logger.error(f"Счёт {account_id} не найден")
        raise AccountNotFoundError(account_id)

    return row[0]


def write_balance(conn: sqlite3.Connection, account_id: int, balance: int) -> None:
    """Записывает новый баланс счёта одним UPDATE."""
    try:
        with guarded_cursor(conn) as cursor:
            cursor.execute(_UPDATE_BALANCE, (balance, account_id))
    except (sqlite3.Error, OverflowError) as e:
        logger.error(f"Ошибка записи баланса счёта {account_id}: {e}")
        raise StatementError(f"Запись баланса счёта {account_id}: {e}") from e
