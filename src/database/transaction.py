import sqlite3
from typing import Optional

from src.common import StatementError, get_logger

logger = get_logger(__name__)


class TransactionBoundary:
    """
    Граница транзакции поверх одного соединения.

    Жизненный цикл: BEGIN -> операции -> COMMIT (успех) или ROLLBACK
    (любое исключение) -> режим автокоммита восстановлен. Граница живёт
    только в пределах одного вызова.

    Пример:
        with guarded_connection(provider) as conn:
            with TransactionBoundary(conn):
                conn.execute(...)
                conn.execute(...)
    """

    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn
        self.opened = False
        self.rollback_failed = False
        self._previous_isolation: Optional[str] = None

    def __enter__(self) -> "TransactionBoundary":
        self._previous_isolation = self.conn.isolation_level
        # BEGIN/COMMIT управляются вручную
        if self._previous_isolation is not None:
            self.conn.isolation_level = None
        try:
            self.conn.execute("BEGIN")
        except sqlite3.Error as e:
            self._restore_mode()
            logger.error(f"Не удалось открыть транзакцию: {e}")
            raise StatementError(f"BEGIN failed: {e}") from e
        self.opened = True
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        try:
            if exc_type is None:
                self._commit()
            else:
                logger.warning(f"Откат транзакции: {exc}")
                self._rollback()
        finally:
            self._restore_mode()
        return False

    def _commit(self) -> None:
        try:
            self.conn.commit()
        except sqlite3.Error as e:
            logger.error(f"Ошибка COMMIT: {e}")
            self._rollback()
            raise StatementError(f"COMMIT failed: {e}") from e

    def _rollback(self) -> None:
        try:
            self.conn.rollback()
        except sqlite3.Error as e:
            self.rollback_failed = True
            logger.error(f"Ошибка в rollback: {e}")

    def _restore_mode(self) -> None:
        # присваивание None при открытой транзакции неявно делает COMMIT
        if self.conn.isolation_level == self._previous_isolation:
            return
        try:
            self.conn.isolation_level = self._previous_isolation
        except sqlite3.Error as e:
            logger.error(f"Не удалось восстановить режим автокоммита: {e}")
