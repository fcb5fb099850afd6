"""
Гарантированное освобождение ресурсов.

Порядок закрытия фиксирован: курсор (он же результат запроса и
подготовленное выражение в DB-API), затем соединение. Вложенные `with`
дают этот порядок на любом пути выхода. Ошибка закрытия логируется и
никогда не маскирует исход основной операции.
"""

import sqlite3
from contextlib import contextmanager
from typing import Iterator

from src.common import ResourceReleaseError, get_logger

from .connection import ConnectionProvider

logger = get_logger(__name__)


def release(resource, kind: str) -> None:
    """Закрывает ресурс, подавляя и логируя ошибку закрытия."""
    if resource is None:
        return
    try:
        resource.close()
    except Exception as e:
        logger.error(str(ResourceReleaseError(kind, e)))


@contextmanager
def guarded_connection(
    provider: ConnectionProvider, create: bool = False
) -> Iterator[sqlite3.Connection]:
    """Соединение, которое закрывается на любом пути выхода."""
    conn = provider.acquire(create=create)
    try:
        yield conn
    finally:
        release(conn, "connection")


@contextmanager
def guarded_cursor(conn: sqlite3.Connection) -> Iterator[sqlite3.Cursor]:
    """Курсор, который закрывается раньше своего соединения."""
    cursor = conn.cursor()
    try:
        yield cursor
    finally:
        release(cursor, "cursor")
