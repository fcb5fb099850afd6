"""
Модуль работы с базой данных.

Предоставляет:
- ConnectionProvider: соединения со встроенным SQLite хранилищем
- guarded_connection / guarded_cursor: гарантированное закрытие ресурсов
- TransactionBoundary: граница транзакции с commit/rollback
- LedgerDatabase: схема, начальные балансы, администрирование
"""

from .connection import ConnectionProvider
from .db import LedgerDatabase
from .guards import guarded_connection, guarded_cursor, release
from .transaction import TransactionBoundary

__all__ = [
    "ConnectionProvider",
    "LedgerDatabase",
    "TransactionBoundary",
    "guarded_connection",
    "guarded_cursor",
    "release",
]
