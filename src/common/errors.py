"""
Иерархия исключений леджера.

- LedgerError: базовое исключение
- DatabaseConnectionError: хранилище недоступно или путь неверный
- StatementError: ошибка чтения/записи
- AccountNotFoundError: счёт с указанным id отсутствует
- ResourceReleaseError: ошибка закрытия ресурса (только логируется)
"""


class LedgerError(Exception):
    """Базовое исключение для операций с леджером."""


class DatabaseConnectionError(LedgerError):
    """Не удалось открыть соединение с хранилищем."""


class StatementError(LedgerError):
    """Ошибка выполнения SQL-запроса (чтение или запись)."""


class AccountNotFoundError(LedgerError):
    """Запрошенный счёт отсутствует в таблице accounts."""

    def __init__(self, account_id: int):
        self.account_id = account_id
        super().__init__(f"Счёт {account_id} не найден")


class ResourceReleaseError(LedgerError):
    """Ошибка закрытия курсора или соединения. Никогда не пробрасывается из guard."""

    def __init__(self, resource: str, cause: Exception):
        self.resource = resource
        self.cause = cause
        super().__init__(f"Ошибка при закрытии {resource}: {cause}")
