from typing import List, Optional

from pydantic import BaseModel, Field


class TransferRequest(BaseModel):
    """Запрос на перевод со счёта-источника на счёт-получатель."""

    amount: int = Field(..., description="Сумма перевода (целое число, знак не проверяется)")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"amount": 200}
            ]
        }
    }


class TransferResponse(BaseModel):
    """Исход перевода."""

    success: bool = Field(..., description="Перевод зафиксирован полностью")
    status: str = Field(..., description="committed / rolled_back / partial / failed")
    atomic: bool = Field(..., description="Выполнялся ли перевод в транзакции")
    amount: int = Field(..., description="Сумма перевода")
    source_balance: Optional[int] = Field(None, description="Рассчитанный баланс источника")
    destination_balance: Optional[int] = Field(None, description="Рассчитанный баланс получателя")
    error: Optional[str] = Field(None, description="Сообщение об ошибке")
    rollback_failed: bool = Field(False, description="Откат транзакции не удался")


class AccountResponse(BaseModel):
    """Строка таблицы счетов."""

    id: int = Field(..., description="Номер счёта")
    balance: int = Field(..., description="Текущий баланс")


class AccountsResponse(BaseModel):
    """Отчёт по всем счетам."""

    accounts: List[AccountResponse] = Field(..., description="Счета в порядке id")
    total: int = Field(..., description="Сумма балансов")
    report: str = Field(..., description="Текстовый отчёт")


class HealthResponse(BaseModel):
    """Ответ эндпоинта проверки состояния (health check)."""

    status: str = Field(..., description="Статус сервиса (healthy/degraded)")
    database_reachable: bool = Field(..., description="Доступно ли хранилище")
    database_path: str = Field(..., description="Путь к файлу БД")
    timestamp: str = Field(..., description="Временная метка проверки")


class ErrorResponse(BaseModel):
    """Стандартный ответ с ошибкой."""

    error: str = Field(..., description="Тип ошибки")
    message: str = Field(..., description="Сообщение об ошибке")
    detail: Optional[str] = Field(None, description="Дополнительные детали ошибки")
