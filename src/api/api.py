"""
FastAPI application for the ledger transfer service.

Endpoints:
- POST /transfers/non-atomic: Transfer with independently committed writes
- POST /transfers/atomic: Transfer inside a single transaction
- GET /accounts: Ledger report
- POST /accounts/reset: Restore seed balances
- GET /health: Service health check

"""

from contextlib import asynccontextmanager
from datetime import datetime

from fastapi import FastAPI, HTTPException, status
from fastapi.responses import JSONResponse

from src.common import DatabaseConnectionError, LedgerError, get_logger
from src.database import LedgerDatabase, guarded_connection
from src.ledger import (
    LedgerReport,
    TransferEngine,
    TransferOutcome,
    TransferStatus,
    format_report,
)

from .schemas import (
    AccountResponse,
    AccountsResponse,
    ErrorResponse,
    HealthResponse,
    TransferRequest,
    TransferResponse,
)

logger = get_logger(__name__)

database: LedgerDatabase = None
engine: TransferEngine = None
report: LedgerReport = None

_OUTCOME_HTTP_STATUS = {
    TransferStatus.COMMITTED: status.HTTP_200_OK,
    TransferStatus.ROLLED_BACK: status.HTTP_409_CONFLICT,
    TransferStatus.PARTIAL: status.HTTP_409_CONFLICT,
    TransferStatus.FAILED: status.HTTP_503_SERVICE_UNAVAILABLE,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Управление жизненным циклом приложения FastAPI.
    - При старте: создаёт схему БД, заполняет счета и собирает движок переводов.
    - При выключении: логирует завершение работы сервиса.
    """
    global database, engine, report

    logger.info("Запуск Ledger Transfer Service")

    database = LedgerDatabase()
    engine = TransferEngine(database.provider)
    report = LedgerReport(database.provider)
    logger.info(f"Счета: {database.get_balances()}")

    yield

    logger.info("Остановка Ledger Transfer Service")


app = FastAPI(
    title="Ledger Transfer API",
    description="""
## Перевод средств между двумя счетами

### Основные возможности:
- **Non-atomic**: каждая запись фиксируется отдельно (частичная запись возможна)
- **Atomic**: обе записи в одной транзакции с откатом при ошибке
- **Report**: текущие балансы счетов

### Архитектура:
```
Transfer request → TransferEngine → ConnectionProvider → read ×2 → write ×2 → commit/rollback
```
    """,
    version="1.0.0",
    lifespan=lifespan,
)


def _to_response(outcome: TransferOutcome) -> JSONResponse:
    body = TransferResponse(
        success=outcome.succeeded,
        status=outcome.status.value,
        atomic=outcome.atomic,
        amount=outcome.amount,
        source_balance=outcome.source_balance,
        destination_balance=outcome.destination_balance,
        error=outcome.error,
        rollback_failed=outcome.rollback_failed,
    )
    return JSONResponse(
        status_code=_OUTCOME_HTTP_STATUS[outcome.status],
        content=body.model_dump(),
    )


# =============================================================================
# TRANSFER ENDPOINTS
# =============================================================================

@app.post(
    "/transfers/non-atomic",
    response_model=TransferResponse,
    tags=["Transfer"],
    summary="Перевод без транзакции",
    responses={
        409: {"model": TransferResponse, "description": "Partial write"},
        503: {"model": TransferResponse, "description": "Nothing written"},
    },
)
def transfer_non_atomic(request: TransferRequest) -> JSONResponse:
    """
    Перевод, где списание и зачисление фиксируются независимо.

    Если зачисление не удалось, списание остаётся в БД (status = partial).
    """
    return _to_response(engine.transfer_without_transaction(request.amount))


@app.post(
    "/transfers/atomic",
    response_model=TransferResponse,
    tags=["Transfer"],
    summary="Перевод с транзакцией",
    responses={
        409: {"model": TransferResponse, "description": "Rolled back"},
        503: {"model": TransferResponse, "description": "Transaction not opened"},
    },
)
def transfer_atomic(request: TransferRequest) -> JSONResponse:
    """
    Перевод в одной транзакции: оба баланса меняются вместе или не меняются.
    """
    return _to_response(engine.transfer_with_transaction(request.amount))


# =============================================================================
# ACCOUNTS ENDPOINTS
# =============================================================================

@app.get(
    "/accounts",
    response_model=AccountsResponse,
    tags=["Accounts"],
    summary="Балансы счетов",
    responses={
        503: {"model": ErrorResponse, "description": "Database unavailable"},
        500: {"model": ErrorResponse, "description": "Query failed"},
    },
)
def list_accounts() -> AccountsResponse:
    """
    Отчёт по всем счетам в порядке id.

    Returns:
        AccountsResponse: строки таблицы, сумма балансов и текстовый отчёт.
    """
    try:
        rows = report.fetch_accounts()
    except DatabaseConnectionError as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=str(e),
        )
    except LedgerError as e:
        logger.error(f"Ошибка отчёта по счетам: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Report failed: {str(e)}",
        )

    return AccountsResponse(
        accounts=[AccountResponse(id=row.id, balance=row.balance) for row in rows],
        total=sum(row.balance for row in rows),
        report=format_report(rows),
    )


@app.post(
    "/accounts/reset",
    response_model=AccountsResponse,
    tags=["Accounts"],
    summary="Сброс балансов",
)
def reset_accounts() -> AccountsResponse:
    """Возвращает счета к начальным балансам из настроек."""
    try:
        database.reset_balances()
    except LedgerError as e:
        logger.error(f"Ошибка сброса балансов: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Reset failed: {str(e)}",
        )
    return list_accounts()


# =============================================================================
# HEALTH ENDPOINT
# =============================================================================

@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["Health"],
    summary="Проверка состояния сервиса",
)
def health_check() -> HealthResponse:
    """
    Проверка работоспособности сервиса (Health Check).

    Returns:
        HealthResponse: статус ('healthy' или 'degraded') и доступность БД.
    """
    reachable = True
    try:
        with guarded_connection(report.provider):
            pass
    except DatabaseConnectionError:
        reachable = False

    return HealthResponse(
        status="healthy" if reachable else "degraded",
        database_reachable=reachable,
        database_path=str(report.provider.db_path),
        timestamp=datetime.now().isoformat(),
    )
