"""
Перевод средств между парой счетов.

Два пути с одинаковой арифметикой:
- transfer_without_transaction: каждый UPDATE фиксируется сразу. Если
  вторая запись падает, первая остаётся в БД и сумма балансов меняется.
- transfer_with_transaction: оба UPDATE внутри одной транзакции; любая
  ошибка чтения или записи откатывает обе записи.

Ни один путь не проверяет знак суммы и итоговых балансов: отрицательные
балансы допустимы.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from src.common import LedgerError, get_logger, settings
from src.database import ConnectionProvider, TransactionBoundary, guarded_connection

from .balances import read_balance, write_balance

logger = get_logger(__name__)


class TransferStatus(str, Enum):
    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"
    PARTIAL = "partial"
    FAILED = "failed"


@dataclass
class TransferOutcome:
    """Результат перевода, который видит вызывающий код."""

    status: TransferStatus
    amount: int
    atomic: bool
    source_balance: Optional[int] = None
    destination_balance: Optional[int] = None
    error: Optional[str] = None
    rollback_failed: bool = False

    @property
    def succeeded(self) -> bool:
        return self.status is TransferStatus.COMMITTED


class TransferEngine:
    """Перевод amount со счёта-источника на счёт-получатель."""

    def __init__(
        self,
        provider: Optional[ConnectionProvider] = None,
        source_id: Optional[int] = None,
        destination_id: Optional[int] = None,
    ):
        self.provider = provider or ConnectionProvider()
        self.source_id = source_id if source_id is not None else settings.source_account_id
        self.destination_id = (
            destination_id if destination_id is not None else settings.destination_account_id
        )

    def _compute_balances(self, conn, amount: int) -> Tuple[int, int]:
        new_source = read_balance(conn, self.source_id) - amount
        new_destination = read_balance(conn, self.destination_id) + amount
        return new_source, new_destination

    def transfer_without_transaction(self, amount: int) -> TransferOutcome:
        """
        Перевод без транзакции: две независимо зафиксированные записи.

        Returns:
            TransferOutcome: COMMITTED, FAILED (ничего не записано) или
            PARTIAL (списание зафиксировано, зачисление потеряно).
        """
        outcome = TransferOutcome(status=TransferStatus.FAILED, amount=amount, atomic=False)
        debited = False

        try:
            with guarded_connection(self.provider) as conn:
                new_source, new_destination = self._compute_balances(conn, amount)
                outcome.source_balance = new_source
                outcome.destination_balance = new_destination

                write_balance(conn, self.source_id, new_source)
                debited = True
                write_balance(conn, self.destination_id, new_destination)
        except LedgerError as e:
            outcome.error = str(e)
            if debited:
                outcome.status = TransferStatus.PARTIAL
                logger.error(
                    f"Перевод без транзакции прерван после списания: "
                    f"{amount} списано со счёта {self.source_id} и не зачислено"
                )
            else:
                logger.error(f"Перевод без транзакции не выполнен: {e}")
            return outcome

        outcome.status = TransferStatus.COMMITTED
        logger.info(
            f"Перевод {amount} без транзакции выполнен: "
            f"{self.source_id}={outcome.source_balance}, "
            f"{self.destination_id}={outcome.destination_balance}"
        )
        return outcome

    def transfer_with_transaction(self, amount: int) -> TransferOutcome:
        """
        Перевод в одной транзакции: обе записи или ни одной.

        Returns:
            TransferOutcome: COMMITTED, ROLLED_BACK (ошибка внутри транзакции)
            или FAILED (транзакция не открылась).
        """
        outcome = TransferOutcome(status=TransferStatus.FAILED, amount=amount, atomic=True)
        boundary = None

        try:
            with guarded_connection(self.provider) as conn:
                boundary = TransactionBoundary(conn)
                with boundary:
                    new_source, new_destination = self._compute_balances(conn, amount)
                    outcome.source_balance = new_source
                    outcome.destination_balance = new_destination

                    write_balance(conn, self.source_id, new_source)
                    write_balance(conn, self.destination_id, new_destination)
        except LedgerError as e:
            outcome.error = str(e)
            if boundary is not None and boundary.rollback_failed:
                outcome.rollback_failed = True
            elif boundary is not None and boundary.opened:
                outcome.status = TransferStatus.ROLLED_BACK
            logger.error(f"Перевод с транзакцией не выполнен ({outcome.status.value}): {e}")
            return outcome

        outcome.status = TransferStatus.COMMITTED
        logger.info(
            f"Перевод {amount} с транзакцией зафиксирован: "
            f"{self.source_id}={outcome.source_balance}, "
            f"{self.destination_id}={outcome.destination_balance}"
        )
        return outcome
