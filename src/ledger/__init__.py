from .balances import read_balance, write_balance
from .report import AccountRow, LedgerReport, format_report
from .transfer import TransferEngine, TransferOutcome, TransferStatus

__all__ = [
    # Core
    "TransferEngine",
    "TransferOutcome",
    "TransferStatus",
    "read_balance",
    "write_balance",
    # Report
    "LedgerReport",
    "AccountRow",
    "format_report",
]
