import sqlite3
from pathlib import Path

import pytest

from src.database import ConnectionProvider, LedgerDatabase
from src.ledger import LedgerReport, TransferEngine


@pytest.fixture
def db_path(tmp_path) -> Path:
    return tmp_path / "bank.sqlite"


@pytest.fixture
def ledger_db(db_path) -> LedgerDatabase:
    """Хранилище с начальными балансами {1: 1000, 2: 500}."""
    return LedgerDatabase(db_path=db_path, initial_balances={1: 1000, 2: 500})


@pytest.fixture
def provider(ledger_db) -> ConnectionProvider:
    return ledger_db.provider


@pytest.fixture
def engine(provider) -> TransferEngine:
    return TransferEngine(provider, source_id=1, destination_id=2)


@pytest.fixture
def report(provider) -> LedgerReport:
    return LedgerReport(provider)


@pytest.fixture
def fail_writes_to(ledger_db):
    """Возвращает функцию, после вызова которой любой UPDATE счёта прерывается триггером."""

    def _install(account_id: int) -> None:
        conn = sqlite3.connect(str(ledger_db.db_path))
        try:
            conn.execute(f"""
                CREATE TRIGGER fail_update_{account_id}
                BEFORE UPDATE ON accounts
                WHEN NEW.id = {account_id}
                BEGIN
                    SELECT RAISE(ABORT, 'injected write failure');
                END
            """)
            conn.commit()
        finally:
            conn.close()

    return _install
