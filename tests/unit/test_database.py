"""
Тесты слоя хранилища: провайдер соединений, guard-ы, граница транзакции, схема.
"""

import sqlite3

import pytest

from src.common import DatabaseConnectionError, StatementError
from src.database import (
    ConnectionProvider,
    LedgerDatabase,
    TransactionBoundary,
    guarded_connection,
    guarded_cursor,
    release,
)


class RecordingResource:
    """Ресурс, который записывает порядок закрытия."""

    def __init__(self, name, log, fail_on_close=False):
        self.name = name
        self.log = log
        self.fail_on_close = fail_on_close

    def close(self):
        self.log.append(self.name)
        if self.fail_on_close:
            raise sqlite3.OperationalError(f"cannot close {self.name}")


class RecordingConnection(RecordingResource):

    def __init__(self, log, cursor_fails=False, connection_fails=False):
        super().__init__("connection", log, fail_on_close=connection_fails)
        self.cursor_fails = cursor_fails

    def cursor(self):
        return RecordingResource("cursor", self.log, fail_on_close=self.cursor_fails)


class RecordingProvider:

    def __init__(self, conn):
        self.conn = conn

    def acquire(self, create=False):
        return self.conn


class FakeTransactionConnection:
    """Соединение, у которого commit/rollback можно заставить падать."""

    def __init__(self, commit_fails=False, rollback_fails=False):
        self.isolation_level = None
        self.commit_fails = commit_fails
        self.rollback_fails = rollback_fails
        self.calls = []

    def execute(self, sql):
        self.calls.append(sql)

    def commit(self):
        self.calls.append("COMMIT")
        if self.commit_fails:
            raise sqlite3.OperationalError("disk I/O error")

    def rollback(self):
        self.calls.append("ROLLBACK")
        if self.rollback_fails:
            raise sqlite3.OperationalError("cannot rollback")


class TestConnectionProvider:

    def test_acquire_opens_in_autocommit_mode(self, provider):
        conn = provider.acquire()
        try:
            assert conn.isolation_level is None
            assert conn.in_transaction is False
        finally:
            conn.close()

    def test_missing_store_raises_connection_error(self, tmp_path):
        provider = ConnectionProvider(tmp_path / "missing.sqlite")

        with pytest.raises(DatabaseConnectionError):
            provider.acquire()

        assert not (tmp_path / "missing.sqlite").exists()

    def test_invalid_location_raises_connection_error(self, tmp_path):
        provider = ConnectionProvider(tmp_path / "no_such_dir" / "bank.sqlite")

        with pytest.raises(DatabaseConnectionError):
            provider.acquire(create=True)


class TestResourceGuards:

    def test_cursor_released_before_connection(self):
        log = []
        provider = RecordingProvider(RecordingConnection(log))

        with guarded_connection(provider) as conn:
            with guarded_cursor(conn):
                pass

        assert log == ["cursor", "connection"]

    def test_resources_released_on_error(self):
        log = []
        provider = RecordingProvider(RecordingConnection(log))

        with pytest.raises(RuntimeError, match="boom"):
            with guarded_connection(provider) as conn:
                with guarded_cursor(conn):
                    raise RuntimeError("boom")

        assert log == ["cursor", "connection"]

    def test_release_failure_does_not_mask_original_error(self):
        log = []
        provider = RecordingProvider(
            RecordingConnection(log, cursor_fails=True, connection_fails=True)
        )

        with pytest.raises(RuntimeError, match="boom"):
            with guarded_connection(provider) as conn:
                with guarded_cursor(conn):
                    raise RuntimeError("boom")

        assert log == ["cursor", "connection"]

    def test_release_failure_is_not_raised(self):
        log = []
        release(RecordingResource("cursor", log, fail_on_close=True), "cursor")
        assert log == ["cursor"]

    def test_release_swallows_non_driver_errors(self):
        class BrokenHandle:
            def close(self):
                raise RuntimeError("handle already detached")

        release(BrokenHandle(), "connection")

    def test_release_ignores_missing_resource(self):
        release(None, "cursor")


class TestTransactionBoundary:

    def test_commit_on_success(self, provider, ledger_db):
        with guarded_connection(provider) as conn:
            with TransactionBoundary(conn) as boundary:
                conn.execute("UPDATE accounts SET balance = 0 WHERE id = 1")
            assert boundary.opened is True
            assert conn.in_transaction is False

        assert ledger_db.get_balances()[1] == 0

    def test_rollback_on_error(self, provider, ledger_db):
        with pytest.raises(RuntimeError):
            with guarded_connection(provider) as conn:
                with TransactionBoundary(conn):
                    conn.execute("UPDATE accounts SET balance = 0 WHERE id = 1")
                    raise RuntimeError("boom")

        assert ledger_db.get_balances() == {1: 1000, 2: 500}

    def test_autocommit_restored_after_rollback(self, provider):
        with guarded_connection(provider) as conn:
            with pytest.raises(RuntimeError):
                with TransactionBoundary(conn):
                    raise RuntimeError("boom")

            assert conn.isolation_level is None
            assert conn.in_transaction is False

    def test_rollback_failure_is_reported_and_original_error_kept(self):
        conn = FakeTransactionConnection(rollback_fails=True)

        with pytest.raises(StatementError, match="write failed"):
            with TransactionBoundary(conn) as boundary:
                raise StatementError("write failed")

        assert boundary.rollback_failed is True
        assert conn.calls == ["BEGIN", "ROLLBACK"]

    def test_commit_failure_rolls_back(self):
        conn = FakeTransactionConnection(commit_fails=True)

        with pytest.raises(StatementError, match="COMMIT failed"):
            with TransactionBoundary(conn):
                pass

        assert conn.calls == ["BEGIN", "COMMIT", "ROLLBACK"]


class TestLedgerDatabase:

    def test_seeds_initial_balances(self, ledger_db):
        assert ledger_db.get_balances() == {1: 1000, 2: 500}
        assert ledger_db.total_balance() == 1500

    def test_reopen_does_not_reset_balances(self, ledger_db, db_path):
        ledger_db.set_balances({1: 10, 2: 20})

        reopened = LedgerDatabase(db_path=db_path, initial_balances={1: 1000, 2: 500})

        assert reopened.get_balances() == {1: 10, 2: 20}

    def test_reset_balances(self, ledger_db):
        ledger_db.set_balances({1: -5, 2: 7})
        ledger_db.reset_balances()

        assert ledger_db.get_balances() == {1: 1000, 2: 500}

    def test_creates_parent_directory(self, tmp_path):
        db_path = tmp_path / "nested" / "bank.sqlite"

        LedgerDatabase(db_path=db_path, initial_balances={1: 1, 2: 2})

        assert db_path.exists()
