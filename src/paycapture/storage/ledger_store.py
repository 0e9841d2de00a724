"""
Ledger store implementation using SQLite.

This module provides the persistent home of ExpenseRecord entries. Records
are created by confirmed capture sessions (or manual entry) and changed only
by explicit user edits.

Design:
- One row per record, keyed by the record's opaque id
- Amounts stored as text to preserve Decimal precision
- Timestamps stored as ISO strings so range queries compare lexically
- Every sqlite3 error is raised as StorageError

Privacy: the ledger is a local-only SQLite file. Never transmit records over
networks as they contain sensitive financial data.
"""

from __future__ import annotations

import logging
import sqlite3
from collections import defaultdict
from datetime import datetime
from decimal import Decimal
from pathlib import Path

from paycapture.model.payment import ExpenseRecord

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Raised when the ledger cannot complete a read or write."""


_COLUMNS = "id, amount, category, merchant, pay_method, occurred_at, remark"


class LedgerStore:
    """SQLite-backed ledger of expense records.

    Usage:
        store = LedgerStore("data/ledger.db")
        store.insert(record)
        records = store.query_by_range(start, end)
    """

    def __init__(self, db_path: str | Path):
        """Initialize ledger with SQLite database.

        Args:
            db_path: Path to SQLite database file. Will be created if doesn't exist.
        """
        self.db_path = Path(db_path)
        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageError(f"Cannot create ledger directory {self.db_path.parent}: {exc}") from exc
        self._init_schema()

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(self.db_path)

    def _init_schema(self) -> None:
        """Initialize database schema if not exists."""
        try:
            conn = self._connect()
        except sqlite3.Error as exc:
            raise StorageError(f"Cannot open ledger {self.db_path}: {exc}") from exc
        try:
            cursor = conn.cursor()
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS expense_records (
                    id TEXT PRIMARY KEY,
                    amount TEXT NOT NULL,
                    category TEXT NOT NULL,
                    merchant TEXT NOT NULL,
                    pay_method TEXT NOT NULL,
                    occurred_at TEXT NOT NULL,
                    remark TEXT NOT NULL DEFAULT ''
                )
            """)
            cursor.execute("""
                CREATE INDEX IF NOT EXISTS idx_records_occurred_at
                ON expense_records(occurred_at)
            """)
            conn.commit()
        except sqlite3.Error as exc:
            raise StorageError(f"Cannot initialize ledger {self.db_path}: {exc}") from exc
        finally:
            conn.close()

    def _execute(self, sql: str, params: tuple = ()) -> int:
        """Run a write statement and return the affected row count."""
        try:
            conn = self._connect()
            try:
                cursor = conn.execute(sql, params)
                conn.commit()
                return cursor.rowcount
            finally:
                conn.close()
        except sqlite3.Error as exc:
            raise StorageError(str(exc)) from exc

    def _query(self, sql: str, params: tuple = ()) -> list[tuple]:
        try:
            conn = self._connect()
            try:
                return conn.execute(sql, params).fetchall()
            finally:
                conn.close()
        except sqlite3.Error as exc:
            raise StorageError(str(exc)) from exc

    @staticmethod
    def _params(record: ExpenseRecord) -> tuple:
        return (
            str(record.amount),
            record.category,
            record.merchant,
            record.pay_method,
            record.occurred_at.isoformat(),
            record.remark,
        )

    @staticmethod
    def _row_to_record(row: tuple) -> ExpenseRecord:
        record_id, amount, category, merchant, pay_method, occurred_at, remark = row
        return ExpenseRecord(
            id=record_id,
            amount=Decimal(amount),
            category=category,
            merchant=merchant,
            pay_method=pay_method,
            occurred_at=datetime.fromisoformat(occurred_at),
            remark=remark,
        )

    def insert(self, record: ExpenseRecord) -> None:
        """Insert a new record.

        Raises:
            StorageError: If the id already exists or the write fails
        """
        self._execute(
            f"INSERT INTO expense_records ({_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?)",
            (record.id, *self._params(record)),
        )
        logger.debug("Inserted record %s", record.id)

    def update(self, record: ExpenseRecord) -> None:
        """Replace the stored fields of an existing record.

        Raises:
            StorageError: If no record has the given id
        """
        changed = self._execute(
            """
            UPDATE expense_records
            SET amount = ?, category = ?, merchant = ?, pay_method = ?, occurred_at = ?, remark = ?
            WHERE id = ?
            """,
            (*self._params(record), record.id),
        )
        if changed == 0:
            raise StorageError(f"Record not found: {record.id}")

    def delete(self, record: ExpenseRecord) -> None:
        """Delete a record; deleting an absent record is a no-op."""
        self._execute("DELETE FROM expense_records WHERE id = ?", (record.id,))

    def get(self, record_id: str) -> ExpenseRecord | None:
        rows = self._query(f"SELECT {_COLUMNS} FROM expense_records WHERE id = ?", (record_id,))
        return self._row_to_record(rows[0]) if rows else None

    def all_records(self) -> list[ExpenseRecord]:
        rows = self._query(f"SELECT {_COLUMNS} FROM expense_records ORDER BY occurred_at DESC")
        return [self._row_to_record(r) for r in rows]

    def query_by_range(self, start: datetime, end: datetime) -> list[ExpenseRecord]:
        """Records with start <= occurred_at <= end, newest first."""
        rows = self._query(
            f"""
            SELECT {_COLUMNS} FROM expense_records
            WHERE occurred_at BETWEEN ? AND ?
            ORDER BY occurred_at DESC
            """,
            (start.isoformat(), end.isoformat()),
        )
        return [self._row_to_record(r) for r in rows]

    def total(self, start: datetime, end: datetime) -> Decimal:
        """Signed sum of all record amounts in the range."""
        return sum((r.amount for r in self.query_by_range(start, end)), Decimal("0"))

    def category_totals(self, start: datetime, end: datetime) -> dict[str, Decimal]:
        """Spending per category in the range (absolute values of expenses only).

        Summed in Python rather than SQL so Decimal precision is kept.
        """
        totals: dict[str, Decimal] = defaultdict(Decimal)
        for record in self.query_by_range(start, end):
            if record.is_expense:
                totals[record.category] += abs(record.amount)
        return dict(totals)


__all__ = ["LedgerStore", "StorageError"]
