"""
Single-writer queue in front of a ledger.

Writes are executed one at a time, in submission order, on a dedicated
worker thread. Callers get a Future back and are never blocked on the write
itself; failures surface through the Future.
"""

from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor

from paycapture.model.payment import ExpenseRecord
from paycapture.storage.ledger_store import LedgerStore, StorageError


class QueuedLedgerWriter:
    def __init__(self, store: LedgerStore):
        self.store = store
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="ledger-writer")

    def insert(self, record: ExpenseRecord) -> Future:
        return self._submit(self.store.insert, record)

    def update(self, record: ExpenseRecord) -> Future:
        return self._submit(self.store.update, record)

    def delete(self, record: ExpenseRecord) -> Future:
        return self._submit(self.store.delete, record)

    def _submit(self, operation, record: ExpenseRecord) -> Future:
        try:
            return self._executor.submit(operation, record)
        except RuntimeError as e:
            raise StorageError(f"Ledger writer is closed: {e}") from e

    def close(self, wait: bool = True) -> None:
        """Stop accepting writes; by default drain the queue first."""
        self._executor.shutdown(wait=wait)

    def __enter__(self) -> QueuedLedgerWriter:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


__all__ = ["QueuedLedgerWriter"]
