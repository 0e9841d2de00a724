from .ledger_store import LedgerStore, StorageError
from .ledger_writer import QueuedLedgerWriter

__all__ = ["LedgerStore", "QueuedLedgerWriter", "StorageError"]
