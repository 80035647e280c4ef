"""In-memory ledger store."""

from atm_ledger.store.ledger import LedgerStore

__all__ = ["LedgerStore"]
