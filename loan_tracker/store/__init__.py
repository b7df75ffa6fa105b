"""In-memory store for loans, investors and their payments."""

from loan_tracker.store.ledger import LedgerStore

__all__ = ["LedgerStore"]
