"""loan-tracker: balances, accrued interest and status for a lending book."""

__version__ = "0.1.0"
