"""Custom exception hierarchy for loan-tracker."""


class LoanTrackerError(Exception):
    """Base exception for all loan-tracker errors."""


class EntityNotFoundError(LoanTrackerError):
    """Raised when a loan, investor, transaction or payment id is not in the ledger."""


class ReferentialIntegrityError(EntityNotFoundError):
    """Raised when a payment points at a loan or investor that does not exist."""


class InvalidEntityStateError(LoanTrackerError):
    """Raised when a ledger edit or calculation meets an inconsistent loan or investor.

    The store raises it for duplicate ids and updates to unknown fields; the
    loan calculator raises it for a loan type it has no handler for.
    """


class ConfigurationError(LoanTrackerError):
    """Raised when configuration is invalid or missing."""


class RecordError(LoanTrackerError):
    """Raised when an inbound record cannot be mapped onto a model."""
