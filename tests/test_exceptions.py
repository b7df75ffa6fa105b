"""Tests for custom exception hierarchy."""

import pytest

from loan_tracker.exceptions import (
    ConfigurationError,
    EntityNotFoundError,
    InvalidEntityStateError,
    LoanTrackerError,
    RecordError,
    ReferentialIntegrityError,
)
from loan_tracker.store import LedgerStore


class TestExceptionHierarchy:
    """Test exception inheritance chain."""

    def test_base_is_exception(self) -> None:
        assert isinstance(LoanTrackerError("test"), Exception)

    def test_entity_not_found_is_base(self) -> None:
        assert isinstance(EntityNotFoundError("test"), LoanTrackerError)

    def test_referential_integrity_is_entity_not_found(self) -> None:
        err = ReferentialIntegrityError("test")
        assert isinstance(err, EntityNotFoundError)
        assert isinstance(err, LoanTrackerError)

    def test_invalid_entity_state_is_base(self) -> None:
        assert isinstance(InvalidEntityStateError("test"), LoanTrackerError)

    def test_configuration_error_is_base(self) -> None:
        assert isinstance(ConfigurationError("test"), LoanTrackerError)

    def test_record_error_is_base(self) -> None:
        assert isinstance(RecordError("test"), LoanTrackerError)

    def test_exception_message(self) -> None:
        err = ReferentialIntegrityError("Loan loan-001 not found")
        assert str(err) == "Loan loan-001 not found"


class TestRaisedByLedger:
    """Errors the ledger store raises."""

    def test_missing_loan(self) -> None:
        with pytest.raises(EntityNotFoundError, match="loan-404"):
            LedgerStore().get_loan("loan-404")

    def test_duplicate_loan(self, finance_loan) -> None:
        store = LedgerStore()
        store.add_loan(finance_loan)

        with pytest.raises(InvalidEntityStateError, match="already exists"):
            store.add_loan(finance_loan)
