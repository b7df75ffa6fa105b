"""Loan models."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from loan_tracker.models.enums import DurationUnit, LoanStatus, LoanType, TransactionType


@dataclass(frozen=True)
class Transaction:
    """A repayment recorded against one loan.

    Transactions are immutable; editing one produces a new record with the
    same ``transaction_id`` (see ``LedgerStore.update_transaction``).
    """

    transaction_id: str
    loan_id: str
    amount: Decimal
    payment_date: date | None  # None when the stored date was unparseable
    payment_type: TransactionType | None = None  # None = legacy, counted as interest

    @property
    def is_principal(self) -> bool:
        return self.payment_type == TransactionType.PRINCIPAL


@dataclass
class Loan:
    """Loan issued to a customer."""

    loan_id: str
    customer_name: str
    loan_type: LoanType
    loan_amount: Decimal  # Principal
    given_amount: Decimal = Decimal("0")  # Actually disbursed
    interest_rate: Decimal = Decimal("0")  # Percent per month (e.g. 2 for 2%)
    start_date: date | None = None
    duration_in_months: int | None = None
    duration_in_days: int | None = None
    duration_value: int | None = None
    duration_unit: DurationUnit | None = None
    phone: str = ""
    status: LoanStatus = LoanStatus.ACTIVE  # Stored copy; derived metrics win
    transactions: list[Transaction] = field(default_factory=list)

    @property
    def term_months(self) -> int | None:
        """Finance term in months."""
        if self.duration_in_months:
            return self.duration_in_months
        if self.duration_value and self.duration_unit in (None, DurationUnit.MONTHS):
            return self.duration_value
        return None

    @property
    def term_days(self) -> int | None:
        """Tender term in days."""
        if self.duration_in_days:
            return self.duration_in_days
        if not self.duration_value:
            return None
        if self.duration_unit in (None, DurationUnit.DAYS):
            return self.duration_value
        if self.duration_unit == DurationUnit.WEEKS:
            return self.duration_value * 7
        return None

    @property
    def collection_unit(self) -> DurationUnit:
        """Interest collection period for InterestRate loans."""
        return self.duration_unit or DurationUnit.MONTHS
