"""Derived metrics produced by the calculation engine.

These are value objects: the engine builds them fresh on every read and
nothing here is persisted back onto a Loan or Investor.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from loan_tracker.models.enums import InvestorStatus, LoanStatus

ZERO = Decimal("0")


@dataclass(frozen=True)
class LoanMetrics:
    """Outstanding position of a single loan as of a given date."""

    total_amount: Decimal  # Total liability (principal + interest)
    amount_paid: Decimal
    balance: Decimal  # Principal due for InterestRate loans
    profit: Decimal
    interest_amount: Decimal  # Interest due for the next period
    status: LoanStatus
    final_due_date: date | None = None
    next_due_date: date | None = None
    remaining_principal: Decimal = ZERO
    total_interest_accrued: Decimal = ZERO
    pending_interest: Decimal = ZERO
    closing_amount: Decimal = ZERO  # Amount that settles the loan today
    missed_periods: int = 0


@dataclass(frozen=True)
class InvestorMetrics:
    """Position of a single investor as of a given date."""

    effective_investment: Decimal
    monthly_profit: Decimal
    accumulated_profit: Decimal
    total_paid: Decimal
    pending_profit: Decimal
    missed_months: int
    current_balance: Decimal
    status: InvestorStatus


@dataclass
class LoanSummary:
    """Dashboard totals over a set of loans."""

    count: int = 0
    total_principal: Decimal = ZERO
    total_given: Decimal = ZERO
    total_collected: Decimal = ZERO
    total_pending: Decimal = ZERO
    total_profit: Decimal = ZERO
    total_interest: Decimal = ZERO  # Interest accrued to date
    status_counts: dict[LoanStatus, int] = field(default_factory=dict)


@dataclass
class InvestorSummary:
    """Dashboard totals over a set of investors."""

    total_investors: int = 0
    total_investment: Decimal = ZERO
    total_profit_earned: Decimal = ZERO
    total_paid_to_investors: Decimal = ZERO
    total_pending_profit: Decimal = ZERO
    overall_profit_loss: Decimal = ZERO
    status_counts: dict[InvestorStatus, int] = field(default_factory=dict)
