"""Loan balance, profit and status calculation."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, timedelta
from decimal import Decimal
from typing import Callable

from loan_tracker.config import EngineConfig
from loan_tracker.engine.periods import Period, PeriodWalker, add_months
from loan_tracker.exceptions import InvalidEntityStateError
from loan_tracker.models.enums import DurationUnit, LoanStatus, LoanType
from loan_tracker.models.loan import Loan
from loan_tracker.models.metrics import ZERO, LoanMetrics

logger = logging.getLogger(__name__)

HUNDRED = Decimal("100")


@dataclass(frozen=True)
class PeriodAccrual:
    """Interest accrued for one complete period of an InterestRate loan."""

    period: Period
    principal: Decimal  # Running principal the interest was charged on
    interest: Decimal
    principal_repaid: Decimal  # Principal payments dated inside the period


def amount_paid(loan: Loan) -> Decimal:
    """Sum of every transaction on the loan, whatever its type."""
    return sum((t.amount for t in loan.transactions), ZERO)


class LoanCalculator:
    """Derive ``LoanMetrics`` for any loan type.

    The calculator holds configuration only; every call is a pure function
    of the loan record and ``as_of``.

    Parameters
    ----------
    config : EngineConfig | None
        Epsilon and period divisors. Defaults to ``EngineConfig()``.
    """

    def __init__(self, config: EngineConfig | None = None) -> None:
        self.config = config or EngineConfig()
        self._handlers: dict[LoanType, Callable[[Loan, date, Decimal], LoanMetrics]] = {
            LoanType.FINANCE: self._finance,
            LoanType.TENDER: self._tender,
            LoanType.INTEREST_RATE: self._interest_rate,
        }

    def calculate(self, loan: Loan, as_of: date) -> LoanMetrics:
        """Compute all metrics for ``loan`` as of ``as_of``.

        Parameters
        ----------
        loan : Loan
            Loan with its full transaction history.
        as_of : date
            Reference "today".

        Returns
        -------
        LoanMetrics
            Freshly derived metrics.
        """
        try:
            handler = self._handlers[loan.loan_type]
        except KeyError:
            raise InvalidEntityStateError(
                f"Loan {loan.loan_id} has unsupported type {loan.loan_type!r}"
            ) from None
        return handler(loan, as_of, amount_paid(loan))

    def loan_status(self, loan: Loan, as_of: date) -> LoanStatus:
        """Derived status: Completed, then Overdue, then Active."""
        return self.calculate(loan, as_of).status

    def final_due_date(self, loan: Loan) -> date | None:
        """Date the loan term ends, or None without a start date or term."""
        start = loan.start_date
        if start is None:
            return None
        if loan.loan_type == LoanType.FINANCE:
            months = loan.term_months
            return add_months(start, months) if months else None
        if loan.loan_type == LoanType.TENDER:
            days = loan.term_days
            return start + timedelta(days=days) if days else None
        if not loan.duration_value or loan.duration_unit is None:
            return None
        return PeriodWalker(loan.duration_unit).boundary(start, loan.duration_value)

    def rate_per_period(self, loan: Loan) -> Decimal:
        """Monthly rate prorated to the loan's collection unit, in percent."""
        rate = loan.interest_rate or ZERO
        unit = loan.collection_unit
        if unit == DurationUnit.WEEKS:
            return rate / self.config.weeks_per_month
        if unit == DurationUnit.DAYS:
            return rate / self.config.days_per_month
        return rate

    def interest_schedule(self, loan: Loan, as_of: date) -> list[PeriodAccrual]:
        """Walk complete periods and accrue interest on the running principal.

        Within a period interest is charged first; principal payments dated
        inside the period reduce the principal from the next period on.
        Principal payments dated before the start (or undated) count before
        the first period.
        """
        start = loan.start_date
        if start is None:
            return []

        rate = self.rate_per_period(loan)
        principal_txns = [t for t in loan.transactions if t.is_principal]
        running = loan.loan_amount - sum(
            (t.amount for t in principal_txns if t.payment_date is None or t.payment_date < start),
            ZERO,
        )

        schedule = []
        for period in PeriodWalker(loan.collection_unit).iter_periods(start, as_of):
            principal = max(ZERO, running)
            repaid = sum(
                (
                    t.amount
                    for t in principal_txns
                    if t.payment_date is not None and period.contains(t.payment_date)
                ),
                ZERO,
            )
            schedule.append(
                PeriodAccrual(
                    period=period,
                    principal=principal,
                    interest=principal * rate / HUNDRED,
                    principal_repaid=repaid,
                )
            )
            running -= repaid
        return schedule

    def _flat_status(self, balance: Decimal, final_due: date | None, as_of: date) -> LoanStatus:
        if balance < self.config.epsilon:
            return LoanStatus.COMPLETED
        if final_due is not None and final_due < as_of:
            return LoanStatus.OVERDUE
        return LoanStatus.ACTIVE

    def _finance(self, loan: Loan, as_of: date, paid: Decimal) -> LoanMetrics:
        principal = loan.loan_amount
        months = loan.term_months or 0
        total = principal + principal * (loan.interest_rate or ZERO) / HUNDRED * months
        balance = max(ZERO, total - paid)
        final_due = self.final_due_date(loan)
        status = self._flat_status(balance, final_due, as_of)
        return LoanMetrics(
            total_amount=total,
            amount_paid=paid,
            balance=balance,
            profit=total - (loan.given_amount or ZERO),
            interest_amount=ZERO,
            status=status,
            final_due_date=final_due,
            next_due_date=None if status == LoanStatus.COMPLETED else final_due,
            closing_amount=balance,
        )

    def _tender(self, loan: Loan, as_of: date, paid: Decimal) -> LoanMetrics:
        total = loan.loan_amount
        balance = max(ZERO, total - paid)
        final_due = self.final_due_date(loan)
        status = self._flat_status(balance, final_due, as_of)
        return LoanMetrics(
            total_amount=total,
            amount_paid=paid,
            balance=balance,
            profit=loan.loan_amount - (loan.given_amount or ZERO),
            interest_amount=ZERO,
            status=status,
            final_due_date=final_due,
            next_due_date=None if status == LoanStatus.COMPLETED else final_due,
            remaining_principal=balance,
            closing_amount=balance,
        )

    def _interest_rate(self, loan: Loan, as_of: date, paid: Decimal) -> LoanMetrics:
        eps = self.config.epsilon
        principal_paid = sum((t.amount for t in loan.transactions if t.is_principal), ZERO)
        interest_paid = paid - principal_paid

        schedule = self.interest_schedule(loan, as_of)
        accrued = sum((a.interest for a in schedule), ZERO)

        remaining = max(ZERO, loan.loan_amount - principal_paid)
        pending = max(ZERO, accrued - interest_paid)
        interest_amount = remaining * self.rate_per_period(loan) / HUNDRED
        closing = remaining + pending
        total = loan.loan_amount + accrued
        final_due = self.final_due_date(loan)

        if closing < eps:
            status = LoanStatus.COMPLETED
        elif pending > eps or (final_due is not None and final_due < as_of):
            status = LoanStatus.OVERDUE
        else:
            status = LoanStatus.ACTIVE

        if status == LoanStatus.COMPLETED:
            next_due = None
        else:
            next_due = PeriodWalker(loan.collection_unit).next_due_date(loan.start_date, as_of)

        logger.debug(
            "Loan %s: %d periods, accrued=%s pending=%s remaining=%s -> %s",
            loan.loan_id,
            len(schedule),
            accrued,
            pending,
            remaining,
            status.value,
        )

        return LoanMetrics(
            total_amount=total,
            amount_paid=paid,
            balance=remaining,
            profit=max(ZERO, total - (loan.given_amount or loan.loan_amount)),
            interest_amount=interest_amount,
            status=status,
            final_due_date=final_due,
            next_due_date=next_due,
            remaining_principal=remaining,
            total_interest_accrued=accrued,
            pending_interest=pending,
            closing_amount=closing,
            missed_periods=int(pending // interest_amount) if interest_amount > 0 else 0,
        )
