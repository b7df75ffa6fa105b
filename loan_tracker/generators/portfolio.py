"""Loan and investor generators with realistic repayment histories."""

from __future__ import annotations

import random
from datetime import date, timedelta
from decimal import Decimal
from typing import Iterator

from loan_tracker.engine.periods import PeriodWalker, add_months
from loan_tracker.generators.base import BaseGenerator, money
from loan_tracker.models import (
    DurationUnit,
    InvestmentType,
    Investor,
    InvestorPayment,
    InvestorPaymentType,
    InvestorStatus,
    Loan,
    LoanType,
    Transaction,
    TransactionType,
)


def _day_within(start: date, end: date) -> date:
    """Random day in ``[start, end)``."""
    span = max(1, (end - start).days)
    return start + timedelta(days=random.randrange(span))


class LoanGenerator(BaseGenerator):
    """Generate synthetic loans with transaction histories.

    Parameters
    ----------
    seed : int | None
        Random seed for reproducibility.
    on_time_rate : float
        Probability that a due installment or interest period gets paid.
    principal_prepay_rate : float
        Per-period probability of a partial principal payment on
        InterestRate loans.
    """

    # Monthly rates in percent
    INTEREST_RATES = {
        LoanType.FINANCE: (1, 1.5, 2, 2.5, 3),
        LoanType.TENDER: (0,),
        LoanType.INTEREST_RATE: (1, 1.5, 2, 3),
    }

    def __init__(
        self,
        seed: int | None = None,
        on_time_rate: float = 0.85,
        principal_prepay_rate: float = 0.05,
    ) -> None:
        super().__init__(seed)
        self.on_time_rate = on_time_rate
        self.principal_prepay_rate = principal_prepay_rate

    def generate(
        self,
        loan_type: LoanType | None = None,
        reference_date: date | None = None,
    ) -> Loan:
        """Generate a loan with payments dated up to ``reference_date``.

        Parameters
        ----------
        loan_type : LoanType | None
            Loan type; random when omitted.
        reference_date : date | None
            Last day payments may fall on (default: today).

        Returns
        -------
        Loan
            Generated loan.
        """
        reference_date = reference_date or date.today()
        loan_type = loan_type or random.choice(list(LoanType))
        start_date = reference_date - timedelta(days=random.randint(30, 540))

        loan = Loan(
            loan_id=self.fake.uuid4(),
            customer_name=self.fake.name(),
            phone=self.fake.phone_number(),
            loan_type=loan_type,
            loan_amount=Decimal(random.randint(10, 500) * 1000),
            interest_rate=Decimal(str(random.choice(self.INTEREST_RATES[loan_type]))),
            start_date=start_date,
        )

        if loan_type == LoanType.FINANCE:
            loan.duration_value = random.choice([6, 10, 12, 18, 24])
            loan.duration_unit = DurationUnit.MONTHS
            loan.given_amount = money(float(loan.loan_amount) * random.choice([0.9, 0.95, 1.0]))
            loan.transactions = list(self._finance_installments(loan, reference_date))
        elif loan_type == LoanType.TENDER:
            loan.duration_value = random.choice([30, 60, 90, 120])
            loan.duration_unit = DurationUnit.DAYS
            loan.given_amount = money(float(loan.loan_amount) * random.uniform(0.75, 0.95))
            loan.transactions = list(self._tender_repayments(loan, reference_date))
        else:
            loan.duration_unit = random.choices(
                [DurationUnit.MONTHS, DurationUnit.WEEKS, DurationUnit.DAYS], weights=[8, 1, 1]
            )[0]
            loan.duration_value = {
                DurationUnit.MONTHS: random.choice([12, 24, 36]),
                DurationUnit.WEEKS: random.choice([26, 52]),
                DurationUnit.DAYS: random.choice([180, 365]),
            }[loan.duration_unit]
            loan.given_amount = loan.loan_amount
            loan.transactions = list(self._interest_payments(loan, reference_date))

        return loan

    def generate_batch(self, count: int, reference_date: date | None = None) -> Iterator[Loan]:
        """Generate ``count`` loans of mixed types."""
        for _ in range(count):
            yield self.generate(reference_date=reference_date)

    def _transaction(self, loan: Loan, amount: Decimal, day: date, kind: TransactionType | None) -> Transaction:
        return Transaction(
            transaction_id=self.fake.uuid4(),
            loan_id=loan.loan_id,
            amount=amount,
            payment_date=day,
            payment_type=kind,
        )

    def _finance_installments(self, loan: Loan, reference_date: date) -> Iterator[Transaction]:
        """Equal monthly installments of principal plus flat interest."""
        months = loan.duration_value
        total = loan.loan_amount * (1 + loan.interest_rate / 100 * months)
        installment = money(total / months)
        for n in range(1, months + 1):
            due = add_months(loan.start_date, n)
            if due > reference_date:
                break
            if random.random() < self.on_time_rate:
                paid_on = due + timedelta(days=random.randint(-3, 5))
                yield self._transaction(loan, installment, min(paid_on, reference_date), None)

    def _tender_repayments(self, loan: Loan, reference_date: date) -> Iterator[Transaction]:
        """One to three lump repayments inside the tender term."""
        end = min(loan.start_date + timedelta(days=loan.duration_value), reference_date)
        if end <= loan.start_date or random.random() >= self.on_time_rate:
            return
        remaining = loan.loan_amount
        for _ in range(random.randint(1, 3)):
            amount = money(float(remaining) * random.uniform(0.3, 1.0))
            if amount <= 0:
                break
            remaining -= amount
            yield self._transaction(loan, amount, _day_within(loan.start_date, end), None)

    def _interest_payments(self, loan: Loan, reference_date: date) -> Iterator[Transaction]:
        """Per-period interest payments and occasional principal prepayments."""
        walker = PeriodWalker(loan.duration_unit)
        divisor = {DurationUnit.MONTHS: 1, DurationUnit.WEEKS: 4, DurationUnit.DAYS: 30}[loan.duration_unit]
        rate = loan.interest_rate / divisor
        principal = loan.loan_amount
        for period in walker.iter_periods(loan.start_date, reference_date):
            interest = money(principal * rate / 100)
            if interest > 0 and random.random() < self.on_time_rate:
                yield self._transaction(
                    loan,
                    interest,
                    _day_within(period.start, period.end),
                    random.choice([TransactionType.INTEREST, TransactionType.INTEREST, None]),
                )
            if principal > 0 and random.random() < self.principal_prepay_rate:
                amount = money(float(principal) * random.uniform(0.1, 0.3))
                principal -= amount
                yield self._transaction(
                    loan, amount, _day_within(period.start, period.end), TransactionType.PRINCIPAL
                )


class InvestorGenerator(BaseGenerator):
    """Generate synthetic investors with payout histories.

    Parameters
    ----------
    seed : int | None
        Random seed for reproducibility.
    on_time_rate : float
        Probability that a month's profit gets paid out.
    closed_rate : float
        Probability that an investor has been closed out manually.
    """

    PROFIT_RATES = (1, 1.5, 2)

    def __init__(
        self,
        seed: int | None = None,
        on_time_rate: float = 0.85,
        closed_rate: float = 0.05,
    ) -> None:
        super().__init__(seed)
        self.on_time_rate = on_time_rate
        self.closed_rate = closed_rate

    def generate(
        self,
        investment_type: InvestmentType | None = None,
        reference_date: date | None = None,
    ) -> Investor:
        """Generate an investor with payouts dated up to ``reference_date``."""
        reference_date = reference_date or date.today()
        investor = Investor(
            investor_id=self.fake.uuid4(),
            name=self.fake.name(),
            investment_type=investment_type or random.choice(list(InvestmentType)),
            investment_amount=Decimal(random.randint(50, 2000) * 1000),
            profit_rate=Decimal(str(random.choice(self.PROFIT_RATES))),
            start_date=reference_date - timedelta(days=random.randint(30, 720)),
        )
        investor.payments = list(self._payouts(investor, reference_date))
        if random.random() < self.closed_rate:
            investor.status = InvestorStatus.CLOSED
        return investor

    def generate_batch(self, count: int, reference_date: date | None = None) -> Iterator[Investor]:
        """Generate ``count`` investors of mixed plans."""
        for _ in range(count):
            yield self.generate(reference_date=reference_date)

    def _payout(self, investor: Investor, amount: Decimal, day: date, kind: InvestorPaymentType | None) -> InvestorPayment:
        return InvestorPayment(
            payment_id=self.fake.uuid4(),
            investor_id=investor.investor_id,
            amount=amount,
            payment_date=day,
            payment_type=kind,
        )

    def _payouts(self, investor: Investor, reference_date: date) -> Iterator[InvestorPayment]:
        base = investor.investment_amount
        walker = PeriodWalker(DurationUnit.MONTHS)
        for period in walker.iter_periods(investor.start_date, reference_date):
            if random.random() < self.on_time_rate:
                yield self._payout(
                    investor,
                    money(base * investor.profit_rate / 100),
                    min(_day_within(period.end, period.end + timedelta(days=5)), reference_date),
                    random.choice([InvestorPaymentType.PROFIT, InvestorPaymentType.INTEREST, None]),
                )
            if investor.investment_type == InvestmentType.INTEREST_RATE_PLAN and random.random() < 0.05:
                amount = money(float(base) * random.uniform(0.1, 0.25))
                base -= amount
                yield self._payout(investor, amount, period.end, InvestorPaymentType.PRINCIPAL)
