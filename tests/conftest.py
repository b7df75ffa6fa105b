"""Pytest configuration and fixtures."""

from datetime import date
from decimal import Decimal

import pytest

from loan_tracker.models import (
    DurationUnit,
    InvestmentType,
    Investor,
    InvestorPayment,
    InvestorPaymentType,
    Loan,
    LoanType,
    Transaction,
    TransactionType,
)


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def as_of() -> date:
    """Reference "today": 11 whole months after 2024-01-01."""
    return date(2024, 12, 1)


def make_txn(
    loan_id: str,
    amount: str | int,
    payment_date: date | None,
    payment_type: TransactionType | None = TransactionType.INTEREST,
    txn_id: str | None = None,
) -> Transaction:
    """Build a transaction with a readable id."""
    return Transaction(
        transaction_id=txn_id or f"{loan_id}-{payment_date}-{amount}-{payment_type}",
        loan_id=loan_id,
        amount=Decimal(str(amount)),
        payment_date=payment_date,
        payment_type=payment_type,
    )


def make_payment(
    investor_id: str,
    amount: str | int,
    payment_date: date | None,
    payment_type: InvestorPaymentType | None = InvestorPaymentType.PROFIT,
    payment_id: str | None = None,
) -> InvestorPayment:
    """Build an investor payment with a readable id."""
    return InvestorPayment(
        payment_id=payment_id or f"{investor_id}-{payment_date}-{amount}-{payment_type}",
        investor_id=investor_id,
        amount=Decimal(str(amount)),
        payment_date=payment_date,
        payment_type=payment_type,
    )


@pytest.fixture
def finance_loan() -> Loan:
    """100000 at 2%/month over 12 months, fully disbursed."""
    return Loan(
        loan_id="loan-fin-001",
        customer_name="Ravi Kumar",
        phone="9876543210",
        loan_type=LoanType.FINANCE,
        loan_amount=Decimal("100000"),
        given_amount=Decimal("100000"),
        interest_rate=Decimal("2"),
        start_date=date(2024, 1, 1),
        duration_in_months=12,
    )


@pytest.fixture
def tender_loan() -> Loan:
    """50000 tender, 40000 disbursed, 60 day term."""
    return Loan(
        loan_id="loan-ten-001",
        customer_name="Lakshmi Devi",
        phone="9123456780",
        loan_type=LoanType.TENDER,
        loan_amount=Decimal("50000"),
        given_amount=Decimal("40000"),
        start_date=date(2024, 1, 1),
        duration_in_days=60,
    )


@pytest.fixture
def interest_loan() -> Loan:
    """600000 at 1%/month collected monthly from 2024-01-01, 24 month term."""
    return Loan(
        loan_id="loan-int-001",
        customer_name="Suresh Reddy",
        phone="9000000001",
        loan_type=LoanType.INTEREST_RATE,
        loan_amount=Decimal("600000"),
        given_amount=Decimal("600000"),
        interest_rate=Decimal("1"),
        start_date=date(2024, 1, 1),
        duration_value=24,
        duration_unit=DurationUnit.MONTHS,
    )


@pytest.fixture
def interest_payments_52000(interest_loan: Loan) -> list[Transaction]:
    """Eight full months of interest plus a 4000 part payment, one legacy."""
    payments = [
        make_txn(interest_loan.loan_id, 6000, date(2024, month, 10))
        for month in range(2, 9)
    ]
    payments.append(make_txn(interest_loan.loan_id, 6000, date(2024, 9, 10), None))
    payments.append(make_txn(interest_loan.loan_id, 4000, date(2024, 10, 10)))
    return payments


@pytest.fixture
def finance_investor() -> Investor:
    """100000 Finance investment at 2%/month from 2024-01-01."""
    return Investor(
        investor_id="inv-fin-001",
        name="Anil Sharma",
        investment_type=InvestmentType.FINANCE,
        investment_amount=Decimal("100000"),
        profit_rate=Decimal("2"),
        start_date=date(2024, 1, 1),
    )


@pytest.fixture
def plan_investor() -> Investor:
    """200000 InterestRatePlan investment at 1%/month from 2024-01-01."""
    return Investor(
        investor_id="inv-irp-001",
        name="Meena Iyer",
        investment_type=InvestmentType.INTEREST_RATE_PLAN,
        investment_amount=Decimal("200000"),
        profit_rate=Decimal("1"),
        start_date=date(2024, 1, 1),
    )


@pytest.fixture
def txn_factory():
    """Factory for loan transactions."""
    return make_txn


@pytest.fixture
def payment_factory():
    """Factory for investor payments."""
    return make_payment
