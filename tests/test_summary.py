"""Tests for SummaryAggregator."""

from datetime import date
from decimal import Decimal

import pytest

from loan_tracker.engine import SummaryAggregator
from loan_tracker.models import (
    InvestmentType,
    Investor,
    InvestorPaymentType,
    InvestorStatus,
    Loan,
    LoanStatus,
    LoanType,
)


@pytest.fixture
def aggregator() -> SummaryAggregator:
    return SummaryAggregator()


@pytest.fixture
def book(finance_loan: Loan, tender_loan: Loan, interest_loan: Loan, interest_payments_52000, txn_factory) -> list[Loan]:
    """One loan of each type as of 2024-12-01."""
    finance_loan.transactions = [txn_factory(finance_loan.loan_id, 10000, date(2024, 3, 1), None)]
    tender_loan.start_date = date(2024, 11, 1)
    tender_loan.transactions = [txn_factory(tender_loan.loan_id, 5000, date(2024, 11, 15), None)]
    interest_loan.transactions = interest_payments_52000
    return [finance_loan, tender_loan, interest_loan]


@pytest.fixture
def investors(finance_investor: Investor, plan_investor: Investor, payment_factory) -> list[Investor]:
    """A delayed Finance investor, an unpaid plan investor and a closed Tender one."""
    finance_investor.payments = [payment_factory(finance_investor.investor_id, 6000, date(2024, 4, 5))]
    closed = Investor(
        investor_id="inv-ten-001",
        name="Kiran Rao",
        investment_type=InvestmentType.TENDER,
        investment_amount=Decimal("50000"),
        profit_rate=Decimal("3"),
        start_date=date(2023, 6, 1),
        status=InvestorStatus.CLOSED,
        payments=[
            payment_factory("inv-ten-001", 50000, date(2024, 1, 1), InvestorPaymentType.PRINCIPAL),
            payment_factory("inv-ten-001", 10000, date(2024, 1, 1)),
        ],
    )
    return [finance_investor, plan_investor, closed]


class TestLoanSummary:
    """Tests for summarize_loans."""

    def test_totals(self, aggregator: SummaryAggregator, book: list[Loan], as_of: date) -> None:
        summary = aggregator.summarize_loans(book, as_of)

        assert summary.count == 3
        assert summary.total_principal == Decimal("750000")
        assert summary.total_given == Decimal("740000")
        assert summary.total_collected == Decimal("67000")
        assert summary.total_pending == Decimal("159000")
        assert summary.total_profit == Decimal("100000")
        assert summary.total_interest == Decimal("66000")

    def test_status_counts(self, aggregator: SummaryAggregator, book: list[Loan], as_of: date) -> None:
        summary = aggregator.summarize_loans(book, as_of)

        assert summary.status_counts == {LoanStatus.ACTIVE: 2, LoanStatus.OVERDUE: 1}

    def test_empty(self, aggregator: SummaryAggregator, as_of: date) -> None:
        summary = aggregator.summarize_loans([], as_of)

        assert summary.count == 0
        assert summary.total_pending == Decimal("0")
        assert summary.status_counts == {}

    def test_matches_calculator(self, aggregator: SummaryAggregator, book: list[Loan], as_of: date) -> None:
        """Totals are plain sums of per-loan metrics."""
        from loan_tracker.engine import LoanCalculator

        calculator = LoanCalculator()
        summary = aggregator.summarize_loans(book, as_of)

        assert summary.total_pending == sum(
            calculator.calculate(loan, as_of).balance for loan in book if loan.loan_type != LoanType.INTEREST_RATE
        )
        assert summary.total_interest == sum(calculator.calculate(loan, as_of).total_interest_accrued for loan in book)

    def test_interest_rate_principal_not_pending(
        self, aggregator: SummaryAggregator, interest_loan: Loan, interest_payments_52000, as_of: date
    ) -> None:
        """An InterestRate loan alone leaves the pending card at zero but reports its accrued interest."""
        interest_loan.transactions = interest_payments_52000
        summary = aggregator.summarize_loans([interest_loan], as_of)

        assert summary.total_pending == Decimal("0")
        assert summary.total_interest == Decimal("66000")
        assert summary.total_principal == Decimal("600000")


class TestLoanSummaryByType:
    """Tests for summarize_loans_by_type."""

    def test_split(self, aggregator: SummaryAggregator, book: list[Loan], as_of: date) -> None:
        by_type = aggregator.summarize_loans_by_type(book, as_of)

        assert by_type[LoanType.FINANCE].total_pending == Decimal("114000")
        assert by_type[LoanType.TENDER].total_pending == Decimal("45000")
        assert by_type[LoanType.INTEREST_RATE].total_pending == Decimal("600000")
        assert by_type[LoanType.INTEREST_RATE].total_interest == Decimal("66000")
        assert by_type[LoanType.FINANCE].total_interest == Decimal("0")

    def test_every_type_present(self, aggregator: SummaryAggregator, finance_loan: Loan, as_of: date) -> None:
        by_type = aggregator.summarize_loans_by_type([finance_loan], as_of)

        assert set(by_type) == set(LoanType)
        assert by_type[LoanType.TENDER].count == 0


class TestInvestorSummary:
    """Tests for summarize_investors."""

    def test_totals(self, aggregator: SummaryAggregator, investors: list[Investor]) -> None:
        summary = aggregator.summarize_investors(investors, date(2024, 6, 1))

        assert summary.total_investors == 3
        assert summary.total_investment == Decimal("350000")
        assert summary.total_profit_earned == Decimal("30000")
        assert summary.total_paid_to_investors == Decimal("66000")
        assert summary.overall_profit_loss == Decimal("-284000")

    def test_plan_investors_not_pending(self, aggregator: SummaryAggregator, investors: list[Investor]) -> None:
        """The unpaid plan investor adds profit earned but nothing pending."""
        summary = aggregator.summarize_investors(investors, date(2024, 6, 1))

        assert summary.total_pending_profit == Decimal("4000")

    def test_status_counts(self, aggregator: SummaryAggregator, investors: list[Investor]) -> None:
        summary = aggregator.summarize_investors(investors, date(2024, 6, 1))

        assert summary.status_counts == {InvestorStatus.DELAYED: 2, InvestorStatus.CLOSED: 1}

    def test_custom_metrics_function(self, finance_investor: Investor) -> None:
        """The aggregator folds whatever the metrics function returns."""
        from loan_tracker.engine import InvestorCalculator

        calls = []
        calculator = InvestorCalculator()

        def tracked(investor, as_of):
            calls.append(investor.investor_id)
            return calculator.calculate(investor, as_of)

        SummaryAggregator(investor_metrics=tracked).summarize_investors([finance_investor], date(2024, 6, 1))

        assert calls == [finance_investor.investor_id]
