"""Dashboard totals over loans and investors."""

from __future__ import annotations

from datetime import date
from typing import Callable, Iterable

from loan_tracker.engine.investors import InvestorCalculator
from loan_tracker.engine.loans import LoanCalculator
from loan_tracker.models.enums import InvestmentType, LoanType
from loan_tracker.models.investor import Investor
from loan_tracker.models.loan import Loan
from loan_tracker.models.metrics import (
    ZERO,
    InvestorMetrics,
    InvestorSummary,
    LoanMetrics,
    LoanSummary,
)

LoanMetricsFn = Callable[[Loan, date], LoanMetrics]
InvestorMetricsFn = Callable[[Investor, date], InvestorMetrics]


class SummaryAggregator:
    """Fold per-entity metrics into dashboard totals.

    Parameters
    ----------
    loan_metrics : LoanMetricsFn | None
        Function computing one loan's metrics. Defaults to
        ``LoanCalculator().calculate``; the ledger store passes its cached
        variant.
    investor_metrics : InvestorMetricsFn | None
        Same for investors.
    """

    def __init__(
        self,
        loan_metrics: LoanMetricsFn | None = None,
        investor_metrics: InvestorMetricsFn | None = None,
    ) -> None:
        self._loan_metrics = loan_metrics or LoanCalculator().calculate
        self._investor_metrics = investor_metrics or InvestorCalculator().calculate

    def summarize_loans(self, loans: Iterable[Loan], as_of: date) -> LoanSummary:
        """Totals for the loans dashboard cards.

        Total pending covers Finance and Tender balances only. An
        InterestRate loan's balance is its outstanding principal, which is
        not yet due, so it stays out of this card.
        """
        summary = LoanSummary()
        for loan in loans:
            self._add_loan(
                summary,
                loan,
                self._loan_metrics(loan, as_of),
                include_pending=loan.loan_type != LoanType.INTEREST_RATE,
            )
        return summary

    def summarize_loans_by_type(self, loans: Iterable[Loan], as_of: date) -> dict[LoanType, LoanSummary]:
        """Per-type totals; every loan type has an entry, even when empty."""
        summaries = {loan_type: LoanSummary() for loan_type in LoanType}
        for loan in loans:
            self._add_loan(summaries[loan.loan_type], loan, self._loan_metrics(loan, as_of))
        return summaries

    def summarize_investors(self, investors: Iterable[Investor], as_of: date) -> InvestorSummary:
        """Totals for the investor dashboard cards.

        Pending profit per investor is accumulated profit minus everything
        paid out. InterestRatePlan investors are left out of the pending
        total: their profit is not a repayment obligation like the other
        plans'.
        """
        summary = InvestorSummary()
        for investor in investors:
            metrics = self._investor_metrics(investor, as_of)
            summary.total_investors += 1
            summary.total_investment += investor.investment_amount
            summary.total_paid_to_investors += metrics.total_paid
            summary.total_profit_earned += metrics.accumulated_profit
            if investor.investment_type != InvestmentType.INTEREST_RATE_PLAN:
                summary.total_pending_profit += max(ZERO, metrics.accumulated_profit - metrics.total_paid)
            summary.status_counts[metrics.status] = summary.status_counts.get(metrics.status, 0) + 1

        summary.overall_profit_loss = summary.total_paid_to_investors - summary.total_investment
        return summary

    @staticmethod
    def _add_loan(
        summary: LoanSummary,
        loan: Loan,
        metrics: LoanMetrics,
        include_pending: bool = True,
    ) -> None:
        summary.count += 1
        summary.total_principal += loan.loan_amount
        summary.total_given += loan.given_amount or ZERO
        summary.total_collected += metrics.amount_paid
        if include_pending:
            summary.total_pending += metrics.balance
        summary.total_profit += metrics.profit
        summary.total_interest += metrics.total_interest_accrued
        summary.status_counts[metrics.status] = summary.status_counts.get(metrics.status, 0) + 1
