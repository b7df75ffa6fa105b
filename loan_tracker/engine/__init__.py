"""Pure calculation engine: balances, accruals, due dates and status."""

from loan_tracker.engine.cache import MetricsCache, investor_fingerprint, loan_fingerprint
from loan_tracker.engine.investors import InvestorCalculator, months_completed
from loan_tracker.engine.loans import LoanCalculator, PeriodAccrual, amount_paid
from loan_tracker.engine.periods import Period, PeriodWalker, add_months
from loan_tracker.engine.summary import SummaryAggregator

__all__ = [
    "InvestorCalculator",
    "LoanCalculator",
    "MetricsCache",
    "Period",
    "PeriodAccrual",
    "PeriodWalker",
    "SummaryAggregator",
    "add_months",
    "amount_paid",
    "investor_fingerprint",
    "loan_fingerprint",
    "months_completed",
]
