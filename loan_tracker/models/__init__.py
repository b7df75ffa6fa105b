"""Domain models for loans, investors and derived metrics."""

from loan_tracker.models.enums import (
    DurationUnit,
    InvestmentType,
    InvestorPaymentType,
    InvestorStatus,
    LoanStatus,
    LoanType,
    TransactionType,
)
from loan_tracker.models.investor import Investor, InvestorPayment
from loan_tracker.models.loan import Loan, Transaction
from loan_tracker.models.metrics import (
    InvestorMetrics,
    InvestorSummary,
    LoanMetrics,
    LoanSummary,
)

__all__ = [
    "DurationUnit",
    "InvestmentType",
    "Investor",
    "InvestorMetrics",
    "InvestorPayment",
    "InvestorPaymentType",
    "InvestorStatus",
    "InvestorSummary",
    "Loan",
    "LoanMetrics",
    "LoanStatus",
    "LoanSummary",
    "LoanType",
    "Transaction",
    "TransactionType",
]
