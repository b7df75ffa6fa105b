"""Enumeration types for loans, investors and their payments."""

from enum import Enum


class LoanType(str, Enum):
    FINANCE = "Finance"
    TENDER = "Tender"
    INTEREST_RATE = "InterestRate"


class DurationUnit(str, Enum):
    DAYS = "Days"
    WEEKS = "Weeks"
    MONTHS = "Months"


class LoanStatus(str, Enum):
    ACTIVE = "Active"
    COMPLETED = "Completed"
    OVERDUE = "Overdue"


class TransactionType(str, Enum):
    """Loan repayment kind. Untyped (legacy) transactions carry ``None``."""

    INTEREST = "interest"
    PRINCIPAL = "principal"


class InvestmentType(str, Enum):
    FINANCE = "Finance"
    TENDER = "Tender"
    INTEREST_RATE_PLAN = "InterestRatePlan"


class InvestorStatus(str, Enum):
    ON_TRACK = "On Track"
    DELAYED = "Delayed"
    CLOSED = "Closed"


class InvestorPaymentType(str, Enum):
    """Investor payout kind. Profit and Interest are synonyms."""

    PRINCIPAL = "Principal"
    PROFIT = "Profit"
    INTEREST = "Interest"
