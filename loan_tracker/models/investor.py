"""Investor models."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from loan_tracker.models.enums import InvestmentType, InvestorPaymentType, InvestorStatus


@dataclass(frozen=True)
class InvestorPayment:
    """Payout made to an investor."""

    payment_id: str
    investor_id: str
    amount: Decimal
    payment_date: date | None
    payment_type: InvestorPaymentType | None = None  # None = legacy, counted as profit
    remarks: str = ""

    @property
    def is_principal(self) -> bool:
        return self.payment_type == InvestorPaymentType.PRINCIPAL


@dataclass
class Investor:
    """Capital taken from an investor."""

    investor_id: str
    name: str
    investment_type: InvestmentType
    investment_amount: Decimal
    profit_rate: Decimal = Decimal("0")  # Percent per month
    start_date: date | None = None
    status: InvestorStatus = InvestorStatus.ON_TRACK  # Only CLOSED is authoritative
    payments: list[InvestorPayment] = field(default_factory=list)
