"""Investor profit and status calculation."""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal

from loan_tracker.config import EngineConfig
from loan_tracker.models.enums import InvestmentType, InvestorStatus
from loan_tracker.models.investor import Investor
from loan_tracker.models.metrics import ZERO, InvestorMetrics

logger = logging.getLogger(__name__)

HUNDRED = Decimal("100")


def months_completed(start: date | None, as_of: date) -> int:
    """Whole calendar months from ``start`` to ``as_of``.

    The running month only counts once ``as_of`` reaches the start's day of
    month. Unknown start dates count as zero months.
    """
    if start is None:
        return 0
    months = (as_of.year - start.year) * 12 + (as_of.month - start.month)
    if as_of.day < start.day:
        months -= 1
    return max(0, months)


class InvestorCalculator:
    """Derive ``InvestorMetrics`` for an investor.

    Unlike InterestRate loans, profit is not walked period by period:
    principal withdrawals lower the monthly profit, and that monthly figure
    is multiplied by the flat count of completed months.
    """

    def __init__(self, config: EngineConfig | None = None) -> None:
        self.config = config or EngineConfig()

    def calculate(self, investor: Investor, as_of: date) -> InvestorMetrics:
        """Compute all metrics for ``investor`` as of ``as_of``."""
        principal_paid = sum((p.amount for p in investor.payments if p.is_principal), ZERO)
        profit_paid = sum((p.amount for p in investor.payments if not p.is_principal), ZERO)
        total_paid = principal_paid + profit_paid

        if investor.status == InvestorStatus.CLOSED:
            return InvestorMetrics(
                effective_investment=investor.investment_amount,
                monthly_profit=ZERO,
                accumulated_profit=max(ZERO, total_paid - investor.investment_amount),
                total_paid=total_paid,
                pending_profit=ZERO,
                missed_months=0,
                current_balance=ZERO,
                status=InvestorStatus.CLOSED,
            )

        effective = self.effective_investment(investor)
        monthly_profit = effective * (investor.profit_rate or ZERO) / HUNDRED
        months = months_completed(investor.start_date, as_of)
        accumulated = monthly_profit * months
        pending = accumulated - profit_paid
        outstanding = max(ZERO, pending)

        status = InvestorStatus.DELAYED if pending > self.config.epsilon else InvestorStatus.ON_TRACK
        logger.debug(
            "Investor %s: %d months, accumulated=%s pending=%s -> %s",
            investor.investor_id,
            months,
            accumulated,
            pending,
            status.value,
        )

        return InvestorMetrics(
            effective_investment=effective,
            monthly_profit=monthly_profit,
            accumulated_profit=accumulated,
            total_paid=total_paid,
            pending_profit=outstanding,
            missed_months=int(outstanding // monthly_profit) if monthly_profit > 0 else 0,
            current_balance=effective + outstanding,
            status=status,
        )

    def effective_investment(self, investor: Investor) -> Decimal:
        """Investment base profit accrues on.

        Only InterestRatePlan investments shrink with principal payouts.
        """
        if investor.investment_type != InvestmentType.INTEREST_RATE_PLAN:
            return investor.investment_amount
        principal_paid = sum((p.amount for p in investor.payments if p.is_principal), ZERO)
        return max(ZERO, investor.investment_amount - principal_paid)
