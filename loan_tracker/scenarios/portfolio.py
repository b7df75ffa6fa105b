"""Lending book scenario: loans and investors with repayment behavior."""

from __future__ import annotations

import logging
import random
from datetime import date
from typing import Any

from loan_tracker.config import LoanTrackerConfig
from loan_tracker.generators import InvestorGenerator, LoanGenerator
from loan_tracker.models import InvestmentType, LoanType
from loan_tracker.serialization import serialize_value, to_dict_fast
from loan_tracker.store import LedgerStore

logger = logging.getLogger(__name__)


class PortfolioScenario:
    """Generate a lending book and fill a ``LedgerStore`` with it.

    This scenario creates:
    - Finance, Tender and InterestRate loans in the given mix
    - Repayment histories where a share of installments/periods is missed
    - Investors across all plans with monthly profit payouts
    """

    def __init__(
        self,
        num_loans: int = 100,
        num_investors: int = 20,
        loan_mix: dict[LoanType, float] | None = None,
        on_time_rate: float = 0.85,
        reference_date: date | None = None,
        seed: int | None = None,
        *,
        config: LoanTrackerConfig | None = None,
    ) -> None:
        """Initialize the portfolio scenario.

        Parameters
        ----------
        num_loans : int
            Number of loans to generate.
        num_investors : int
            Number of investors to generate.
        loan_mix : dict[LoanType, float] | None
            Relative weight of each loan type (default: equal).
        on_time_rate : float
            Probability that a due payment is made.
        reference_date : date | None
            "Today" for the generated histories (default: today).
        seed : int | None
            Random seed for reproducibility.
        config : LoanTrackerConfig | None
            Configuration for the store that receives the data.
        """
        self.num_loans = num_loans
        self.num_investors = num_investors
        self.loan_mix = loan_mix or {loan_type: 1.0 for loan_type in LoanType}
        self.reference_date = reference_date or date.today()
        self.seed = seed

        if seed is not None:
            random.seed(seed)

        self.store = LedgerStore(config=config or LoanTrackerConfig())
        self._loan_gen = LoanGenerator(seed=seed, on_time_rate=on_time_rate)
        self._investor_gen = InvestorGenerator(seed=seed, on_time_rate=on_time_rate)

    def generate(self) -> LedgerStore:
        """Generate all loans and investors.

        Returns
        -------
        LedgerStore
            Store containing all generated data.
        """
        logger.info(
            "Starting portfolio scenario: %d loans, %d investors as of %s",
            self.num_loans,
            self.num_investors,
            self.reference_date,
        )

        types = list(self.loan_mix)
        weights = [self.loan_mix[t] for t in types]
        for _ in range(self.num_loans):
            loan_type = random.choices(types, weights=weights)[0]
            self.store.add_loan(self._loan_gen.generate(loan_type, self.reference_date))

        for investor in self._investor_gen.generate_batch(self.num_investors, self.reference_date):
            self.store.add_investor(investor)

        logger.info("Generated %s", self.store.summary())
        return self.store

    def get_portfolio_summary(self, as_of: date | None = None) -> dict[str, Any]:
        """Get dashboard figures for the generated book.

        Returns
        -------
        dict[str, Any]
            Loan totals, per-type totals and investor totals as builtin
            values.
        """
        as_of = as_of or self.reference_date
        by_type = self.store.loan_summary_by_type(as_of)
        investors = list(self.store.investors.values())
        return {
            "as_of": as_of.isoformat(),
            "entities": self.store.summary(),
            "loans": to_dict_fast(self.store.loan_summary(as_of)),
            "loans_by_type": {t.value: to_dict_fast(s) for t, s in by_type.items()},
            "investors": to_dict_fast(self.store.investor_summary(as_of)),
            "investor_plans": serialize_value(
                {
                    plan: sum(1 for i in investors if i.investment_type == plan)
                    for plan in InvestmentType
                }
            ),
        }
