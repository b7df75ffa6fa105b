"""Tests for the portfolio scenario and report script."""

import json
from datetime import date

import pytest

from loan_tracker.models import InvestmentType, LoanStatus, LoanType
from loan_tracker.scenarios import PortfolioScenario
from loan_tracker.store import LedgerStore

REFERENCE = date(2024, 12, 1)


@pytest.fixture
def scenario(seed: int) -> PortfolioScenario:
    return PortfolioScenario(num_loans=30, num_investors=8, reference_date=REFERENCE, seed=seed)


class TestPortfolioScenario:
    """Tests for PortfolioScenario."""

    def test_generate(self, scenario: PortfolioScenario) -> None:
        store = scenario.generate()

        assert isinstance(store, LedgerStore)
        assert len(store.loans) == 30
        assert len(store.investors) == 8
        assert store.summary()["transactions"] > 0

    def test_loan_mix(self, seed: int) -> None:
        scenario = PortfolioScenario(
            num_loans=10, num_investors=0, loan_mix={LoanType.TENDER: 1.0}, reference_date=REFERENCE, seed=seed
        )
        store = scenario.generate()

        assert {loan.loan_type for loan in store.loans.values()} == {LoanType.TENDER}

    def test_reproducible(self, seed: int) -> None:
        summaries = []
        for _ in range(2):
            scenario = PortfolioScenario(num_loans=5, num_investors=2, reference_date=REFERENCE, seed=seed)
            scenario.generate()
            summaries.append(scenario.get_portfolio_summary())

        assert summaries[0] == summaries[1]

    def test_portfolio_summary(self, scenario: PortfolioScenario) -> None:
        scenario.generate()
        summary = scenario.get_portfolio_summary()

        assert summary["as_of"] == "2024-12-01"
        assert summary["loans"]["count"] == 30
        assert sum(s["count"] for s in summary["loans_by_type"].values()) == 30
        assert set(summary["loans_by_type"]) == {t.value for t in LoanType}
        assert summary["investors"]["total_investors"] == 8
        assert set(summary["investor_plans"]) == {p.value for p in InvestmentType}
        assert set(summary["loans"]["status_counts"]) <= {s.value for s in LoanStatus}

    def test_summary_is_json_serializable(self, scenario: PortfolioScenario) -> None:
        scenario.generate()

        json.dumps(scenario.get_portfolio_summary())

    def test_late_payers_fall_overdue(self, seed: int) -> None:
        scenario = PortfolioScenario(
            num_loans=20,
            num_investors=0,
            loan_mix={LoanType.INTEREST_RATE: 1.0},
            on_time_rate=0.0,
            reference_date=REFERENCE,
            seed=seed,
        )
        store = scenario.generate()

        assert len(store.loans_by_status(LoanStatus.OVERDUE, REFERENCE)) == 20


class TestPortfolioReport:
    """Tests for the portfolio_report script."""

    def test_main_prints_summary(self, capsys: pytest.CaptureFixture[str]) -> None:
        from scripts.portfolio_report import main

        assert main(["--loans", "5", "--investors", "2", "--as-of", "2024-12-01"]) == 0

        out = capsys.readouterr().out
        assert '"as_of": "2024-12-01"' in out
        assert '"total_investors": 2' in out

    def test_overdue_listing(self, capsys: pytest.CaptureFixture[str]) -> None:
        from scripts.portfolio_report import main

        args = ["--loans", "20", "--investors", "0", "--on-time-rate", "0", "--as-of", "2024-12-01", "--overdue"]
        assert main(args) == 0

        assert '"status": "Overdue"' in capsys.readouterr().out
