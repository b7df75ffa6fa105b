#!/usr/bin/env python3
"""Generate a synthetic lending book and print its dashboard figures.

Useful for eyeballing the calculation engine against a realistic mix of
loans and investors without a database or HTTP layer.
"""

import argparse
import json
import sys
from datetime import date
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from dateutil import parser as date_parser

from loan_tracker.config import LoanTrackerConfig
from loan_tracker.logging import get_logger, setup_logging
from loan_tracker.models import LoanStatus
from loan_tracker.scenarios import PortfolioScenario
from loan_tracker.serialization import to_dict_fast

logger = get_logger("portfolio_report")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Generate a sample lending book and report its totals"
    )
    parser.add_argument(
        "--loans",
        type=int,
        default=50,
        help="Number of loans to generate (default: 50)",
    )
    parser.add_argument(
        "--investors",
        type=int,
        default=10,
        help="Number of investors to generate (default: 10)",
    )
    parser.add_argument(
        "--on-time-rate",
        type=float,
        default=0.85,
        help="Probability that a due payment is made (default: 0.85)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=42,
        help="Random seed for reproducibility (default: 42)",
    )
    parser.add_argument(
        "--as-of",
        type=lambda s: date_parser.isoparse(s).date(),
        default=None,
        help="Reference date, YYYY-MM-DD (default: today)",
    )
    parser.add_argument(
        "--overdue",
        action="store_true",
        help="Also list overdue loans",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Run the report."""
    args = parse_args(argv)
    config = LoanTrackerConfig.from_env()
    setup_logging(config.log_level, config.log_format)

    as_of = args.as_of or date.today()
    scenario = PortfolioScenario(
        num_loans=args.loans,
        num_investors=args.investors,
        on_time_rate=args.on_time_rate,
        reference_date=as_of,
        seed=args.seed,
        config=config,
    )
    store = scenario.generate()

    print(json.dumps(scenario.get_portfolio_summary(as_of), indent=2))

    if args.overdue:
        overdue = store.loans_by_status(LoanStatus.OVERDUE, as_of)
        logger.info("%d overdue loans", len(overdue))
        for loan in overdue:
            metrics = to_dict_fast(store.loan_metrics(loan.loan_id, as_of))
            print(f"{loan.customer_name:30} {loan.loan_type.value:12} {json.dumps(metrics)}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
