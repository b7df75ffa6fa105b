"""Synthetic loan and investor generators."""

from loan_tracker.generators.base import BaseGenerator
from loan_tracker.generators.portfolio import InvestorGenerator, LoanGenerator

__all__ = ["BaseGenerator", "InvestorGenerator", "LoanGenerator"]
