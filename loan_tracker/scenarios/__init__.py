"""Scenarios for generating realistic lending books."""

from loan_tracker.scenarios.portfolio import PortfolioScenario

__all__ = ["PortfolioScenario"]
