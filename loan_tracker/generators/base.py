"""Base generator class for synthetic portfolio generators."""

from __future__ import annotations

import random
from abc import ABC
from decimal import ROUND_HALF_UP, Decimal

from faker import Faker

CENT = Decimal("0.01")


def money(value: float | Decimal) -> Decimal:
    """Round an amount to the currency minor unit."""
    return Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)


class BaseGenerator(ABC):
    """Base class for all data generators.

    Provides common initialization: Faker instance creation and
    seed-based reproducibility.

    Parameters
    ----------
    seed : int | None
        Random seed for reproducibility.
    locale : str
        Faker locale (default ``en_IN``).
    """

    def __init__(self, seed: int | None = None, locale: str = "en_IN") -> None:
        self.fake = Faker(locale)
        if seed is not None:
            self.fake.seed_instance(seed)
            random.seed(seed)
