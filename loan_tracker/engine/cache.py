"""Content-addressed memoization of calculator results.

Each entity gets one slot holding the fingerprint of its inputs, the
``as_of`` date and the metrics. A slot is reused only when both match, so an
edited payment or a new day always recomputes.
"""

from __future__ import annotations

import hashlib
import threading
from collections import OrderedDict
from datetime import date
from typing import Callable, Generic, Iterable, TypeVar

from loan_tracker.models.investor import Investor
from loan_tracker.models.loan import Loan

E = TypeVar("E")
M = TypeVar("M")


def _digest(parts: Iterable[object]) -> str:
    h = hashlib.sha256()
    for part in parts:
        h.update(repr(part).encode("utf-8"))
        h.update(b"\x1f")
    return h.hexdigest()


def loan_fingerprint(loan: Loan) -> str:
    """Hash every loan field the calculator reads, payments in order."""
    return _digest(
        [
            loan.loan_type,
            loan.loan_amount,
            loan.given_amount,
            loan.interest_rate,
            loan.start_date,
            loan.duration_in_months,
            loan.duration_in_days,
            loan.duration_value,
            loan.duration_unit,
            *((t.amount, t.payment_date, t.payment_type) for t in loan.transactions),
        ]
    )


def investor_fingerprint(investor: Investor) -> str:
    """Hash every investor field the calculator reads, payments in order."""
    return _digest(
        [
            investor.investment_type,
            investor.investment_amount,
            investor.profit_rate,
            investor.start_date,
            investor.status,
            *((p.amount, p.payment_date, p.payment_type) for p in investor.payments),
        ]
    )


class MetricsCache(Generic[E, M]):
    """Bounded LRU cache in front of a calculator.

    Parameters
    ----------
    compute : Callable[[E, date], M]
        The calculator entry point, e.g. ``LoanCalculator().calculate``.
    entity_id : Callable[[E], str]
        Slot key for an entity.
    fingerprint : Callable[[E], str]
        Content hash of the entity's mutable inputs.
    max_entries : int
        Slots kept before the least recently used is evicted.
    """

    def __init__(
        self,
        compute: Callable[[E, date], M],
        entity_id: Callable[[E], str],
        fingerprint: Callable[[E], str],
        max_entries: int = 4096,
    ) -> None:
        self._compute = compute
        self._entity_id = entity_id
        self._fingerprint = fingerprint
        self._max_entries = max_entries
        self._slots: OrderedDict[str, tuple[str, date, M]] = OrderedDict()
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    @classmethod
    def for_loans(cls, compute: Callable[[Loan, date], M], max_entries: int = 4096) -> "MetricsCache[Loan, M]":
        return cls(compute, lambda loan: loan.loan_id, loan_fingerprint, max_entries)

    @classmethod
    def for_investors(
        cls, compute: Callable[[Investor, date], M], max_entries: int = 4096
    ) -> "MetricsCache[Investor, M]":
        return cls(compute, lambda investor: investor.investor_id, investor_fingerprint, max_entries)

    def get(self, entity: E, as_of: date) -> M:
        """Return cached metrics, recomputing when inputs or ``as_of`` changed."""
        key = self._entity_id(entity)
        fingerprint = self._fingerprint(entity)
        with self._lock:
            slot = self._slots.get(key)
            if slot is not None and slot[0] == fingerprint and slot[1] == as_of:
                self._slots.move_to_end(key)
                self.hits += 1
                return slot[2]
            self.misses += 1

        metrics = self._compute(entity, as_of)

        with self._lock:
            self._slots[key] = (fingerprint, as_of, metrics)
            self._slots.move_to_end(key)
            while len(self._slots) > self._max_entries:
                self._slots.popitem(last=False)
        return metrics

    def invalidate(self, entity_id: str) -> None:
        """Drop the slot for one entity."""
        with self._lock:
            self._slots.pop(entity_id, None)

    def clear(self) -> None:
        with self._lock:
            self._slots.clear()
            self.hits = 0
            self.misses = 0

    def __len__(self) -> int:
        return len(self._slots)
