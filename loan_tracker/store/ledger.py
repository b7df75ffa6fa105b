"""In-memory ledger of loans, investors and their payments."""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any, Iterable

from loan_tracker.config import LoanTrackerConfig
from loan_tracker.engine import (
    InvestorCalculator,
    LoanCalculator,
    MetricsCache,
    SummaryAggregator,
)
from loan_tracker.exceptions import (
    EntityNotFoundError,
    InvalidEntityStateError,
    ReferentialIntegrityError,
)
from loan_tracker.models import (
    Investor,
    InvestorMetrics,
    InvestorPayment,
    InvestorSummary,
    Loan,
    LoanMetrics,
    LoanStatus,
    LoanSummary,
    LoanType,
    Transaction,
)

logger = logging.getLogger(__name__)

# Fields a caller may edit through update_loan / update_investor
LOAN_SCALAR_FIELDS = frozenset(
    f.name for f in dataclasses.fields(Loan) if f.name not in ("loan_id", "transactions")
)
INVESTOR_SCALAR_FIELDS = frozenset(
    f.name for f in dataclasses.fields(Investor) if f.name not in ("investor_id", "payments")
)


@dataclass
class LedgerStore:
    """Owns loans and investors and answers metric queries about them.

    Metrics are never stored: every read runs the calculators against the
    current payment set, optionally through a content-hash cache. ``as_of``
    defaults to today here and nowhere deeper.
    """

    config: LoanTrackerConfig = field(default_factory=LoanTrackerConfig)

    loans: dict[str, Loan] = field(default_factory=dict)
    investors: dict[str, Investor] = field(default_factory=dict)

    # Payment id -> owner id
    _transaction_owner: dict[str, str] = field(default_factory=dict)
    _payment_owner: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.loan_calculator = LoanCalculator(self.config.engine)
        self.investor_calculator = InvestorCalculator(self.config.engine)
        if self.config.cache.enabled:
            max_entries = self.config.cache.max_entries
            self._loan_cache = MetricsCache.for_loans(self.loan_calculator.calculate, max_entries)
            self._investor_cache = MetricsCache.for_investors(self.investor_calculator.calculate, max_entries)
            self.aggregator = SummaryAggregator(self._loan_cache.get, self._investor_cache.get)
        else:
            self._loan_cache = None
            self._investor_cache = None
            self.aggregator = SummaryAggregator(
                self.loan_calculator.calculate, self.investor_calculator.calculate
            )

    # Loans
    def add_loan(self, loan: Loan) -> None:
        """Add a loan together with any transactions it already carries."""
        if loan.loan_id in self.loans:
            raise InvalidEntityStateError(f"Loan {loan.loan_id} already exists")
        for txn in loan.transactions:
            self._check_new_transaction(txn, loan.loan_id)
        self.loans[loan.loan_id] = loan
        for txn in loan.transactions:
            self._transaction_owner[txn.transaction_id] = loan.loan_id
        logger.debug(
            "Added %s loan %s for %s",
            loan.loan_type.value,
            loan.loan_id,
            loan.customer_name,
            extra={"loan_id": loan.loan_id, "transactions": len(loan.transactions)},
        )

    def get_loan(self, loan_id: str) -> Loan:
        try:
            return self.loans[loan_id]
        except KeyError:
            raise EntityNotFoundError(f"Loan {loan_id} not found") from None

    def update_loan(self, loan_id: str, **changes: Any) -> Loan:
        """Edit scalar loan fields; transactions are managed separately."""
        unknown = set(changes) - LOAN_SCALAR_FIELDS
        if unknown:
            raise InvalidEntityStateError(f"Cannot update loan fields: {', '.join(sorted(unknown))}")
        loan = self.get_loan(loan_id)
        for name, value in changes.items():
            setattr(loan, name, value)
        logger.debug("Updated loan %s: %s", loan_id, ", ".join(sorted(changes)))
        return loan

    def remove_loans(self, loan_ids: Iterable[str]) -> int:
        """Delete loans and their transactions. Unknown ids are ignored."""
        removed = 0
        for loan_id in loan_ids:
            loan = self.loans.pop(loan_id, None)
            if loan is None:
                continue
            for txn in loan.transactions:
                self._transaction_owner.pop(txn.transaction_id, None)
            if self._loan_cache is not None:
                self._loan_cache.invalidate(loan_id)
            removed += 1
        logger.info("Removed %d loans", removed)
        return removed

    # Transactions
    def _check_new_transaction(self, txn: Transaction, loan_id: str) -> None:
        if txn.loan_id != loan_id:
            raise ReferentialIntegrityError(
                f"Transaction {txn.transaction_id} belongs to loan {txn.loan_id}, not {loan_id}"
            )
        if txn.transaction_id in self._transaction_owner:
            raise InvalidEntityStateError(f"Transaction {txn.transaction_id} already exists")

    def add_transaction(self, txn: Transaction) -> None:
        """Append a repayment to its loan."""
        if txn.loan_id not in self.loans:
            raise ReferentialIntegrityError(f"Loan {txn.loan_id} not found")
        self._check_new_transaction(txn, txn.loan_id)
        self.loans[txn.loan_id].transactions.append(txn)
        self._transaction_owner[txn.transaction_id] = txn.loan_id
        logger.debug("Added %s transaction %s to loan %s", txn.payment_type, txn.transaction_id, txn.loan_id)

    def _find_transaction(self, loan_id: str, transaction_id: str) -> tuple[Loan, int]:
        loan = self.get_loan(loan_id)
        for index, txn in enumerate(loan.transactions):
            if txn.transaction_id == transaction_id:
                return loan, index
        raise EntityNotFoundError(f"Transaction {transaction_id} not found on loan {loan_id}")

    def update_transaction(
        self,
        loan_id: str,
        transaction_id: str,
        amount: Decimal | None = None,
        payment_date: date | None = None,
    ) -> Transaction:
        """Replace a transaction's amount and/or date, keeping id and type."""
        loan, index = self._find_transaction(loan_id, transaction_id)
        current = loan.transactions[index]
        replacement = dataclasses.replace(
            current,
            amount=current.amount if amount is None else amount,
            payment_date=current.payment_date if payment_date is None else payment_date,
        )
        loan.transactions[index] = replacement
        return replacement

    def remove_transaction(self, loan_id: str, transaction_id: str) -> Transaction:
        loan, index = self._find_transaction(loan_id, transaction_id)
        self._transaction_owner.pop(transaction_id, None)
        return loan.transactions.pop(index)

    # Investors
    def add_investor(self, investor: Investor) -> None:
        """Add an investor together with any payments it already carries."""
        if investor.investor_id in self.investors:
            raise InvalidEntityStateError(f"Investor {investor.investor_id} already exists")
        for payment in investor.payments:
            self._check_new_payment(payment, investor.investor_id)
        self.investors[investor.investor_id] = investor
        for payment in investor.payments:
            self._payment_owner[payment.payment_id] = investor.investor_id
        logger.debug(
            "Added %s investor %s",
            investor.investment_type.value,
            investor.investor_id,
            extra={"investor_id": investor.investor_id, "payments": len(investor.payments)},
        )

    def get_investor(self, investor_id: str) -> Investor:
        try:
            return self.investors[investor_id]
        except KeyError:
            raise EntityNotFoundError(f"Investor {investor_id} not found") from None

    def update_investor(self, investor_id: str, **changes: Any) -> Investor:
        """Edit scalar investor fields, including closing the account."""
        unknown = set(changes) - INVESTOR_SCALAR_FIELDS
        if unknown:
            raise InvalidEntityStateError(f"Cannot update investor fields: {', '.join(sorted(unknown))}")
        investor = self.get_investor(investor_id)
        for name, value in changes.items():
            setattr(investor, name, value)
        return investor

    def remove_investors(self, investor_ids: Iterable[str]) -> int:
        removed = 0
        for investor_id in investor_ids:
            investor = self.investors.pop(investor_id, None)
            if investor is None:
                continue
            for payment in investor.payments:
                self._payment_owner.pop(payment.payment_id, None)
            if self._investor_cache is not None:
                self._investor_cache.invalidate(investor_id)
            removed += 1
        logger.info("Removed %d investors", removed)
        return removed

    # Investor payments
    def _check_new_payment(self, payment: InvestorPayment, investor_id: str) -> None:
        if payment.investor_id != investor_id:
            raise ReferentialIntegrityError(
                f"Payment {payment.payment_id} belongs to investor {payment.investor_id}, not {investor_id}"
            )
        if payment.payment_id in self._payment_owner:
            raise InvalidEntityStateError(f"Payment {payment.payment_id} already exists")

    def add_investor_payment(self, payment: InvestorPayment) -> None:
        """Append a payout to its investor."""
        if payment.investor_id not in self.investors:
            raise ReferentialIntegrityError(f"Investor {payment.investor_id} not found")
        self._check_new_payment(payment, payment.investor_id)
        self.investors[payment.investor_id].payments.append(payment)
        self._payment_owner[payment.payment_id] = payment.investor_id

    def _find_payment(self, investor_id: str, payment_id: str) -> tuple[Investor, int]:
        investor = self.get_investor(investor_id)
        for index, payment in enumerate(investor.payments):
            if payment.payment_id == payment_id:
                return investor, index
        raise EntityNotFoundError(f"Payment {payment_id} not found on investor {investor_id}")

    def update_investor_payment(
        self,
        investor_id: str,
        payment_id: str,
        amount: Decimal | None = None,
        payment_date: date | None = None,
    ) -> InvestorPayment:
        investor, index = self._find_payment(investor_id, payment_id)
        current = investor.payments[index]
        replacement = dataclasses.replace(
            current,
            amount=current.amount if amount is None else amount,
            payment_date=current.payment_date if payment_date is None else payment_date,
        )
        investor.payments[index] = replacement
        return replacement

    def remove_investor_payment(self, investor_id: str, payment_id: str) -> InvestorPayment:
        investor, index = self._find_payment(investor_id, payment_id)
        self._payment_owner.pop(payment_id, None)
        return investor.payments.pop(index)

    # Metrics
    def loan_metrics(self, loan_id: str, as_of: date | None = None) -> LoanMetrics:
        loan = self.get_loan(loan_id)
        as_of = as_of or date.today()
        if self._loan_cache is not None:
            return self._loan_cache.get(loan, as_of)
        return self.loan_calculator.calculate(loan, as_of)

    def investor_metrics(self, investor_id: str, as_of: date | None = None) -> InvestorMetrics:
        investor = self.get_investor(investor_id)
        as_of = as_of or date.today()
        if self._investor_cache is not None:
            return self._investor_cache.get(investor, as_of)
        return self.investor_calculator.calculate(investor, as_of)

    def loan_summary(self, as_of: date | None = None) -> LoanSummary:
        return self.aggregator.summarize_loans(self.loans.values(), as_of or date.today())

    def loan_summary_by_type(self, as_of: date | None = None) -> dict[LoanType, LoanSummary]:
        return self.aggregator.summarize_loans_by_type(self.loans.values(), as_of or date.today())

    def investor_summary(self, as_of: date | None = None) -> InvestorSummary:
        return self.aggregator.summarize_investors(self.investors.values(), as_of or date.today())

    # Queries
    def search_loans(self, term: str) -> list[Loan]:
        """Match customer name (case-insensitive) or phone substring."""
        needle = term.strip()
        if not needle:
            return list(self.loans.values())
        lowered = needle.lower()
        return [
            loan
            for loan in self.loans.values()
            if lowered in loan.customer_name.strip().lower() or (loan.phone and needle in loan.phone)
        ]

    def loans_by_status(self, status: LoanStatus, as_of: date | None = None) -> list[Loan]:
        """Loans whose derived status is ``status``."""
        as_of = as_of or date.today()
        return [loan for loan in self.loans.values() if self.loan_metrics(loan.loan_id, as_of).status == status]

    def summary(self) -> dict[str, int]:
        """Return summary counts of all entities."""
        return {
            "loans": len(self.loans),
            "transactions": len(self._transaction_owner),
            "investors": len(self.investors),
            "investor_payments": len(self._payment_owner),
        }
