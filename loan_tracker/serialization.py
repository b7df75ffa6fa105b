"""Adapters between plain records and loan-tracker models.

Inbound records use the camelCase field names of the HTTP layer
(``loanAmount``, ``startDate``...) with snake_case payment fields
(``payment_date``, ``payment_type``). Business values degrade instead of
failing: missing numbers become zero and unparseable dates become ``None``.
Only structural problems, such as an unknown loan type, raise ``RecordError``.
"""

from __future__ import annotations

import logging
from dataclasses import fields
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Mapping, TypeVar

from dateutil import parser as date_parser

from loan_tracker.exceptions import RecordError
from loan_tracker.models import (
    DurationUnit,
    InvestmentType,
    Investor,
    InvestorPayment,
    InvestorPaymentType,
    InvestorStatus,
    Loan,
    LoanStatus,
    LoanType,
    Transaction,
    TransactionType,
)

logger = logging.getLogger(__name__)

EnumT = TypeVar("EnumT", bound=Enum)


def parse_decimal(value: Any, field_name: str = "value") -> Decimal:
    """Coerce a numeric field to Decimal; missing or garbage becomes 0."""
    if value is None or value == "":
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    try:
        # str() keeps floats like 0.1 from dragging binary noise along
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        logger.warning("Unparseable %s %r, using 0", field_name, value)
        return Decimal("0")


def parse_int(value: Any, field_name: str = "value") -> int | None:
    """Coerce a duration field to int; missing or garbage becomes None."""
    if value is None or value == "":
        return None
    number = parse_decimal(value, field_name)
    return int(number) if number else None


def parse_date(value: Any, field_name: str = "date") -> date | None:
    """Parse an ISO date or timestamp; anything unparseable becomes None."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date_parser.isoparse(str(value)).date()
    except (ValueError, OverflowError):
        logger.warning("Unparseable %s %r, date-dependent outputs will be empty", field_name, value)
        return None


def parse_enum(enum_cls: type[EnumT], value: Any, field_name: str) -> EnumT | None:
    """Map a tag onto ``enum_cls``; ``None`` stays ``None``."""
    if value is None or value == "":
        return None
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        raise RecordError(f"Unknown {field_name} {value!r}") from None


def _require_enum(enum_cls: type[EnumT], value: Any, field_name: str) -> EnumT:
    parsed = parse_enum(enum_cls, value, field_name)
    if parsed is None:
        raise RecordError(f"Missing {field_name}")
    return parsed


def transaction_from_record(record: Mapping[str, Any], loan_id: str | None = None) -> Transaction:
    """Build a Transaction from a payment record."""
    return Transaction(
        transaction_id=str(record.get("id", "")),
        loan_id=str(record.get("loan_id") or loan_id or ""),
        amount=parse_decimal(record.get("amount"), "amount"),
        payment_date=parse_date(record.get("payment_date"), "payment_date"),
        payment_type=parse_enum(TransactionType, record.get("payment_type"), "payment_type"),
    )


def loan_from_record(record: Mapping[str, Any]) -> Loan:
    """Build a Loan (with its transactions) from an HTTP-layer record."""
    loan_id = str(record.get("id", ""))
    return Loan(
        loan_id=loan_id,
        customer_name=record.get("customerName") or "",
        phone=record.get("phone") or "",
        loan_type=_require_enum(LoanType, record.get("loanType"), "loanType"),
        loan_amount=parse_decimal(record.get("loanAmount"), "loanAmount"),
        given_amount=parse_decimal(record.get("givenAmount"), "givenAmount"),
        interest_rate=parse_decimal(record.get("interestRate"), "interestRate"),
        start_date=parse_date(record.get("startDate"), "startDate"),
        duration_in_months=parse_int(record.get("durationInMonths"), "durationInMonths"),
        duration_in_days=parse_int(record.get("durationInDays"), "durationInDays"),
        duration_value=parse_int(record.get("durationValue"), "durationValue"),
        duration_unit=parse_enum(DurationUnit, record.get("durationUnit"), "durationUnit"),
        status=parse_enum(LoanStatus, record.get("status"), "status") or LoanStatus.ACTIVE,
        transactions=[
            transaction_from_record(t, loan_id) for t in record.get("transactions") or []
        ],
    )


def investor_payment_from_record(record: Mapping[str, Any], investor_id: str | None = None) -> InvestorPayment:
    """Build an InvestorPayment from a payment record."""
    return InvestorPayment(
        payment_id=str(record.get("id", "")),
        investor_id=str(record.get("investor_id") or investor_id or ""),
        amount=parse_decimal(record.get("amount"), "amount"),
        payment_date=parse_date(record.get("payment_date"), "payment_date"),
        payment_type=parse_enum(InvestorPaymentType, record.get("payment_type"), "payment_type"),
        remarks=record.get("remarks") or "",
    )


def investor_from_record(record: Mapping[str, Any]) -> Investor:
    """Build an Investor (with its payments) from an HTTP-layer record."""
    investor_id = str(record.get("id", ""))
    return Investor(
        investor_id=investor_id,
        name=record.get("name") or "",
        investment_type=_require_enum(InvestmentType, record.get("investmentType"), "investmentType"),
        investment_amount=parse_decimal(record.get("investmentAmount"), "investmentAmount"),
        profit_rate=parse_decimal(record.get("profitRate"), "profitRate"),
        start_date=parse_date(record.get("startDate"), "startDate"),
        status=parse_enum(InvestorStatus, record.get("status"), "status") or InvestorStatus.ON_TRACK,
        payments=[
            investor_payment_from_record(p, investor_id) for p in record.get("payments") or []
        ],
    )


def to_dict_fast(obj: Any) -> dict:
    """Convert a flat dataclass without the deep copy ``asdict`` makes.

    Nested dataclasses (a Loan's transactions) are left to
    ``serialize_value``, which only handles builtin containers, so use
    this for metrics objects rather than models.
    """
    return {f.name: serialize_value(getattr(obj, f.name)) for f in fields(obj)}


def serialize_value(value: Any) -> Any:
    """Serialize a value to builtin types."""
    if isinstance(value, Decimal):
        return str(value)
    elif isinstance(value, Enum):
        return value.value
    elif isinstance(value, datetime):
        return value.isoformat()
    elif isinstance(value, date):
        return value.isoformat()
    elif isinstance(value, dict):
        return {serialize_value(k): serialize_value(v) for k, v in value.items()}
    elif isinstance(value, (list, tuple)):
        return [serialize_value(v) for v in value]
    return value
