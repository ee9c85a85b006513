"""Data models for ledger records and aggregation results."""

from dataclasses import dataclass
from datetime import datetime
from decimal import (
    Context,
    Decimal,
    DivisionByZero,
    Inexact,
    InvalidOperation,
    Overflow,
    ROUND_HALF_EVEN,
    ROUND_HALF_UP,
)
from enum import Enum
from typing import Optional

# 34 significant digits, IEEE 754 decimal128. A sum that would need rounding
# raises decimal.Inexact instead.
DECIMAL128 = Context(
    prec=34,
    rounding=ROUND_HALF_EVEN,
    traps=[InvalidOperation, DivisionByZero, Overflow, Inexact],
)


class Polarity(Enum):
    """Sign applied to an amount based on its transaction type."""

    CREDIT = 1  # Increases the balance
    DEBIT = -1  # Decreases the balance

    @property
    def sign(self) -> int:
        return self.value


@dataclass(frozen=True)
class TransactionRecord:
    """
    One ledger entry as supplied by the persistence layer.

    Amounts are exact decimals; the polarity comes from the type code,
    not from the sign of the stored amount.
    """

    transaction_id: str
    type_code: str
    category_code: str
    amount: Decimal
    account_id: str
    card_number: Optional[str] = None
    merchant_id: Optional[str] = None
    merchant_name: Optional[str] = None
    merchant_city: Optional[str] = None
    merchant_zip: Optional[str] = None
    description: str = ""
    source: Optional[str] = None
    original_timestamp: Optional[datetime] = None
    processing_timestamp: Optional[datetime] = None


@dataclass(frozen=True)
class AggregateResult:
    """Signed sum of amounts over a set of records, plus the record count."""

    total: Decimal
    count: int

    @classmethod
    def empty(cls) -> "AggregateResult":
        return cls(total=Decimal("0"), count=0)

    def combine(self, other: "AggregateResult") -> "AggregateResult":
        """Merge two partial results computed over disjoint record sets."""
        return AggregateResult(
            total=DECIMAL128.add(self.total, other.total),
            count=self.count + other.count,
        )

    def __add__(self, other: "AggregateResult") -> "AggregateResult":
        if not isinstance(other, AggregateResult):
            return NotImplemented
        return self.combine(other)

    def rounded(self, places: int = 2) -> Decimal:
        """Total rounded for presentation only."""
        return self.total.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)
