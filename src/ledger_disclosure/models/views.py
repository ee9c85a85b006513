"""View objects exposed at the system boundary and the result of redacting them."""

from dataclasses import dataclass, field, fields
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from ..utils.exceptions import UnknownTierWarning
from .transaction import AggregateResult, TransactionRecord


class AuthorizationTier(Enum):
    """Authorization level of the requester, from most to least trusted."""

    ADMIN = "ADMIN"
    MANAGER = "MANAGER"
    STANDARD = "STANDARD"
    READONLY = "READONLY"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def parse(cls, claim: Optional[str]) -> "AuthorizationTier":
        """
        Resolve an authorization claim to a tier.

        Matching ignores case and surrounding whitespace. Anything that is not
        a tier name resolves to UNKNOWN, never to ADMIN.
        """
        if claim is None:
            return cls.UNKNOWN
        try:
            return cls(str(claim).strip().upper())
        except ValueError:
            return cls.UNKNOWN

    @classmethod
    def is_recognized(cls, claim: Optional[str]) -> bool:
        return claim is not None and str(claim).strip().upper() in cls.__members__


def camel_case(name: str) -> str:
    """Convert an attribute name to its wire name (phone_number_1 -> phoneNumber1)."""
    head, *rest = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def _wire_value(value: Any) -> Any:
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    if hasattr(value, "to_dict"):
        return value.to_dict()
    return value


class _WireView:
    """Mixin giving dataclass views a camelCase plain-dict form."""

    def to_dict(self) -> dict[str, Any]:
        return {camel_case(f.name): _wire_value(getattr(self, f.name)) for f in fields(self)}


@dataclass(frozen=True)
class TransactionView(_WireView):
    """Transaction details section of a view bundle."""

    transaction_id: str
    type_code: Optional[str] = None
    category_code: Optional[str] = None
    source: Optional[str] = None
    description: str = ""
    amount: Optional[Decimal] = None
    merchant_id: Optional[str] = None
    merchant_name: Optional[str] = None
    merchant_city: Optional[str] = None
    merchant_zip: Optional[str] = None
    card_number: Optional[str] = None
    original_timestamp: Optional[datetime] = None
    processing_timestamp: Optional[datetime] = None

    @classmethod
    def from_record(cls, record: TransactionRecord) -> "TransactionView":
        return cls(
            transaction_id=record.transaction_id,
            type_code=record.type_code,
            category_code=record.category_code,
            source=record.source,
            description=record.description,
            amount=record.amount,
            merchant_id=record.merchant_id,
            merchant_name=record.merchant_name,
            merchant_city=record.merchant_city,
            merchant_zip=record.merchant_zip,
            card_number=record.card_number,
            original_timestamp=record.original_timestamp,
            processing_timestamp=record.processing_timestamp,
        )

    @property
    def masked_card_number(self) -> Optional[str]:
        """Card number showing only the last four digits."""
        if self.card_number is not None and len(self.card_number) >= 4:
            return "**** **** **** " + self.card_number[-4:]
        return self.card_number

    @property
    def merchant_info(self) -> Optional[str]:
        """Merchant name, city and zip joined for display."""
        info = self.merchant_name or ""
        if self.merchant_city:
            info = f"{info}, {self.merchant_city}" if info else self.merchant_city
        if self.merchant_zip:
            info = f"{info} {self.merchant_zip}" if info else self.merchant_zip
        return info or None

    @property
    def processing_status(self) -> str:
        if self.processing_timestamp is not None:
            return "PROCESSED"
        if self.original_timestamp is not None:
            return "PENDING"
        return "INITIATED"


@dataclass(frozen=True)
class AccountView(_WireView):
    """Account section of a view bundle."""

    account_id: Optional[str] = None
    active_status: Optional[str] = None
    current_balance: Optional[Decimal] = None
    credit_limit: Optional[Decimal] = None
    cash_credit_limit: Optional[Decimal] = None
    current_cycle_credit: Optional[Decimal] = None
    current_cycle_debit: Optional[Decimal] = None
    open_date: Optional[str] = None
    expiration_date: Optional[str] = None
    group_id: Optional[str] = None
    card_number: Optional[str] = None
    card_cvv: Optional[str] = None


@dataclass(frozen=True)
class Address(_WireView):
    line_1: Optional[str] = None
    line_2: Optional[str] = None
    city: Optional[str] = None
    state_code: Optional[str] = None
    zip_code: Optional[str] = None


@dataclass(frozen=True)
class CustomerView(_WireView):
    """Customer section of a view bundle."""

    customer_id: Optional[str] = None
    first_name: Optional[str] = None
    middle_name: Optional[str] = None
    last_name: Optional[str] = None
    address: Optional[Address] = None
    phone_number_1: Optional[str] = None
    phone_number_2: Optional[str] = None
    ssn: Optional[str] = None
    government_issued_id: Optional[str] = None
    date_of_birth: Optional[str] = None
    fico_credit_score: Optional[int] = None


@dataclass(frozen=True)
class BalanceView(_WireView):
    """Aggregated figures shown alongside a transaction."""

    category_balance: Optional[Decimal] = None
    account_balance: Optional[Decimal] = None
    record_count: Optional[int] = None

    @classmethod
    def from_results(
        cls,
        category: Optional[AggregateResult] = None,
        account: Optional[AggregateResult] = None,
    ) -> "BalanceView":
        return cls(
            category_balance=category.total if category is not None else None,
            account_balance=account.total if account is not None else None,
            record_count=account.count if account is not None else None,
        )


# Wire section name -> ViewBundle attribute
SECTIONS: dict[str, str] = {
    "transactionDetails": "transaction",
    "accountInfo": "account",
    "customerInfo": "customer",
    "balanceInfo": "balances",
}


@dataclass(frozen=True)
class ViewBundle:
    """Related views assembled for a single disclosure decision."""

    transaction: Optional[TransactionView] = None
    account: Optional[AccountView] = None
    customer: Optional[CustomerView] = None
    balances: Optional[BalanceView] = None

    def has_section(self, section: str) -> bool:
        return getattr(self, SECTIONS[section]) is not None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        for section, attr in SECTIONS.items():
            view = getattr(self, attr)
            if view is not None:
                result[section] = view.to_dict()
        return result


@dataclass(frozen=True)
class RedactionOutcome:
    """Redacted bundle plus the audit record of what was redacted."""

    bundle: ViewBundle
    tier: AuthorizationTier
    redacted_fields: tuple[str, ...] = ()
    was_masked: bool = False
    warnings: tuple[UnknownTierWarning, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        return {
            "bundle": self.bundle.to_dict(),
            "authorizationLevel": self.tier.value,
            "redactedFields": list(self.redacted_fields),
            "wasMasked": self.was_masked,
        }
