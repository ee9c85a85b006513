"""Data models for ledger aggregation and disclosure."""

from .transaction import (
    Polarity,
    TransactionRecord,
    AggregateResult,
)
from .views import (
    AuthorizationTier,
    TransactionView,
    AccountView,
    Address,
    CustomerView,
    BalanceView,
    ViewBundle,
    RedactionOutcome,
    SECTIONS,
)

__all__ = [
    "Polarity",
    "TransactionRecord",
    "AggregateResult",
    "AuthorizationTier",
    "TransactionView",
    "AccountView",
    "Address",
    "CustomerView",
    "BalanceView",
    "ViewBundle",
    "RedactionOutcome",
    "SECTIONS",
]
