"""Authorization-tiered disclosure rules and engine."""

from .rules import (
    Sensitivity,
    FieldSpec,
    FIELD_CATALOG,
    TRUST_ORDER,
    DisclosurePolicy,
)
from .engine import DisclosurePolicyEngine

__all__ = [
    "Sensitivity",
    "FieldSpec",
    "FIELD_CATALOG",
    "TRUST_ORDER",
    "DisclosurePolicy",
    "DisclosurePolicyEngine",
]
