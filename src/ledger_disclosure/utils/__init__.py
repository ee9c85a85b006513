"""Utility modules."""

from .exceptions import (
    LedgerDisclosureError,
    ConventionGapError,
    ConfigurationError,
    TransactionParseError,
    BundleParseError,
    UnknownTierWarning,
)
from .logging_config import setup_logging

__all__ = [
    "LedgerDisclosureError",
    "ConventionGapError",
    "ConfigurationError",
    "TransactionParseError",
    "BundleParseError",
    "UnknownTierWarning",
    "setup_logging",
]
