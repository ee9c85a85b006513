"""Sign-aware ledger aggregation and authorization-tiered disclosure control."""

__version__ = "0.1.0"
