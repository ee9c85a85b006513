"""Sign convention and ledger aggregation."""

from .convention import SignConvention
from .aggregator import aggregate, aggregate_chunks, LedgerAggregator

__all__ = [
    "SignConvention",
    "aggregate",
    "aggregate_chunks",
    "LedgerAggregator",
]
