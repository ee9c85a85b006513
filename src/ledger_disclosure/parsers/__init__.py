"""Input adapters for transaction records and view bundles."""

from .transaction_csv import TransactionCsvParser
from .view_bundle import load_view_bundle, parse_view_bundle

__all__ = ["TransactionCsvParser", "load_view_bundle", "parse_view_bundle"]
