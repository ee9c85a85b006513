"""Loader for camelCase JSON view bundles."""

from dataclasses import fields
from datetime import datetime
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Optional
import json
import logging

from ..models.views import (
    SECTIONS,
    AccountView,
    Address,
    BalanceView,
    CustomerView,
    TransactionView,
    ViewBundle,
    camel_case,
)
from ..utils.exceptions import BundleParseError

logger = logging.getLogger(__name__)

_VIEW_TYPES = {
    "transaction": TransactionView,
    "account": AccountView,
    "customer": CustomerView,
    "balances": BalanceView,
}

_DECIMAL_FIELDS = {
    "amount",
    "current_balance",
    "credit_limit",
    "cash_credit_limit",
    "current_cycle_credit",
    "current_cycle_debit",
    "category_balance",
    "account_balance",
}
_TIMESTAMP_FIELDS = {"original_timestamp", "processing_timestamp"}


def _convert(name: str, value: Any) -> Any:
    if value is None:
        return None
    if name in _DECIMAL_FIELDS:
        try:
            # str() first so JSON floats keep their printed digits
            return Decimal(str(value))
        except InvalidOperation as e:
            raise BundleParseError(f"Invalid decimal for {name}: {value!r}") from e
    if name in _TIMESTAMP_FIELDS:
        try:
            return datetime.fromisoformat(value)
        except (TypeError, ValueError) as e:
            raise BundleParseError(f"Invalid timestamp for {name}: {value!r}") from e
    if name == "address":
        if not isinstance(value, dict):
            raise BundleParseError("customerInfo.address must be an object")
        return _build(Address, value)
    return value


def _build(view_type, data: dict[str, Any]):
    wire_names = {camel_case(f.name): f.name for f in fields(view_type)}
    unknown = sorted(set(data) - set(wire_names))
    if unknown:
        logger.debug(f"Ignoring unknown {view_type.__name__} keys: {unknown}")

    kwargs = {
        wire_names[key]: _convert(wire_names[key], value)
        for key, value in data.items()
        if key in wire_names
    }
    try:
        return view_type(**kwargs)
    except TypeError as e:
        raise BundleParseError(f"Invalid {view_type.__name__}: {e}") from e


def parse_view_bundle(data: dict[str, Any]) -> ViewBundle:
    """
    Build a ViewBundle from a decoded JSON document.

    Args:
        data: Mapping keyed by section name (transactionDetails, accountInfo, ...)

    Returns:
        View bundle with the sections that are present

    Raises:
        BundleParseError: If a section is malformed
    """
    if not isinstance(data, dict):
        raise BundleParseError("View bundle must be a JSON object")

    views: dict[str, Optional[Any]] = {}
    for section, attr in SECTIONS.items():
        section_data = data.get(section)
        if section_data is None:
            continue
        if not isinstance(section_data, dict):
            raise BundleParseError(f"{section} must be an object")
        views[attr] = _build(_VIEW_TYPES[attr], section_data)

    return ViewBundle(**views)


def load_view_bundle(file_path: Path) -> ViewBundle:
    """
    Load a view bundle from a JSON file.

    Raises:
        BundleParseError: If the file cannot be read or decoded
    """
    logger.info(f"Loading view bundle: {file_path}")
    try:
        with open(file_path, "r", encoding="utf-8") as f:
            data = json.load(f, parse_float=Decimal)
    except (OSError, json.JSONDecodeError) as e:
        raise BundleParseError(f"Failed to read view bundle: {e}") from e

    return parse_view_bundle(data)
