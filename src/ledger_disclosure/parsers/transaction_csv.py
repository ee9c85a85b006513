"""
Transaction CSV parser.
Loads exported ledger rows into TransactionRecord values.
"""

from datetime import datetime
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Optional
import logging

import pandas as pd

from ..config import LedgerConfig
from ..models.transaction import TransactionRecord
from ..utils.exceptions import TransactionParseError

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("transaction_id", "type_code", "amount")


class TransactionCsvParser:
    """Parser for transaction CSV exports."""

    def __init__(self, config: LedgerConfig):
        """
        Initialize the parser with configuration.

        Args:
            config: Application configuration object
        """
        self.config = config
        self.input_config = config.input.transactions
        self.column_mappings = self.input_config.column_mappings

    def parse_file(self, file_path: Path) -> list[TransactionRecord]:
        """
        Parse a transaction CSV file.

        Args:
            file_path: Path to the CSV file

        Returns:
            List of transaction records

        Raises:
            TransactionParseError: If the file cannot be read
        """
        logger.info(f"Parsing transaction CSV file: {file_path}")

        try:
            # Everything as text so amounts never pass through float
            df = pd.read_csv(
                file_path,
                encoding=self.input_config.encoding,
                delimiter=self.input_config.delimiter,
                dtype=str,
                keep_default_na=False,
            )
        except Exception as e:
            logger.error(f"Failed to read CSV file: {e}")
            raise TransactionParseError(f"Failed to read CSV file: {e}") from e

        records = self._process_dataframe(df)
        skipped = len(df) - len(records)
        if skipped:
            logger.warning(f"Skipped {skipped} invalid row(s) in {file_path}")
        logger.info(f"Extracted {len(records)} transactions from CSV")

        return records

    def _process_dataframe(self, df: pd.DataFrame) -> list[TransactionRecord]:
        records: list[TransactionRecord] = []

        for idx, row in df.iterrows():
            record = self._normalize_row(row, int(idx))
            if record:
                records.append(record)

        return records

    def _value(self, row: pd.Series, field: str) -> Optional[str]:
        column = self.column_mappings.get(field, field)
        value = row.get(column)
        if value is None or pd.isna(value):
            return None
        value = str(value).strip()
        return value or None

    def _normalize_row(self, row: pd.Series, idx: int) -> Optional[TransactionRecord]:
        """
        Convert a DataFrame row to a TransactionRecord.

        Args:
            row: Pandas Series representing a row
            idx: Row index

        Returns:
            Transaction record or None if the row is invalid
        """
        for field in REQUIRED_FIELDS:
            if self._value(row, field) is None:
                logger.warning(f"Row {idx}: Missing {field}, skipping")
                return None

        amount = self._parse_amount(self._value(row, "amount"))
        if amount is None:
            logger.warning(f"Row {idx}: Invalid amount, skipping")
            return None

        return TransactionRecord(
            transaction_id=self._value(row, "transaction_id"),
            type_code=self._value(row, "type_code").upper(),
            category_code=self._value(row, "category_code") or "",
            amount=amount,
            account_id=self._value(row, "account_id") or "",
            card_number=self._value(row, "card_number"),
            merchant_id=self._value(row, "merchant_id"),
            merchant_name=self._value(row, "merchant_name"),
            merchant_city=self._value(row, "merchant_city"),
            merchant_zip=self._value(row, "merchant_zip"),
            description=self._value(row, "description") or "",
            source=self._value(row, "source"),
            original_timestamp=self._parse_timestamp(self._value(row, "original_timestamp")),
            processing_timestamp=self._parse_timestamp(
                self._value(row, "processing_timestamp")
            ),
        )

    def _parse_amount(self, amount_value: Optional[str]) -> Optional[Decimal]:
        """
        Parse an amount value from the CSV.

        Args:
            amount_value: Amount text, possibly with currency symbol and commas

        Returns:
            Decimal amount or None
        """
        if amount_value is None:
            return None

        try:
            cleaned = amount_value.replace("$", "").replace(",", "").strip()
            amount = Decimal(cleaned)
        except InvalidOperation:
            return None

        return amount if amount.is_finite() else None

    def _parse_timestamp(self, value: Optional[str]) -> Optional[datetime]:
        if value is None:
            return None

        try:
            return datetime.strptime(value, self.input_config.timestamp_format)
        except ValueError:
            # Try pandas parser as fallback
            try:
                return pd.to_datetime(value).to_pydatetime()
            except (ValueError, TypeError):
                return None
