"""
Sign-aware aggregation of transaction amounts.
Totals are exact decimals; rounding happens only at presentation.
"""

from decimal import Decimal
from typing import Iterable
import logging

from ..models.transaction import DECIMAL128, AggregateResult, Polarity, TransactionRecord
from ..utils.exceptions import ConventionGapError
from .convention import SignConvention

logger = logging.getLogger(__name__)


def aggregate(
    records: Iterable[TransactionRecord], convention: SignConvention
) -> AggregateResult:
    """
    Compute the signed total and count of a set of records.

    Args:
        records: Records already filtered by the caller
        convention: Polarity table covering every type code in records

    Returns:
        Aggregate result; zero total and count for empty input

    Raises:
        ConventionGapError: If a record's type code has no polarity
        decimal.Inexact: If the exact total does not fit in 34 digits
    """
    total = Decimal("0")
    count = 0

    for record in records:
        try:
            polarity = convention.polarity_of(record.type_code)
        except ConventionGapError:
            logger.error(
                f"Transaction {record.transaction_id}: type code "
                f"'{record.type_code}' missing from sign convention"
            )
            raise
        signed = record.amount if polarity is Polarity.CREDIT else record.amount.copy_negate()
        total = DECIMAL128.add(total, signed)
        count += 1

    return AggregateResult(total=total, count=count)


def aggregate_chunks(
    chunks: Iterable[Iterable[TransactionRecord]], convention: SignConvention
) -> AggregateResult:
    """Aggregate each chunk separately and merge the partial results."""
    result = AggregateResult.empty()
    for chunk in chunks:
        result = result.combine(aggregate(chunk, convention))
    return result


class LedgerAggregator:
    """
    Balance calculations over a caller-supplied record stream.

    Every figure is the signed debit/credit sum, including page totals.
    """

    def __init__(self, convention: SignConvention):
        self.convention = convention

    def category_balance(
        self,
        records: Iterable[TransactionRecord],
        account_id: str,
        category_code: str,
    ) -> AggregateResult:
        """Balance of one category within one account."""
        return aggregate(
            (
                r
                for r in records
                if r.account_id == account_id and r.category_code == category_code
            ),
            self.convention,
        )

    def account_balance(
        self, records: Iterable[TransactionRecord], account_id: str
    ) -> AggregateResult:
        return aggregate((r for r in records if r.account_id == account_id), self.convention)

    def category_balances(
        self, records: Iterable[TransactionRecord], account_id: str
    ) -> dict[str, AggregateResult]:
        """
        Balances for every category of an account.

        Args:
            records: Records for any number of accounts
            account_id: Account to report on

        Returns:
            Mapping of category code to its aggregate, sorted by category code
        """
        by_category: dict[str, list[TransactionRecord]] = {}
        for record in records:
            if record.account_id == account_id:
                by_category.setdefault(record.category_code, []).append(record)

        return {
            category: aggregate(by_category[category], self.convention)
            for category in sorted(by_category)
        }

    def page_total(self, page_records: Iterable[TransactionRecord]) -> AggregateResult:
        """Signed total of the records on the current page only."""
        return aggregate(page_records, self.convention)
