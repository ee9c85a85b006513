"""
Transaction view and listing flow: aggregate balances, assemble the view
bundle, then redact it for the requester.
"""

from dataclasses import dataclass, replace
from typing import Iterable, Optional, Union
import logging

from .config import LedgerConfig
from .disclosure.engine import DisclosurePolicyEngine
from .disclosure.rules import DisclosurePolicy
from .ledger.aggregator import LedgerAggregator
from .ledger.convention import SignConvention
from .models.transaction import AggregateResult, TransactionRecord
from .models.views import (
    AccountView,
    AuthorizationTier,
    BalanceView,
    CustomerView,
    RedactionOutcome,
    TransactionView,
    ViewBundle,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransactionPage:
    """Redacted transactions of one page and their page-local signed total."""

    items: tuple[RedactionOutcome, ...]
    page_total: AggregateResult


class TransactionViewService:
    """Composes the ledger aggregator and the disclosure engine."""

    def __init__(self, config: LedgerConfig):
        """
        Initialize the service.

        Args:
            config: Application configuration

        Raises:
            ConfigurationError: If the convention or rule tables are invalid
        """
        self.config = config
        self.convention = SignConvention.from_config(config.sign_convention)
        self.aggregator = LedgerAggregator(self.convention)
        self.engine = DisclosurePolicyEngine(DisclosurePolicy.from_config(config.disclosure))

    def view_transaction(
        self,
        record: TransactionRecord,
        tier: Union[AuthorizationTier, str, None],
        account: Optional[AccountView] = None,
        customer: Optional[CustomerView] = None,
        account_records: Iterable[TransactionRecord] = (),
    ) -> RedactionOutcome:
        """
        Build the redacted detail view of a single transaction.

        Args:
            record: Transaction to show
            tier: Requester tier or raw authorization claim
            account: Account view, if the caller has it; its stored balance is kept
            customer: Customer view, if the caller has it
            account_records: Records of the transaction's account used for balances

        Returns:
            Redaction outcome for the assembled bundle

        Raises:
            ConventionGapError: If an account record has an unmapped type code
        """
        account_records = list(account_records)
        balances: Optional[BalanceView] = None

        if account_records:
            category = self.aggregator.category_balance(
                account_records, record.account_id, record.category_code
            )
            account_total = self.aggregator.account_balance(account_records, record.account_id)
            balances = BalanceView.from_results(category=category, account=account_total)

        bundle = ViewBundle(
            transaction=TransactionView.from_record(record),
            account=account,
            customer=customer,
            balances=balances,
        )
        return self.engine.apply(bundle, tier)

    def list_page(
        self,
        page_records: Iterable[TransactionRecord],
        tier: Union[AuthorizationTier, str, None],
    ) -> TransactionPage:
        """
        Redact one page of transactions and compute its signed total.

        The tier is resolved once per page.
        """
        page_records = list(page_records)
        page_total = self.aggregator.page_total(page_records)

        resolved, warning = self.engine.resolve_tier(tier)
        items = []
        for record in page_records:
            bundle = ViewBundle(transaction=TransactionView.from_record(record))
            outcome = self.engine.apply(bundle, resolved)
            if warning:
                outcome = replace(outcome, warnings=(warning,))
            items.append(outcome)

        logger.info(
            f"Listed {len(items)} transactions for tier {resolved.value}, "
            f"page total {page_total.rounded()}"
        )
        return TransactionPage(items=tuple(items), page_total=page_total)
