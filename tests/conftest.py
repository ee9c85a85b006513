"""Shared fixtures: default tables, sample records and a fully populated bundle."""

from datetime import datetime
from decimal import Decimal

import pytest

from ledger_disclosure.config import LedgerConfig, get_default_config
from ledger_disclosure.disclosure import DisclosurePolicy, DisclosurePolicyEngine
from ledger_disclosure.ledger import SignConvention
from ledger_disclosure.models import (
    AccountView,
    Address,
    BalanceView,
    CustomerView,
    TransactionRecord,
    TransactionView,
    ViewBundle,
)


def make_record(
    type_code: str,
    amount: str,
    transaction_id: str = "T1",
    account_id: str = "00000000001",
    category_code: str = "0001",
) -> TransactionRecord:
    return TransactionRecord(
        transaction_id=transaction_id,
        type_code=type_code,
        category_code=category_code,
        amount=Decimal(amount),
        account_id=account_id,
        card_number="4111111111111111",
        merchant_id="M100",
        merchant_name="Corner Grocery",
    )


@pytest.fixture
def record_factory():
    return make_record


@pytest.fixture
def default_config() -> LedgerConfig:
    return LedgerConfig(**get_default_config())


@pytest.fixture
def convention(default_config) -> SignConvention:
    return SignConvention.from_config(default_config.sign_convention)


@pytest.fixture
def policy(default_config) -> DisclosurePolicy:
    return DisclosurePolicy.from_config(default_config.disclosure)


@pytest.fixture
def engine(policy) -> DisclosurePolicyEngine:
    return DisclosurePolicyEngine(policy)


@pytest.fixture
def transaction_view() -> TransactionView:
    return TransactionView(
        transaction_id="0000000000000001",
        type_code="PU",
        category_code="0001",
        source="POS TERM",
        description="Groceries",
        amount=Decimal("100.00"),
        merchant_id="M100",
        merchant_name="Corner Grocery",
        merchant_city="Austin",
        merchant_zip="78701",
        card_number="4111111111111111",
        original_timestamp=datetime(2024, 3, 1, 10, 15),
        processing_timestamp=datetime(2024, 3, 1, 10, 16),
    )


@pytest.fixture
def account_view() -> AccountView:
    return AccountView(
        account_id="00000000001",
        active_status="Y",
        current_balance=Decimal("1250.40"),
        credit_limit=Decimal("5000.00"),
        cash_credit_limit=Decimal("1000.00"),
        card_number="4111111111111111",
        card_cvv="123",
    )


@pytest.fixture
def customer_view() -> CustomerView:
    return CustomerView(
        customer_id="1000000001",
        first_name="John",
        last_name="Smith",
        address=Address(line_1="123 Main St", state_code="TX", zip_code="75001"),
        phone_number_1="214-555-0001",
        ssn="123456789",
        government_issued_id="DL-TX-000111",
        date_of_birth="1980-01-15",
        fico_credit_score=720,
    )


@pytest.fixture
def full_bundle(transaction_view, account_view, customer_view) -> ViewBundle:
    return ViewBundle(
        transaction=transaction_view,
        account=account_view,
        customer=customer_view,
        balances=BalanceView(
            category_balance=Decimal("80.00"),
            account_balance=Decimal("1250.40"),
            record_count=12,
        ),
    )
