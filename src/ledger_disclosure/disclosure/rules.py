"""
Declarative disclosure rules: the field catalog and per-tier redaction tables.
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping
import logging

from ..config import DisclosureRulesConfig, LedgerConfig, get_default_config
from ..models.views import AuthorizationTier
from ..utils.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class Sensitivity(Enum):
    """How a field is treated when a rule redacts it."""

    IDENTIFIER = "identifier"
    MONETARY = "monetary"
    PERSONAL = "personal"
    FREE_TEXT = "free_text"  # Never redacted

    @property
    def redactable(self) -> bool:
        return self is not Sensitivity.FREE_TEXT


@dataclass(frozen=True)
class FieldSpec:
    """A wire field path and the view attribute behind it."""

    path: str
    section: str
    attribute: str
    sensitivity: Sensitivity


def _spec(path: str, attribute: str, sensitivity: Sensitivity) -> FieldSpec:
    section = path.split(".", 1)[0]
    return FieldSpec(path=path, section=section, attribute=attribute, sensitivity=sensitivity)


_ID = Sensitivity.IDENTIFIER
_MONEY = Sensitivity.MONETARY
_PII = Sensitivity.PERSONAL
_TEXT = Sensitivity.FREE_TEXT

FIELD_CATALOG: Mapping[str, FieldSpec] = MappingProxyType(
    {
        spec.path: spec
        for spec in (
            _spec("transactionDetails.transactionId", "transaction_id", _ID),
            _spec("transactionDetails.amount", "amount", _MONEY),
            _spec("transactionDetails.merchantId", "merchant_id", _ID),
            _spec("transactionDetails.merchantName", "merchant_name", _TEXT),
            _spec("transactionDetails.merchantCity", "merchant_city", _TEXT),
            _spec("transactionDetails.description", "description", _TEXT),
            _spec("transactionDetails.cardNumber", "card_number", _ID),
            _spec("accountInfo.accountId", "account_id", _ID),
            _spec("accountInfo.currentBalance", "current_balance", _MONEY),
            _spec("accountInfo.creditLimit", "credit_limit", _MONEY),
            _spec("accountInfo.cashCreditLimit", "cash_credit_limit", _MONEY),
            _spec("accountInfo.currentCycleCredit", "current_cycle_credit", _MONEY),
            _spec("accountInfo.currentCycleDebit", "current_cycle_debit", _MONEY),
            _spec("accountInfo.cardNumber", "card_number", _ID),
            _spec("accountInfo.cardCvv", "card_cvv", _ID),
            _spec("customerInfo.customerId", "customer_id", _ID),
            _spec("customerInfo.firstName", "first_name", _TEXT),
            _spec("customerInfo.lastName", "last_name", _TEXT),
            _spec("customerInfo.address", "address", _PII),
            _spec("customerInfo.phoneNumber1", "phone_number_1", _PII),
            _spec("customerInfo.phoneNumber2", "phone_number_2", _PII),
            _spec("customerInfo.ssn", "ssn", _ID),
            _spec("customerInfo.governmentIssuedId", "government_issued_id", _ID),
            _spec("customerInfo.dateOfBirth", "date_of_birth", _PII),
            _spec("customerInfo.ficoCreditScore", "fico_credit_score", _PII),
            _spec("balanceInfo.categoryBalance", "category_balance", _MONEY),
            _spec("balanceInfo.accountBalance", "account_balance", _MONEY),
        )
    }
)

# Least to most restrictive
TRUST_ORDER: tuple[AuthorizationTier, ...] = (
    AuthorizationTier.ADMIN,
    AuthorizationTier.MANAGER,
    AuthorizationTier.STANDARD,
    AuthorizationTier.READONLY,
)


def _validate_paths(tier_name: str, paths: list[str]) -> None:
    for path in paths:
        spec = FIELD_CATALOG.get(path)
        if spec is None:
            raise ConfigurationError(f"{tier_name}: unknown field path '{path}'")
        if not spec.sensitivity.redactable:
            raise ConfigurationError(f"{tier_name}: free-text field '{path}' cannot be redacted")


def _ordered_union(*groups: tuple[str, ...]) -> tuple[str, ...]:
    seen: dict[str, None] = {}
    for group in groups:
        for path in group:
            seen.setdefault(path, None)
    return tuple(seen)


class DisclosurePolicy:
    """
    Total mapping from every AuthorizationTier to its ordered redaction set.

    Tables are accumulated from looser to stricter tiers, so each tier's set
    contains the set of every more trusted tier.
    """

    def __init__(self, rules: Mapping[AuthorizationTier, tuple[str, ...]]):
        missing = [tier.value for tier in AuthorizationTier if tier not in rules]
        if missing:
            raise ConfigurationError(f"No disclosure rule for tiers: {', '.join(missing)}")
        self._rules = MappingProxyType({tier: tuple(rules[tier]) for tier in AuthorizationTier})

    @classmethod
    def from_config(cls, config: DisclosureRulesConfig) -> "DisclosurePolicy":
        """
        Build cumulative tier tables from configuration.

        Raises:
            ConfigurationError: If a path is unknown or not redactable
        """
        _validate_paths("manager", config.manager)
        _validate_paths("standard", config.standard)
        _validate_paths("readonly", config.readonly)

        manager = _ordered_union(tuple(config.manager))
        standard = _ordered_union(manager, tuple(config.standard))
        readonly = _ordered_union(standard, tuple(config.readonly))

        logger.debug(
            f"Loaded disclosure rules: manager={len(manager)}, "
            f"standard={len(standard)}, readonly={len(readonly)}"
        )
        return cls(
            {
                AuthorizationTier.ADMIN: (),
                AuthorizationTier.MANAGER: manager,
                AuthorizationTier.STANDARD: standard,
                AuthorizationTier.READONLY: readonly,
                # Unrecognized claims get maximum redaction
                AuthorizationTier.UNKNOWN: readonly,
            }
        )

    @classmethod
    def default(cls) -> "DisclosurePolicy":
        return cls.from_config(LedgerConfig(**get_default_config()).disclosure)

    def paths_for(self, tier: AuthorizationTier) -> tuple[str, ...]:
        return self._rules[tier]

    def is_nested(self) -> bool:
        """Check that each tier redacts everything a more trusted tier does."""
        for looser, stricter in zip(TRUST_ORDER, TRUST_ORDER[1:]):
            if not set(self._rules[looser]) <= set(self._rules[stricter]):
                return False
        return set(self._rules[AuthorizationTier.READONLY]) <= set(
            self._rules[AuthorizationTier.UNKNOWN]
        )
