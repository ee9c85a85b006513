"""
Sign convention: the table mapping transaction type codes to a polarity.
Built once from configuration and read-only afterwards.
"""

from types import MappingProxyType
from typing import Iterator, Mapping, Optional
import logging

from ..config import LedgerConfig, SignConventionConfig, get_default_config
from ..models.transaction import Polarity
from ..utils.exceptions import ConfigurationError, ConventionGapError

logger = logging.getLogger(__name__)


class SignConvention(Mapping[str, Polarity]):
    """
    Immutable type code -> polarity mapping.

    Lookups of codes outside the table raise ConventionGapError; there is
    no default polarity.
    """

    def __init__(
        self,
        polarities: Mapping[str, Polarity],
        descriptions: Optional[Mapping[str, str]] = None,
    ):
        self._polarities = MappingProxyType(dict(polarities))
        self._descriptions = MappingProxyType(dict(descriptions or {}))

    @classmethod
    def from_config(cls, config: SignConventionConfig) -> "SignConvention":
        """
        Build a convention from the credits/debits tables.

        Raises:
            ConfigurationError: If a code is listed under both polarities
        """
        ambiguous = sorted(set(config.credits) & set(config.debits))
        if ambiguous:
            raise ConfigurationError(
                f"Type codes mapped to both polarities: {', '.join(ambiguous)}"
            )

        polarities: dict[str, Polarity] = {}
        descriptions: dict[str, str] = {}
        for code, desc in config.credits.items():
            polarities[code] = Polarity.CREDIT
            descriptions[code] = desc
        for code, desc in config.debits.items():
            polarities[code] = Polarity.DEBIT
            descriptions[code] = desc

        logger.debug(
            f"Loaded sign convention: {len(config.credits)} credit codes, "
            f"{len(config.debits)} debit codes"
        )
        return cls(polarities, descriptions)

    @classmethod
    def default(cls) -> "SignConvention":
        return cls.from_config(LedgerConfig(**get_default_config()).sign_convention)

    def polarity_of(self, type_code: str) -> Polarity:
        try:
            return self._polarities[type_code]
        except KeyError:
            raise ConventionGapError(type_code) from None

    def describe(self, type_code: str) -> str:
        return self._descriptions.get(type_code, "")

    def __getitem__(self, type_code: str) -> Polarity:
        return self._polarities[type_code]

    def __iter__(self) -> Iterator[str]:
        return iter(self._polarities)

    def __len__(self) -> int:
        return len(self._polarities)

    def __repr__(self) -> str:
        return f"SignConvention({dict(self._polarities)!r})"
