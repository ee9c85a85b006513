"""Custom exceptions for the ledger aggregation and disclosure core."""


class LedgerDisclosureError(Exception):
    """Base exception for ledger and disclosure errors."""

    pass


class ConventionGapError(LedgerDisclosureError):
    """A transaction type code has no polarity in the sign convention."""

    def __init__(self, type_code: str):
        self.type_code = type_code
        super().__init__(f"No polarity defined for transaction type code '{type_code}'")


class ConfigurationError(LedgerDisclosureError):
    """Error in configuration."""

    pass


class TransactionParseError(LedgerDisclosureError):
    """Error parsing a transaction CSV file."""

    pass


class BundleParseError(LedgerDisclosureError):
    """Error parsing a view bundle document."""

    pass


class UnknownTierWarning(UserWarning):
    """An unrecognized authorization tier was supplied and degraded to UNKNOWN."""

    def __init__(self, claim):
        self.claim = claim
        super().__init__(
            f"Unrecognized authorization tier {claim!r}; applying maximum redaction"
        )
