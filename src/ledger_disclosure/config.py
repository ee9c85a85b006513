"""Configuration loader and validation for sign conventions and disclosure rules."""

from pathlib import Path
from typing import Any, Optional
import logging

import yaml
from pydantic import BaseModel, Field, ValidationError

from .utils.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class TransactionInputConfig(BaseModel):
    """Configuration for transaction CSV parsing."""

    encoding: str = "utf-8"
    delimiter: str = ","
    timestamp_format: str = "%Y-%m-%d %H:%M:%S"
    column_mappings: dict[str, str] = Field(
        default_factory=lambda: {
            "transaction_id": "transaction_id",
            "type_code": "type_code",
            "category_code": "category_code",
            "amount": "amount",
            "account_id": "account_id",
            "card_number": "card_number",
            "merchant_id": "merchant_id",
            "merchant_name": "merchant_name",
            "merchant_city": "merchant_city",
            "merchant_zip": "merchant_zip",
            "description": "description",
            "source": "source",
            "original_timestamp": "original_timestamp",
            "processing_timestamp": "processing_timestamp",
        }
    )


class InputConfig(BaseModel):
    """Configuration for input file parsing."""

    transactions: TransactionInputConfig = Field(default_factory=TransactionInputConfig)


class SignConventionConfig(BaseModel):
    """Type codes per polarity, each mapped to a human readable description."""

    credits: dict[str, str] = Field(default_factory=dict)
    debits: dict[str, str] = Field(default_factory=dict)


class DisclosureRulesConfig(BaseModel):
    """
    Cumulative redaction tables.

    Each stricter tier lists only the paths it adds on top of the looser
    tier, so MANAGER <= STANDARD <= READONLY holds by construction.
    ADMIN redacts nothing and UNKNOWN shares the READONLY table.
    """

    manager: list[str] = Field(default_factory=list)
    standard: list[str] = Field(default_factory=list)
    readonly: list[str] = Field(default_factory=list)


class LoggingConfig(BaseModel):
    """Configuration for logging."""

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class LedgerConfig(BaseModel):
    """Main configuration model."""

    input: InputConfig = Field(default_factory=InputConfig)
    sign_convention: SignConventionConfig = Field(default_factory=SignConventionConfig)
    disclosure: DisclosureRulesConfig = Field(default_factory=DisclosureRulesConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    config_file_path: Optional[str] = None


def get_default_config() -> dict[str, Any]:
    """Return the default configuration as a dictionary."""
    return {
        "input": {
            "transactions": {
                "encoding": "utf-8",
                "delimiter": ",",
                "timestamp_format": "%Y-%m-%d %H:%M:%S",
            },
        },
        "sign_convention": {
            "credits": {
                "PU": "Purchase",
                "ON": "Online Purchase",
                "RP": "Recurring Payment",
                "CA": "Cash Advance",
                "CB": "Chargeback",
                "AF": "Annual Fee",
                "LF": "Late Fee",
                "OF": "Overlimit Fee",
                "IN": "Interest Charge",
                "BT": "Balance Transfer",
            },
            "debits": {
                "PA": "Payment",
                "CR": "Credit",
                "RF": "Refund",
                "RV": "Reversal",
                "AD": "Adjustment",
            },
        },
        "disclosure": {
            "manager": [
                "customerInfo.ssn",
                "customerInfo.governmentIssuedId",
            ],
            "standard": [
                "transactionDetails.cardNumber",
                "customerInfo.phoneNumber1",
                "customerInfo.phoneNumber2",
                "customerInfo.dateOfBirth",
                "customerInfo.ficoCreditScore",
                "accountInfo.currentBalance",
                "accountInfo.creditLimit",
                "accountInfo.cashCreditLimit",
                "balanceInfo.accountBalance",
                "balanceInfo.categoryBalance",
            ],
            "readonly": [
                "transactionDetails.merchantId",
                "customerInfo.customerId",
                "customerInfo.address",
                "accountInfo.accountId",
                "accountInfo.cardNumber",
                "accountInfo.cardCvv",
            ],
        },
        "logging": {
            "level": "INFO",
            "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        },
    }


def load_config(config_path: Optional[Path] = None) -> LedgerConfig:
    """
    Load configuration from a YAML file or use defaults.

    Args:
        config_path: Path to YAML configuration file (optional)

    Returns:
        LedgerConfig object with loaded or default settings

    Raises:
        ConfigurationError: If the file is not valid YAML or fails validation
    """
    config_dict = get_default_config()

    if config_path and config_path.exists():
        logger.info(f"Loading configuration from: {config_path}")
        try:
            with open(config_path, "r") as f:
                user_config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {config_path}: {e}") from e

        if not isinstance(user_config, dict):
            raise ConfigurationError(f"Configuration root must be a mapping: {config_path}")

        config_dict = _deep_merge(config_dict, user_config)
        config_dict["config_file_path"] = str(config_path)
    else:
        logger.info("Using default configuration")

    try:
        return LedgerConfig(**config_dict)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e


def _deep_merge(base: dict, override: dict) -> dict:
    """
    Deep merge two dictionaries.

    Args:
        base: Base dictionary
        override: Dictionary to merge on top

    Returns:
        Merged dictionary
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def generate_default_config(output_path: Path) -> None:
    """
    Generate a default configuration file.

    Args:
        output_path: Path to write the configuration file
    """
    config_dict = get_default_config()

    yaml_content = """# Ledger aggregation and disclosure configuration
# sign_convention: every type code must appear under exactly one polarity
#   (quote codes such as 'ON', YAML otherwise reads them as booleans)
# disclosure: each tier lists the paths it adds to the looser tier

"""
    yaml_content += yaml.dump(config_dict, default_flow_style=False, sort_keys=False)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w") as f:
        f.write(yaml_content)

    logger.info(f"Generated configuration file: {output_path}")
