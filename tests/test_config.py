"""Tests for configuration loading."""

import logging

import pytest

from ledger_disclosure.config import (
    _deep_merge,
    generate_default_config,
    get_default_config,
    load_config,
)
from ledger_disclosure.disclosure import DisclosurePolicy
from ledger_disclosure import service
from ledger_disclosure.ledger import SignConvention
from ledger_disclosure.models import AuthorizationTier, Polarity
from ledger_disclosure.utils.exceptions import ConfigurationError
from ledger_disclosure.utils.logging_config import setup_logging


def test_defaults_without_file():
    config = load_config(None)
    assert config.config_file_path is None
    assert "PU" in config.sign_convention.credits
    assert "PA" in config.sign_convention.debits


def test_user_file_merges_over_defaults(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "sign_convention:\n"
        "  debits:\n"
        "    'XF': Transfer Out\n"
        "disclosure:\n"
        "  manager: []\n"
    )
    config = load_config(path)
    convention = SignConvention.from_config(config.sign_convention)

    assert config.config_file_path == str(path)
    assert convention.polarity_of("XF") is Polarity.DEBIT
    assert convention.polarity_of("PU") is Polarity.CREDIT
    policy = DisclosurePolicy.from_config(config.disclosure)
    assert policy.paths_for(AuthorizationTier.MANAGER) == ()
    assert "customerInfo.ssn" not in policy.paths_for(AuthorizationTier.STANDARD)


def test_generated_file_round_trips(tmp_path):
    path = tmp_path / "out" / "config.yaml"
    generate_default_config(path)

    text = path.read_text()
    assert text.startswith("# Ledger aggregation")
    # 'ON' must stay a string key, not the YAML boolean
    config = load_config(path)
    assert config.sign_convention.credits["ON"] == "Online Purchase"
    assert config.disclosure.readonly == get_default_config()["disclosure"]["readonly"]


def test_invalid_yaml_rejected(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("disclosure: [unclosed\n")
    with pytest.raises(ConfigurationError, match="Invalid YAML"):
        load_config(path)


def test_non_mapping_root_rejected(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- a\n- b\n")
    with pytest.raises(ConfigurationError):
        load_config(path)


def test_schema_violation_rejected(tmp_path):
    path = tmp_path / "typed.yaml"
    path.write_text("disclosure:\n  manager: 12\n")
    with pytest.raises(ConfigurationError, match="Invalid configuration"):
        load_config(path)


def test_deep_merge_replaces_lists_and_merges_dicts():
    base = {"a": {"x": 1, "y": [1, 2]}, "b": 1}
    merged = _deep_merge(base, {"a": {"y": [3]}, "c": 2})
    assert merged == {"a": {"x": 1, "y": [3]}, "b": 1, "c": 2}
    assert base["a"]["y"] == [1, 2]


def test_setup_logging_replaces_handlers(tmp_path):
    log_file = tmp_path / "logs" / "app.log"
    logger = setup_logging(logging.DEBUG, log_file=log_file)
    assert len(logger.handlers) == 2
    logger = setup_logging(logging.INFO)
    assert len(logger.handlers) == 1
    # Module loggers reach the package handlers
    assert service.logger.parent is logger
    assert log_file.parent.exists()
