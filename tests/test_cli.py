"""Tests for the command-line interface."""

import json

import pytest
from click.testing import CliRunner

from ledger_disclosure.cli import main

CSV_TEXT = (
    "transaction_id,type_code,category_code,amount,account_id\n"
    "T1,PU,0001,100.00,A1\n"
    "T2,CA,0002,50.00,A1\n"
    "T3,PA,0001,30.00,A1\n"
    "T4,PU,0001,7.00,A2\n"
)


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def csv_file(tmp_path):
    path = tmp_path / "txns.csv"
    path.write_text(CSV_TEXT)
    return path


@pytest.fixture
def bundle_file(tmp_path, full_bundle):
    path = tmp_path / "bundle.json"
    path.write_text(json.dumps(full_bundle.to_dict()))
    return path


def test_aggregate_all(runner, csv_file):
    result = runner.invoke(main, ["aggregate", str(csv_file)])
    assert result.exit_code == 0, result.output
    assert "127.00" in result.output


def test_aggregate_category(runner, csv_file):
    result = runner.invoke(
        main, ["aggregate", str(csv_file), "--account", "A1", "--category", "0001"]
    )
    assert result.exit_code == 0, result.output
    assert "70.00" in result.output


def test_aggregate_category_requires_account(runner, csv_file):
    result = runner.invoke(main, ["aggregate", str(csv_file), "--category", "0001"])
    assert result.exit_code == 2


def test_aggregate_convention_gap(runner, tmp_path):
    path = tmp_path / "gap.csv"
    path.write_text(CSV_TEXT + "T5,ZZ,0001,1.00,A1\n")
    result = runner.invoke(main, ["aggregate", str(path)])
    assert result.exit_code == 1
    assert "ZZ" in result.output


def test_disclose_json(runner, bundle_file):
    result = runner.invoke(main, ["disclose", str(bundle_file), "--tier", "standard", "--json"])
    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert data["authorizationLevel"] == "STANDARD"
    assert data["wasMasked"] is True
    assert "customerInfo.ssn" in data["redactedFields"]
    assert data["bundle"]["customerInfo"]["ssn"] is None


def test_disclose_admin_json(runner, bundle_file):
    result = runner.invoke(main, ["disclose", str(bundle_file), "--tier", "ADMIN", "--json"])
    data = json.loads(result.output)
    assert data["redactedFields"] == []
    assert data["wasMasked"] is False
    assert data["bundle"]["customerInfo"]["ssn"] == "123456789"


def test_disclose_unknown_tier_table(runner, bundle_file):
    result = runner.invoke(main, ["disclose", str(bundle_file), "--tier", "root"])
    assert result.exit_code == 0, result.output
    assert "Warning" in result.output
    assert "accountInfo.cardCvv" in result.output
    assert "Masked: yes" in result.output


def test_disclose_bad_bundle(runner, tmp_path):
    path = tmp_path / "bundle.json"
    path.write_text("[]")
    result = runner.invoke(main, ["disclose", str(path), "--tier", "ADMIN"])
    assert result.exit_code == 1


def test_show_rules(runner):
    result = runner.invoke(main, ["show-rules"])
    assert result.exit_code == 0, result.output
    assert "Disclosure Rules" in result.output
    assert "merchantName" not in result.output


def test_init_config(runner, tmp_path):
    output = tmp_path / "generated.yaml"
    result = runner.invoke(main, ["init-config", "-o", str(output)])
    assert result.exit_code == 0, result.output
    assert output.exists()

    result = runner.invoke(main, ["show-rules", "-c", str(output)])
    assert result.exit_code == 0, result.output
