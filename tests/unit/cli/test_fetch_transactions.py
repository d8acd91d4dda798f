from unittest.mock import AsyncMock, patch

import pytest
from click.testing import CliRunner

from cli import cli

TARGET_CONTRACT = "0xAbCdEf0123456789aBcDeF0123456789AbCdEf01"
BASE_ARGS = [
    "fetch_transactions",
    "--rpc-url",
    "http://localhost:8545",
    "--target-contract",
    TARGET_CONTRACT,
    "--start-block",
    "100",
    "--end-block",
    "102",
]


@pytest.fixture(autouse=True)
def no_logging_setup():
    with patch("cli.fetch_transactions.configure_logging"):
        yield


@pytest.fixture
def mock_job():
    with patch("cli.fetch_transactions.FetchTransactionsJob") as MockJob:
        job = MockJob.return_value
        job.run = AsyncMock()
        job.encoded_data = "1|0x1|0xfrom|0xto|0x0|0x|100|0|0x1"
        yield MockJob


def test_output_is_bracketed_by_sentinels(mock_job):
    result = CliRunner().invoke(cli, BASE_ARGS)

    assert result.exit_code == 0, result.output
    assert result.output.splitlines() == [
        "TRANSACTION_DATA:START",
        "TRANSACTION_DATA:1|0x1|0xfrom|0xto|0x0|0x|100|0|0x1",
        "TRANSACTION_DATA:END",
    ]
    mock_job.return_value.run.assert_awaited_once()


def test_defaults_are_passed_to_job(mock_job):
    CliRunner().invoke(cli, BASE_ARGS)

    kwargs = mock_job.call_args.kwargs
    assert kwargs["rpc_url"] == "http://localhost:8545"
    assert kwargs["target_contract"] == TARGET_CONTRACT
    assert kwargs["start_block"] == 100
    assert kwargs["end_block"] == 102
    assert kwargs["output_format"] == "simple"
    assert kwargs["batch_size"] == 10
    assert kwargs["max_concurrent"] == 5
    assert kwargs["detect_internal_calls"] is False
    assert kwargs["rpc_timeout"] == 30


def test_options_are_passed_to_job(mock_job):
    args = BASE_ARGS + [
        "--output-format", "json",
        "--batch-size", "20",
        "--max-concurrent", "8",
        "--detect-internal-calls",
        "--rpc-timeout", "5",
    ]

    result = CliRunner().invoke(cli, args)

    assert result.exit_code == 0, result.output
    kwargs = mock_job.call_args.kwargs
    assert kwargs["output_format"] == "json"
    assert kwargs["batch_size"] == 20
    assert kwargs["max_concurrent"] == 8
    assert kwargs["detect_internal_calls"] is True
    assert kwargs["rpc_timeout"] == 5


def test_missing_required_option_fails():
    result = CliRunner().invoke(cli, ["fetch_transactions", "--rpc-url", "http://localhost:8545"])

    assert result.exit_code != 0
    assert "TRANSACTION_DATA" not in result.output


@pytest.mark.parametrize("option, value", [("--batch-size", "0"), ("--max-concurrent", "0"), ("--start-block", "-1")])
def test_out_of_range_numbers_fail(option, value):
    args = list(BASE_ARGS)
    if option in args:
        args[args.index(option) + 1] = value
    else:
        args += [option, value]

    result = CliRunner().invoke(cli, args)

    assert result.exit_code == 2


def test_start_after_end_is_fatal():
    args = BASE_ARGS[:-1] + ["99"]

    result = CliRunner().invoke(cli, args)

    assert result.exit_code == 1
    assert "range_end" in result.output
    assert "TRANSACTION_DATA" not in result.output


def test_malformed_rpc_url_is_fatal():
    args = [arg if arg != "http://localhost:8545" else "localhost" for arg in BASE_ARGS]

    result = CliRunner().invoke(cli, args)

    assert result.exit_code == 1
    assert "Malformed RPC URL" in result.output


def test_invalid_target_contract_is_fatal():
    args = [arg if arg != TARGET_CONTRACT else "0x1234" for arg in BASE_ARGS]

    result = CliRunner().invoke(cli, args)

    assert result.exit_code == 1
    assert "Invalid target contract address" in result.output
