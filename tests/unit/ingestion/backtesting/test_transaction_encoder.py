import json
import re
from unittest.mock import patch

import pytest
from pydantic_core import PydanticSerializationError

from ingestion.backtesting.exporters.transaction_encoder import TransactionEncoder
from ingestion.backtesting.models.filtered_transaction import FilteredTransaction

JSON_FIELDS = ["hash", "from", "to", "value", "data", "block_number", "transaction_index", "gas_price"]


def build_filtered_transaction(tx_hash: str = "0x1", block_number: str = "100", index: str = "0") -> FilteredTransaction:
    return FilteredTransaction(
        hash=tx_hash,
        from_address="0x1111111111111111111111111111111111111111",
        to_address="0xabcdef0123456789abcdef0123456789abcdef01",
        value="0xde0b6b3a7640000",
        data="0xa9059cbb",
        block_number=block_number,
        transaction_index=index,
        gas_price="0x3b9aca00",
    )


@pytest.fixture
def encoder():
    return TransactionEncoder()


def test_simple_format_empty(encoder):
    assert encoder.encode([], "simple") == "0"


def test_simple_format_single_transaction(encoder):
    tx = build_filtered_transaction()

    assert encoder.encode([tx], "simple") == (
        "1|0x1|0x1111111111111111111111111111111111111111|0xabcdef0123456789abcdef0123456789abcdef01"
        "|0xde0b6b3a7640000|0xa9059cbb|100|0|0x3b9aca00"
    )


def test_simple_format_count_and_record_pattern(encoder):
    transactions = [build_filtered_transaction(f"0x{i}", index=str(i)) for i in range(3)]

    payload = encoder.encode(transactions, "simple")

    assert payload.split("|", 1)[0] == "3"
    assert payload.count("|") == 3 * 8
    assert len(re.findall(r"\|0x\d\|[^|]*\|[^|]*\|[^|]*\|[^|]*\|\d+\|\d+\|[^|]*", payload)) == 3


def test_json_format(encoder):
    transactions = [build_filtered_transaction("0x1"), build_filtered_transaction("0x2", index="1")]

    payload = encoder.encode(transactions, "json")
    decoded = json.loads(payload)

    assert len(decoded) == 2
    assert list(decoded[0].keys()) == JSON_FIELDS
    assert decoded[1]["hash"] == "0x2"
    assert decoded[1]["transaction_index"] == "1"
    assert decoded[0]["from"] == "0x1111111111111111111111111111111111111111"


def test_json_format_empty(encoder):
    assert encoder.encode([], "json") == "[]"


def test_json_format_is_case_insensitive(encoder):
    assert encoder.encode([], "JSON") == "[]"


def test_json_serialization_failure_falls_back_to_empty_array(encoder):
    with patch("ingestion.backtesting.exporters.transaction_encoder.TRANSACTION_LIST_ADAPTER") as mock_adapter:
        mock_adapter.dump_json.side_effect = PydanticSerializationError("boom")
        assert encoder.encode([build_filtered_transaction()], "json") == "[]"


def test_unknown_format_falls_back_to_simple(encoder, caplog):
    payload = encoder.encode([build_filtered_transaction()], "xml")

    assert payload.startswith("1|0x1|")
    assert "Unknown output format 'xml'" in caplog.text
