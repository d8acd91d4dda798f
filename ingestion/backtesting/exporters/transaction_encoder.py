from typing import List, Sequence

from pydantic import TypeAdapter
from pydantic_core import PydanticSerializationError

from ingestion.backtesting.enums.output_format import OutputFormat
from ingestion.backtesting.models.filtered_transaction import FilteredTransaction
from utils.logger_utils import get_logger

logger = get_logger("Transaction Encoder")

SIMPLE_FORMAT_DELIMITER = "|"
EMPTY_JSON_ARRAY = "[]"

TRANSACTION_LIST_ADAPTER = TypeAdapter(List[FilteredTransaction])


class TransactionEncoder(object):
    """Stateless serializers for the filtered transaction list."""

    def encode(self, transactions: Sequence[FilteredTransaction], output_format: str) -> str:
        """
        Encodes transactions in the selected format.
        An unrecognized format selector falls back to the simple format.
        """
        try:
            selected_format = OutputFormat(str(output_format).strip().lower())
        except ValueError:
            logger.warning(f"Unknown output format '{output_format}', falling back to '{OutputFormat.SIMPLE.value}'")
            selected_format = OutputFormat.SIMPLE

        if selected_format == OutputFormat.JSON:
            return self.encode_json(transactions)
        return self.encode_simple(transactions)

    @staticmethod
    def encode_simple(transactions: Sequence[FilteredTransaction]) -> str:
        """
        Pipe-delimited format, easy to parse in Solidity:
        count|hash|from|to|value|data|blockNumber|txIndex|gasPrice|...
        """
        fields = [str(len(transactions))]
        for tx in transactions:
            fields.extend(
                [
                    tx.hash,
                    tx.from_address,
                    tx.to_address,
                    tx.value,
                    tx.data,
                    tx.block_number,
                    tx.transaction_index,
                    tx.gas_price,
                ]
            )
        return SIMPLE_FORMAT_DELIMITER.join(fields)

    @staticmethod
    def encode_json(transactions: Sequence[FilteredTransaction]) -> str:
        try:
            return TRANSACTION_LIST_ADAPTER.dump_json(list(transactions), by_alias=True).decode("utf-8")
        except PydanticSerializationError as e:
            logger.error(f"Failed to serialize transactions to JSON: {e}")
            return EMPTY_JSON_ARRAY
