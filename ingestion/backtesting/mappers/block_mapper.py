# MIT License
#
# Copyright (c) 2018 Evgeny Medvedev, evge.medvedev@gmail.com
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in all
# copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.
#
# Modified By: Cuong CT, 6/12/2025
# Change Description: Refactored to use Pydantic models and added typing.

from typing import Any, Dict

from pydantic import ValidationError

from ingestion.backtesting.mappers.transaction_mapper import EthTransactionMapper
from ingestion.backtesting.models.block import EthBlock
from utils.exceptions import MalformedBlockError
from utils.formatter_utils import wire_number_to_int


class EthBlockMapper(object):
    def __init__(self):
        self.transaction_mapper = EthTransactionMapper()

    def json_dict_to_block(self, json_dict: Dict[str, Any]) -> EthBlock:
        """
        Builds an EthBlock from an eth_getBlockByNumber(..., true) result.

        Raises:
            MalformedBlockError: If the block or any of its transactions is malformed.
                MalformedNumericError (a subclass) when the block number is not hex or decimal.
        """
        if not isinstance(json_dict, dict):
            raise MalformedBlockError(f"Expected a block object, got {type(json_dict).__name__}")

        number = wire_number_to_int(json_dict.get("number"), "number")

        raw_transactions = json_dict.get("transactions", [])
        if not isinstance(raw_transactions, list):
            raise MalformedBlockError(f"Block {number}: transactions must be a list")

        try:
            transactions = []
            for tx in raw_transactions:
                if not isinstance(tx, dict):
                    # Hash-only listing, full transactions were not requested
                    raise MalformedBlockError(f"Block {number}: expected full transaction objects")
                transactions.append(self.transaction_mapper.json_dict_to_transaction(tx))

            return EthBlock(
                number=number,
                base_fee_per_gas=json_dict.get("baseFeePerGas"),
                transactions=transactions,
            )
        except ValidationError as e:
            raise MalformedBlockError(f"Block {number}: {e.error_count()} invalid field(s): {e.errors()[0]['msg']}")
