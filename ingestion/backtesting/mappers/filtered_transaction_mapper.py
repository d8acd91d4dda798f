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
# Change Description: Add Typing, Using Pydantic Model to implement mapper logic.

from typing import AbstractSet, List, Set

from ingestion.backtesting.models.block import EthBlock
from ingestion.backtesting.models.filtered_transaction import FilteredTransaction
from ingestion.backtesting.models.receipt_log import EthReceiptLog
from ingestion.backtesting.models.transaction import EthTransaction
from utils.formatter_utils import to_normalized_address, wire_number_to_decimal_string


class FilteredTransactionMapper(object):
    """Selects the transactions of a block that are addressed to a target contract."""

    def filter_block(
        self,
        block: EthBlock,
        target_address: str,
        matched_hashes: AbstractSet[str] = frozenset(),
    ) -> List[FilteredTransaction]:
        """
        Returns one FilteredTransaction per transaction whose `to` equals target_address
        (case-insensitive), plus any transaction whose hash is in matched_hashes.
        Contract creations (no `to`) only match through matched_hashes.

        Raises:
            MalformedNumericError: If a matching transaction's index is neither hex nor decimal.
        """
        target = to_normalized_address(target_address)
        block_number = str(block.number)

        filtered_transactions = []
        for tx in block.transactions:
            if self._is_addressed_to(tx, target) or tx.hash in matched_hashes:
                filtered_transactions.append(self.transaction_to_filtered_transaction(tx, block_number))
        return filtered_transactions

    @staticmethod
    def _is_addressed_to(tx: EthTransaction, target: str) -> bool:
        if tx.to_address is None:
            return False
        return to_normalized_address(tx.to_address) == target

    @staticmethod
    def transaction_to_filtered_transaction(tx: EthTransaction, block_number: str) -> FilteredTransaction:
        return FilteredTransaction(
            hash=tx.hash,
            from_address=tx.from_address,
            to_address=tx.to_address or "",
            value=tx.value,
            data=tx.input,
            block_number=block_number,
            transaction_index=wire_number_to_decimal_string(tx.transaction_index, "transactionIndex"),
            gas_price=tx.gas_price,
        )

    @staticmethod
    def hashes_with_logs_from(logs: List[EthReceiptLog], target_address: str) -> Set[str]:
        """Hashes of transactions that emitted at least one log from target_address."""
        target = to_normalized_address(target_address)
        return {
            log.transaction_hash
            for log in logs
            if log.transaction_hash is not None and to_normalized_address(log.address) == target
        }
