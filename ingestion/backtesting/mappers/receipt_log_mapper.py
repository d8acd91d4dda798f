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

from typing import Any, Dict, List

from ingestion.backtesting.models.receipt_log import EthReceiptLog
from utils.exceptions import MalformedBlockError


class EthReceiptLogMapper(object):
    @staticmethod
    def json_dict_to_receipt_log(json_dict: Dict[str, Any], **kwargs) -> EthReceiptLog:
        return EthReceiptLog(
            transaction_hash=json_dict.get("transactionHash") or kwargs.get("transaction_hash"),
            address=json_dict.get("address"),
        )

    def block_receipts_to_logs(self, receipts: Any) -> List[EthReceiptLog]:
        """Flattens an eth_getBlockReceipts result into its logs."""
        if not isinstance(receipts, list):
            raise MalformedBlockError(f"Expected a list of receipts, got {type(receipts).__name__}")

        logs = []
        for receipt in receipts:
            if not isinstance(receipt, dict):
                raise MalformedBlockError("Expected receipt objects in eth_getBlockReceipts result")
            for log in receipt.get("logs") or []:
                if isinstance(log, dict):
                    logs.append(
                        self.json_dict_to_receipt_log(log, transaction_hash=receipt.get("transactionHash"))
                    )
        return logs
