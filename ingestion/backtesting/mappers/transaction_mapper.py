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

from typing import Any, Dict

from ingestion.backtesting.models.transaction import EthTransaction


class EthTransactionMapper(object):
    @staticmethod
    def json_dict_to_transaction(json_dict: Dict[str, Any]) -> EthTransaction:
        # Numeric fields stay in wire encoding here; the filter normalizes the ones it emits.
        return EthTransaction(
            hash=json_dict.get("hash"),
            from_address=json_dict.get("from"),
            to_address=json_dict.get("to"),
            value=json_dict.get("value"),
            input=json_dict.get("input"),
            transaction_index=json_dict.get("transactionIndex"),
            gas_price=json_dict.get("gasPrice"),
        )
