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
# Change Description: Refactored for performance, readability, and type safety.

from typing import Any, Dict, List, Optional

from utils.exceptions import RpcResponseError

JSON_RPC_VERSION = "2.0"


def generate_json_rpc(method: str, params: Optional[List[Any]] = None, request_id: int = 1) -> Dict[str, Any]:
    return {
        "jsonrpc": JSON_RPC_VERSION,
        "method": method,
        "params": params if params is not None else [],
        "id": request_id,
    }


def generate_get_block_by_number_json_rpc(block_number: int, include_transactions: bool = True, request_id: int = 1):
    return generate_json_rpc("eth_getBlockByNumber", [hex(block_number), include_transactions], request_id)


def generate_get_block_receipts_json_rpc(block_number: int, request_id: int = 1):
    return generate_json_rpc("eth_getBlockReceipts", [hex(block_number)], request_id)


def rpc_response_to_result(response: Any) -> Any:
    if not isinstance(response, dict):
        raise RpcResponseError(f"Unexpected JSON-RPC response (non-object): {response!r}.")

    error = response.get("error")
    if error is not None:
        raise RpcResponseError(f"RPC error: {_format_rpc_error(error)}.")

    result = response.get("result")
    if result is None:
        # Unknown block, or a node behind a load balancer that is not synced yet
        raise RpcResponseError(f"result is None in response {response}. Make sure Ethereum node is synced.")

    return result


def _format_rpc_error(error: Any) -> str:
    if not isinstance(error, dict):
        return str(error)
    parts: List[str] = []
    if error.get("code") is not None:
        parts.append(f"code {error['code']}")
    if error.get("message"):
        parts.append(str(error["message"]))
    if error.get("data"):
        parts.append(str(error["data"]))
    return ": ".join(parts) if parts else "unknown error"
