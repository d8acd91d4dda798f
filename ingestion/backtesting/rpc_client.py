import asyncio
from typing import Any, Dict, List, Optional

import aiohttp

from utils.exceptions import BlockFetchError
from utils.logger_utils import get_logger
from utils.rpc_utils import (
    generate_get_block_by_number_json_rpc,
    generate_get_block_receipts_json_rpc,
    rpc_response_to_result,
)
from utils.validation_utils import validate_rpc_url

logger = get_logger("Rpc Client")

DEFAULT_TIMEOUT_SECONDS = 30
DEFAULT_POOL_SIZE = 10


class RpcClient(object):
    """
    JSON-RPC client for a single EVM node endpoint.
    Uses one persistent ClientSession for connection pooling; every call is bounded by the session timeout.
    Calls are never retried. Any failure is reported as a BlockFetchError for the requested block.
    """

    def __init__(self, rpc_url: str, timeout: int = DEFAULT_TIMEOUT_SECONDS, pool_size: int = DEFAULT_POOL_SIZE):
        # Raises ConfigError for a malformed endpoint, before any session exists
        self.rpc_url = validate_rpc_url(rpc_url)
        self.id_counter = 0
        self.pool_size = pool_size
        # Total timeout for the request (connect + read)
        self.timeout = aiohttp.ClientTimeout(total=timeout)

        # Persistent Session
        self._session: Optional[aiohttp.ClientSession] = None

    async def __aenter__(self) -> "RpcClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def _get_session(self) -> aiohttp.ClientSession:
        """Lazy loads or returns the existing session."""
        if self._session is None or self._session.closed:
            connector = aiohttp.TCPConnector(limit=self.pool_size, force_close=False)
            self._session = aiohttp.ClientSession(
                connector=connector,
                timeout=self.timeout,
                headers={"Content-Type": "application/json"},
            )
        return self._session

    async def close(self):
        """Closes the underlying session."""
        if self._session and not self._session.closed:
            await self._session.close()

    def _generate_id(self) -> int:
        self.id_counter += 1
        return self.id_counter

    async def fetch_block(self, block_number: int) -> Dict[str, Any]:
        """
        Fetches a block with full transaction objects.

        Raises:
            BlockFetchError: On network error, timeout, bad HTTP status, bad JSON or a JSON-RPC error.
        """
        payload = generate_get_block_by_number_json_rpc(block_number, True, self._generate_id())
        return await self._make_request(block_number, payload)

    async def fetch_block_receipts(self, block_number: int) -> List[Dict[str, Any]]:
        payload = generate_get_block_receipts_json_rpc(block_number, self._generate_id())
        return await self._make_request(block_number, payload)

    async def _make_request(self, block_number: int, payload: Dict[str, Any]) -> Any:
        method_name = payload["method"]
        session = await self._get_session()
        logger.debug(f"{method_name} for block {block_number} at {self.rpc_url}")
        try:
            async with session.post(self.rpc_url, json=payload) as response:
                if response.status != 200:
                    raise BlockFetchError(block_number, f"RPC HTTP Error {response.status} in {method_name}")
                data = await response.json(content_type=None)
            return rpc_response_to_result(data)
        except asyncio.TimeoutError:
            raise BlockFetchError(block_number, f"Timeout in {method_name} after {self.timeout.total}s")
        except aiohttp.ClientError as e:
            raise BlockFetchError(block_number, f"Network error in {method_name}: {e}")
        except ValueError as e:
            # RpcResponseError, or an undecodable JSON body
            raise BlockFetchError(block_number, f"Bad response to {method_name}: {e}")
