import asyncio
from typing import Any, Dict, Iterable, List, Optional

import pytest

from utils.exceptions import BlockFetchError

TARGET_CONTRACT = "0xAbCdEf0123456789aBcDeF0123456789AbCdEf01"
SENDER = "0x1111111111111111111111111111111111111111"


def build_transaction(
    tx_hash: str,
    to: Optional[str] = TARGET_CONTRACT.lower(),
    index: str = "0x0",
    value: str = "0xde0b6b3a7640000",
    data: str = "0xa9059cbb",
    gas_price: str = "0x3b9aca00",
) -> Dict[str, Any]:
    return {
        "hash": tx_hash,
        "from": SENDER,
        "to": to,
        "value": value,
        "input": data,
        "transactionIndex": index,
        "gasPrice": gas_price,
        "nonce": "0x1",
    }


def build_block(number: int, transactions: Iterable[Dict[str, Any]] = ()) -> Dict[str, Any]:
    return {
        "number": hex(number),
        "hash": f"0xblock{number}",
        "baseFeePerGas": "0x7",
        "transactions": list(transactions),
    }


class FakeRpcClient:
    """In-memory block source that records how many fetches are in flight."""

    def __init__(
        self,
        blocks: Optional[Dict[int, Dict[str, Any]]] = None,
        failing_blocks: Iterable[int] = (),
        receipts: Optional[Dict[int, List[Dict[str, Any]]]] = None,
        delays: Optional[Dict[int, float]] = None,
        default_delay: float = 0.01,
    ):
        self.blocks = blocks or {}
        self.failing_blocks = set(failing_blocks)
        self.receipts = receipts or {}
        self.delays = delays or {}
        self.default_delay = default_delay

        self.in_flight = 0
        self.max_in_flight = 0
        self.events: List[tuple] = []
        self.closed = False

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    async def close(self):
        self.closed = True

    async def _track(self, kind: str, block_number: int):
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        self.events.append(("start", kind, block_number))
        try:
            await asyncio.sleep(self.delays.get(block_number, self.default_delay))
            if block_number in self.failing_blocks:
                raise BlockFetchError(block_number, "connection reset")
        finally:
            self.in_flight -= 1
            self.events.append(("end", kind, block_number))

    async def fetch_block(self, block_number: int) -> Dict[str, Any]:
        await self._track("block", block_number)
        return self.blocks.get(block_number, build_block(block_number))

    async def fetch_block_receipts(self, block_number: int) -> List[Dict[str, Any]]:
        await self._track("receipts", block_number)
        return self.receipts.get(block_number, [])


@pytest.fixture
def target_contract():
    return TARGET_CONTRACT


@pytest.fixture
def make_transaction():
    return build_transaction


@pytest.fixture
def make_block():
    return build_block


@pytest.fixture
def fake_rpc_client():
    return FakeRpcClient
