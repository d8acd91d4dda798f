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
# Change Description: Refactored to coordinate work using RangeFetcherExecutor.

from typing import Optional

from ingestion.backtesting.executors.range_fetcher_executor import RangeFetcherExecutor
from ingestion.backtesting.exporters.transaction_encoder import TransactionEncoder
from ingestion.backtesting.models.range_result import RangeResult
from ingestion.backtesting.rpc_client import DEFAULT_POOL_SIZE, DEFAULT_TIMEOUT_SECONDS, RpcClient
from ingestion.blockchainetl.jobs.async_base_job import AsyncBaseJob
from utils.logger_utils import get_logger
from utils.validation_utils import validate_block_range, validate_target_address

logger = get_logger("Fetch Transactions Job")


async def fetch_range(
    rpc_endpoint: str,
    start_block: int,
    end_block: int,
    target_address: str,
    batch_size: int,
    max_concurrent: int,
    detect_internal_calls: bool = False,
    rpc_timeout: int = DEFAULT_TIMEOUT_SECONDS,
    rpc_pool_size: int = DEFAULT_POOL_SIZE,
) -> RangeResult:
    """
    Fetches every block in [start_block, end_block] and returns the transactions sent to target_address.

    Raises:
        ConfigError: For invalid arguments or a malformed endpoint. Per-block failures never raise;
            they are reported through RangeResult.failed_blocks.
    """
    job = FetchTransactionsJob(
        rpc_url=rpc_endpoint,
        target_contract=target_address,
        start_block=start_block,
        end_block=end_block,
        batch_size=batch_size,
        max_concurrent=max_concurrent,
        detect_internal_calls=detect_internal_calls,
        rpc_timeout=rpc_timeout,
        rpc_pool_size=rpc_pool_size,
    )
    await job.run()
    return job.result


class FetchTransactionsJob(AsyncBaseJob):
    def __init__(
        self,
        rpc_url: str,
        target_contract: str,
        start_block: int,
        end_block: int,
        batch_size: int = 10,
        max_concurrent: int = 5,
        output_format: str = "simple",
        detect_internal_calls: bool = False,
        rpc_timeout: int = DEFAULT_TIMEOUT_SECONDS,
        rpc_pool_size: int = DEFAULT_POOL_SIZE,
    ):
        # Fail fast: every ConfigError surfaces here, before any fetching begins
        validate_block_range(start_block, end_block)
        validate_target_address(target_contract)

        self.target_contract = target_contract
        self.start_block = start_block
        self.end_block = end_block
        self.output_format = output_format

        # Each in-flight call needs its own pooled connection, or the pool caps max_concurrent
        self.rpc_client = RpcClient(rpc_url, timeout=rpc_timeout, pool_size=max(rpc_pool_size, max_concurrent))
        self.executor = RangeFetcherExecutor(
            rpc_client=self.rpc_client,
            batch_size=batch_size,
            max_concurrent=max_concurrent,
            detect_internal_calls=detect_internal_calls,
        )
        self.encoder = TransactionEncoder()

        self.result: Optional[RangeResult] = None
        self.encoded_data: Optional[str] = None

    async def _start(self) -> None:
        logger.info(
            f"Starting FetchTransactionsJob for {self.target_contract} "
            f"from {self.start_block} to {self.end_block}"
        )

    async def _export(self) -> None:
        self.result = await self.executor.fetch_range(self.start_block, self.end_block, self.target_contract)
        self.encoded_data = self.encoder.encode(self.result.transactions, self.output_format)

    async def _end(self) -> None:
        await self.rpc_client.close()
        logger.info("FetchTransactionsJob completed")
