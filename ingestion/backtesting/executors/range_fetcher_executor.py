import asyncio
from typing import Iterable, List

from pydantic import ValidationError

from ingestion.backtesting.mappers.block_mapper import EthBlockMapper
from ingestion.backtesting.mappers.filtered_transaction_mapper import FilteredTransactionMapper
from ingestion.backtesting.mappers.receipt_log_mapper import EthReceiptLogMapper
from ingestion.backtesting.models.block import EthBlock
from ingestion.backtesting.models.range_result import FetchOutcome, RangeResult
from ingestion.backtesting.rpc_client import RpcClient
from utils.async_utils import gather_with_semaphore
from utils.exceptions import BlockFetchError, MalformedBlockError
from utils.formatter_utils import to_normalized_address
from utils.logger_utils import get_logger
from utils.progress_logger_utils import ProgressLogger
from utils.validation_utils import validate_block_range, validate_positive, validate_target_address

logger = get_logger("Range Fetcher Executor")

# Errors that fail a single block without aborting the run
PER_BLOCK_ERRORS = (BlockFetchError, MalformedBlockError, ValidationError)


class RangeFetcherExecutor:
    """
    Fetches a block range in sequential, barrier-synchronized batches.

    Inside a batch every block is fetched concurrently, but a single semaphore shared by the
    whole run keeps at most max_concurrent RPC calls in flight. Batch N+1 is not dispatched
    until every fetch of batch N has resolved. Per-block failures are recorded and never retried.
    Only the coordinating coroutine (fetch_range) updates counters; fetch tasks return FetchOutcome values.
    """

    def __init__(
        self,
        rpc_client: RpcClient,
        batch_size: int,
        max_concurrent: int,
        detect_internal_calls: bool = False,
    ):
        validate_positive("batch_size", batch_size)
        validate_positive("max_concurrent", max_concurrent)

        self.rpc_client = rpc_client
        self.batch_size = batch_size
        self.max_concurrent = max_concurrent
        self.detect_internal_calls = detect_internal_calls

        # Mappers
        self.block_mapper = EthBlockMapper()
        self.receipt_log_mapper = EthReceiptLogMapper()
        self.filtered_transaction_mapper = FilteredTransactionMapper()

        self.progress_logger = ProgressLogger(name="block range fetch", logger=logger)

    async def fetch_range(self, start_block: int, end_block: int, target_address: str) -> RangeResult:
        """
        Main entry point: fetch and filter every block in [start_block, end_block].

        Raises:
            ConfigError: If the range or the target address is invalid.
        """
        validate_block_range(start_block, end_block)
        validate_target_address(target_address)
        target = to_normalized_address(target_address)

        logger.info(
            f"Starting fetch: blocks {start_block} to {end_block} "
            f"(batch size: {self.batch_size}, max concurrent: {self.max_concurrent})"
        )

        # One semaphore for the whole run, so the cap is global and not per batch
        semaphore = asyncio.Semaphore(self.max_concurrent)
        result = RangeResult()

        self.progress_logger.start(total_items=end_block - start_block + 1)
        try:
            for batch in self._batch_iterator(start_block, end_block, self.batch_size):
                logger.info(f"Processing batch: blocks {batch[0]} to {batch[-1]}")

                # Batch barrier: gather returns only once every block of the batch has resolved
                outcomes: List[FetchOutcome] = await gather_with_semaphore(
                    semaphore,
                    *(self._fetch_block_outcome(block_number, target) for block_number in batch),
                )
                self._merge_outcomes(result, outcomes)
                self.progress_logger.track(len(batch))
        finally:
            elapsed = self.progress_logger.finish()

        result.elapsed_seconds = elapsed or 0.0
        logger.info(
            f"Processed {result.blocks_succeeded}/{result.blocks_attempted} blocks "
            f"({result.blocks_failed} failed), found {result.transactions_found} transactions"
        )
        logger.info(
            f"Average: {result.blocks_per_second:.2f} blocks/sec, "
            f"{result.transactions_per_second:.2f} transactions/sec"
        )
        return result

    @staticmethod
    def _batch_iterator(start_block: int, end_block: int, batch_size: int) -> Iterable[List[int]]:
        for batch_start in range(start_block, end_block + 1, batch_size):
            batch_end = min(batch_start + batch_size - 1, end_block)
            yield list(range(batch_start, batch_end + 1))

    @staticmethod
    def _merge_outcomes(result: RangeResult, outcomes: List[FetchOutcome]) -> None:
        # Outcomes arrive in dispatch order (ascending block number), whatever the completion order was
        for outcome in outcomes:
            result.blocks_attempted += 1
            if outcome.succeeded:
                result.blocks_succeeded += 1
                result.transactions_found += len(outcome.transactions)
                result.transactions.extend(outcome.transactions)
            else:
                result.failed_blocks.append(outcome)

    async def _fetch_block_outcome(self, block_number: int, target: str) -> FetchOutcome:
        """
        Worker: fetch one block, filter it, and wrap the result. Never raises for per-block errors.
        """
        try:
            raw_block = await self.rpc_client.fetch_block(block_number)
            block = self.block_mapper.json_dict_to_block(raw_block)
            matched_hashes = await self._internal_call_hashes(block, target)
            transactions = self.filtered_transaction_mapper.filter_block(block, target, matched_hashes)
        except PER_BLOCK_ERRORS as e:
            logger.warning(f"Error fetching block {block_number}: {e}")
            return FetchOutcome(block_number=block_number, error=str(e))

        if transactions:
            logger.info(f"Block {block_number}: found {len(transactions)} transactions")

        transactions.sort(key=lambda tx: int(tx.transaction_index))
        return FetchOutcome(block_number=block_number, transactions=transactions)

    async def _internal_call_hashes(self, block: EthBlock, target: str) -> frozenset:
        """
        Hashes of transactions that reached the target through an internal call,
        detected by a receipt log emitted by the target. Runs inside the block's concurrency slot.
        """
        if not self.detect_internal_calls or not block.transactions:
            return frozenset()

        receipts = await self.rpc_client.fetch_block_receipts(block.number)
        logs = self.receipt_log_mapper.block_receipts_to_logs(receipts)
        return frozenset(self.filtered_transaction_mapper.hashes_with_logs_from(logs, target))
