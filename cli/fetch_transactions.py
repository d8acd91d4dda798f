import asyncio
from typing import Optional

import click

from config.settings import settings
from ingestion.backtesting.jobs.fetch_transactions_job import FetchTransactionsJob
from utils.exceptions import ConfigError
from utils.logger_utils import configure_logging, get_logger

logger = get_logger("Fetch Transactions")

OUTPUT_MARKER = "TRANSACTION_DATA"


@click.command(context_settings=dict(help_option_names=["-h", "--help"]))
@click.option("--rpc-url", required=True, type=str, help="JSON-RPC endpoint URL of the block source.")
@click.option("--target-contract", required=True, type=str, help="Contract address to filter transactions for.")
@click.option("--start-block", required=True, type=click.IntRange(min=0), help="Starting block number (inclusive).")
@click.option("--end-block", required=True, type=click.IntRange(min=0), help="Ending block number (inclusive).")
@click.option(
    "--output-format",
    default=settings.fetcher.output_format,
    show_default=True,
    type=str,
    help="Output format: simple or json. Unrecognized values fall back to simple.",
)
@click.option(
    "--batch-size",
    default=settings.fetcher.batch_size,
    show_default=True,
    type=click.IntRange(min=1),
    help="Number of blocks per batch. The next batch starts only after the whole batch has completed.",
)
@click.option(
    "--max-concurrent",
    default=settings.fetcher.max_concurrent,
    show_default=True,
    type=click.IntRange(min=1),
    help="Maximum number of RPC requests in flight at any time.",
)
@click.option(
    "--detect-internal-calls",
    is_flag=True,
    default=False,
    help="Also select transactions whose receipt logs were emitted by the target (one extra eth_getBlockReceipts call per block).",
)
@click.option(
    "--rpc-timeout",
    default=settings.fetcher.rpc_timeout,
    show_default=True,
    type=click.IntRange(min=1),
    help="Timeout in seconds for a single RPC request.",
)
@click.option("--log-file", default=None, show_default=True, type=str, help="Path to the log file.")
def fetch_transactions(
    rpc_url: str,
    target_contract: str,
    start_block: int,
    end_block: int,
    output_format: str,
    batch_size: int,
    max_concurrent: int,
    detect_internal_calls: bool,
    rpc_timeout: int,
    log_file: Optional[str] = None,
):
    """Fetches the transactions sent to a contract over a block range, for backtesting."""
    configure_logging(log_file, settings.app.log_level)

    try:
        job = FetchTransactionsJob(
            rpc_url=rpc_url,
            target_contract=target_contract,
            start_block=start_block,
            end_block=end_block,
            batch_size=batch_size,
            max_concurrent=max_concurrent,
            output_format=output_format,
            detect_internal_calls=detect_internal_calls,
            rpc_timeout=rpc_timeout,
            rpc_pool_size=settings.fetcher.rpc_pool_size,
        )
    except ConfigError as e:
        raise click.ClickException(str(e))

    asyncio.run(job.run())

    click.echo(f"{OUTPUT_MARKER}:START")
    click.echo(f"{OUTPUT_MARKER}:{job.encoded_data}")
    click.echo(f"{OUTPUT_MARKER}:END")
