from unittest.mock import patch

import pytest

from ingestion.backtesting.jobs.fetch_transactions_job import FetchTransactionsJob, fetch_range
from utils.exceptions import ConfigError

RPC_URL = "http://localhost:8545"
OTHER_CONTRACT = "0x2222222222222222222222222222222222222222"


@pytest.fixture
def scenario_blocks(make_block, make_transaction):
    return {
        100: make_block(100, [make_transaction("0x1", index="0x0")]),
        101: make_block(101, [make_transaction("0x2", to=OTHER_CONTRACT)]),
        102: make_block(102),
    }


def test_initialization_validation(target_contract):
    with pytest.raises(ConfigError, match="Block number must be greater than or equal to 0"):
        FetchTransactionsJob(RPC_URL, target_contract, start_block=-1, end_block=10)

    with pytest.raises(ConfigError, match="range_end"):
        FetchTransactionsJob(RPC_URL, target_contract, start_block=10, end_block=5)

    with pytest.raises(ConfigError, match="Malformed RPC URL"):
        FetchTransactionsJob("not-a-url", target_contract, start_block=1, end_block=5)

    with pytest.raises(ConfigError, match="batch_size"):
        FetchTransactionsJob(RPC_URL, target_contract, start_block=1, end_block=5, batch_size=0)


@pytest.mark.asyncio
async def test_job_encodes_simple_payload(fake_rpc_client, scenario_blocks, target_contract):
    client = fake_rpc_client(blocks=scenario_blocks)
    with patch("ingestion.backtesting.jobs.fetch_transactions_job.RpcClient", return_value=client):
        job = FetchTransactionsJob(RPC_URL, target_contract.upper().replace("0X", "0x"), 100, 102)
        await job.run()

    tx = scenario_blocks[100]["transactions"][0]
    assert job.encoded_data == (
        f"1|0x1|{tx['from']}|{target_contract.lower()}|{tx['value']}|{tx['input']}|100|0|{tx['gasPrice']}"
    )
    assert job.result.blocks_succeeded == 3
    assert client.closed


@pytest.mark.asyncio
async def test_job_encodes_json_payload(fake_rpc_client, scenario_blocks, target_contract):
    client = fake_rpc_client(blocks=scenario_blocks)
    with patch("ingestion.backtesting.jobs.fetch_transactions_job.RpcClient", return_value=client):
        job = FetchTransactionsJob(RPC_URL, target_contract, 100, 102, output_format="json")
        await job.run()

    assert job.encoded_data.startswith('[{"hash":"0x1","from":')
    assert '"block_number":"100","transaction_index":"0"' in job.encoded_data


@pytest.mark.asyncio
async def test_job_closes_client_when_all_blocks_fail(fake_rpc_client, target_contract):
    client = fake_rpc_client(failing_blocks=[1, 2])
    with patch("ingestion.backtesting.jobs.fetch_transactions_job.RpcClient", return_value=client):
        job = FetchTransactionsJob(RPC_URL, target_contract, 1, 2)
        await job.run()

    assert job.encoded_data == "0"
    assert job.result.blocks_failed == 2
    assert client.closed


@pytest.mark.asyncio
async def test_fetch_range(fake_rpc_client, scenario_blocks, target_contract):
    client = fake_rpc_client(blocks=scenario_blocks)
    with patch("ingestion.backtesting.jobs.fetch_transactions_job.RpcClient", return_value=client) as mock_client:
        result = await fetch_range(RPC_URL, 100, 102, target_contract, batch_size=2, max_concurrent=1)

    mock_client.assert_called_once_with(RPC_URL, timeout=30, pool_size=10)
    assert [tx.hash for tx in result.transactions] == ["0x1"]
    assert result.blocks_attempted == 3
    assert client.max_in_flight == 1
    assert client.closed


@pytest.mark.asyncio
async def test_connection_pool_covers_max_concurrent(fake_rpc_client, target_contract):
    client = fake_rpc_client()
    with patch("ingestion.backtesting.jobs.fetch_transactions_job.RpcClient", return_value=client) as mock_client:
        await fetch_range(RPC_URL, 1, 2, target_contract, batch_size=2, max_concurrent=25, rpc_pool_size=10)

    mock_client.assert_called_once_with(RPC_URL, timeout=30, pool_size=25)


@pytest.mark.asyncio
async def test_fetch_range_rejects_bad_endpoint(target_contract):
    with pytest.raises(ConfigError):
        await fetch_range("ftp://node", 1, 2, target_contract, batch_size=1, max_concurrent=1)
