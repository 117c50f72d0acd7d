import json

import pytest
import responses

from solkit.rpc.account_methods import GetBalanceConfig
from solkit.rpc.models import Commitment, RpcResponseError
from solkit.rpc.rpc_client import RpcClient
from solkit.rpc.transaction_methods import GetSlotConfig
from solkit.rpc.transport import RpcHttpError

ENDPOINT = "http://localhost:8899"
ADDRESS = "RNfp4xTbBb4C3kcv2KqtAj8mu4YhMHxqm1Skg9uchZ7"


@pytest.fixture
def mock():
    with responses.RequestsMock() as rsps:
        yield rsps


def _body(mock, index=0):
    return json.loads(mock.calls[index].request.body)


def test_account_and_transaction_methods_share_one_client(mock):
    mock.add(
        responses.POST,
        ENDPOINT,
        body='{"jsonrpc":"2.0","result":{"context":{"slot":73914708},"value":6999995000},"id":1}',
    )
    mock.add(responses.POST, ENDPOINT, body='{"jsonrpc":"2.0","result":78478796,"id":1}')
    client = RpcClient(ENDPOINT)

    balance = client.get_balance(ADDRESS, GetBalanceConfig(commitment=Commitment.FINALIZED))
    slot = client.get_slot(GetSlotConfig(commitment=Commitment.PROCESSED))

    assert balance.value == 6999995000
    assert balance.context.slot == 73914708
    assert slot.result == 78478796
    assert _body(mock, 0) == {
        "jsonrpc": "2.0",
        "id": 1,
        "method": "getBalance",
        "params": [ADDRESS, {"commitment": "finalized"}],
    }
    assert _body(mock, 1) == {
        "jsonrpc": "2.0",
        "id": 1,
        "method": "getSlot",
        "params": [{"commitment": "processed"}],
    }


def test_block_methods_available(mock):
    mock.add(responses.POST, ENDPOINT, body='{"jsonrpc":"2.0","result":78413497,"id":1}')
    client = RpcClient(ENDPOINT)
    assert client.minimum_ledger_slot() == 78413497
    assert _body(mock)["method"] == "minimumLedgerSlot"
    assert "params" not in _body(mock)


def test_error_reply_raises(mock):
    mock.add(
        responses.POST,
        ENDPOINT,
        body='{"jsonrpc":"2.0","error":{"code":-32005,"message":"Node is behind by 42 slots"},"id":1}',
    )
    client = RpcClient(ENDPOINT)
    with pytest.raises(RpcResponseError) as info:
        client.get_genesis_hash()
    assert info.value.code == -32005
    assert info.value.message == "Node is behind by 42 slots"


def test_http_error_status_raises(mock):
    mock.add(responses.POST, ENDPOINT, body="oops", status=500)
    client = RpcClient(ENDPOINT)
    with pytest.raises(RpcHttpError) as info:
        client.get_transaction_count()
    assert info.value.status_code == 500