import base64
import json

import pytest
import responses

from solkit.client import AccountInfo, Client
from solkit.rpc.models import Commitment, RpcResponseError
from solkit.rpc.transaction_methods import GetSlotConfig
from solkit.rpc.transport import RpcHttpError

ENDPOINT = "http://localhost:8899"
ADDRESS = "F5RYi7FMPefkc7okJNh21Hcsch7RUaLVr8Rzc8SQqxUb"
TOKEN_OWNER = "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA"
SLICE_DATA = "Bj5w2ZFXmNyj7tuRN89kxw/6+2LN04KBBSUL12sdbN4="
RAW_TX = (
    "ATRYBqVekVOUHarhI0hXlMCqlcAxn7dNuH/TYXZFa9aPAGDT6tMC7NIqExjRV2EXy3HJB7kPjiNwT4fLdxBFQw4B"
    "AAECBj5w2ZFXmNyj7tuRN89kxw/6+2LN04KBBSUL12sdbN4AAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAA"
    "AGESezVpevNbRbWDSu3ezgl24yUCjGiZzveFPdbyKi4TAQECAAAMAgAAAAEAAAAAAAAA"
)


@pytest.fixture
def mock():
    with responses.RequestsMock() as rsps:
        yield rsps


def _body(mock, index=0):
    return json.loads(mock.calls[index].request.body)


def _account_reply(data):
    return json.dumps(
        {
            "jsonrpc": "2.0",
            "result": {
                "context": {"slot": 77317718},
                "value": {
                    "data": data,
                    "executable": False,
                    "lamports": 1461600,
                    "owner": TOKEN_OWNER,
                    "rentEpoch": 178,
                },
            },
            "id": 1,
        }
    )


def test_get_balance(mock):
    mock.add(
        responses.POST,
        ENDPOINT,
        body='{"jsonrpc":"2.0","result":{"context":{"slot":73914708},"value":6999995000},"id":1}',
    )
    assert Client(ENDPOINT).get_balance(ADDRESS) == 6999995000
    assert _body(mock)["params"] == [ADDRESS]


def test_get_balance_error_raises(mock):
    mock.add(
        responses.POST,
        ENDPOINT,
        body='{"jsonrpc":"2.0","error":{"code":-32602,"message":"Invalid param"},"id":1}',
    )
    with pytest.raises(RpcResponseError) as info:
        Client(ENDPOINT).get_balance(ADDRESS)
    assert info.value.code == -32602


def test_get_token_account_balance(mock):
    mock.add(
        responses.POST,
        ENDPOINT,
        body='{"jsonrpc":"2.0","result":{"context":{"slot":80218700},"value":{"amount":"10000000000","decimals":9,"uiAmount":10.0,"uiAmountString":"10"}},"id":1}',
    )
    assert Client(ENDPOINT).get_token_account_balance(ADDRESS) == (10000000000, 9)


@pytest.mark.parametrize("amount", ["", "-5", "1.5", "abc"])
def test_get_token_account_balance_bad_amount(mock, amount):
    mock.add(
        responses.POST,
        ENDPOINT,
        body=json.dumps(
            {
                "jsonrpc": "2.0",
                "result": {"context": {"slot": 1}, "value": {"amount": amount, "decimals": 9}},
                "id": 1,
            }
        ),
    )
    with pytest.raises(ValueError):
        Client(ENDPOINT).get_token_account_balance(ADDRESS)


def test_get_account_info_decodes_data(mock):
    mock.add(responses.POST, ENDPOINT, body=_account_reply([SLICE_DATA, "base64"]))
    info = Client(ENDPOINT).get_account_info(ADDRESS)
    assert info.lamports == 1461600
    assert info.owner == TOKEN_OWNER
    assert info.rent_epoch == 178
    assert info.executable is False
    assert base64.b64encode(info.data).decode() == SLICE_DATA
    assert _body(mock)["params"] == [ADDRESS, {"encoding": "base64"}]


def test_get_account_info_missing_account(mock):
    mock.add(
        responses.POST,
        ENDPOINT,
        body='{"jsonrpc":"2.0","result":{"context":{"slot":77382573},"value":null},"id":1}',
    )
    assert Client(ENDPOINT).get_account_info(ADDRESS) == AccountInfo()


def test_get_account_info_encoding_mismatch(mock):
    mock.add(responses.POST, ENDPOINT, body=_account_reply([SLICE_DATA, "base64+zstd"]))
    with pytest.raises(ValueError, match="encoding mismatch"):
        Client(ENDPOINT).get_account_info(ADDRESS)


def test_get_account_info_data_not_a_list(mock):
    mock.add(responses.POST, ENDPOINT, body=_account_reply("RNfp4xTbBb4C3kcv2KqtAj8mu4YhMHxqm1Skg9uchZ7"))
    with pytest.raises(ValueError):
        Client(ENDPOINT).get_account_info(ADDRESS)


def test_get_account_info_bad_base64(mock):
    mock.add(responses.POST, ENDPOINT, body=_account_reply(["!!!not base64!!!", "base64"]))
    with pytest.raises(ValueError, match="base64"):
        Client(ENDPOINT).get_account_info(ADDRESS)


def test_get_recent_blockhash(mock):
    mock.add(
        responses.POST,
        ENDPOINT,
        body='{"jsonrpc":"2.0","result":{"context":{"slot":77387537},"value":{"blockhash":"867JxboSVrJLWQNZfF2odbP1QVVsd3DHYxbhsRX85Tsj","feeCalculator":{"lamportsPerSignature":5000}}},"id":1}',
    )
    value = Client(ENDPOINT).get_recent_blockhash()
    assert value.blockhash == "867JxboSVrJLWQNZfF2odbP1QVVsd3DHYxbhsRX85Tsj"
    assert value.fee_calculator.lamports_per_signature == 5000
    assert _body(mock)["method"] == "getRecentBlockhash"


def test_send_raw_transaction(mock):
    mock.add(
        responses.POST,
        ENDPOINT,
        body='{"jsonrpc":"2.0","result":"23hVrUsx17XuRbGndEPhShvaMT7HnxEs4dppq2NqvFJTDbEFm11a16f6W4Abs7RfXpzKQRKRoCiyHSNvBmvhVwR7","id":1}',
    )
    signature = Client(ENDPOINT).send_raw_transaction(base64.b64decode(RAW_TX))
    assert signature == (
        "23hVrUsx17XuRbGndEPhShvaMT7HnxEs4dppq2NqvFJTDbEFm11a16f6W4Abs7RfXpzKQRKRoCiyHSNvBmvhVwR7"
    )
    assert _body(mock) == {
        "jsonrpc": "2.0",
        "id": 1,
        "method": "sendTransaction",
        "params": [RAW_TX, {"encoding": "base64"}],
    }


def test_send_raw_transaction_error(mock):
    mock.add(
        responses.POST,
        ENDPOINT,
        body='{"jsonrpc":"2.0","error":{"code":-32002,"message":"Transaction simulation failed: Blockhash not found","data":{"accounts":null,"err":"BlockhashNotFound","logs":[]}},"id":1}',
    )
    with pytest.raises(RpcResponseError) as info:
        Client(ENDPOINT).send_raw_transaction(b"\x01\x02")
    assert info.value.message == "Transaction simulation failed: Blockhash not found"
    assert info.value.error.data == {"accounts": None, "err": "BlockhashNotFound", "logs": []}


def test_get_slot_with_config(mock):
    mock.add(responses.POST, ENDPOINT, body='{"jsonrpc":"2.0","result":78478796,"id":1}')
    slot = Client(ENDPOINT).get_slot(GetSlotConfig(commitment=Commitment.PROCESSED))
    assert slot == 78478796
    assert _body(mock)["params"] == [{"commitment": "processed"}]


def test_get_slot_http_failure(mock):
    mock.add(responses.POST, ENDPOINT, body="", status=503)
    with pytest.raises(RpcHttpError) as info:
        Client(ENDPOINT).get_slot()
    assert info.value.status_code == 503