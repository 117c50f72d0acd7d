# solkit

Public key utilities and a JSON-RPC client for Solana clusters.

## Installation

```
pip install solkit
```

## Public keys and derived addresses

```python
from solkit.public_key import (
    PublicKey,
    create_with_seed,
    find_associated_token_address,
    find_program_address,
)

wallet = PublicKey.from_string("EvN4kgKmCmYzdbd5kL8Q8YgkUW5RoqMTpBczrfLExtx7")
mint = PublicKey.from_string("8765cK2Vucsic6NA5nm4cfkrCzusaFVqBf6Pk31tGkXH")

address, bump = find_associated_token_address(wallet, mint)
print(address.to_base58(), bump)
```

`PublicKey.from_bytes` cuts input longer than 32 bytes and left-pads shorter
input with zeros. `PublicKey.from_string` decodes base58 text; text that is
not valid base58 gives the all-zero key. `to_base58()` and `to_json()` turn a
key back into text.

`create_program_address` raises `ProgramAddressError` when there are more than
16 seeds, a seed is longer than 32 bytes, or the derived address lies on the
ed25519 curve. `find_program_address` tries bump seeds from 255 down to 1 and
returns the first off-curve address together with its bump.
`create_with_seed` derives an address from a base key, a text seed and a
program id.

Well-known program ids and sysvar addresses are module constants, for
example `SYSTEM_PROGRAM_ID`, `TOKEN_PROGRAM_ID`,
`SPL_ASSOCIATED_TOKEN_ACCOUNT_PROGRAM_ID` and `SYSVAR_RENT_PUBKEY`.

Base58 encoding is available on its own through `solkit.base58.b58encode`
and `solkit.base58.b58decode`, and `solkit.curve.is_on_curve` tells whether
32 bytes decode to an ed25519 point.

## Talking to a cluster

```python
from solkit.client import Client

client = Client("http://localhost:8899")

lamports = client.get_balance("RNfp4xTbBb4C3kcv2KqtAj8mu4YhMHxqm1Skg9uchZ7")
slot = client.get_slot()
blockhash = client.get_recent_blockhash()
```

`Client` returns plain values:

- `get_balance` and `get_slot` return integers;
- `get_token_account_balance` returns the amount and the mint's decimals;
- `get_account_info` asks for base64 data and returns an `AccountInfo` whose
  `data` is bytes, or an empty `AccountInfo` for an unknown account;
- `get_recent_blockhash` returns a `RecentBlockhash`;
- `send_raw_transaction` base64-encodes already serialized, signed
  transaction bytes, sends them and returns the signature.

For the full raw responses, use `solkit.rpc.rpc_client.RpcClient`. It offers
the account methods (`get_account_info`, `get_balance`,
`get_program_accounts`, `get_token_supply`, `get_stake_activation`, ...), the
transaction methods (`send_transaction`, `simulate_transaction`,
`get_signature_statuses`, `get_transaction`, `request_airdrop`, ...) and the
block methods (`get_block`, `get_blocks`, `get_epoch_info`,
`get_cluster_nodes`, `get_version`, ...). Most take an optional config object
such as `GetAccountInfoConfig`, `ProgramAccountsConfig` or
`SendTransactionConfig` for commitment, encoding, filters and similar
options. The cluster endpoint names `DEVNET_RPC_ENDPOINT`,
`TESTNET_RPC_ENDPOINT` and `MAINNET_RPC_ENDPOINT` live in
`solkit.rpc.transport`.

## Errors

- A JSON-RPC error object from the node raises `RpcResponseError` (from
  `solkit.rpc.models`), carrying `code` and `message`. The methods that return
  full responses, such as `RpcClient.get_balance`, put the error on the
  response's `error` field instead; `Client` raises it.
- An HTTP status outside 200 to 300 raises `RpcHttpError` with the status code
  and the body.
- A reply body that is not JSON raises `ValueError`; connection failures are
  raised by `requests` as they come.

## What it does not do

The package does not build, sign or serialize transactions and holds no
keypairs: `send_raw_transaction` and `send_transaction` only pass on a
transaction that is already encoded. There are no websocket subscriptions and
no command-line tool.

## Running the tests

```
pip install -e ".[test]"
pytest
```