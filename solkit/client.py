"""High-level client that returns plain values instead of raw RPC replies."""

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass
from typing import Any

from solkit.rpc.account_methods import (
    AccountEncoding,
    GetAccountInfoConfig,
    GetBalanceConfig,
    GetTokenAccountBalanceConfig,
)
from solkit.rpc.models import GeneralResponse, RpcResponseError
from solkit.rpc.rpc_client import RpcClient
from solkit.rpc.transaction_methods import (
    GetSlotConfig,
    RecentBlockhash,
    SendTransactionConfig,
    SendTransactionEncoding,
)

_MAX_U64 = 2**64 - 1


@dataclass
class AccountInfo:
    """An account's state with its data already decoded to bytes."""

    lamports: int = 0
    owner: str = ""
    executable: bool = False
    rent_epoch: int = 0
    data: bytes = b""


def _check(response: GeneralResponse) -> None:
    if response.error is not None:
        raise RpcResponseError(response.error)


def _parse_amount(text: str) -> int:
    if not text.isascii() or not text.isdigit():
        raise ValueError(f"failed to cast token amount {text!r}")
    value = int(text)
    if value > _MAX_U64:
        raise ValueError(f"failed to cast token amount {text!r}")
    return value


class Client:
    """Convenience wrapper over :class:`RpcClient` for common queries."""

    def __init__(self, endpoint: str) -> None:
        self.rpc = RpcClient(endpoint)

    def get_balance(self, address: str, config: GetBalanceConfig | None = None) -> int:
        """Return the lamport balance of an account."""
        response = self.rpc.get_balance(address, config)
        _check(response)
        return response.value

    def get_token_account_balance(
        self, address: str, config: GetTokenAccountBalanceConfig | None = None
    ) -> tuple[int, int]:
        """Return the token amount and the mint's decimals of an SPL token account."""
        response = self.rpc.get_token_account_balance(address, config)
        _check(response)
        return _parse_amount(response.value.amount), response.value.decimals

    def get_account_info(self, address: str) -> AccountInfo:
        """Return an account's state; an unknown account yields an empty AccountInfo."""
        response = self.rpc.get_account_info(
            address, GetAccountInfoConfig(encoding=AccountEncoding.BASE64)
        )
        _check(response)
        value = response.value
        if value is None:
            return AccountInfo()
        raw: Any = value.data
        if not isinstance(raw, list) or len(raw) != 2:
            raise ValueError("failed to read account data as [data, encoding]")
        encoded, encoding = raw
        if encoding != AccountEncoding.BASE64.value:
            raise ValueError("encoding mismatch")
        if not isinstance(encoded, str):
            raise ValueError("failed to base64 decode data")
        try:
            data = base64.b64decode(encoded, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise ValueError("failed to base64 decode data") from exc
        return AccountInfo(
            lamports=value.lamports,
            owner=value.owner,
            executable=value.executable,
            rent_epoch=value.rent_epoch,
            data=data,
        )

    def get_recent_blockhash(self) -> RecentBlockhash:
        """Return a recent blockhash with its fee schedule."""
        response = self.rpc.get_recent_blockhash()
        _check(response)
        return response.value

    def send_raw_transaction(self, tx: bytes) -> str:
        """Send a serialized, signed transaction and return its signature."""
        response = self.rpc.send_transaction(
            base64.b64encode(bytes(tx)).decode("ascii"),
            SendTransactionConfig(encoding=SendTransactionEncoding.BASE64),
        )
        _check(response)
        return response.result

    def get_slot(self, config: GetSlotConfig | None = None) -> int:
        """Return the current slot."""
        response = self.rpc.get_slot(config)
        _check(response)
        return response.result