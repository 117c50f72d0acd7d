"""JSON-RPC methods that read accounts, balances and token supplies."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from solkit.rpc.models import Commitment, Context, GeneralResponse, RpcResponseError
from solkit.rpc.transport import RpcTransport


def _plain(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


def _base_fields(data: dict[str, Any]) -> dict[str, Any]:
    base = GeneralResponse.from_dict(data)
    return {"jsonrpc": base.jsonrpc, "id": base.id, "error": base.error}


def _result_or_raise(reply: dict[str, Any]) -> Any:
    base = GeneralResponse.from_dict(reply)
    if base.error is not None:
        raise RpcResponseError(base.error)
    return reply.get("result")


class AccountEncoding(str, Enum):
    """Encoding of account data; base58 is limited to data under 128 bytes."""

    BASE58 = "base58"
    JSON_PARSED = "jsonParsed"
    BASE64 = "base64"
    BASE64_ZSTD = "base64+zstd"


@dataclass
class DataSlice:
    """A window into account data; zero fields are left out of the request."""

    offset: int = 0
    length: int = 0

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.offset:
            out["offset"] = self.offset
        if self.length:
            out["length"] = self.length
        return out


@dataclass
class GetAccountInfoConfig:
    commitment: Commitment | None = None
    encoding: AccountEncoding | None = None
    data_slice: DataSlice | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.commitment:
            out["commitment"] = _plain(self.commitment)
        if self.encoding:
            out["encoding"] = _plain(self.encoding)
        if self.data_slice is not None:
            out["dataSlice"] = self.data_slice.to_dict()
        return out


@dataclass
class AccountInfoValue:
    lamports: int = 0
    owner: str = ""
    executable: bool = False
    rent_epoch: int = 0
    data: Any = None


def _account_from_dict(data: dict[str, Any]) -> AccountInfoValue:
    return AccountInfoValue(
        lamports=data.get("lamports") or 0,
        owner=data.get("owner") or "",
        executable=bool(data.get("executable")),
        rent_epoch=data.get("rentEpoch") or 0,
        data=data.get("data"),
    )


@dataclass
class GetAccountInfoResponse(GeneralResponse):
    context: Context = field(default_factory=Context)
    value: AccountInfoValue | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> GetAccountInfoResponse:
        result = data.get("result") or {}
        value = result.get("value")
        return cls(
            **_base_fields(data),
            context=Context.from_dict(result.get("context")),
            value=_account_from_dict(value) if value is not None else None,
        )


@dataclass
class GetBalanceConfig:
    commitment: Commitment | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"commitment": _plain(self.commitment)} if self.commitment else {}


@dataclass
class GetBalanceResponse(GeneralResponse):
    context: Context = field(default_factory=Context)
    value: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> GetBalanceResponse:
        result = data.get("result") or {}
        return cls(
            **_base_fields(data),
            context=Context.from_dict(result.get("context")),
            value=result.get("value") or 0,
        )


@dataclass
class MemCmp:
    offset: int = 0
    bytes: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"offset": self.offset, "bytes": self.bytes}


@dataclass
class ProgramAccountsFilter:
    """One filter: set either mem_cmp or data_size; use two filters for both."""

    mem_cmp: MemCmp | None = None
    data_size: int = 0

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.mem_cmp is not None:
            out["memcmp"] = self.mem_cmp.to_dict()
        if self.data_size:
            out["dataSize"] = self.data_size
        return out


@dataclass
class ProgramAccountsConfig:
    encoding: AccountEncoding | None = None
    commitment: Commitment | None = None
    data_slice: DataSlice | None = None
    filters: list[ProgramAccountsFilter] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.encoding:
            out["encoding"] = _plain(self.encoding)
        if self.commitment:
            out["commitment"] = _plain(self.commitment)
        if self.data_slice is not None:
            out["dataSlice"] = {"offset": self.data_slice.offset, "length": self.data_slice.length}
        if self.filters:
            out["filters"] = [item.to_dict() for item in self.filters]
        return out


@dataclass
class ProgramAccount:
    pubkey: str = ""
    account: AccountInfoValue = field(default_factory=AccountInfoValue)


def _program_accounts(items: list[dict[str, Any]] | None) -> list[ProgramAccount]:
    return [
        ProgramAccount(
            pubkey=item.get("pubkey") or "",
            account=_account_from_dict(item.get("account") or {}),
        )
        for item in items or []
    ]


@dataclass
class ProgramAccountsResponse(GeneralResponse):
    result: list[ProgramAccount] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ProgramAccountsResponse:
        return cls(**_base_fields(data), result=_program_accounts(data.get("result")))


@dataclass
class ProgramAccountsWithContextResponse(GeneralResponse):
    context: Context = field(default_factory=Context)
    value: list[ProgramAccount] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ProgramAccountsWithContextResponse:
        result = data.get("result") or {}
        return cls(
            **_base_fields(data),
            context=Context.from_dict(result.get("context")),
            value=_program_accounts(result.get("value")),
        )


@dataclass
class GetTokenAccountBalanceConfig:
    commitment: Commitment | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"commitment": _plain(self.commitment)} if self.commitment else {}


@dataclass
class TokenAccountBalance:
    amount: str = ""
    decimals: int = 0
    ui_amount_string: str = ""


def _token_amount(data: dict[str, Any]) -> dict[str, Any]:
    return {
        "amount": data.get("amount") or "",
        "decimals": data.get("decimals") or 0,
        "ui_amount_string": data.get("uiAmountString") or "",
    }


@dataclass
class GetTokenAccountBalanceResponse(GeneralResponse):
    context: Context = field(default_factory=Context)
    value: TokenAccountBalance = field(default_factory=TokenAccountBalance)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> GetTokenAccountBalanceResponse:
        result = data.get("result") or {}
        return cls(
            **_base_fields(data),
            context=Context.from_dict(result.get("context")),
            value=TokenAccountBalance(**_token_amount(result.get("value") or {})),
        )


@dataclass
class TokenSupply:
    amount: str = ""
    decimals: int = 0
    ui_amount_string: str = ""


class StakeActivationState(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    ACTIVATING = "activating"
    DEACTIVATING = "deactivating"


@dataclass
class GetStakeActivationConfig:
    commitment: Commitment | None = None
    epoch: int = 0

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.commitment:
            out["commitment"] = _plain(self.commitment)
        if self.epoch:
            out["epoch"] = self.epoch
        return out


@dataclass
class StakeActivation:
    state: StakeActivationState
    active: int = 0
    inactive: int = 0


class AccountMethods(RpcTransport):
    """Account, balance and token queries."""

    def get_account_info(
        self, address: str, config: GetAccountInfoConfig | None = None
    ) -> GetAccountInfoResponse:
        """Return everything the node knows about one account."""
        args = (address,) if config is None else (address, config.to_dict())
        return GetAccountInfoResponse.from_dict(self.call("getAccountInfo", *args))

    def get_balance(
        self, address: str, config: GetBalanceConfig | None = None
    ) -> GetBalanceResponse:
        """Return the lamport balance of an account."""
        args = (address,) if config is None else (address, config.to_dict())
        return GetBalanceResponse.from_dict(self.call("getBalance", *args))

    def get_program_accounts(
        self, program_id: str, config: ProgramAccountsConfig | None = None
    ) -> ProgramAccountsResponse:
        """Return all accounts owned by a program."""
        args = (program_id,) if config is None else (program_id, config.to_dict())
        return ProgramAccountsResponse.from_dict(self.call("getProgramAccounts", *args))

    def get_program_accounts_with_context(
        self, program_id: str, config: ProgramAccountsConfig | None = None
    ) -> ProgramAccountsWithContextResponse:
        """Return all accounts owned by a program together with the slot context."""
        params = (config or ProgramAccountsConfig()).to_dict()
        params["withContext"] = True
        return ProgramAccountsWithContextResponse.from_dict(
            self.call("getProgramAccounts", program_id, params)
        )

    def get_token_account_balance(
        self, address: str, config: GetTokenAccountBalanceConfig | None = None
    ) -> GetTokenAccountBalanceResponse:
        """Return the token balance of an SPL token account."""
        args = (address,) if config is None else (address, config.to_dict())
        return GetTokenAccountBalanceResponse.from_dict(
            self.call("getTokenAccountBalance", *args)
        )

    def get_token_supply(self, mint_address: str, commitment: Commitment | str) -> TokenSupply:
        """Return the total supply of an SPL token mint."""
        result = _result_or_raise(
            self.call("getTokenSupply", mint_address, {"commitment": _plain(commitment)})
        )
        value = (result or {}).get("value") or {}
        return TokenSupply(**_token_amount(value))

    def get_minimum_balance_for_rent_exemption(self, data_len: int) -> int:
        """Return the lamports needed to make an account of this size rent exempt."""
        result = _result_or_raise(self.call("getMinimumBalanceForRentExemption", data_len))
        return result or 0

    def get_stake_activation(
        self, address: str, config: GetStakeActivationConfig | None = None
    ) -> StakeActivation:
        """Return epoch activation information for a stake account."""
        params = (config or GetStakeActivationConfig()).to_dict()
        result = _result_or_raise(self.call("getStakeActivation", address, params)) or {}
        return StakeActivation(
            state=StakeActivationState(result.get("state")),
            active=result.get("active") or 0,
            inactive=result.get("inactive") or 0,
        )