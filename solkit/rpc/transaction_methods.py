"""JSON-RPC methods that send, simulate and look up transactions."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from solkit.rpc.account_methods import AccountInfoValue
from solkit.rpc.models import (
    Commitment,
    Context,
    GeneralResponse,
    RpcResponseError,
    Transaction,
    TransactionMeta,
)
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


def _commitment_dict(commitment: Commitment | str | None) -> dict[str, Any]:
    return {"commitment": _plain(commitment)} if commitment else {}


@dataclass
class GetRecentBlockhashConfig:
    commitment: Commitment | None = None

    def to_dict(self) -> dict[str, Any]:
        return _commitment_dict(self.commitment)


@dataclass
class FeeCalculator:
    lamports_per_signature: int = 0


@dataclass
class RecentBlockhash:
    blockhash: str = ""
    fee_calculator: FeeCalculator = field(default_factory=FeeCalculator)


@dataclass
class GetRecentBlockhashResponse(GeneralResponse):
    context: Context = field(default_factory=Context)
    value: RecentBlockhash = field(default_factory=RecentBlockhash)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> GetRecentBlockhashResponse:
        result = data.get("result") or {}
        value = result.get("value") or {}
        fees = value.get("feeCalculator") or {}
        return cls(
            **_base_fields(data),
            context=Context.from_dict(result.get("context")),
            value=RecentBlockhash(
                blockhash=value.get("blockhash") or "",
                fee_calculator=FeeCalculator(
                    lamports_per_signature=fees.get("lamportsPerSignature") or 0
                ),
            ),
        )


@dataclass
class GetSlotConfig:
    commitment: Commitment | None = None

    def to_dict(self) -> dict[str, Any]:
        return _commitment_dict(self.commitment)


@dataclass
class GetSlotResponse(GeneralResponse):
    result: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> GetSlotResponse:
        return cls(**_base_fields(data), result=data.get("result") or 0)


class SendTransactionEncoding(str, Enum):
    BASE58 = "base58"
    BASE64 = "base64"


@dataclass
class SendTransactionConfig:
    """Options for sendTransaction; unset fields are left to the node's defaults."""

    skip_preflight: bool = False
    preflight_commitment: Commitment | None = None
    encoding: SendTransactionEncoding | None = None
    max_retries: int = 0

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.skip_preflight:
            out["skipPreflight"] = True
        if self.preflight_commitment:
            out["preflightCommitment"] = _plain(self.preflight_commitment)
        if self.encoding:
            out["encoding"] = _plain(self.encoding)
        if self.max_retries:
            out["maxRetries"] = self.max_retries
        return out


@dataclass
class SendTransactionResponse(GeneralResponse):
    result: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SendTransactionResponse:
        return cls(**_base_fields(data), result=data.get("result") or "")


class SimulateTransactionEncoding(str, Enum):
    BASE58 = "base58"
    BASE64 = "base64"


@dataclass
class SimulateTransactionAccounts:
    addresses: list[str] = field(default_factory=list)
    encoding: str = ""

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.encoding:
            out["encoding"] = _plain(self.encoding)
        out["addresses"] = list(self.addresses)
        return out


@dataclass
class SimulateTransactionConfig:
    """Options for simulateTransaction; sig_verify conflicts with replace_recent_blockhash."""

    sig_verify: bool = False
    preflight_commitment: Commitment | None = None
    encoding: SimulateTransactionEncoding | None = None
    replace_recent_blockhash: bool = False
    accounts: SimulateTransactionAccounts | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.sig_verify:
            out["sigVerify"] = True
        if self.preflight_commitment:
            out["preflightCommitment"] = _plain(self.preflight_commitment)
        if self.encoding:
            out["encoding"] = _plain(self.encoding)
        if self.replace_recent_blockhash:
            out["replaceRecentBlockhash"] = True
        if self.accounts is not None:
            out["accounts"] = self.accounts.to_dict()
        return out


@dataclass
class SimulationResult:
    err: Any = None
    logs: list[str] = field(default_factory=list)
    accounts: list[AccountInfoValue | None] = field(default_factory=list)


def _account_value(data: dict[str, Any] | None) -> AccountInfoValue | None:
    if data is None:
        return None
    return AccountInfoValue(
        lamports=data.get("lamports") or 0,
        owner=data.get("owner") or "",
        executable=bool(data.get("executable")),
        rent_epoch=data.get("rentEpoch") or 0,
        data=data.get("data"),
    )


@dataclass
class SignatureStatus:
    slot: int = 0
    confirmations: int | None = None
    confirmation_status: Commitment | None = None
    err: Any = None


@dataclass
class SignaturesForAddressConfig:
    """Paging options; limit is between 1 and 1000 and 'processed' is not supported."""

    limit: int = 0
    before: str = ""
    until: str = ""
    commitment: Commitment | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.limit:
            out["limit"] = self.limit
        if self.before:
            out["before"] = self.before
        if self.until:
            out["until"] = self.until
        if self.commitment:
            out["commitment"] = _plain(self.commitment)
        return out


@dataclass
class SignatureInfo:
    signature: str = ""
    slot: int = 0
    block_time: int | None = None
    err: Any = None
    memo: str | None = None


@dataclass
class GetTransactionConfig:
    commitment: Commitment | None = None

    def to_dict(self) -> dict[str, Any]:
        return _commitment_dict(self.commitment)


@dataclass
class ConfirmedTransaction:
    slot: int = 0
    meta: TransactionMeta = field(default_factory=TransactionMeta)
    transaction: Transaction = field(default_factory=Transaction)


def _confirmed_transaction(result: dict[str, Any] | None) -> ConfirmedTransaction | None:
    if result is None:
        return None
    return ConfirmedTransaction(
        slot=result.get("slot") or 0,
        meta=TransactionMeta.from_dict(result.get("meta")),
        transaction=Transaction.from_dict(result.get("transaction")),
    )


def _signature_infos(items: list[dict[str, Any]] | None) -> list[SignatureInfo]:
    return [
        SignatureInfo(
            signature=item.get("signature") or "",
            slot=item.get("slot") or 0,
            block_time=item.get("blockTime"),
            err=item.get("err"),
            memo=item.get("memo"),
        )
        for item in items or []
    ]


class TransactionMethods(RpcTransport):
    """Transaction submission, simulation and history queries."""

    def get_recent_blockhash(
        self, config: GetRecentBlockhashConfig | None = None
    ) -> GetRecentBlockhashResponse:
        """Return a recent blockhash and the fee schedule that goes with it."""
        args = () if config is None else (config.to_dict(),)
        return GetRecentBlockhashResponse.from_dict(self.call("getRecentBlockhash", *args))

    def get_slot(self, config: GetSlotConfig | None = None) -> GetSlotResponse:
        """Return the slot the node has reached."""
        args = () if config is None else (config.to_dict(),)
        return GetSlotResponse.from_dict(self.call("getSlot", *args))

    def send_transaction(
        self, tx: str, config: SendTransactionConfig | None = None
    ) -> SendTransactionResponse:
        """Submit an encoded, signed transaction to the cluster."""
        args = (tx,) if config is None else (tx, config.to_dict())
        return SendTransactionResponse.from_dict(self.call("sendTransaction", *args))

    def simulate_transaction(
        self, raw_tx: str, config: SimulateTransactionConfig | None = None
    ) -> SimulationResult:
        """Simulate sending a transaction without committing it."""
        params = (config or SimulateTransactionConfig()).to_dict()
        result = _result_or_raise(self.call("simulateTransaction", raw_tx, params)) or {}
        value = result.get("value") or {}
        return SimulationResult(
            err=value.get("err"),
            logs=list(value.get("logs") or []),
            accounts=[_account_value(item) for item in value.get("accounts") or []],
        )

    def get_signature_statuses(self, signatures: list[str]) -> list[SignatureStatus | None]:
        """Return the status of each signature, None for ones the node does not know."""
        result = _result_or_raise(
            self.call(
                "getSignatureStatuses",
                list(signatures),
                {"searchTransactionHistory": True},
            )
        ) or {}
        statuses: list[SignatureStatus | None] = []
        for item in result.get("value") or []:
            if item is None:
                statuses.append(None)
                continue
            status = item.get("confirmationStatus")
            statuses.append(
                SignatureStatus(
                    slot=item.get("slot") or 0,
                    confirmations=item.get("confirmations"),
                    confirmation_status=Commitment(status) if status is not None else None,
                    err=item.get("err"),
                )
            )
        return statuses

    def get_signatures_for_address(
        self, address: str, config: SignaturesForAddressConfig | None = None
    ) -> list[SignatureInfo]:
        """Return signatures of transactions involving an address, newest first."""
        params = (config or SignaturesForAddressConfig()).to_dict()
        result = _result_or_raise(self.call("getSignaturesForAddress", address, params))
        return _signature_infos(result)

    def get_confirmed_signatures_for_address(
        self, address: str, config: SignaturesForAddressConfig | None = None
    ) -> list[SignatureInfo]:
        """Same as get_signatures_for_address, for nodes that predate that method."""
        params = (config or SignaturesForAddressConfig()).to_dict()
        result = _result_or_raise(self.call("getConfirmedSignaturesForAddress2", address, params))
        return _signature_infos(result)

    def get_transaction(
        self, tx_hash: str, config: GetTransactionConfig | None = None
    ) -> ConfirmedTransaction | None:
        """Return a confirmed transaction, or None if the node has no record of it."""
        params = (config or GetTransactionConfig()).to_dict()
        return _confirmed_transaction(_result_or_raise(self.call("getTransaction", tx_hash, params)))

    def get_confirmed_transaction(self, tx_hash: str) -> ConfirmedTransaction | None:
        """Same as get_transaction, for nodes that predate that method."""
        return _confirmed_transaction(
            _result_or_raise(self.call("getConfirmedTransaction", tx_hash, "json"))
        )

    def get_transaction_count(self) -> int:
        """Return the current transaction count from the ledger."""
        return _result_or_raise(self.call("getTransactionCount")) or 0

    def request_airdrop(self, address: str, lamports: int) -> str:
        """Request an airdrop and return the base58 signature of its transaction."""
        return _result_or_raise(self.call("requestAirdrop", address, lamports)) or ""