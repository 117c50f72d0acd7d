"""Data types shared by the JSON-RPC methods."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Commitment(str, Enum):
    FINALIZED = "finalized"
    CONFIRMED = "confirmed"
    PROCESSED = "processed"


class Encoding(str, Enum):
    BASE58 = "base58"
    BASE64 = "base64"
    BASE64_ZSTD = "base64+zstd"


@dataclass
class ErrorResponse:
    code: int = 0
    message: str = ""
    data: dict[str, Any] | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ErrorResponse:
        return cls(
            code=data.get("code") or 0,
            message=data.get("message") or "",
            data=data.get("data"),
        )


class RpcResponseError(Exception):
    """Raised when the node answers with a JSON-RPC error object."""

    def __init__(self, error: ErrorResponse) -> None:
        super().__init__(error.message)
        self.error = error

    @property
    def code(self) -> int:
        return self.error.code

    @property
    def message(self) -> str:
        return self.error.message


@dataclass
class Context:
    slot: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> Context:
        return cls(slot=(data or {}).get("slot") or 0)


@dataclass
class GeneralResponse:
    jsonrpc: str = ""
    id: int = 0
    error: ErrorResponse | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> GeneralResponse:
        error = data.get("error")
        return cls(
            jsonrpc=data.get("jsonrpc") or "",
            id=data.get("id") or 0,
            error=ErrorResponse.from_dict(error) if error is not None else None,
        )


@dataclass
class Instruction:
    program_id_index: int = 0
    accounts: list[int] = field(default_factory=list)
    data: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Instruction:
        return cls(
            program_id_index=data.get("programIdIndex") or 0,
            accounts=list(data.get("accounts") or []),
            data=data.get("data") or "",
        )


@dataclass
class TokenAmount:
    amount: str = ""
    decimals: int = 0
    ui_amount_string: str = ""


@dataclass
class TransactionMetaTokenBalance:
    account_index: int = 0
    mint: str = ""
    ui_token_amount: TokenAmount = field(default_factory=TokenAmount)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TransactionMetaTokenBalance:
        amount = data.get("uiTokenAmount") or {}
        return cls(
            account_index=data.get("accountIndex") or 0,
            mint=data.get("mint") or "",
            ui_token_amount=TokenAmount(
                amount=amount.get("amount") or "",
                decimals=amount.get("decimals") or 0,
                ui_amount_string=amount.get("uiAmountString") or "",
            ),
        )


@dataclass
class InnerInstruction:
    index: int = 0
    instructions: list[Instruction] = field(default_factory=list)


@dataclass
class TransactionMeta:
    fee: int = 0
    pre_balances: list[int] = field(default_factory=list)
    post_balances: list[int] = field(default_factory=list)
    pre_token_balances: list[TransactionMetaTokenBalance] = field(default_factory=list)
    post_token_balances: list[TransactionMetaTokenBalance] = field(default_factory=list)
    log_messages: list[str] = field(default_factory=list)
    inner_instructions: list[InnerInstruction] = field(default_factory=list)
    err: Any = None
    status: dict[str, Any] | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> TransactionMeta:
        data = data or {}
        return cls(
            fee=data.get("fee") or 0,
            pre_balances=list(data.get("preBalances") or []),
            post_balances=list(data.get("postBalances") or []),
            pre_token_balances=[
                TransactionMetaTokenBalance.from_dict(item)
                for item in data.get("preTokenBalances") or []
            ],
            post_token_balances=[
                TransactionMetaTokenBalance.from_dict(item)
                for item in data.get("postTokenBalances") or []
            ],
            log_messages=list(data.get("logMessages") or []),
            inner_instructions=[
                InnerInstruction(
                    index=item.get("index") or 0,
                    instructions=[
                        Instruction.from_dict(ins) for ins in item.get("instructions") or []
                    ],
                )
                for item in data.get("innerInstructions") or []
            ],
            err=data.get("err"),
            status=data.get("status"),
        )


@dataclass
class MessageHeader:
    num_required_signatures: int = 0
    num_readonly_signed_accounts: int = 0
    num_readonly_unsigned_accounts: int = 0


@dataclass
class Message:
    header: MessageHeader = field(default_factory=MessageHeader)
    account_keys: list[str] = field(default_factory=list)
    recent_blockhash: str = ""
    instructions: list[Instruction] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> Message:
        data = data or {}
        header = data.get("header") or {}
        return cls(
            header=MessageHeader(
                num_required_signatures=header.get("numRequiredSignatures") or 0,
                num_readonly_signed_accounts=header.get("numReadonlySignedAccounts") or 0,
                num_readonly_unsigned_accounts=header.get("numReadonlyUnsignedAccounts") or 0,
            ),
            account_keys=list(data.get("accountKeys") or []),
            recent_blockhash=data.get("recentBlockhash") or "",
            instructions=[Instruction.from_dict(item) for item in data.get("instructions") or []],
        )


@dataclass
class Transaction:
    signatures: list[str] = field(default_factory=list)
    message: Message = field(default_factory=Message)

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> Transaction:
        data = data or {}
        return cls(
            signatures=list(data.get("signatures") or []),
            message=Message.from_dict(data.get("message")),
        )