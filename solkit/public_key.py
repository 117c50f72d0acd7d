"""Public keys, program-derived addresses and well-known account addresses."""

from __future__ import annotations

import hashlib
import json
from collections.abc import Iterable
from dataclasses import dataclass

from solkit.base58 import b58decode, b58encode
from solkit.curve import is_on_curve

PUBLIC_KEY_LENGTH = 32
MAX_SEED_LENGTH = 32
MAX_SEEDS = 16

_PDA_MARKER = b"ProgramDerivedAddress"


class ProgramAddressError(ValueError):
    """Raised when a program address cannot be derived from the given seeds."""


@dataclass(frozen=True)
class PublicKey:
    """A 32-byte account address."""

    key: bytes = bytes(PUBLIC_KEY_LENGTH)

    def __post_init__(self) -> None:
        key = bytes(self.key)
        if len(key) != PUBLIC_KEY_LENGTH:
            raise ValueError(f"public key must be {PUBLIC_KEY_LENGTH} bytes, got {len(key)}")
        object.__setattr__(self, "key", key)

    @classmethod
    def from_string(cls, text: str) -> PublicKey:
        """Build a key from base58 text; undecodable text yields the zero key."""
        try:
            data = b58decode(text)
        except ValueError:
            data = b""
        return cls.from_bytes(data)

    @classmethod
    def from_bytes(cls, data: bytes) -> PublicKey:
        """Build a key from bytes: longer input is cut to 32, shorter is left-padded with zeros."""
        data = bytes(data)[:PUBLIC_KEY_LENGTH]
        return cls(data.rjust(PUBLIC_KEY_LENGTH, b"\0"))

    def to_base58(self) -> str:
        return b58encode(self.key)

    def to_json(self) -> str:
        """Return the key as a JSON string literal."""
        return json.dumps(self.to_base58())

    def __bytes__(self) -> bytes:
        return self.key

    def __str__(self) -> str:
        return self.to_base58()

    def __repr__(self) -> str:
        return f"PublicKey({self.to_base58()!r})"


def create_program_address(seeds: Iterable[bytes], program_id: PublicKey) -> PublicKey:
    """Derive a program address that lies off the Edwards25519 curve."""
    seeds = [bytes(seed) for seed in seeds]
    if len(seeds) > MAX_SEEDS:
        raise ProgramAddressError("length of the seed is too long for address generation")
    if any(len(seed) > MAX_SEED_LENGTH for seed in seeds):
        raise ProgramAddressError("length of the seed is too long for address generation")
    digest = hashlib.sha256(b"".join(seeds) + bytes(program_id) + _PDA_MARKER).digest()
    if is_on_curve(digest):
        raise ProgramAddressError("invalid seeds, address must fall off the curve")
    return PublicKey.from_bytes(digest)


def create_with_seed(from_key: PublicKey, seed: str, program_id: PublicKey) -> PublicKey:
    """Derive an address from a base key, a text seed and an owning program."""
    digest = hashlib.sha256(bytes(from_key) + seed.encode("utf-8") + bytes(program_id)).digest()
    return PublicKey.from_bytes(digest)


def find_program_address(seeds: Iterable[bytes], program_id: PublicKey) -> tuple[PublicKey, int]:
    """Find the first off-curve address trying bump seeds from 255 down to 1."""
    seeds = [bytes(seed) for seed in seeds]
    for nonce in range(0xFF, 0, -1):
        try:
            return create_program_address([*seeds, bytes([nonce])], program_id), nonce
        except ProgramAddressError:
            continue
    raise ProgramAddressError("unable to find a viable program address")


SYSTEM_PROGRAM_ID = PublicKey.from_string("11111111111111111111111111111111")
CONFIG_PROGRAM_ID = PublicKey.from_string("Config1111111111111111111111111111111111111")
STAKE_PROGRAM_ID = PublicKey.from_string("Stake11111111111111111111111111111111111111")
VOTE_PROGRAM_ID = PublicKey.from_string("Vote111111111111111111111111111111111111111")
BPF_LOADER_PROGRAM_ID = PublicKey.from_string("BPFLoader1111111111111111111111111111111111")
SECP256K1_PROGRAM_ID = PublicKey.from_string("KeccakSecp256k11111111111111111111111111111")
TOKEN_PROGRAM_ID = PublicKey.from_string("TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA")
SPL_ASSOCIATED_TOKEN_ACCOUNT_PROGRAM_ID = PublicKey.from_string(
    "ATokenGPvbdGVxr1b2hvZbsiqW5xWH25efTNsLJA8knL"
)
SPL_NAME_SERVICE_PROGRAM_ID = PublicKey.from_string("namesLPneVptA9Z5rqUDD9tMTWEJwofgaYwp8cawRkX")
METAPLEX_TOKEN_META_PROGRAM_ID = PublicKey.from_string(
    "metaqbxxUerdq28cj1RbAWkYQm3ybzjb6a8bt518x1s"
)

SYSVAR_CLOCK_PUBKEY = PublicKey.from_string("SysvarC1ock11111111111111111111111111111111")
SYSVAR_RECENT_BLOCKHASHES_PUBKEY = PublicKey.from_string(
    "SysvarRecentB1ockHashes11111111111111111111"
)
SYSVAR_RENT_PUBKEY = PublicKey.from_string("SysvarRent111111111111111111111111111111111")
SYSVAR_REWARDS_PUBKEY = PublicKey.from_string("SysvarRewards111111111111111111111111111111")
SYSVAR_STAKE_HISTORY_PUBKEY = PublicKey.from_string("SysvarStakeHistory1111111111111111111111111")
SYSVAR_INSTRUCTIONS_PUBKEY = PublicKey.from_string("Sysvar1nstructions1111111111111111111111111")
STAKE_CONFIG_PUBKEY = PublicKey.from_string("StakeConfig11111111111111111111111111111111")


def find_associated_token_address(
    wallet_address: PublicKey, token_mint_address: PublicKey
) -> tuple[PublicKey, int]:
    """Find the associated token account for a wallet and a mint."""
    seeds = [bytes(wallet_address), bytes(TOKEN_PROGRAM_ID), bytes(token_mint_address)]
    return find_program_address(seeds, SPL_ASSOCIATED_TOKEN_ACCOUNT_PROGRAM_ID)