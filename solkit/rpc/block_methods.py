"""JSON-RPC methods that query blocks, slots and the state of the cluster."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from solkit.rpc.models import (
    Commitment,
    GeneralResponse,
    RpcResponseError,
    Transaction,
    TransactionMeta,
)
from solkit.rpc.transport import RpcTransport


def _plain(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


def _result_or_raise(reply: dict[str, Any]) -> Any:
    base = GeneralResponse.from_dict(reply)
    if base.error is not None:
        raise RpcResponseError(base.error)
    return reply.get("result")


@dataclass
class GetBlockConfig:
    """Commitment option shared by the block queries; 'processed' is not supported."""

    commitment: Commitment | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"commitment": _plain(self.commitment)} if self.commitment else {}


@dataclass
class Reward:
    pubkey: str = ""
    lamports: int = 0
    post_balance: int = 0
    reward_type: str = ""


@dataclass
class BlockTransaction:
    meta: TransactionMeta = field(default_factory=TransactionMeta)
    transaction: Transaction = field(default_factory=Transaction)


@dataclass
class Block:
    blockhash: str = ""
    previous_blockhash: str = ""
    parent_slot: int = 0
    block_time: int | None = None
    transactions: list[BlockTransaction] = field(default_factory=list)
    rewards: list[Reward] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> Block:
        data = data or {}
        return cls(
            blockhash=data.get("blockhash") or "",
            previous_blockhash=data.get("previousBlockhash") or "",
            parent_slot=data.get("parentSlot") or 0,
            block_time=data.get("blockTime"),
            transactions=[
                BlockTransaction(
                    meta=TransactionMeta.from_dict(item.get("meta")),
                    transaction=Transaction.from_dict(item.get("transaction")),
                )
                for item in data.get("transactions") or []
            ],
            rewards=[
                Reward(
                    pubkey=item.get("pubkey") or "",
                    lamports=item.get("lamports") or 0,
                    post_balance=item.get("postBalance") or 0,
                    reward_type=item.get("rewardType") or "",
                )
                for item in data.get("rewards") or []
            ],
        )


@dataclass
class BlockCommitment:
    commitment: list[int] = field(default_factory=list)
    total_stake: int = 0


@dataclass
class ClusterNode:
    pubkey: str = ""
    gossip: str = ""
    rpc: str = ""
    tpu: str = ""
    shred_version: int = 0
    feature_set: int | None = None
    version: str | None = None


@dataclass
class EpochInfo:
    absolute_slot: int = 0
    block_height: int = 0
    epoch: int = 0
    slot_index: int = 0
    slots_in_epoch: int = 0


@dataclass
class InflationRate:
    epoch: int = 0
    foundation: float = 0.0
    total: float = 0.0
    validator: float = 0.0


@dataclass
class Version:
    solana_core: str = ""
    feature_set: int = 0


class BlockMethods(RpcTransport):
    """Block, slot, epoch and node queries."""

    def get_block(self, slot: int, config: GetBlockConfig | None = None) -> Block | None:
        """Return a confirmed block, or None if the node has none for the slot."""
        params = (config or GetBlockConfig()).to_dict()
        result = _result_or_raise(self.call("getBlock", slot, params))
        return None if result is None else Block.from_dict(result)

    def get_confirmed_block(self, slot: int) -> Block | None:
        """Same as get_block, for nodes that predate that method."""
        result = _result_or_raise(self.call("getConfirmedBlock", slot, "json"))
        return None if result is None else Block.from_dict(result)

    def get_block_commitment(self, slot: int) -> BlockCommitment:
        """Return the commitment for a particular block."""
        result = _result_or_raise(self.call("getBlockCommitment", slot)) or {}
        return BlockCommitment(
            commitment=list(result.get("commitment") or []),
            total_stake=result.get("totalStake") or 0,
        )

    def get_block_height(self, config: GetBlockConfig | None = None) -> int:
        """Return the current block height of the node."""
        params = (config or GetBlockConfig()).to_dict()
        return _result_or_raise(self.call("getBlockHeight", params)) or 0

    def get_block_time(self, slot: int) -> int | None:
        """Return the estimated production time of a block as a Unix timestamp."""
        return _result_or_raise(self.call("getBlockTime", slot))

    def get_blocks(
        self, start_slot: int, end_slot: int, config: GetBlockConfig | None = None
    ) -> list[int]:
        """Return confirmed blocks between two slots; the range may span 500,000 slots."""
        params = (config or GetBlockConfig()).to_dict()
        return list(_result_or_raise(self.call("getBlocks", start_slot, end_slot, params)) or [])

    def get_blocks_with_limit(
        self, start_slot: int, limit: int, config: GetBlockConfig | None = None
    ) -> list[int]:
        """Return up to limit confirmed blocks starting at the given slot."""
        params = (config or GetBlockConfig()).to_dict()
        return list(
            _result_or_raise(self.call("getBlocksWithLimit", start_slot, limit, params)) or []
        )

    def get_confirmed_blocks(self, start_slot: int, end_slot: int) -> list[int]:
        """Same as get_blocks, for nodes that predate that method."""
        return list(_result_or_raise(self.call("getConfirmedBlocks", start_slot, end_slot)) or [])

    def get_confirmed_blocks_with_limit(self, start_slot: int, limit: int) -> list[int]:
        """Same as get_blocks_with_limit, for nodes that predate that method."""
        return list(
            _result_or_raise(self.call("getConfirmedBlocksWithLimit", start_slot, limit)) or []
        )

    def get_cluster_nodes(self) -> list[ClusterNode]:
        """Return the nodes taking part in the cluster."""
        result = _result_or_raise(self.call("getClusterNodes")) or []
        return [
            ClusterNode(
                pubkey=item.get("pubkey") or "",
                gossip=item.get("gossip") or "",
                rpc=item.get("rpc") or "",
                tpu=item.get("tpu") or "",
                shred_version=item.get("shredVersion") or 0,
                feature_set=item.get("featureSet"),
                version=item.get("version"),
            )
            for item in result
        ]

    def get_epoch_info(self, commitment: Commitment | str) -> EpochInfo:
        """Return information about the current epoch."""
        result = _result_or_raise(
            self.call("getEpochInfo", {"commitment": _plain(commitment)})
        ) or {}
        return EpochInfo(
            absolute_slot=result.get("absoluteSlot") or 0,
            block_height=result.get("blockHeight") or 0,
            epoch=result.get("epoch") or 0,
            slot_index=result.get("slotIndex") or 0,
            slots_in_epoch=result.get("slotsInEpoch") or 0,
        )

    def get_first_available_block(self) -> int:
        """Return the lowest confirmed slot not yet purged from the ledger."""
        return _result_or_raise(self.call("getFirstAvailableBlock")) or 0

    def get_genesis_hash(self) -> str:
        """Return the genesis hash."""
        return _result_or_raise(self.call("getGenesisHash")) or ""

    def get_identity(self) -> str:
        """Return the identity public key of the node."""
        result = _result_or_raise(self.call("getIdentity")) or {}
        return result.get("identity") or ""

    def get_inflation_rate(self) -> InflationRate:
        """Return the inflation values for the current epoch."""
        result = _result_or_raise(self.call("getInflationRate")) or {}
        return InflationRate(
            epoch=result.get("epoch") or 0,
            foundation=float(result.get("foundation") or 0.0),
            total=float(result.get("total") or 0.0),
            validator=float(result.get("validator") or 0.0),
        )

    def get_version(self) -> Version:
        """Return the software versions running on the node."""
        result = _result_or_raise(self.call("getVersion")) or {}
        return Version(
            solana_core=result.get("solana-core") or "",
            feature_set=result.get("feature-set") or 0,
        )

    def minimum_ledger_slot(self) -> int:
        """Return the lowest slot the node still holds in its ledger."""
        return _result_or_raise(self.call("minimumLedgerSlot")) or 0