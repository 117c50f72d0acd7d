"""The complete JSON-RPC client for one node endpoint."""

from __future__ import annotations

from solkit.rpc.account_methods import AccountMethods
from solkit.rpc.block_methods import BlockMethods
from solkit.rpc.transaction_methods import TransactionMethods


class RpcClient(AccountMethods, TransactionMethods, BlockMethods):
    """Raw JSON-RPC client offering every account, transaction and block method.

    Create it with the URL of a node, for example one of the endpoint
    constants in :mod:`solkit.rpc.transport`.
    """