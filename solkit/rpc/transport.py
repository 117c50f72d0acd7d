"""HTTP JSON-RPC transport."""

from __future__ import annotations

import json
from enum import Enum
from typing import Any

import requests

DEVNET_RPC_ENDPOINT = "https://api.devnet.solana.com"
TESTNET_RPC_ENDPOINT = "https://api.testnet.solana.com"
MAINNET_RPC_ENDPOINT = "https://api.mainnet-beta.solana.com"


class RpcHttpError(Exception):
    """Raised when the node answers with an HTTP status outside 200..300."""

    def __init__(self, status_code: int, body: bytes) -> None:
        super().__init__(f"get status code: {status_code}")
        self.status_code = status_code
        self.body = body


def _encode(obj: Any) -> Any:
    to_dict = getattr(obj, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    if isinstance(obj, Enum):
        return obj.value
    raise TypeError(f"cannot encode {type(obj).__name__} as JSON")


def prepare_payload(method: str, *args: Any) -> bytes:
    """Build a JSON-RPC 2.0 request body; params are omitted when there are none."""
    request: dict[str, Any] = {"jsonrpc": "2.0", "id": 1, "method": method}
    if args:
        request["params"] = list(args)
    return json.dumps(request, default=_encode, separators=(",", ":")).encode("utf-8")


class RpcTransport:
    """Posts JSON-RPC requests to one endpoint and returns decoded replies."""

    def __init__(self, endpoint: str) -> None:
        self.endpoint = endpoint
        self._session = requests.Session()

    def call(self, method: str, *args: Any) -> Any:
        """Send one request and return the decoded JSON reply."""
        payload = prepare_payload(method, *args)
        response = self._session.post(
            self.endpoint,
            data=payload,
            headers={"Content-Type": "application/json"},
        )
        body = response.content
        if response.status_code < 200 or response.status_code > 300:
            raise RpcHttpError(response.status_code, body)
        try:
            return json.loads(body)
        except ValueError as exc:
            raise ValueError(f"failed to json decode body, err: {exc}") from exc