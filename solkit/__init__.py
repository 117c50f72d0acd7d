"""Solana public keys, derived addresses, base58 and a JSON-RPC client."""

__version__ = "0.1.0"