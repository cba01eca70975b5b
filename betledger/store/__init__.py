"""Bet store module."""

from betledger.store.json_store import JsonBetStore

__all__ = ["JsonBetStore"]
