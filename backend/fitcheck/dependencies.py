"""Shared dependencies and utilities."""

from fitcheck.db import KeyValueStore, get_store


def get_kv_store() -> KeyValueStore:
    """Get the key-value store holding user profiles and readiness results."""
    return get_store()
