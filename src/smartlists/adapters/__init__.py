"""Adapters - I/O implementations of ports."""

from .json_store import JsonTodoStore, ReadOnlyListError, StoreError

__all__ = [
    "JsonTodoStore",
    "ReadOnlyListError",
    "StoreError",
]
