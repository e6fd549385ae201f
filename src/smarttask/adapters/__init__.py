"""Adapters - I/O implementations of ports."""

from .json_store import JsonTaskRepository, TaskStoreError

__all__ = [
    "JsonTaskRepository",
    "TaskStoreError",
]
