from __future__ import annotations

from .areas import MemoryArea, SqliteArea, StorageArea
from .tiers import (
    DEFAULT_LOAD_ORDER,
    DEFAULT_QUOTAS,
    SYNC_QUOTA_BYTES_PER_ITEM,
    QuotaExceededError,
    StorageError,
    TwoTierStorage,
    clear_storage,
    data_size_in_bytes,
    has_enough_storage_space,
    load_from_storage,
    memory_storage,
    open_storage,
    remove_from_storage,
    save_to_storage,
)

__all__ = [
    "DEFAULT_LOAD_ORDER",
    "DEFAULT_QUOTAS",
    "MemoryArea",
    "QuotaExceededError",
    "SYNC_QUOTA_BYTES_PER_ITEM",
    "SqliteArea",
    "StorageArea",
    "StorageError",
    "TwoTierStorage",
    "clear_storage",
    "data_size_in_bytes",
    "has_enough_storage_space",
    "load_from_storage",
    "memory_storage",
    "open_storage",
    "remove_from_storage",
    "save_to_storage",
]
