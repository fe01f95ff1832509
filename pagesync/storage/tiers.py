from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Literal

from ..config import PageSyncConfig, load_config
from .areas import MemoryArea, SqliteArea, StorageArea

logger = logging.getLogger(__name__)

Tier = Literal["local", "sync"]
ClearTarget = Literal["local", "sync", "both"]

TIERS: tuple[Tier, ...] = ("local", "sync")
DEFAULT_LOAD_ORDER: tuple[Tier, ...] = ("local", "sync")

# Browser sync areas cap each item at 8 KiB; local areas are effectively unbounded.
SYNC_QUOTA_BYTES_PER_ITEM = 8192
DEFAULT_QUOTAS: dict[str, int | None] = {"local": None, "sync": SYNC_QUOTA_BYTES_PER_ITEM}


class StorageError(RuntimeError):
    pass


class QuotaExceededError(StorageError):
    def __init__(self, key: str, tier: str, size: int, quota: int) -> None:
        super().__init__(f"{key} is {size} bytes, over the {tier} quota of {quota} bytes")
        self.key = key
        self.tier = tier
        self.size = size
        self.quota = quota


@dataclass
class TwoTierStorage:
    local: StorageArea
    sync: StorageArea
    quotas: dict[str, int | None] = field(default_factory=lambda: dict(DEFAULT_QUOTAS))

    def area(self, tier: str) -> StorageArea:
        if tier == "local":
            return self.local
        if tier == "sync":
            return self.sync
        raise ValueError(f"unknown storage tier: {tier!r}")

    def quota(self, tier: str) -> int | None:
        self.area(tier)
        return self.quotas.get(tier)

    def close(self) -> None:
        for area in (self.local, self.sync):
            close = getattr(area, "close", None)
            if callable(close):
                close()


def memory_storage(
    local: Mapping[str, Any] | None = None,
    sync: Mapping[str, Any] | None = None,
    *,
    quotas: dict[str, int | None] | None = None,
) -> TwoTierStorage:
    return TwoTierStorage(
        local=MemoryArea(local),
        sync=MemoryArea(sync),
        quotas=dict(quotas) if quotas is not None else dict(DEFAULT_QUOTAS),
    )


def open_storage(
    config: PageSyncConfig | None = None,
    *,
    local_db: str | None = None,
    sync_db: str | None = None,
) -> TwoTierStorage:
    cfg = config or load_config()
    return TwoTierStorage(
        local=SqliteArea(local_db or cfg.local_db_path, name="local"),
        sync=SqliteArea(sync_db or cfg.sync_db_path, name="sync"),
        quotas={"local": cfg.local_quota_bytes, "sync": cfg.sync_quota_bytes_per_item},
    )


def data_size_in_bytes(value: Any) -> int:
    """UTF-8 length of the compact JSON form, as the browser measures it."""

    return len(json.dumps(value, ensure_ascii=False, separators=(",", ":")).encode("utf-8"))


def has_enough_storage_space(
    value: Any,
    tier: str,
    *,
    quotas: Mapping[str, int | None] | None = None,
) -> bool:
    limits = DEFAULT_QUOTAS if quotas is None else quotas
    if tier not in TIERS:
        raise ValueError(f"unknown storage tier: {tier!r}")
    quota = limits.get(tier)
    if quota is None:
        return True
    return data_size_in_bytes(value) <= quota


def load_from_storage(
    storage: TwoTierStorage,
    key: str,
    default: Any,
    order: Sequence[str] = DEFAULT_LOAD_ORDER,
) -> Any:
    for tier in order:
        found, value = storage.area(tier).get(key)
        if found and value is not None:
            return value
    return default


def save_to_storage(storage: TwoTierStorage, items: Mapping[str, Any], tier: str) -> None:
    """Write `items` to one tier, refusing the whole write if any item is over quota."""

    area = storage.area(tier)
    quota = storage.quota(tier)
    if quota is not None:
        for key, value in items.items():
            if not has_enough_storage_space(value, tier, quotas=storage.quotas):
                size = data_size_in_bytes(value)
                logger.warning(
                    "refusing to write %s to %s storage: %d bytes > %d",
                    key,
                    tier,
                    size,
                    quota,
                )
                raise QuotaExceededError(key, tier, size, quota)
    area.set(items)


def remove_from_storage(storage: TwoTierStorage, keys: Iterable[str], tier: str) -> None:
    storage.area(tier).remove(list(keys))


def clear_storage(storage: TwoTierStorage, target: str) -> None:
    if target == "both":
        storage.local.clear()
        storage.sync.clear()
        return
    storage.area(target).clear()
