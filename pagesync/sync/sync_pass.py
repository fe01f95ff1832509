from __future__ import annotations

import logging
from typing import Any

from ..settings import (
    Settings,
    default_settings,
    merge_pages,
    partition_remote_pages,
    settings_from_dict,
    settings_to_dict,
)
from ..storage import (
    QuotaExceededError,
    TwoTierStorage,
    data_size_in_bytes,
    load_from_storage,
    save_to_storage,
)

logger = logging.getLogger(__name__)

SETTINGS_KEY = "settings"
SYNC_ENABLED_KEY = "syncEnabled"
MIGRATION_COMPLETE_KEY = "migrationComplete"


def load_local_settings(storage: TwoTierStorage, *, key: str = SETTINGS_KEY) -> Settings:
    raw = load_from_storage(storage, key, None, order=("local",))
    if raw is None:
        return default_settings()
    return settings_from_dict(raw)


def load_remote_settings(storage: TwoTierStorage, *, key: str = SETTINGS_KEY) -> Settings:
    raw = load_from_storage(storage, key, None, order=("sync",))
    if raw is None:
        return Settings()
    return settings_from_dict(raw)


def sync_enabled(storage: TwoTierStorage, *, default: bool = False) -> bool:
    return bool(load_from_storage(storage, SYNC_ENABLED_KEY, default, order=("local",)))


def set_sync_enabled(storage: TwoTierStorage, enabled: bool) -> None:
    save_to_storage(storage, {SYNC_ENABLED_KEY: bool(enabled)}, "local")


def migration_complete(storage: TwoTierStorage) -> bool:
    return bool(load_from_storage(storage, MIGRATION_COMPLETE_KEY, False, order=("local",)))


def _clamp_selected(selected: int, page_count: int) -> int:
    if page_count <= 0:
        return 0
    return min(max(selected, 0), page_count - 1)


def run_sync_pass(
    storage: TwoTierStorage,
    *,
    push: bool = True,
    key: str = SETTINGS_KEY,
) -> dict[str, Any]:
    """Merge the sync tier's pages into local settings and write the result back.

    Safe to rerun: with unchanged tiers a second pass adds nothing.
    """

    local = load_local_settings(storage, key=key)
    remote = load_remote_settings(storage, key=key)
    duplicates, new_pages = partition_remote_pages(local.pages, remote.pages)
    merged_pages = merge_pages(local.pages, remote.pages)
    merged = Settings(
        pages=merged_pages,
        selected_page=_clamp_selected(local.selected_page, len(merged_pages)),
    )
    payload = settings_to_dict(merged)
    save_to_storage(storage, {key: payload}, "local")

    pushed = False
    error: str | None = None
    if push:
        try:
            save_to_storage(storage, {key: payload}, "sync")
            pushed = True
        except QuotaExceededError as exc:
            error = "quota_exceeded"
            logger.warning("sync push skipped: %s", exc)

    logger.info(
        "sync pass: local=%d remote=%d added=%d duplicates=%d pushed=%s",
        len(local.pages),
        len(remote.pages),
        len(new_pages),
        len(duplicates),
        pushed,
    )
    return {
        "ok": error is None,
        "local_pages": len(local.pages),
        "remote_pages": len(remote.pages),
        "added": len(new_pages),
        "duplicates": len(duplicates),
        "pages": len(merged_pages),
        "pushed": pushed,
        "error": error,
    }


def sync_if_enabled(
    storage: TwoTierStorage,
    *,
    push: bool = True,
    key: str = SETTINGS_KEY,
    default_enabled: bool = False,
) -> dict[str, Any] | None:
    if not sync_enabled(storage, default=default_enabled):
        logger.debug("sync disabled; skipping pass")
        return None
    return run_sync_pass(storage, push=push, key=key)


def migrate_to_sync(
    storage: TwoTierStorage,
    *,
    push: bool = True,
    key: str = SETTINGS_KEY,
) -> bool:
    """Run the first merge for an install that has never synced.

    Returns False when the migration already happened.
    """

    if migration_complete(storage):
        return False
    result = run_sync_pass(storage, push=push, key=key)
    save_to_storage(storage, {MIGRATION_COMPLETE_KEY: True}, "local")
    logger.info("migration complete: added %d page(s) from sync", result["added"])
    return True


def sync_status(
    storage: TwoTierStorage,
    *,
    key: str = SETTINGS_KEY,
    default_enabled: bool = False,
) -> dict[str, Any]:
    local_raw = load_from_storage(storage, key, None, order=("local",))
    remote_raw = load_from_storage(storage, key, None, order=("sync",))
    local = settings_from_dict(local_raw) if local_raw is not None else None
    remote = settings_from_dict(remote_raw) if remote_raw is not None else None
    duplicates, new_pages = partition_remote_pages(
        local.pages if local else [], remote.pages if remote else []
    )
    return {
        "sync_enabled": sync_enabled(storage, default=default_enabled),
        "migration_complete": migration_complete(storage),
        "local_pages": len(local.pages) if local else None,
        "remote_pages": len(remote.pages) if remote else None,
        "local_bytes": data_size_in_bytes(local_raw) if local_raw is not None else 0,
        "remote_bytes": data_size_in_bytes(remote_raw) if remote_raw is not None else 0,
        "sync_quota_bytes": storage.quota("sync"),
        "pending_remote_pages": [page.name for page in new_pages],
        "duplicate_remote_pages": len(duplicates),
    }
