from __future__ import annotations

from .sync_pass import (
    MIGRATION_COMPLETE_KEY,
    SETTINGS_KEY,
    SYNC_ENABLED_KEY,
    migrate_to_sync,
    run_sync_pass,
    set_sync_enabled,
    sync_enabled,
    sync_if_enabled,
    sync_status,
)

__all__ = [
    "MIGRATION_COMPLETE_KEY",
    "SETTINGS_KEY",
    "SYNC_ENABLED_KEY",
    "migrate_to_sync",
    "run_sync_pass",
    "set_sync_enabled",
    "sync_enabled",
    "sync_if_enabled",
    "sync_status",
]
