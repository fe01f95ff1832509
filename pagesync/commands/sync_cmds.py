from __future__ import annotations

import typer
from rich import print
from rich.markup import escape

from pagesync.config import PageSyncConfig
from pagesync.storage import StorageError, TwoTierStorage
from pagesync.sync import (
    migrate_to_sync,
    run_sync_pass,
    set_sync_enabled,
    sync_enabled,
    sync_status,
)

from .common import format_bytes


def sync_once_cmd(
    storage: TwoTierStorage,
    *,
    config: PageSyncConfig,
    push: bool,
    force: bool,
) -> None:
    """Run one sync pass."""

    if not force and not sync_enabled(storage, default=config.sync_enabled):
        print("[yellow]Sync is disabled. Run `pagesync sync enable` or pass --force.[/yellow]")
        raise typer.Exit(code=1)
    try:
        result = run_sync_pass(storage, push=push, key=config.settings_key)
    except (StorageError, ValueError) as exc:
        print(f"[red]Sync failed: {exc}[/red]")
        raise typer.Exit(code=1) from exc
    print(
        f"Pages: {result['pages']} (added {result['added']}, "
        f"duplicates {result['duplicates']})"
    )
    if result["pushed"]:
        print("[green]Pushed merged settings to sync storage[/green]")
    elif result["error"] == "quota_exceeded":
        print("[yellow]Settings are too large for sync storage; kept local copy only[/yellow]")
    if not result["ok"]:
        raise typer.Exit(code=2)


def sync_migrate_cmd(storage: TwoTierStorage, *, config: PageSyncConfig, push: bool) -> None:
    """Run the first-time merge unless it already happened."""

    try:
        ran = migrate_to_sync(storage, push=push, key=config.settings_key)
    except (StorageError, ValueError) as exc:
        print(f"[red]Migration failed: {exc}[/red]")
        raise typer.Exit(code=1) from exc
    if ran:
        print("[green]Migration complete[/green]")
    else:
        print("Migration already complete")


def sync_enable_cmd(storage: TwoTierStorage) -> None:
    set_sync_enabled(storage, True)
    print("[green]Sync enabled[/green]")


def sync_disable_cmd(storage: TwoTierStorage) -> None:
    set_sync_enabled(storage, False)
    print("Sync disabled")


def sync_status_cmd(storage: TwoTierStorage, *, config: PageSyncConfig) -> None:
    """Show sync flags, sizes, and pending remote pages."""

    try:
        status = sync_status(
            storage, key=config.settings_key, default_enabled=config.sync_enabled
        )
    except ValueError as exc:
        print(f"[red]Stored settings are invalid: {exc}[/red]")
        raise typer.Exit(code=1) from exc
    quota = status["sync_quota_bytes"]
    quota_text = format_bytes(quota) if quota is not None else "unlimited"
    print(f"- Enabled: {status['sync_enabled']}")
    print(f"- Migration complete: {status['migration_complete']}")
    print(f"- Local pages: {status['local_pages'] if status['local_pages'] is not None else '-'}")
    print(
        f"- Remote pages: {status['remote_pages'] if status['remote_pages'] is not None else '-'}"
    )
    print(f"- Local size: {format_bytes(status['local_bytes'])}")
    print(f"- Remote size: {format_bytes(status['remote_bytes'])} / {quota_text}")
    pending = status["pending_remote_pages"]
    print(f"- Pending remote pages: {len(pending)}")
    for name in pending:
        print(f"  - {escape(name)}")
    print(f"- Duplicate remote pages: {status['duplicate_remote_pages']}")
