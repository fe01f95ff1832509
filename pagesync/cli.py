from __future__ import annotations

from pathlib import Path

import typer
from rich import print

from . import __version__
from .commands.common import storage_from_options
from .commands.settings_cmds import key_cmd, merge_cmd
from .commands.storage_cmds import storage_clear_cmd, storage_show_cmd, storage_size_cmd
from .commands.sync_cmds import (
    sync_disable_cmd,
    sync_enable_cmd,
    sync_migrate_cmd,
    sync_once_cmd,
    sync_status_cmd,
)
from .config import load_config

app = typer.Typer(help="pagesync: merge header pages between browser storage tiers")
sync_app = typer.Typer(help="Reconcile local settings with sync storage")
storage_app = typer.Typer(help="Inspect and clear storage tiers")
app.add_typer(sync_app, name="sync")
app.add_typer(storage_app, name="storage")

LOCAL_DB_OPTION = typer.Option(None, "--local-db", help="Path to the local tier database")
SYNC_DB_OPTION = typer.Option(None, "--sync-db", help="Path to the sync tier database")


@app.command("version")
def version() -> None:
    """Print version."""

    print(__version__)


@app.command("key")
def key(
    path: Path = typer.Argument(..., exists=True, readable=True, help="Settings JSON file"),
) -> None:
    """Print the identity key of each page in a settings file."""

    key_cmd(path=path)


@app.command("merge")
def merge(
    local_path: Path = typer.Argument(..., exists=True, readable=True, help="Local settings"),
    remote_path: Path = typer.Argument(..., exists=True, readable=True, help="Remote settings"),
    output: Path = typer.Option(None, "--output", "-o", help="Write merged settings here"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Only report what would change"),
) -> None:
    """Merge two settings files offline."""

    merge_cmd(local_path=local_path, remote_path=remote_path, output=output, dry_run=dry_run)


@sync_app.command("once")
def sync_once(
    local_db: str = LOCAL_DB_OPTION,
    sync_db: str = SYNC_DB_OPTION,
    push: bool = typer.Option(True, "--push/--no-push", help="Write the result to sync storage"),
    force: bool = typer.Option(False, "--force", help="Run even when sync is disabled"),
) -> None:
    """Run one sync pass."""

    config = load_config()
    storage = storage_from_options(local_db, sync_db)
    try:
        sync_once_cmd(storage, config=config, push=push and config.push_on_sync, force=force)
    finally:
        storage.close()


@sync_app.command("migrate")
def sync_migrate(
    local_db: str = LOCAL_DB_OPTION,
    sync_db: str = SYNC_DB_OPTION,
    push: bool = typer.Option(True, "--push/--no-push", help="Write the result to sync storage"),
) -> None:
    """Run the first-time merge with sync storage."""

    config = load_config()
    storage = storage_from_options(local_db, sync_db)
    try:
        sync_migrate_cmd(storage, config=config, push=push and config.push_on_sync)
    finally:
        storage.close()


@sync_app.command("status")
def sync_status(
    local_db: str = LOCAL_DB_OPTION,
    sync_db: str = SYNC_DB_OPTION,
) -> None:
    """Show sync state."""

    config = load_config()
    storage = storage_from_options(local_db, sync_db)
    try:
        sync_status_cmd(storage, config=config)
    finally:
        storage.close()


@sync_app.command("enable")
def sync_enable(
    local_db: str = LOCAL_DB_OPTION,
    sync_db: str = SYNC_DB_OPTION,
) -> None:
    """Turn sync on for this install."""

    storage = storage_from_options(local_db, sync_db)
    try:
        sync_enable_cmd(storage)
    finally:
        storage.close()


@sync_app.command("disable")
def sync_disable(
    local_db: str = LOCAL_DB_OPTION,
    sync_db: str = SYNC_DB_OPTION,
) -> None:
    """Turn sync off for this install."""

    storage = storage_from_options(local_db, sync_db)
    try:
        sync_disable_cmd(storage)
    finally:
        storage.close()


@storage_app.command("size")
def storage_size(
    tier: str = typer.Option("both", help="local, sync, or both"),
    local_db: str = LOCAL_DB_OPTION,
    sync_db: str = SYNC_DB_OPTION,
) -> None:
    """Show stored sizes against tier quotas."""

    storage = storage_from_options(local_db, sync_db)
    try:
        storage_size_cmd(storage, tier=tier)
    finally:
        storage.close()


@storage_app.command("clear")
def storage_clear(
    tier: str = typer.Option(..., help="local, sync, or both"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
    local_db: str = LOCAL_DB_OPTION,
    sync_db: str = SYNC_DB_OPTION,
) -> None:
    """Clear a storage tier."""

    storage = storage_from_options(local_db, sync_db)
    try:
        storage_clear_cmd(storage, tier=tier, yes=yes)
    finally:
        storage.close()


@storage_app.command("show")
def storage_show(
    key: str = typer.Argument(..., help="Storage key, e.g. settings"),
    tier: str = typer.Option("both", help="local, sync, or both (local first)"),
    local_db: str = LOCAL_DB_OPTION,
    sync_db: str = SYNC_DB_OPTION,
) -> None:
    """Print a stored value."""

    storage = storage_from_options(local_db, sync_db)
    try:
        storage_show_cmd(storage, key=key, tier=tier)
    finally:
        storage.close()


def main() -> None:
    app()


if __name__ == "__main__":
    main()
