from __future__ import annotations

import sys

import typer
from rich import print

from pagesync.storage import (
    TwoTierStorage,
    clear_storage,
    data_size_in_bytes,
    has_enough_storage_space,
    load_from_storage,
)

from .common import dump_json, format_bytes


def _tiers(tier: str) -> list[str]:
    if tier == "both":
        return ["local", "sync"]
    if tier in {"local", "sync"}:
        return [tier]
    print(f"[red]Unknown tier: {tier} (expected local, sync, or both)[/red]")
    raise typer.Exit(code=1)


def storage_size_cmd(storage: TwoTierStorage, *, tier: str) -> None:
    """Show the stored size of every key, checked against the tier quota."""

    for name in _tiers(tier):
        area = storage.area(name)
        keys = area.keys()
        print(f"[bold]{name}[/bold] ({len(keys)} keys)")
        for key in keys:
            found, value = area.get(key)
            if not found:
                continue
            size = data_size_in_bytes(value)
            fits = has_enough_storage_space(value, name, quotas=storage.quotas)
            marker = "" if fits else " [red]over quota[/red]"
            print(f"  - {key}: {format_bytes(size)}{marker}")


def storage_clear_cmd(storage: TwoTierStorage, *, tier: str, yes: bool) -> None:
    _tiers(tier)
    if not yes and not typer.confirm(f"Clear {tier} storage?"):
        raise typer.Exit(code=1)
    clear_storage(storage, tier)
    print(f"Cleared {tier} storage")


def storage_show_cmd(storage: TwoTierStorage, *, key: str, tier: str) -> None:
    order = _tiers(tier)
    missing = object()
    value = load_from_storage(storage, key, missing, order=order)
    if value is missing:
        print(f"[yellow]{key} not found[/yellow]")
        raise typer.Exit(code=1)
    sys.stdout.write(dump_json(value) + "\n")
