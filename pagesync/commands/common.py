from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import typer
from rich import print

from pagesync.config import load_config
from pagesync.settings import Settings, settings_from_dict, settings_to_dict
from pagesync.storage import TwoTierStorage, open_storage


def storage_from_options(local_db: str | None, sync_db: str | None) -> TwoTierStorage:
    return open_storage(load_config(), local_db=local_db, sync_db=sync_db)


def read_settings_file_or_exit(path: Path) -> Settings:
    try:
        raw = json.loads(path.read_text())
    except FileNotFoundError as exc:
        print(f"[red]No such file: {path}[/red]")
        raise typer.Exit(code=1) from exc
    except json.JSONDecodeError as exc:
        print(f"[red]Invalid JSON in {path}: {exc}[/red]")
        raise typer.Exit(code=1) from exc
    # Bare page arrays are accepted as well as full settings documents.
    if isinstance(raw, list):
        raw = {"pages": raw, "selectedPage": 0}
    try:
        return settings_from_dict(raw)
    except ValueError as exc:
        print(f"[red]Invalid settings in {path}: {exc}[/red]")
        raise typer.Exit(code=1) from exc


def write_settings_file(path: Path, settings: Settings) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(settings_to_dict(settings), indent=2, ensure_ascii=False) + "\n")


def dump_json(payload: Any) -> str:
    return json.dumps(payload, indent=2, ensure_ascii=False)


def format_bytes(size: int) -> str:
    units = ["B", "KB", "MB", "GB"]
    value = float(size)
    for unit in units:
        if value < 1024 or unit == units[-1]:
            if unit == "B":
                return f"{int(value)} {unit}"
            return f"{value:.1f} {unit}"
        value /= 1024
    return f"{int(size)} B"
