from __future__ import annotations

import sys
from pathlib import Path

from rich import print
from rich.markup import escape

from pagesync.settings import (
    Settings,
    merge_pages,
    page_key,
    partition_remote_pages,
    settings_to_dict,
)

from .common import dump_json, read_settings_file_or_exit, write_settings_file


def key_cmd(*, path: Path) -> None:
    """Print the identity key of every page in a settings file."""

    settings = read_settings_file_or_exit(path)
    for page in settings.pages:
        # Keys may contain rich markup characters; bypass rich here.
        sys.stdout.write(f"{page.id}\t{page_key(page)}\n")


def merge_cmd(*, local_path: Path, remote_path: Path, output: Path | None, dry_run: bool) -> None:
    """Merge two settings files the way a sync pass would."""

    local = read_settings_file_or_exit(local_path)
    remote = read_settings_file_or_exit(remote_path)
    duplicates, new_pages = partition_remote_pages(local.pages, remote.pages)
    if dry_run:
        print(f"Duplicates: {len(duplicates)}")
        print(f"New pages: {len(new_pages)}")
        for page in new_pages:
            print(f"- {escape(page.name)} (will be disabled)")
        return

    merged_pages = merge_pages(local.pages, remote.pages)
    selected = min(max(local.selected_page, 0), max(len(merged_pages) - 1, 0))
    merged = Settings(pages=merged_pages, selected_page=selected)
    if output is None:
        sys.stdout.write(dump_json(settings_to_dict(merged)) + "\n")
        return
    write_settings_file(output, merged)
    print(
        f"[green]Merged {len(new_pages)} new page(s); "
        f"skipped {len(duplicates)} duplicate(s) -> {escape(str(output))}[/green]"
    )
