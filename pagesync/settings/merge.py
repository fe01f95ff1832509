from __future__ import annotations

from collections.abc import Sequence
from dataclasses import replace
from typing import Any

from .identity import page_key
from .types import Page


def _copy_page(page: Page, **changes: Any) -> Page:
    return replace(
        page,
        headers=[replace(h) for h in page.headers],
        filters=[replace(f) for f in page.filters],
        **changes,
    )


def partition_remote_pages(
    local: Sequence[Page], remote: Sequence[Page]
) -> tuple[list[Page], list[Page]]:
    """Split remote pages into (duplicates of a local page, new pages).

    Remote order is kept within each half.
    """

    local_keys = {page_key(page) for page in local}
    duplicates: list[Page] = []
    new_pages: list[Page] = []
    for page in remote:
        if page_key(page) in local_keys:
            duplicates.append(page)
        else:
            new_pages.append(page)
    return duplicates, new_pages


def merge_pages(local: list[Page], remote: Sequence[Page]) -> list[Page]:
    """Append remote pages that local does not already have.

    Local pages always win over a remote page with the same identity, so the
    remote copy is dropped even when its enabled flags differ. Pages taken from
    remote arrive disabled: a rule set synced in from another browser must not
    start rewriting traffic until the user turns it on here. When something is
    added every id is reassigned to its position in the result.

    Neither input is mutated. With nothing new to add the local list itself is
    returned.
    """

    _, new_pages = partition_remote_pages(local, remote)
    if not new_pages:
        return local

    offset = len(local)
    merged = [_copy_page(page, id=index) for index, page in enumerate(local)]
    merged.extend(
        _copy_page(page, id=offset + index, enabled=False)
        for index, page in enumerate(new_pages)
    )
    return merged
