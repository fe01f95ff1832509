from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def _isolate_pagesync_paths(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("PAGESYNC_CONFIG", str(tmp_path / "config" / "config.json"))
    monkeypatch.setenv("PAGESYNC_LOCAL_DB", str(tmp_path / "db" / "local.sqlite"))
    monkeypatch.setenv("PAGESYNC_SYNC_DB", str(tmp_path / "db" / "sync.sqlite"))
    for name in (
        "PAGESYNC_SYNC_ENABLED",
        "PAGESYNC_SYNC_QUOTA_BYTES",
        "PAGESYNC_LOCAL_QUOTA_BYTES",
        "PAGESYNC_PUSH_ON_SYNC",
        "PAGESYNC_SETTINGS_KEY",
    ):
        monkeypatch.delenv(name, raising=False)
