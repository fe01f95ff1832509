from pathlib import Path

from pagesync.config import PageSyncConfig
from pagesync.settings import Page, Settings, default_settings, settings_to_dict
from pagesync.storage import memory_storage, open_storage
from pagesync.sync import (
    migrate_to_sync,
    run_sync_pass,
    set_sync_enabled,
    sync_enabled,
    sync_if_enabled,
    sync_status,
)


def _settings(*pages: Page, selected: int = 0) -> dict:
    return settings_to_dict(Settings(pages=list(pages), selected_page=selected))


def test_new_user_gets_default_settings_everywhere() -> None:
    storage = memory_storage()

    result = run_sync_pass(storage)

    expected = settings_to_dict(default_settings())
    assert result["ok"] is True
    assert result["added"] == 0
    assert storage.local.get("settings") == (True, expected)
    assert storage.sync.get("settings") == (True, expected)


def test_sync_pass_adds_remote_pages_disabled() -> None:
    storage = memory_storage(
        local={"settings": _settings(Page(id=0, name="Local", enabled=True))},
        sync={"settings": _settings(Page(id=0, name="Remote", enabled=True))},
    )

    result = run_sync_pass(storage)

    _, stored = storage.local.get("settings")
    assert result["added"] == 1
    assert [p["name"] for p in stored["pages"]] == ["Local", "Remote"]
    assert [p["enabled"] for p in stored["pages"]] == [True, False]
    assert [p["id"] for p in stored["pages"]] == [0, 1]
    assert storage.sync.get("settings") == (True, stored)


def test_sync_pass_is_repeatable() -> None:
    storage = memory_storage(
        local={"settings": _settings(Page(id=0, name="A"))},
        sync={"settings": _settings(Page(id=0, name="B"), Page(id=1, name="A", enabled=False))},
    )

    first = run_sync_pass(storage)
    _, after_first = storage.local.get("settings")
    second = run_sync_pass(storage)
    _, after_second = storage.local.get("settings")

    assert first["added"] == 1
    assert first["duplicates"] == 1
    assert second["added"] == 0
    assert after_first == after_second


def test_sync_pass_without_push_leaves_sync_tier() -> None:
    remote = _settings(Page(id=0, name="Remote"))
    storage = memory_storage(sync={"settings": remote})

    result = run_sync_pass(storage, push=False)

    assert result["pushed"] is False
    assert storage.sync.get("settings") == (True, remote)
    _, local = storage.local.get("settings")
    assert [p["name"] for p in local["pages"]] == ["Default", "Remote"]


def test_sync_pass_keeps_local_when_push_over_quota() -> None:
    storage = memory_storage(
        local={"settings": _settings(Page(id=0, name="Big" * 10))},
        sync={"settings": _settings(Page(id=0, name="Remote"))},
        quotas={"local": None, "sync": 64},
    )

    result = run_sync_pass(storage)

    assert result["ok"] is False
    assert result["error"] == "quota_exceeded"
    assert result["pushed"] is False
    _, local = storage.local.get("settings")
    assert len(local["pages"]) == 2
    _, remote = storage.sync.get("settings")
    assert len(remote["pages"]) == 1


def test_sync_pass_clamps_selected_page() -> None:
    storage = memory_storage(local={"settings": _settings(Page(id=0, name="Only"), selected=5)})

    run_sync_pass(storage, push=False)

    _, local = storage.local.get("settings")
    assert local["selectedPage"] == 0


def test_sync_enabled_flag_lives_in_local_tier() -> None:
    storage = memory_storage(sync={"syncEnabled": True})

    assert sync_enabled(storage) is False
    set_sync_enabled(storage, True)
    assert sync_enabled(storage) is True
    assert storage.local.get("syncEnabled") == (True, True)


def test_sync_if_enabled_skips_when_disabled() -> None:
    storage = memory_storage(sync={"settings": _settings(Page(id=0, name="Remote"))})

    assert sync_if_enabled(storage) is None
    assert storage.local.keys() == []

    set_sync_enabled(storage, True)
    result = sync_if_enabled(storage)
    assert result is not None
    assert result["added"] == 1


def test_migration_runs_once() -> None:
    storage = memory_storage(sync={"settings": _settings(Page(id=0, name="My Custom Page"))})

    assert migrate_to_sync(storage) is True
    assert storage.local.get("migrationComplete") == (True, True)
    _, local = storage.local.get("settings")
    assert [p["name"] for p in local["pages"]] == ["Default", "My Custom Page"]

    storage.sync.set({"settings": _settings(Page(id=0, name="Later"))})
    assert migrate_to_sync(storage) is False
    _, local_again = storage.local.get("settings")
    assert local_again == local


def test_sync_status_reports_pending_pages() -> None:
    storage = memory_storage(
        local={"settings": _settings(Page(id=0, name="A"))},
        sync={"settings": _settings(Page(id=0, name="A"), Page(id=1, name="B"))},
    )

    status = sync_status(storage)

    assert status["sync_enabled"] is False
    assert status["migration_complete"] is False
    assert status["local_pages"] == 1
    assert status["remote_pages"] == 2
    assert status["pending_remote_pages"] == ["B"]
    assert status["duplicate_remote_pages"] == 1
    assert status["sync_quota_bytes"] == 8192
    assert status["remote_bytes"] > status["local_bytes"] > 0


def test_two_installs_converge_through_sqlite_tiers(tmp_path: Path) -> None:
    sync_db = str(tmp_path / "shared-sync.sqlite")
    browser_a = open_storage(
        PageSyncConfig(local_db_path=str(tmp_path / "a.sqlite"), sync_db_path=sync_db)
    )
    browser_b = open_storage(
        PageSyncConfig(local_db_path=str(tmp_path / "b.sqlite"), sync_db_path=sync_db)
    )
    try:
        browser_a.local.set({"settings": _settings(Page(id=0, name="Work"))})
        browser_b.local.set({"settings": _settings(Page(id=0, name="Home"))})

        run_sync_pass(browser_a)
        run_sync_pass(browser_b)
        run_sync_pass(browser_a)

        _, pages_a = browser_a.local.get("settings")
        _, pages_b = browser_b.local.get("settings")
        assert [p["name"] for p in pages_a["pages"]] == ["Work", "Home"]
        assert [p["name"] for p in pages_b["pages"]] == ["Home", "Work"]
        assert [p["enabled"] for p in pages_a["pages"]] == [True, False]
        assert [p["enabled"] for p in pages_b["pages"]] == [True, False]
    finally:
        browser_a.close()
        browser_b.close()


def test_sync_status_uses_configured_default_when_flag_unset() -> None:
    storage = memory_storage()

    assert sync_status(storage, default_enabled=True)["sync_enabled"] is True
    set_sync_enabled(storage, False)
    assert sync_status(storage, default_enabled=True)["sync_enabled"] is False
