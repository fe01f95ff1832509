from copy import deepcopy
from itertools import count

from pagesync.settings import (
    HeaderFilter,
    HeaderSetting,
    Page,
    default_page,
    merge_pages,
    page_key,
    partition_remote_pages,
)

_ids = count()


def _header(name: str, value: str, enabled: bool = True) -> HeaderSetting:
    return HeaderSetting(
        id=f"test-{next(_ids)}",
        header_name=name,
        header_value=value,
        header_enabled=enabled,
    )


def _filter(kind: str, value: str) -> HeaderFilter:
    return HeaderFilter(id=f"filter-{next(_ids)}", type=kind, value=value)  # type: ignore[arg-type]


def _page(page_id: int, name: str, enabled: bool, headers=None, filters=None) -> Page:
    return Page(
        id=page_id,
        name=name,
        enabled=enabled,
        headers=list(headers or []),
        filters=list(filters or []),
    )


def test_empty_remote_returns_local_unchanged() -> None:
    local = [
        _page(0, "My Page 1", True, [_header("X-Test", "test1")]),
        _page(1, "My Page 2", False, [_header("X-Test", "test2")]),
    ]
    snapshot = deepcopy(local)

    result = merge_pages(local, [])

    assert result is local
    assert result == snapshot


def test_full_overlap_is_a_noop() -> None:
    local = [_page(0, "Page 1", True, [_header("X-Test", "value")])]
    remote = [_page(0, "Page 1", True, [_header("X-Test", "value")])]

    result = merge_pages(local, remote)

    assert len(result) == 1
    assert result[0].name == "Page 1"


def test_new_remote_pages_are_appended_and_disabled() -> None:
    local = [_page(0, "A", True)]
    remote = [_page(0, "B", True)]

    result = merge_pages(local, remote)

    assert [page.name for page in result] == ["A", "B"]
    assert result[0].enabled is True
    assert result[1].enabled is False


def test_ids_are_reindexed_densely() -> None:
    local = [_page(5, "Local Page", True)]
    remote = [_page(10, "Sync Page", True)]

    result = merge_pages(local, remote)

    assert [page.id for page in result] == [0, 1]


def test_duplicate_remote_page_keeps_local_copy() -> None:
    local = [_page(0, "X", True, [_header("H", "v", enabled=True)])]
    remote = [_page(0, "X", False, [_header("H", "v", enabled=False)])]

    result = merge_pages(local, remote)

    assert result == local
    assert result[0].enabled is True
    assert result[0].headers[0].header_enabled is True


def test_empty_local_takes_remote_in_order_disabled() -> None:
    remote = [_page(7, "Y", True), _page(3, "Z", False)]

    result = merge_pages([], remote)

    assert [page.name for page in result] == ["Y", "Z"]
    assert [page.id for page in result] == [0, 1]
    assert all(page.enabled is False for page in result)


def test_same_name_different_headers_is_a_new_page() -> None:
    local = [_page(0, "Same Page", True, [_header("X-Local", "value")])]
    remote = [_page(0, "Same Page", False, [_header("X-Sync", "value")])]

    assert len(merge_pages(local, remote)) == 2


def test_same_headers_different_name_is_a_new_page() -> None:
    header = _header("X-Test", "value")
    local = [_page(0, "Local Page", True, [header])]
    remote = [_page(0, "Sync Page", False, [header])]

    assert len(merge_pages(local, remote)) == 2


def test_mixed_duplicates_and_new_pages() -> None:
    shared = _header("X-Shared", "shared")
    local = [
        _page(0, "Shared Page", True, [shared]),
        _page(1, "Local Only", True, [_header("X-Local", "local")]),
    ]
    remote = [
        _page(0, "Shared Page", False, [shared]),
        _page(1, "Sync Only", True, [_header("X-Sync", "sync")]),
    ]

    result = merge_pages(local, remote)

    assert [page.name for page in result] == ["Shared Page", "Local Only", "Sync Only"]
    assert [page.enabled for page in result] == [True, True, False]


def test_local_enabled_states_survive_merge() -> None:
    local = [_page(0, "A", True), _page(1, "B", False), _page(2, "C", True)]
    remote = [_page(0, "D", True), _page(1, "B", True)]

    result = merge_pages(local, remote)

    assert [page.enabled for page in result[:3]] == [True, False, True]
    assert result[3].name == "D"
    assert result[3].enabled is False


def test_new_page_keeps_its_own_fields() -> None:
    remote_page = _page(
        4,
        "Remote",
        True,
        [_header("X-A", "1", enabled=False)],
        [_filter("exclude", "https://b.com")],
    )
    remote_page.keep_enabled = True

    [merged] = merge_pages([], [remote_page])

    assert merged.keep_enabled is True
    assert merged.headers == remote_page.headers
    assert merged.headers[0].header_enabled is False
    assert merged.filters == remote_page.filters


def test_merge_does_not_mutate_inputs() -> None:
    local = [_page(9, "Local", True, [_header("X-L", "l")])]
    remote = [_page(4, "Remote", True, [_header("X-R", "r")])]
    local_before = deepcopy(local)
    remote_before = deepcopy(remote)

    result = merge_pages(local, remote)
    result[1].headers[0].header_value = "changed"

    assert local == local_before
    assert remote == remote_before


def test_merge_is_idempotent() -> None:
    local = [_page(0, "Default", True, [_header("X-Default", "default")])]
    remote = [
        _page(0, "Work Profile", False, [_header("X-Work", "work")]),
        _page(1, "Home Profile", False, [_header("X-Home", "home")]),
    ]

    once = merge_pages(local, remote)
    twice = merge_pages(once, remote)

    assert [page.name for page in once] == ["Default", "Work Profile", "Home Profile"]
    assert twice == once


def test_every_new_page_is_disabled_and_ids_are_positions() -> None:
    local = [_page(3, "A", True), _page(8, "B", False)]
    remote = [_page(0, "C", True), _page(1, "A", True), _page(2, "D", True)]
    local_keys = {page_key(page) for page in local}

    result = merge_pages(local, remote)

    for index, page in enumerate(result):
        assert page.id == index
        if page_key(page) not in local_keys:
            assert page.enabled is False


def test_two_browsers_converge_on_same_page_set() -> None:
    shared = _header("X-Shared", "shared-value")
    browser_a = [
        _page(0, "Shared Page", True, [shared]),
        _page(1, "Browser A Only", True, [_header("X-A", "a")]),
    ]
    browser_b = [
        _page(0, "Shared Page", True, [shared]),
        _page(1, "Browser B Only", True, [_header("X-B", "b")]),
    ]

    merged_a = merge_pages(browser_a, browser_b)
    merged_b = merge_pages(browser_b, merged_a)

    assert {page_key(p) for p in merged_a} == {page_key(p) for p in merged_b}
    assert len(merged_a) == 3


def test_reinstall_merges_default_page_with_sync_data() -> None:
    remote = [_page(0, "My Custom Page", True, [_header("X-Custom", "value")])]

    result = merge_pages([default_page()], remote)

    assert [page.name for page in result] == ["Default", "My Custom Page"]


def test_partition_keeps_remote_order() -> None:
    local = [_page(0, "A", True)]
    remote = [_page(0, "C", True), _page(1, "A", False), _page(2, "B", True)]

    duplicates, new_pages = partition_remote_pages(local, remote)

    assert [page.name for page in duplicates] == ["A"]
    assert [page.name for page in new_pages] == ["C", "B"]
