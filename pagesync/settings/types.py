from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, TypedDict

HeaderType = Literal["request", "response"]
FilterType = Literal["include", "exclude"]

HEADER_TYPES: frozenset[str] = frozenset({"request", "response"})
FILTER_TYPES: frozenset[str] = frozenset({"include", "exclude"})


@dataclass
class HeaderSetting:
    id: str
    header_name: str
    header_value: str
    header_enabled: bool = True
    header_type: HeaderType = "request"


@dataclass
class HeaderFilter:
    id: str
    type: FilterType
    value: str
    enabled: bool = True
    # False when `value` did not parse as a usable URL pattern.
    valid: bool = True


@dataclass
class Page:
    id: int
    name: str
    enabled: bool = True
    keep_enabled: bool = False
    headers: list[HeaderSetting] = field(default_factory=list)
    filters: list[HeaderFilter] = field(default_factory=list)


@dataclass
class Settings:
    pages: list[Page] = field(default_factory=list)
    selected_page: int = 0


class HeaderSettingDict(TypedDict):
    id: str
    headerName: str
    headerValue: str
    headerEnabled: bool
    headerType: str


class HeaderFilterDict(TypedDict):
    id: str
    type: str
    value: str
    enabled: bool
    valid: bool


class PageDict(TypedDict):
    id: int
    name: str
    enabled: bool
    keepEnabled: bool
    headers: list[HeaderSettingDict]
    filters: list[HeaderFilterDict]


class SettingsDict(TypedDict):
    pages: list[PageDict]
    selectedPage: int


def _as_bool(value: object, default: bool) -> bool:
    if value is None:
        return default
    return bool(value)


def header_from_dict(data: dict[str, Any]) -> HeaderSetting:
    if not isinstance(data, dict):
        raise ValueError("invalid header")
    header_type = str(data.get("headerType") or "request")
    if header_type not in HEADER_TYPES:
        header_type = "request"
    name = data.get("headerName")
    value = data.get("headerValue")
    return HeaderSetting(
        id=str(data.get("id") or ""),
        header_name="" if name is None else str(name),
        header_value="" if value is None else str(value),
        header_enabled=_as_bool(data.get("headerEnabled"), True),
        header_type=header_type,  # type: ignore[arg-type]
    )


def filter_from_dict(data: dict[str, Any]) -> HeaderFilter:
    if not isinstance(data, dict):
        raise ValueError("invalid filter")
    filter_type = str(data.get("type") or "")
    if filter_type not in FILTER_TYPES:
        raise ValueError(f"invalid filter type: {filter_type!r}")
    value = data.get("value")
    return HeaderFilter(
        id=str(data.get("id") or ""),
        type=filter_type,  # type: ignore[arg-type]
        value="" if value is None else str(value),
        enabled=_as_bool(data.get("enabled"), True),
        valid=_as_bool(data.get("valid"), True),
    )


def page_from_dict(data: dict[str, Any], *, index: int = 0) -> Page:
    if not isinstance(data, dict) or not isinstance(data.get("name"), str):
        raise ValueError("invalid page")
    raw_id = data.get("id", index)
    try:
        page_id = int(raw_id)
    except (TypeError, ValueError):
        page_id = index
    return Page(
        id=page_id,
        name=data["name"],
        enabled=_as_bool(data.get("enabled"), True),
        keep_enabled=_as_bool(data.get("keepEnabled"), False),
        headers=[header_from_dict(item) for item in data.get("headers") or []],
        filters=[filter_from_dict(item) for item in data.get("filters") or []],
    )


def settings_from_dict(data: object) -> Settings:
    if not isinstance(data, dict):
        raise ValueError("invalid settings")
    pages_raw = data.get("pages") or []
    if not isinstance(pages_raw, list):
        raise ValueError("invalid settings")
    pages = [page_from_dict(item, index=idx) for idx, item in enumerate(pages_raw)]
    try:
        selected = int(data.get("selectedPage") or 0)
    except (TypeError, ValueError):
        selected = 0
    return Settings(pages=pages, selected_page=selected)


def header_to_dict(header: HeaderSetting) -> HeaderSettingDict:
    return {
        "id": header.id,
        "headerName": header.header_name,
        "headerValue": header.header_value,
        "headerEnabled": header.header_enabled,
        "headerType": header.header_type,
    }


def filter_to_dict(item: HeaderFilter) -> HeaderFilterDict:
    return {
        "id": item.id,
        "type": item.type,
        "value": item.value,
        "enabled": item.enabled,
        "valid": item.valid,
    }


def page_to_dict(page: Page) -> PageDict:
    return {
        "id": page.id,
        "name": page.name,
        "enabled": page.enabled,
        "keepEnabled": page.keep_enabled,
        "headers": [header_to_dict(h) for h in page.headers],
        "filters": [filter_to_dict(f) for f in page.filters],
    }


def settings_to_dict(settings: Settings) -> SettingsDict:
    return {
        "pages": [page_to_dict(page) for page in settings.pages],
        "selectedPage": settings.selected_page,
    }
