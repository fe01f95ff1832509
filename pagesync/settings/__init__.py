from __future__ import annotations

from .defaults import default_page, default_settings
from .identity import page_key
from .merge import merge_pages, partition_remote_pages
from .types import (
    HeaderFilter,
    HeaderSetting,
    Page,
    Settings,
    page_from_dict,
    page_to_dict,
    settings_from_dict,
    settings_to_dict,
)

__all__ = [
    "HeaderFilter",
    "HeaderSetting",
    "Page",
    "Settings",
    "default_page",
    "default_settings",
    "merge_pages",
    "page_from_dict",
    "page_key",
    "page_to_dict",
    "partition_remote_pages",
    "settings_from_dict",
    "settings_to_dict",
]
