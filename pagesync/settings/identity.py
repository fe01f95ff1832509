"""Content fingerprint used to recognise the same page across browser instances.

Only the fields a user would consider "the page" take part: the page name, each
header's name and value, and each filter's type and value. Ids, enabled flags,
`keep_enabled`, header types and filter validity are ignored, and header/filter
order does not matter.
"""

from __future__ import annotations

import json
from collections.abc import Iterable

from .types import HeaderFilter, HeaderSetting, Page

KEY_SEPARATOR = "_"


def _text(value: object) -> str:
    return json.dumps(str(value), ensure_ascii=False)


def _record(pairs: Iterable[tuple[str, object]]) -> str:
    # Field order is the order given here, never a mapping's iteration order.
    return "{" + ",".join(f"{_text(name)}:{_text(value)}" for name, value in pairs) + "}"


def _sorted_headers(headers: Iterable[HeaderSetting]) -> list[HeaderSetting]:
    return sorted(headers, key=lambda h: (h.header_name, h.header_value))


def _sorted_filters(filters: Iterable[HeaderFilter]) -> list[HeaderFilter]:
    return sorted(filters, key=lambda f: (str(f.type), str(f.value)))


def canonical_content(page: Page) -> str:
    headers = ",".join(
        _record((("headerName", h.header_name), ("headerValue", h.header_value)))
        for h in _sorted_headers(page.headers)
    )
    filters = ",".join(
        _record((("type", f.type), ("value", f.value))) for f in _sorted_filters(page.filters)
    )
    return f'{{"headers":[{headers}],"filters":[{filters}]}}'


def page_key(page: Page) -> str:
    return f"{page.name}{KEY_SEPARATOR}{canonical_content(page)}"
