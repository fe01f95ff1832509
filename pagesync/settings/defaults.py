from __future__ import annotations

from .types import HeaderSetting, Page, Settings

DEFAULT_PAGE_NAME = "Default"


def default_page() -> Page:
    return Page(
        id=0,
        name=DEFAULT_PAGE_NAME,
        enabled=True,
        keep_enabled=False,
        headers=[
            HeaderSetting(
                id="default-1",
                header_name="X-Frame-Options",
                header_value="ALLOW-FROM https://www.youtube.com/",
                header_enabled=True,
                header_type="request",
            )
        ],
        filters=[],
    )


def default_settings() -> Settings:
    """Settings a fresh install starts from."""

    return Settings(pages=[default_page()], selected_page=0)
