from __future__ import annotations

import json
import os
import warnings
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .db import DEFAULT_LOCAL_DB_PATH, DEFAULT_SYNC_DB_PATH

DEFAULT_CONFIG_PATH = Path("~/.config/pagesync/config.json").expanduser()

CONFIG_ENV_OVERRIDES = {
    "local_db_path": "PAGESYNC_LOCAL_DB",
    "sync_db_path": "PAGESYNC_SYNC_DB",
    "sync_enabled": "PAGESYNC_SYNC_ENABLED",
    "sync_quota_bytes_per_item": "PAGESYNC_SYNC_QUOTA_BYTES",
    "local_quota_bytes": "PAGESYNC_LOCAL_QUOTA_BYTES",
    "push_on_sync": "PAGESYNC_PUSH_ON_SYNC",
    "settings_key": "PAGESYNC_SETTINGS_KEY",
}

_INT_KEYS = {"sync_quota_bytes_per_item"}
_BOOL_KEYS = {"sync_enabled", "push_on_sync"}


def get_config_path(path: Path | None = None) -> Path:
    candidate = path or Path(os.getenv("PAGESYNC_CONFIG", DEFAULT_CONFIG_PATH))
    return candidate.expanduser()


def strip_json_comments(text: str) -> str:
    lines: list[str] = []
    for line in text.splitlines():
        result: list[str] = []
        in_string = False
        escape_next = False
        i = 0
        while i < len(line):
            char = line[i]
            if escape_next:
                result.append(char)
                escape_next = False
                i += 1
                continue
            if char == "\\" and in_string:
                result.append(char)
                escape_next = True
                i += 1
                continue
            if char == '"':
                in_string = not in_string
                result.append(char)
                i += 1
                continue
            if not in_string and char == "/" and i + 1 < len(line) and line[i + 1] == "/":
                break
            result.append(char)
            i += 1
        lines.append("".join(result))
    return "\n".join(lines)


def _loads_config(raw: str) -> Any:
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return json.loads(strip_json_comments(raw))


def read_config_file(path: Path | None = None) -> dict[str, Any]:
    config_path = get_config_path(path)
    if not config_path.exists():
        return {}
    raw = config_path.read_text()
    if not raw.strip():
        return {}
    try:
        data = _loads_config(raw)
    except json.JSONDecodeError as exc:
        raise ValueError("invalid config json") from exc
    if not isinstance(data, dict):
        raise ValueError("config must be an object")
    return data


def write_config_file(data: dict[str, Any], path: Path | None = None) -> Path:
    config_path = get_config_path(path)
    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(json.dumps(data, ensure_ascii=False, indent=2) + "\n")
    return config_path


def get_env_overrides() -> dict[str, str]:
    overrides: dict[str, str] = {}
    for key, env_var in CONFIG_ENV_OVERRIDES.items():
        value = os.getenv(env_var)
        if value is not None:
            overrides[key] = value
    return overrides


@dataclass
class PageSyncConfig:
    local_db_path: str = str(DEFAULT_LOCAL_DB_PATH)
    sync_db_path: str = str(DEFAULT_SYNC_DB_PATH)
    sync_enabled: bool = False
    sync_quota_bytes_per_item: int = 8192
    # None means the local tier has no per-item quota.
    local_quota_bytes: int | None = None
    push_on_sync: bool = True
    settings_key: str = "settings"


def _parse_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    if value.lower() in {"1", "true", "yes", "on"}:
        return True
    if value.lower() in {"0", "false", "off", "no"}:
        return False
    return default


def _parse_int(value: object, default: int, *, key: str) -> int:
    if value is None:
        return default
    try:
        return int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        warnings.warn(f"Invalid int for {key}: {value!r}", RuntimeWarning, stacklevel=2)
        return default


def _parse_optional_int(value: object, default: int | None, *, key: str) -> int | None:
    if value is None:
        return default
    if isinstance(value, str) and value.strip().lower() in {"", "none", "unlimited"}:
        return None
    try:
        parsed = int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        warnings.warn(f"Invalid int for {key}: {value!r}", RuntimeWarning, stacklevel=2)
        return default
    return parsed if parsed > 0 else None


def _coerce_bool(value: object, default: bool, *, key: str) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0
    if isinstance(value, str):
        return _parse_bool(value, default)
    warnings.warn(f"Invalid bool for {key}: {value!r}", RuntimeWarning, stacklevel=2)
    return default


def load_config(path: Path | None = None) -> PageSyncConfig:
    cfg = PageSyncConfig()
    config_path = get_config_path(path)
    if config_path.exists():
        try:
            data = _loads_config(config_path.read_text())
        except json.JSONDecodeError:
            data = {}
        if isinstance(data, dict):
            cfg = _apply_dict(cfg, data)
    cfg = _apply_env(cfg)
    return cfg


def _apply_dict(cfg: PageSyncConfig, data: dict[str, Any]) -> PageSyncConfig:
    for key, value in data.items():
        if not hasattr(cfg, key):
            continue
        if key in _INT_KEYS:
            setattr(cfg, key, _parse_int(value, getattr(cfg, key), key=key))
            continue
        if key in _BOOL_KEYS:
            setattr(cfg, key, _coerce_bool(value, getattr(cfg, key), key=key))
            continue
        if key == "local_quota_bytes":
            cfg.local_quota_bytes = _parse_optional_int(value, None, key=key)
            continue
        setattr(cfg, key, value)
    return cfg


def _apply_env(cfg: PageSyncConfig) -> PageSyncConfig:
    cfg.local_db_path = os.getenv("PAGESYNC_LOCAL_DB", cfg.local_db_path)
    cfg.sync_db_path = os.getenv("PAGESYNC_SYNC_DB", cfg.sync_db_path)
    cfg.sync_enabled = _parse_bool(os.getenv("PAGESYNC_SYNC_ENABLED"), cfg.sync_enabled)
    cfg.sync_quota_bytes_per_item = _parse_int(
        os.getenv("PAGESYNC_SYNC_QUOTA_BYTES"),
        cfg.sync_quota_bytes_per_item,
        key="sync_quota_bytes_per_item",
    )
    cfg.local_quota_bytes = _parse_optional_int(
        os.getenv("PAGESYNC_LOCAL_QUOTA_BYTES"), cfg.local_quota_bytes, key="local_quota_bytes"
    )
    cfg.push_on_sync = _parse_bool(os.getenv("PAGESYNC_PUSH_ON_SYNC"), cfg.push_on_sync)
    cfg.settings_key = os.getenv("PAGESYNC_SETTINGS_KEY", cfg.settings_key)
    return cfg
