from __future__ import annotations

from datetime import date, datetime, time
from pathlib import Path
from typing import TypeAlias
import tomllib

from docprune.exceptions import ConfigError
from docprune.redundancy.rules import DEFAULT_ALIASES, RedundancyRules

DEFAULT_CONFIG_NAME = "docprune.toml"

TomlScalar: TypeAlias = str | int | float | bool | None | date | datetime | time
TomlValue: TypeAlias = TomlScalar | list["TomlValue"] | dict[str, "TomlValue"]
TomlTable: TypeAlias = dict[str, TomlValue]

_STRING_KEYS = (
    "union_separator",
    "namespace_separator",
    "interface_suffix",
    "collection_marker",
)


def _load_toml(path: Path) -> TomlTable:
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError:
        return {}
    try:
        data = tomllib.loads(raw)
    except tomllib.TOMLDecodeError:
        return {}
    return data if isinstance(data, dict) else {}


def load_config(root: Path | None = None, config_path: Path | None = None) -> TomlTable:
    if config_path is None:
        base = root if root is not None else Path.cwd()
        config_path = base / DEFAULT_CONFIG_NAME
    return _load_toml(config_path)


def redundancy_defaults(
    root: Path | None = None, config_path: Path | None = None
) -> TomlTable:
    data = load_config(root=root, config_path=config_path)
    section = data.get("redundancy", {})
    return section if isinstance(section, dict) else {}


def files_defaults(root: Path | None = None, config_path: Path | None = None) -> TomlTable:
    data = load_config(root=root, config_path=config_path)
    section = data.get("files", {})
    return section if isinstance(section, dict) else {}


def _normalize_name_list(value: TomlValue) -> list[str]:
    items: list[str] = []
    if value is None:
        return items
    if isinstance(value, str):
        items = [part.strip() for part in value.split(",") if part.strip()]
    elif isinstance(value, (list, tuple, set)):
        for item in value:
            if isinstance(item, str):
                items.extend([part.strip() for part in item.split(",") if part.strip()])
    return [item for item in items if item]


def _as_bool(value: TomlValue) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return False


def exclude_patterns(section: TomlTable | None) -> list[str]:
    if section is None:
        return []
    if not isinstance(section, dict):
        return []
    return _normalize_name_list(section.get("exclude"))


def alias_table(section: TomlTable | None) -> dict[str, str]:
    """Built-in aliases overlaid with ``[redundancy.aliases]``; empty targets delete."""
    aliases = dict(DEFAULT_ALIASES)
    if not section:
        return aliases
    raw = section.get("aliases")
    if raw is None:
        return aliases
    if not isinstance(raw, dict):
        raise ConfigError("redundancy.aliases", "expected a table of strings")
    for documented, declared in raw.items():
        if not isinstance(declared, str):
            raise ConfigError(f"redundancy.aliases.{documented}", "expected a string")
        if declared.strip():
            aliases[documented] = declared.strip()
        else:
            aliases.pop(documented, None)
    return aliases


def rules_from_config(section: TomlTable | None) -> RedundancyRules:
    if not section:
        return RedundancyRules()
    if not isinstance(section, dict):
        raise ConfigError("redundancy", "expected a table")
    overrides: dict[str, object] = {}
    for key in _STRING_KEYS:
        value = section.get(key)
        if value is None:
            continue
        if not isinstance(value, str):
            raise ConfigError(f"redundancy.{key}", "expected a string")
        overrides[key] = value
    if not overrides.get("union_separator", "|"):
        raise ConfigError("redundancy.union_separator", "must not be empty")
    if not overrides.get("namespace_separator", "."):
        raise ConfigError("redundancy.namespace_separator", "must not be empty")
    if "stop_after_qualified_param_match" in section:
        overrides["stop_after_qualified_param_match"] = _as_bool(
            section.get("stop_after_qualified_param_match")
        )
    overrides["aliases"] = alias_table(section)
    return RedundancyRules(**overrides)


def merge_payload(payload: TomlTable, defaults: TomlTable) -> TomlTable:
    merged = dict(defaults)
    for key, value in payload.items():
        if value is None:
            continue
        merged[key] = value
    return merged
