"""Helpers for validating and deriving config values."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from docnav.config.model import ExtraEntry
from docnav.defaults import DEFAULT_SECTIONS, SECTION_KINDS


def resolve_sections(value: Any) -> list[str]:
    """Validate a section ordering, matching kinds case-insensitively."""
    if value is None:
        return list(DEFAULT_SECTIONS)
    if not isinstance(value, list):
        raise ValueError(
            f"theme_opts 'sections' must be a list, got {type(value).__name__}"
        )

    by_key = {kind.casefold(): kind for kind in SECTION_KINDS}
    sections: list[str] = []
    for entry in value:
        if not isinstance(entry, str):
            raise ValueError(
                "theme_opts 'sections' entries must be strings, "
                f"got {type(entry).__name__}"
            )
        kind = by_key.get(entry.casefold())
        if kind is None:
            known = ", ".join(SECTION_KINDS)
            raise ValueError(f"Unknown section '{entry}' (expected one of: {known})")
        if kind not in sections:
            sections.append(kind)
    return sections


def resolve_extra_entries(value: Any, key: str, base_dir: Path) -> list[ExtraEntry]:
    """Parse a list of ``{title, path}`` mappings, resolving relative paths."""
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(
            f"theme_opts '{key}' must be a list, got {type(value).__name__}"
        )

    entries: list[ExtraEntry] = []
    for index, item in enumerate(value):
        if not isinstance(item, dict):
            raise ValueError(
                f"theme_opts '{key}[{index}]' must be a mapping, "
                f"got {type(item).__name__}"
            )
        path = item.get("path")
        if not isinstance(path, str) or not path:
            raise ValueError(f"theme_opts '{key}[{index}]' needs a 'path' string")
        title = item.get("title")
        if title is not None and not isinstance(title, str):
            raise ValueError(
                f"theme_opts '{key}[{index}].title' must be a string, "
                f"got {type(title).__name__}"
            )
        resolved = resolve_path(path, base_dir)
        if not title:
            title = resolved.stem.replace("-", " ").title()
        entries.append(ExtraEntry(title=title, path=resolved))
    return entries


def resolve_path(value: str, base_dir: Path) -> Path:
    path = Path(value).expanduser()
    if path.is_absolute():
        return path
    return base_dir / path


def as_bool(value: Any, key: str, default: bool) -> bool:
    if value is None:
        return default
    if not isinstance(value, bool):
        raise ValueError(f"'{key}' must be a boolean, got {type(value).__name__}")
    return value
