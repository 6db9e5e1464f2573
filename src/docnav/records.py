"""Doclet records and the navigation/search structures built from them."""

from __future__ import annotations

import json
from collections.abc import Iterable
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

ANONYMOUS = "<anonymous>"


@dataclass(frozen=True)
class DocRecord:
    """One parsed documentation comment, as emitted by ``jsdoc -X``."""

    longname: str
    name: str
    kind: str
    memberof: str | None = None
    description: str = ""
    inherited: bool = False
    scope: str | None = None
    access: str | None = None
    undocumented: bool = False
    ignore: bool = False
    version: str = ""
    since: str = ""

    @classmethod
    def from_mapping(cls, raw: dict[str, Any]) -> DocRecord:
        """Build a record from a raw doclet, filling gaps with defaults."""
        longname = _as_str(raw.get("longname")) or _as_str(raw.get("name"))
        name = _as_str(raw.get("name")) or _last_segment(longname)
        memberof = raw.get("memberof")
        return cls(
            longname=longname,
            name=name,
            kind=_as_str(raw.get("kind")),
            memberof=memberof if isinstance(memberof, str) and memberof else None,
            description=_as_str(raw.get("description")),
            inherited=bool(raw.get("inherited", False)),
            scope=raw.get("scope") if isinstance(raw.get("scope"), str) else None,
            access=raw.get("access") if isinstance(raw.get("access"), str) else None,
            undocumented=bool(raw.get("undocumented", False)),
            ignore=bool(raw.get("ignore", False)),
            version=_as_str(raw.get("version")),
            since=_as_str(raw.get("since")),
        )


@dataclass
class NavItem:
    """A sidebar entry with optional children (methods)."""

    name: str
    link: str
    children: list[NavItem] = field(default_factory=list)


@dataclass
class NavSection:
    """A titled group of sidebar entries."""

    name: str
    items: list[NavItem]
    id: str


@dataclass
class Sidebar:
    """The complete sidebar: a title plus ordered, non-empty sections."""

    title: str
    sections: list[NavSection]

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class SearchEntry:
    """A flattened record for the client-side search index."""

    title: str
    link: str
    description: str
    titles: list[str] = field(default_factory=list)
    subtitles: list[str] = field(default_factory=list)
    links: list[dict[str, str]] = field(default_factory=list)
    keywords: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def section_id(name: str) -> str:
    """Return the DOM id used for a sidebar section."""
    return "sidebar-" + "-".join(name.lower().split())


def load_records(path: Path) -> tuple[list[DocRecord], list[str]]:
    """Load doclets from a ``jsdoc -X`` JSON dump.

    Args:
        path: Path to the JSON file.

    Returns:
        Tuple of (records, warnings). Entries that are not objects are
        skipped and reported as warnings.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ValueError: If the file is not a JSON array.
    """
    if not path.exists():
        raise FileNotFoundError(f"Doclet file not found: {path}")

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"Doclet file is not valid JSON: {path}: {exc}") from exc

    if not isinstance(raw, list):
        raise ValueError(f"Doclet file must contain a JSON array: {path}")

    return parse_records(raw)


def parse_records(raw: Iterable[Any]) -> tuple[list[DocRecord], list[str]]:
    """Convert raw doclet mappings to records, skipping malformed entries."""
    records: list[DocRecord] = []
    warnings: list[str] = []
    for index, entry in enumerate(raw):
        if not isinstance(entry, dict):
            warnings.append(
                f"Skipping doclet #{index}: expected an object, "
                f"got {type(entry).__name__}"
            )
            continue
        record = DocRecord.from_mapping(entry)
        if not record.longname:
            warnings.append(f"Skipping doclet #{index}: no longname or name")
            continue
        records.append(record)
    return records, warnings


def prune(
    records: Iterable[DocRecord], include_private: bool = False
) -> list[DocRecord]:
    """Drop doclets that should never be published."""
    kept: list[DocRecord] = []
    for record in records:
        if record.undocumented or record.ignore:
            continue
        if record.memberof == ANONYMOUS:
            continue
        if record.access == "private" and not include_private:
            continue
        kept.append(record)
    return kept


def sort_records(records: Iterable[DocRecord]) -> list[DocRecord]:
    """Sort doclets by longname, version, since (stable)."""
    return sorted(records, key=lambda r: (r.longname, r.version, r.since))


def _as_str(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return str(value)


def _last_segment(longname: str) -> str:
    """Return the final path segment of a longname (``a.b#c`` -> ``c``)."""
    name = longname
    for sep in (".", "#", "~", ":", "/"):
        name = name.rsplit(sep, 1)[-1]
    return name
