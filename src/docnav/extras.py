"""Markdown documents added to the sidebar and search outside the API docs."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from docnav.config import ExtraEntry
from docnav.links import anchor
from docnav.records import NavItem, NavSection, section_id

MARKDOWN_SUFFIXES = (".md", ".markdown")
OTHER_SECTION = "Other"

_HEADING = re.compile(r"^#\s+(.+?)\s*#*\s*$", re.MULTILINE)


@dataclass
class ExtraDoc:
    """A markdown document outside the API reference."""

    title: str
    link: str
    path: Path
    content: str


def first_heading(content: str) -> str | None:
    """Return the text of the first ``# heading`` in markdown, if any."""
    match = _HEADING.search(content)
    return match.group(1) if match else None


def filename_title(path: Path) -> str:
    """Derive a title from a file name, e.g. ``getting-started.md``."""
    return path.stem.replace("-", " ").replace("_", " ").title()


def extra_item_url(category: str | None, name: str) -> str:
    """Output page name for an extra item.

    Files in a directory are prefixed with the directory name; standalone
    files keep only their stem.
    """
    stem = Path(name).stem
    if category is None:
        return f"{stem.lower()}.html"
    slug = "_".join(stem.split()).lower()
    return f"{category.lower()}-{slug}.html"


def read_structure_json(directory: Path) -> list[tuple[str, dict[str, Any]]] | None:
    """Read ``structure.json`` ({filename: {title, ...}}) from a directory.

    Returns:
        Ordered (filename, data) pairs, or None when there is no structure file.

    Raises:
        ValueError: If the file is not a JSON object.
    """
    structure_path = directory / "structure.json"
    if not structure_path.exists():
        return None
    try:
        raw = json.loads(structure_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid structure file {structure_path}: {exc}") from exc
    if not isinstance(raw, dict):
        raise ValueError(f"Structure file must be a JSON object: {structure_path}")
    return [
        (str(filename), data if isinstance(data, dict) else {})
        for filename, data in raw.items()
    ]


def _read_markdown(path: Path, warnings: list[str]) -> str | None:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        warnings.append(f"Could not read {path}: {exc}")
        return None


def _directory_entries(
    directory: Path, warnings: list[str]
) -> list[tuple[Path, str | None]]:
    """List markdown files in a directory with their configured titles."""
    try:
        structure = read_structure_json(directory)
    except ValueError as exc:
        warnings.append(str(exc))
        structure = None

    if structure is not None:
        entries: list[tuple[Path, str | None]] = []
        for filename, data in structure:
            title = data.get("title")
            if not isinstance(title, str):
                title = None
            entries.append((directory / f"{filename}.md", title))
        return entries

    return [
        (path, None)
        for path in sorted(directory.iterdir())
        if path.is_file() and path.suffix in MARKDOWN_SUFFIXES
    ]


def collect_extra_sidebar(
    items: list[ExtraEntry], warnings: list[str]
) -> tuple[list[NavSection], list[ExtraDoc]]:
    """Build sidebar sections and searchable documents for extra items.

    Each directory becomes its own section; standalone files are gathered
    into a trailing "Other" section.
    """
    sections: list[NavSection] = []
    docs: list[ExtraDoc] = []
    other_items: list[NavItem] = []

    for item in items:
        if item.path.is_dir():
            section = NavSection(name=item.title, items=[], id=section_id(item.title))
            for path, title in _directory_entries(item.path, warnings):
                if not path.exists():
                    warnings.append(f"Extra sidebar file not found: {path}")
                    continue
                content = _read_markdown(path, warnings)
                if content is None:
                    continue
                name = title or first_heading(content) or filename_title(path)
                link = extra_item_url(item.path.name, path.name)
                section.items.append(NavItem(name=name, link=anchor(link, name)))
                docs.append(ExtraDoc(title=name, link=link, path=path, content=content))
            if section.items:
                sections.append(section)
        elif item.path.is_file():
            content = _read_markdown(item.path, warnings)
            if content is None:
                continue
            name = first_heading(content) or item.title
            link = extra_item_url(None, item.path.name)
            other_items.append(NavItem(name=name, link=anchor(link, name)))
            docs.append(
                ExtraDoc(title=item.title, link=link, path=item.path, content=content)
            )
        else:
            warnings.append(f"Extra sidebar item not found: {item.path}")

    if other_items:
        sections.append(
            NavSection(
                name=OTHER_SECTION, items=other_items, id=section_id(OTHER_SECTION)
            )
        )
    return sections, docs


def load_extra_md(entries: list[ExtraEntry], warnings: list[str]) -> list[ExtraDoc]:
    """Read standalone markdown pages listed under ``extra_md``."""
    docs: list[ExtraDoc] = []
    for entry in entries:
        if not entry.path.is_file():
            warnings.append(f"Extra markdown file not found: {entry.path}")
            continue
        content = _read_markdown(entry.path, warnings)
        if content is None:
            continue
        link = f"{entry.path.stem}.html"
        docs.append(
            ExtraDoc(title=entry.title, link=link, path=entry.path, content=content)
        )
    return docs
