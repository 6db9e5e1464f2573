"""Configuration model."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from docnav.defaults import DEFAULT_DESTINATION, DEFAULT_SECTIONS, DEFAULT_TITLE


@dataclass
class ExtraEntry:
    """A titled markdown file or directory added outside the API docs."""

    title: str
    path: Path


@dataclass
class Config:
    """Resolved configuration for sidebar and search generation."""

    title: str = DEFAULT_TITLE
    sections: list[str] = field(default_factory=lambda: list(DEFAULT_SECTIONS))
    exclude_inherited: bool = False
    search: bool = True
    sort: bool = True
    include_private: bool = False
    destination: Path = Path(DEFAULT_DESTINATION)
    tutorials: Path | None = None
    extra_md: list[ExtraEntry] = field(default_factory=list)
    extra_sidebar_items: list[ExtraEntry] = field(default_factory=list)
