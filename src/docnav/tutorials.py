"""Tutorial discovery."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from docnav.convert import extract_title_from_html, html_to_text, strip_markdown
from docnav.extras import filename_title, first_heading

HTML_SUFFIXES = (".html", ".htm")
TUTORIAL_SUFFIXES = (".md", ".markdown", *HTML_SUFFIXES)


@dataclass
class Tutorial:
    """A standalone guide page."""

    name: str
    title: str
    text: str


def _configured_title(path: Path, warnings: list[str]) -> str | None:
    """Read ``{"title": ...}`` from the tutorial's sibling JSON file."""
    meta_path = path.with_suffix(".json")
    if not meta_path.exists():
        return None
    try:
        meta = json.loads(meta_path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        warnings.append(f"Ignoring tutorial config {meta_path}: {exc}")
        return None
    title = meta.get("title") if isinstance(meta, dict) else None
    return title if isinstance(title, str) and title else None


def load_tutorials(directory: Path, warnings: list[str]) -> list[Tutorial]:
    """Load tutorials from a directory, sorted by file name.

    Titles come from a sibling ``<name>.json``, then the document's own
    heading, then the file name.
    """
    if not directory.is_dir():
        warnings.append(f"Tutorials directory not found: {directory}")
        return []

    tutorials: list[Tutorial] = []
    for path in sorted(directory.iterdir()):
        if not path.is_file() or path.suffix.lower() not in TUTORIAL_SUFFIXES:
            continue
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            warnings.append(f"Skipping tutorial {path}: {exc}")
            continue

        if path.suffix.lower() in HTML_SUFFIXES:
            heading = extract_title_from_html(content)
            text = html_to_text(content)
        else:
            heading = first_heading(content)
            text = strip_markdown(content, keep_headings=True)

        title = _configured_title(path, warnings) or heading or filename_title(path)
        tutorials.append(Tutorial(name=path.stem, title=title, text=text))
    return tutorials
