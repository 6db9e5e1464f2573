"""Main generation orchestration."""

from __future__ import annotations

import json
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from docnav.config import Config
from docnav.defaults import SEARCH_DATA_PATH, SIDEBAR_DATA_PATH
from docnav.extras import collect_extra_sidebar, load_extra_md
from docnav.links import LinkRegistry
from docnav.members import get_members
from docnav.records import DocRecord, Sidebar, prune, sort_records
from docnav.search import (
    build_search_index,
    build_search_list,
    extra_doc_entries,
    tutorial_entries,
)
from docnav.sidebar import build_sidebar
from docnav.tutorials import Tutorial, load_tutorials


@dataclass
class BuildResult:
    """Result of building navigation and search data (no files written)."""

    sidebar: Sidebar
    search: dict[str, Any] | None
    records: list[DocRecord]
    warnings: list[str]


@dataclass
class GenerateResult:
    """Result of generation with files written."""

    sidebar: Sidebar
    search: dict[str, Any] | None
    output_files: list[Path]
    warnings: list[str]


def build_docnav_output(
    config: Config,
    records: Sequence[DocRecord],
    tutorials: Sequence[Tutorial] | None = None,
) -> BuildResult:
    """Build the sidebar and search index.

    Args:
        config: Resolved configuration.
        records: Doclets as loaded from the parser output.
        tutorials: Tutorials to include. Loaded from ``config.tutorials``
            when not given.

    Returns:
        BuildResult with the sidebar, the search payload (None when search
        is disabled) and any warnings collected along the way.
    """
    warnings: list[str] = []

    published = prune(records, include_private=config.include_private)
    if config.sort:
        published = sort_records(published)

    if tutorials is None:
        tutorials = (
            load_tutorials(config.tutorials, warnings) if config.tutorials else []
        )

    registry = LinkRegistry()
    registry.register_records(published)

    extra_sections, extra_sidebar_docs = collect_extra_sidebar(
        config.extra_sidebar_items, warnings
    )

    sidebar = build_sidebar(
        title=config.title,
        members=get_members(published),
        registry=registry,
        all_records=published,
        tutorials=tutorials,
        order=config.sections,
        exclude_inherited=config.exclude_inherited,
        extra_sections=extra_sections,
        warnings=warnings,
    )

    search = None
    if config.search:
        entries = build_search_list(published, registry)
        entries.extend(tutorial_entries(tutorials))
        entries.extend(extra_doc_entries(load_extra_md(config.extra_md, warnings)))
        entries.extend(extra_doc_entries(extra_sidebar_docs))
        search = build_search_index(entries)

    return BuildResult(
        sidebar=sidebar,
        search=search,
        records=published,
        warnings=warnings,
    )


def write_outputs(
    result: BuildResult,
    output_dir: Path,
    dry_run: bool = False,
) -> list[Path]:
    """Write ``data/sidebar.json`` and, if built, ``data/search.json``.

    Args:
        result: Output of :func:`build_docnav_output`.
        output_dir: Directory to write into.
        dry_run: If True, don't write anything.

    Returns:
        List of output paths (written or would-be).
    """
    payloads: list[tuple[Path, Any]] = [
        (output_dir / SIDEBAR_DATA_PATH, result.sidebar.to_dict()),
    ]
    if result.search is not None:
        payloads.append((output_dir / SEARCH_DATA_PATH, result.search))

    written: list[Path] = []
    for path, payload in payloads:
        if not dry_run:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(
                json.dumps(payload, ensure_ascii=False), encoding="utf-8"
            )
        written.append(path)
    return written


def generate_docnav(
    config: Config,
    records: Sequence[DocRecord],
    output_dir: Path | None = None,
    dry_run: bool = False,
) -> GenerateResult:
    """Build and write the sidebar and search index.

    Args:
        config: Resolved configuration.
        records: Doclets as loaded from the parser output.
        output_dir: Path to write output files. Defaults to config.destination.
        dry_run: If True, don't write files.
    Returns:
        GenerateResult with the built data and output paths.
    """
    build = build_docnav_output(config=config, records=records)
    if output_dir is None:
        output_dir = config.destination
    output_files = write_outputs(build, output_dir=output_dir, dry_run=dry_run)

    return GenerateResult(
        sidebar=build.sidebar,
        search=build.search,
        output_files=output_files,
        warnings=build.warnings,
    )
