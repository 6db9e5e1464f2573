"""Configuration loading from a JSDoc conf.json or YAML file."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from docnav.config.derive import (
    as_bool,
    resolve_extra_entries,
    resolve_path,
    resolve_sections,
)
from docnav.config.model import Config
from docnav.config.plugin import get_opts, get_theme_opts
from docnav.defaults import DEFAULT_DESTINATION, DEFAULT_TITLE


class _PermissiveLoader(yaml.SafeLoader):
    """SafeLoader that ignores unknown Python tags.

    Configs shared with other tooling sometimes carry Python-specific tags
    like !python/object/apply which SafeLoader rejects. This loader treats
    them as raw strings to allow parsing the rest of the config.
    """


def _ignore_unknown(loader: yaml.Loader, tag_suffix: str, node: yaml.Node) -> str:
    """Return the raw tag as a placeholder string."""
    return f"<{node.tag}>"


# Register handler for all Python tags (both full and shorthand forms)
_PermissiveLoader.add_multi_constructor("tag:yaml.org,2002:python/", _ignore_unknown)
_PermissiveLoader.add_multi_constructor("!python/", _ignore_unknown)


def load_config(config_path: Path) -> Config:
    """Load and resolve configuration.

    JSON is a subset of YAML, so a JSDoc ``conf.json`` loads through the
    same path as a ``.yml`` file.

    Args:
        config_path: Path to the config file.

    Returns:
        Resolved Config object.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValueError: If the config is not a mapping or has invalid values.
    """
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, encoding="utf-8") as f:
        raw = yaml.load(f, Loader=_PermissiveLoader)

    if not isinstance(raw, dict):
        raise ValueError(f"Config file must be a mapping: {config_path}")

    return _config_from_raw(raw, base_dir=config_path.parent)


def _config_from_raw(raw: dict[str, Any], base_dir: Path) -> Config:
    """Build a Config from a parsed config mapping."""
    opts = get_opts(raw)
    theme_opts = get_theme_opts(raw) or {}

    title = theme_opts.get("title", DEFAULT_TITLE)
    if not isinstance(title, str):
        raise ValueError(
            f"theme_opts 'title' must be a string, got {type(title).__name__}"
        )

    destination = opts.get("destination", DEFAULT_DESTINATION)
    if not isinstance(destination, str):
        raise ValueError(
            f"opts 'destination' must be a string, got {type(destination).__name__}"
        )

    tutorials = opts.get("tutorials")
    if tutorials is not None and not isinstance(tutorials, str):
        raise ValueError(
            f"opts 'tutorials' must be a string, got {type(tutorials).__name__}"
        )

    return Config(
        title=title,
        sections=resolve_sections(theme_opts.get("sections")),
        exclude_inherited=as_bool(
            theme_opts.get("exclude_inherited"), "exclude_inherited", False
        ),
        search=as_bool(theme_opts.get("search"), "search", True),
        sort=as_bool(theme_opts.get("sort"), "sort", True),
        include_private=as_bool(opts.get("private"), "private", False),
        destination=resolve_path(destination, base_dir),
        tutorials=resolve_path(tutorials, base_dir) if tutorials else None,
        extra_md=resolve_extra_entries(
            theme_opts.get("extra_md"), "extra_md", base_dir
        ),
        extra_sidebar_items=resolve_extra_entries(
            theme_opts.get("extra_sidebar_items"), "extra_sidebar_items", base_dir
        ),
    )
