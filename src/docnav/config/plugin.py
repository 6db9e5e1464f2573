"""Theme option lookup inside JSDoc-style config files."""

from __future__ import annotations

from typing import Any

THEME_KEYS = ("theme_opts", "docnav")


def get_opts(raw: dict[str, Any]) -> dict[str, Any]:
    """Return the JSDoc ``opts`` mapping, or an empty dict."""
    opts = raw.get("opts")
    return opts if isinstance(opts, dict) else {}


def get_theme_opts(raw: dict[str, Any]) -> dict[str, Any] | None:
    """Extract theme options from a config mapping.

    Three layouts are accepted:

    JSDoc conf.json:
        {"opts": {"theme_opts": {...}}}

    Top-level:
        theme_opts:
          sections: ...

    Named:
        docnav:
          sections: ...
    """
    opts = get_opts(raw)
    if "theme_opts" in opts:
        theme_opts = opts["theme_opts"]
        # Option block with no values parses as None
        return theme_opts if isinstance(theme_opts, dict) else {}

    for key in THEME_KEYS:
        if key in raw:
            theme_opts = raw[key]
            return theme_opts if isinstance(theme_opts, dict) else {}
    return None
