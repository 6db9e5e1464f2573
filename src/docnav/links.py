"""Longname to URL resolution and HTML anchor helpers."""

from __future__ import annotations

import html
import re
from collections.abc import Iterable

from docnav.records import DocRecord

CONTAINER_KINDS = frozenset(
    {"class", "module", "namespace", "mixin", "external", "interface"}
)
GLOBAL_PAGE = "global.html"

# Instance members take no marker after the "#"
SCOPE_PUNCTUATION = {"static": ".", "inner": "~"}

_UNSAFE_CHARS = re.compile(r"[^$a-zA-Z0-9._-]")


def filename_for(longname: str) -> str:
    """Convert a container longname to a page filename stem.

    ``module:foo/bar`` becomes ``module-foo_bar``.
    """
    stem = longname
    if stem.startswith("module:"):
        stem = "module-" + stem[len("module:") :]
    elif stem.startswith("external:"):
        stem = "external-" + stem[len("external:") :]
    return _UNSAFE_CHARS.sub("_", stem)


def anchor(url: str, text: str) -> str:
    """Render an HTML anchor; ``text`` is escaped."""
    return f'<a href="{html.escape(url, quote=True)}">{html.escape(text)}</a>'


def fragment_for(record: DocRecord) -> str:
    """Return the URL fragment JSDoc gives a member on its owner's page.

    Static members get a leading ``.``, inner members ``~``, and events an
    ``event:`` namespace (``Actor.create``, ``Actor~helper``,
    ``Actor#event:spawn``).
    """
    namespace = "event:" if record.kind == "event" else ""
    return SCOPE_PUNCTUATION.get(record.scope or "", "") + namespace + record.name


def tutorial_url(name: str) -> str:
    return f"tutorial-{_UNSAFE_CHARS.sub('_', name)}.html"


class LinkRegistry:
    """Assigns each documented longname a unique URL."""

    def __init__(self) -> None:
        self._urls: dict[str, str] = {}
        self._taken: set[str] = {"index", "global"}

    def __contains__(self, longname: str) -> bool:
        return longname in self._urls

    def register(self, longname: str, url: str) -> None:
        self._urls[longname] = url

    def url_for(self, longname: str) -> str | None:
        return self._urls.get(longname)

    def unique_filename(self, longname: str) -> str:
        """Return a page filename not yet handed out (case-insensitive)."""
        stem = filename_for(longname) or "_"
        candidate = stem
        counter = 0
        while candidate.lower() in self._taken:
            counter += 1
            candidate = f"{stem}_{counter}"
        self._taken.add(candidate.lower())
        return f"{candidate}.html"

    def register_records(self, records: Iterable[DocRecord]) -> None:
        """Register URLs for all records.

        Container kinds get their own pages. Every other record links to a
        fragment on the page of its nearest container, found through the
        ``memberof`` chain regardless of record order.
        """
        records = list(records)
        owners = {record.longname: record.memberof for record in records}
        for record in records:
            if record.kind in CONTAINER_KINDS and record.longname not in self:
                self.register(record.longname, self.unique_filename(record.longname))
        for record in records:
            if record.longname in self:
                continue
            page = self._owner_page(record.memberof, owners)
            self.register(record.longname, f"{page}#{fragment_for(record)}")

    def _owner_page(self, memberof: str | None, owners: dict[str, str | None]) -> str:
        """Find the page of the nearest registered container above a member."""
        visited: set[str] = set()
        while memberof is not None and memberof not in visited:
            url = self.url_for(memberof)
            if url is not None:
                return url.split("#", 1)[0]
            visited.add(memberof)
            memberof = owners.get(memberof)
        return GLOBAL_PAGE

    def linkto(self, longname: str, text: str | None = None) -> str:
        """Link to a longname, or return escaped text if it is unknown."""
        label = text if text is not None else longname
        url = self.url_for(longname)
        if url is None:
            return html.escape(label)
        return anchor(url, label)

    def linkto_external(self, longname: str, text: str | None = None) -> str:
        """Like :meth:`linkto`, stripping quotes around external names."""
        label = text if text is not None else longname
        return self.linkto(longname, label.strip('"'))

    def linkto_tutorial(self, name: str, text: str | None = None) -> str:
        return anchor(tutorial_url(name), text if text is not None else name)
