"""Search index building."""

from __future__ import annotations

import re
from collections import Counter
from collections.abc import Iterable
from typing import Any

from docnav.convert import description_to_markdown, strip_markdown
from docnav.extras import ExtraDoc
from docnav.links import LinkRegistry, anchor, tutorial_url
from docnav.records import DocRecord, SearchEntry
from docnav.tutorials import Tutorial

DESCRIPTION_LENGTH = 150
TUTORIAL_DESCRIPTION_LENGTH = 100
KEYWORD_COUNT = 50

COMMON_WORDS = frozenset(
    "the a an and or but in on at to for of with by".split()
)

_CODE_FENCE = re.compile(r"```[\s\S]*?```")
_LINK = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")
_NON_ALPHA = re.compile(r"[^a-zA-Z\s]")
_TITLE = re.compile(r"^#\s+(.*)$", re.MULTILINE)
_SUBTITLE = re.compile(r"^##\s+(.*)$", re.MULTILINE)
_TRAILING_PUNCTUATION = re.compile(r"[,;:\-]+$")


def generate_keywords(content: str, count: int = KEYWORD_COUNT) -> list[str]:
    """Return the ``count`` most frequent meaningful words in Markdown text.

    Ties keep the order in which words first appear.
    """
    clean = _CODE_FENCE.sub("", content)
    clean = _LINK.sub(r"\1", clean)
    clean = _NON_ALPHA.sub(" ", clean)
    words = [
        word
        for word in clean.lower().split()
        if len(word) > 2 and word not in COMMON_WORDS
    ]
    return [word for word, _ in Counter(words).most_common(count)]


def cleanup_search_description(
    content: str, max_length: int = DESCRIPTION_LENGTH
) -> str:
    """Turn Markdown into a short plain-text description.

    Text longer than ``max_length`` is cut at the last sentence end that
    fits, or failing that the last comma or space, and gets an ellipsis.
    """
    content = strip_markdown(content)
    if len(content) <= max_length:
        return content

    cutoff = max(content.rfind(mark, 0, max_length + 1) for mark in ".?!")
    if cutoff == -1:
        cutoff = max(content.rfind(mark, 0, max_length + 1) for mark in ", ")
    if cutoff == -1:
        content = content[:max_length]
        cutoff = content.rfind(" ")

    if cutoff > 0:
        content = content[: cutoff + 1].strip()
    content = _TRAILING_PUNCTUATION.sub("", content)

    if len(content) < max_length:
        content += "..."
    return content


def analyze_content(content: str) -> dict[str, Any]:
    """Pull headings, links and keywords out of a Markdown document."""
    return {
        "titles": [title.strip() for title in _TITLE.findall(content)],
        "subtitles": [subtitle.strip() for subtitle in _SUBTITLE.findall(content)],
        "links": [{"text": text, "url": url} for text, url in _LINK.findall(content)],
        "keywords": generate_keywords(content),
    }


def record_entry(record: DocRecord, registry: LinkRegistry) -> SearchEntry:
    """Build the search entry for one doclet."""
    markdown = description_to_markdown(record.description)
    return SearchEntry(
        title=record.longname,
        link=registry.linkto(record.longname, record.name),
        description=cleanup_search_description(markdown),
        titles=[record.name],
        keywords=generate_keywords(markdown),
    )


def build_search_list(
    records: Iterable[DocRecord], registry: LinkRegistry
) -> list[SearchEntry]:
    """Flatten doclets into search entries, preserving order.

    Inherited doclets and ``package`` doclets are left out.
    """
    return [
        record_entry(record, registry)
        for record in records
        if record.kind != "package" and not record.inherited
    ]


def tutorial_entries(tutorials: Iterable[Tutorial]) -> list[SearchEntry]:
    """One entry per tutorial page, described by its opening text."""
    entries: list[SearchEntry] = []
    for tutorial in tutorials:
        url = tutorial_url(tutorial.name)
        entries.append(
            SearchEntry(
                title=tutorial.title,
                link=anchor(url, url),
                description=tutorial.text[:TUTORIAL_DESCRIPTION_LENGTH],
                titles=[tutorial.title],
            )
        )
    return entries


def extra_doc_entries(docs: Iterable[ExtraDoc]) -> list[SearchEntry]:
    entries: list[SearchEntry] = []
    for doc in docs:
        analysis = analyze_content(doc.content)
        entries.append(
            SearchEntry(
                title=doc.title,
                link=doc.link,
                description=cleanup_search_description(doc.content),
                titles=analysis["titles"],
                subtitles=analysis["subtitles"],
                links=analysis["links"],
                keywords=analysis["keywords"],
            )
        )
    return entries


def build_search_index(entries: Iterable[SearchEntry]) -> dict[str, Any]:
    """Assemble the ``data/search.json`` payload.

    Returns:
        Mapping with the entry ``list`` plus de-duplicated ``titles``,
        ``subtitles``, ``links`` and ``keywords`` across all entries.
    """
    entry_list = list(entries)
    titles: dict[str, None] = {}
    subtitles: dict[str, None] = {}
    keywords: dict[str, None] = {}
    links: dict[tuple[str, str], dict[str, str]] = {}

    for entry in entry_list:
        titles.update(dict.fromkeys(entry.titles))
        subtitles.update(dict.fromkeys(entry.subtitles))
        keywords.update(dict.fromkeys(entry.keywords))
        for link in entry.links:
            links.setdefault((link.get("url", ""), link.get("text", "")), link)

    return {
        "list": [entry.to_dict() for entry in entry_list],
        "titles": list(titles),
        "subtitles": list(subtitles),
        "links": list(links.values()),
        "keywords": list(keywords),
    }
