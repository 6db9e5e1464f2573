"""HTML and Markdown text helpers for descriptions and tutorial pages."""

from __future__ import annotations

import re

import mdformat
from bs4 import BeautifulSoup, NavigableString, Tag
from markdownify import ATX, MarkdownConverter


def _should_remove(tag: Tag) -> bool:
    """Check if a tag carries no searchable text."""
    if tag.name in {"img", "svg", "script", "style"}:
        return True
    return tag.name == "a" and tag.img is not None


def _autoclean(soup: BeautifulSoup | Tag) -> None:
    """Remove images and scripts, unwrap JSDoc ``{@link}`` spans."""
    for element in soup.find_all(_should_remove):
        element.decompose()

    for element in soup.find_all("span", attrs={"class": "jsdoc-link"}):
        element.replace_with(NavigableString(element.get_text()))


def _get_language(tag: Tag) -> str:
    """Extract a language name from ``<pre>``/``<code>`` classes."""
    classes: list[str] = list(tag.get("class") or ())
    code_child = tag.find("code")
    if code_child:
        classes.extend(code_child.get("class") or ())
    for css_class in classes:
        if css_class.startswith("language-"):
            return css_class[9:]
        if css_class.startswith("lang-"):
            return css_class[5:]
    return ""


_converter = MarkdownConverter(
    bullets="-",
    code_language_callback=_get_language,
    escape_underscores=False,
    heading_style=ATX,
)


def description_to_markdown(description: str) -> str:
    """Convert a doclet description (HTML or plain text) to Markdown.

    Args:
        description: Description as emitted by the doc parser. JSDoc runs
            its markdown plugin before export, so this is usually HTML.

    Returns:
        Normalised Markdown, or an empty string for blank input.
    """
    if not description.strip():
        return ""
    soup = BeautifulSoup(description, "html.parser")
    _autoclean(soup)
    md = _converter.convert_soup(soup)
    return mdformat.text(md, options={"wrap": "no"}, extensions=("tables",)).strip()


def extract_title_from_html(html: str) -> str | None:
    """Extract page title from HTML.

    Tries <title> tag first, then falls back to first <h1>.

    Returns:
        The page title, or None if not found.
    """
    soup = BeautifulSoup(html, "html.parser")

    title_tag = soup.find("title")
    if title_tag:
        title = title_tag.get_text().strip()
        if title:
            return title

    h1_tag = soup.find("h1")
    if h1_tag:
        text = h1_tag.get_text().strip()
        if text:
            return text

    return None


def html_to_text(html: str) -> str:
    """Return the visible text of an HTML fragment, whitespace-collapsed.

    Prefers ``<body>``, then ``<article>``, then the whole document.
    """
    soup = BeautifulSoup(html, "html.parser")
    content = soup.find("body") or soup.find("article") or soup
    _autoclean(content)
    return " ".join(content.get_text(" ").split())


_MD_IMAGE = re.compile(r"!\[([^\]]*)\]\([^)]+\)")
_MD_RULE = re.compile(r"^(-{3,}|\*{3,}|_{3,})$", re.MULTILINE)
_MD_HEADING = re.compile(r"^#+\s+.*$", re.MULTILINE)
_MD_LINK = re.compile(r"\[([^\]]+)\]\([^)]+\)")
_MD_PUNCTUATION = re.compile(r"(?<!\\)[*_`#]")
_MD_ESCAPE = re.compile(r"\\([!-/:-@\[-`{-~])")


def strip_markdown(content: str, keep_headings: bool = False) -> str:
    """Reduce Markdown to plain, whitespace-collapsed text.

    Images and horizontal rules are dropped, links keep their text.
    Headings are dropped unless ``keep_headings`` is set.
    Backslash-escaped characters are kept as literal text.
    """
    content = _MD_IMAGE.sub("", content)
    content = _MD_RULE.sub("", content)
    if not keep_headings:
        content = _MD_HEADING.sub("", content)
    content = _MD_LINK.sub(r"\1", content)
    content = _MD_PUNCTUATION.sub("", content)
    content = _MD_ESCAPE.sub(r"\1", content)
    return " ".join(content.split())
