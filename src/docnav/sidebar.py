"""Sidebar navigation building."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping, Sequence

from docnav.defaults import (
    CLASSES,
    DEFAULT_SECTIONS,
    EVENTS,
    EXTERNALS,
    GLOBAL,
    INTERFACES,
    MIXINS,
    MODULES,
    NAMESPACES,
    TUTORIALS,
)
from docnav.links import LinkRegistry
from docnav.members import Members, index_methods
from docnav.records import DocRecord, NavItem, NavSection, Sidebar, section_id
from docnav.tutorials import Tutorial

LinkFn = Callable[[str, str], str]

# Sections whose items never list methods
_LEAF_SECTIONS = frozenset({TUTORIALS, GLOBAL})


def tutorial_records(tutorials: Iterable[Tutorial]) -> list[DocRecord]:
    """Represent tutorials as records so they flow through the same builder."""
    return [
        DocRecord(longname=t.name, name=t.title, kind="tutorial") for t in tutorials
    ]


def members_by_section(
    members: Members, tutorials: Iterable[Tutorial] = ()
) -> dict[str, list[DocRecord]]:
    """Map each section kind to the records it lists."""
    return {
        MODULES: members.modules,
        CLASSES: members.classes,
        EXTERNALS: members.externals,
        EVENTS: members.events,
        NAMESPACES: members.namespaces,
        MIXINS: members.mixins,
        TUTORIALS: tutorial_records(tutorials),
        INTERFACES: members.interfaces,
        GLOBAL: members.globals,
    }


def build_section(
    heading: str,
    items: Sequence[DocRecord],
    seen: set[str],
    linkto: LinkFn,
    methods: Mapping[str, Sequence[DocRecord]] | None = None,
    method_linkto: LinkFn | None = None,
) -> NavSection | None:
    """Build one sidebar section.

    Records whose longname is already in ``seen`` are skipped, and each new
    longname is added to it. When ``methods`` is given, each item gets its
    methods as children.

    Returns:
        The section, or None if it would have no items.
    """
    section = NavSection(name=heading, items=[], id=section_id(heading))
    child_linkto = method_linkto or linkto

    for record in items:
        if record.longname in seen:
            continue
        seen.add(record.longname)

        name = record.name.removeprefix("module:")
        item = NavItem(name=name, link=linkto(record.longname, name))
        if methods is not None:
            for method in methods.get(record.longname, ()):
                item.children.append(
                    NavItem(
                        name=method.name,
                        link=child_linkto(method.longname, method.name),
                    )
                )
        section.items.append(item)

    return section if section.items else None


def build_nav_sections(
    section_records: Mapping[str, Sequence[DocRecord]],
    order: Sequence[str],
    registry: LinkRegistry,
    all_records: Iterable[DocRecord],
    exclude_inherited: bool = False,
    warnings: list[str] | None = None,
) -> list[NavSection]:
    """Group records into non-empty sections in the requested order.

    Args:
        section_records: Section kind to the records listed under it.
        order: Section kinds in display order.
        registry: Link registry used to render anchors.
        all_records: Every record, searched for methods of listed items.
        exclude_inherited: Leave inherited methods out of item children.
        warnings: Collects messages about unknown section kinds.

    Returns:
        Sections in ``order``, skipping empty and unknown ones.
    """
    methods = index_methods(all_records, exclude_inherited=exclude_inherited)
    seen: set[str] = set()
    # Global and Tutorials keep their own seen-sets
    separate_seen: dict[str, set[str]] = {GLOBAL: set(), TUTORIALS: set()}

    sections: list[NavSection] = []
    for kind in order:
        if kind not in section_records:
            if warnings is not None:
                warnings.append(f"Unknown sidebar section: {kind}")
            continue

        linkto: LinkFn = registry.linkto
        if kind == EXTERNALS:
            linkto = registry.linkto_external
        elif kind == TUTORIALS:
            linkto = registry.linkto_tutorial

        section = build_section(
            heading=kind,
            items=section_records[kind],
            seen=separate_seen.get(kind, seen),
            linkto=linkto,
            methods=None if kind in _LEAF_SECTIONS else methods,
            method_linkto=registry.linkto,
        )
        if section is not None:
            sections.append(section)
    return sections


def build_sidebar(
    title: str,
    members: Members,
    registry: LinkRegistry,
    all_records: Iterable[DocRecord],
    tutorials: Iterable[Tutorial] = (),
    order: Sequence[str] = DEFAULT_SECTIONS,
    exclude_inherited: bool = False,
    extra_sections: Iterable[NavSection] = (),
    warnings: list[str] | None = None,
) -> Sidebar:
    """Build the complete sidebar, API sections first, then extra sections."""
    sections = build_nav_sections(
        members_by_section(members, tutorials),
        order,
        registry,
        all_records,
        exclude_inherited=exclude_inherited,
        warnings=warnings,
    )
    sections.extend(section for section in extra_sections if section.items)
    return Sidebar(title=title, sections=sections)
