"""Group doclets by the member kinds shown in the sidebar."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from docnav.records import DocRecord

GLOBAL_KINDS = frozenset({"function", "member", "constant", "typedef"})


@dataclass
class Members:
    """Doclets bucketed by kind, in input order."""

    classes: list[DocRecord] = field(default_factory=list)
    externals: list[DocRecord] = field(default_factory=list)
    events: list[DocRecord] = field(default_factory=list)
    globals: list[DocRecord] = field(default_factory=list)
    mixins: list[DocRecord] = field(default_factory=list)
    modules: list[DocRecord] = field(default_factory=list)
    namespaces: list[DocRecord] = field(default_factory=list)
    interfaces: list[DocRecord] = field(default_factory=list)


_KIND_TO_BUCKET = {
    "class": "classes",
    "external": "externals",
    "event": "events",
    "mixin": "mixins",
    "module": "modules",
    "namespace": "namespaces",
    "interface": "interfaces",
}


def get_members(records: Iterable[DocRecord]) -> Members:
    """Bucket doclets into the kinds the sidebar knows about."""
    members = Members()
    for record in records:
        bucket = _KIND_TO_BUCKET.get(record.kind)
        if bucket is not None:
            getattr(members, bucket).append(record)
        elif record.memberof is None and record.kind in GLOBAL_KINDS:
            members.globals.append(record)
    return members


def index_methods(
    records: Iterable[DocRecord], exclude_inherited: bool = False
) -> dict[str, list[DocRecord]]:
    """Map each owner longname to its functions, one per method longname."""
    methods: dict[str, list[DocRecord]] = {}
    seen: set[tuple[str, str]] = set()
    for record in records:
        if record.kind != "function" or record.memberof is None:
            continue
        if exclude_inherited and record.inherited:
            continue
        key = (record.memberof, record.longname)
        if key in seen:
            continue
        seen.add(key)
        methods.setdefault(record.memberof, []).append(record)
    return methods
