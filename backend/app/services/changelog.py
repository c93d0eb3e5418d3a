"""
Changelog Builder - renders done work items as a release note

Pure function over an already ordered sequence of done items. Items are
grouped by type and rendered as up to three titled sections:

    BUG FIXED:
    1. Fix: Crash on save

    ADD FEATURE:
    1. Add: Dark mode

    CHANGES:
    1. Changes: Faster search

Sections always appear in that order, numbering restarts at 1 in each
section, and items keep their input order. Unknown types are dropped.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, List, Mapping, Optional, Tuple

from app.models.work_item import ItemType

NO_CHANGELOG = "No changelog yet"

# (item type, heading, line verb) in render order
SECTIONS: Tuple[Tuple[str, str, str], ...] = (
    (ItemType.BUG.value, "BUG FIXED:", "Fix"),
    (ItemType.NEW_FEATURE.value, "ADD FEATURE:", "Add"),
    (ItemType.FEATURE_UPDATE.value, "CHANGES:", "Changes"),
)


@dataclass(frozen=True)
class ChangelogCounts:
    bug_fixed: int = 0
    feature_added: int = 0
    feature_updated: int = 0

    @property
    def total(self) -> int:
        return self.bug_fixed + self.feature_added + self.feature_updated


@dataclass(frozen=True)
class ChangelogReport:
    text: str
    counts: ChangelogCounts

    @property
    def is_empty(self) -> bool:
        return self.counts.total == 0


def _field(item: Any, name: str) -> Any:
    if isinstance(item, Mapping):
        return item.get(name)
    return getattr(item, name, None)


def _item_type(item: Any) -> Optional[str]:
    value = _field(item, "type")
    if isinstance(value, Enum):
        value = value.value
    return value if isinstance(value, str) else None


def _item_title(item: Any) -> str:
    title = _field(item, "title")
    return "" if title is None else str(title)


def _render_section(heading: str, verb: str, titles: List[str]) -> str:
    lines = [heading]
    lines.extend(f"{n}. {verb}: {title}" for n, title in enumerate(titles, start=1))
    return "\n".join(lines) + "\n"


def build_changelog(items: Optional[Iterable[Any]]) -> ChangelogReport:
    """
    Build the changelog for a sequence of done items.

    Accepts ORM rows, store records or plain mappings; only `type` and
    `title` are read. Never raises: a missing or empty input, or one with
    no recognized types, yields the "No changelog yet" sentinel.
    """
    groups = {item_type: [] for item_type, _, _ in SECTIONS}
    for item in items or ():
        item_type = _item_type(item)
        if item_type in groups:
            groups[item_type].append(_item_title(item))

    sections = [
        _render_section(heading, verb, groups[item_type])
        for item_type, heading, verb in SECTIONS
        if groups[item_type]
    ]

    counts = ChangelogCounts(
        bug_fixed=len(groups[ItemType.BUG.value]),
        feature_added=len(groups[ItemType.NEW_FEATURE.value]),
        feature_updated=len(groups[ItemType.FEATURE_UPDATE.value]),
    )

    # Sections end in "\n", so joining on "\n" leaves exactly one blank line between them
    text = "\n".join(sections) if sections else NO_CHANGELOG
    return ChangelogReport(text=text, counts=counts)
