from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Iterable

from gallery.db import GalleryItem


# Accepted spellings for a date group label, tried in order.
_DATE_FORMATS = (
    "%B %d, %Y",  # May 1, 2025
    "%b %d, %Y",  # Apr 15, 2025
    "%B %d %Y",
    "%b %d %Y",
    "%Y-%m-%d",
    "%m/%d/%Y",
    "%d %B %Y",
)


def parse_date_group(label: str | None) -> date | None:
    """Interpret a date group label as a calendar date, or None if it is not one."""
    if not label:
        return None
    text = " ".join(str(label).split())
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


@dataclass(frozen=True)
class DateGroup:
    date: str
    items: list[GalleryItem] = field(default_factory=list)

    @property
    def id(self) -> str:
        return self.date

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "date": self.date,
            "items": [i.to_dict() for i in self.items],
        }


def group_by_date(items: Iterable[GalleryItem]) -> list[DateGroup]:
    """Bucket items by `date_group`, most recent date first.

    Items keep their input order inside a group. Groups whose labels parse to
    the same date keep first-appearance order; labels that are not dates sort
    after every dated group, also in first-appearance order.
    """
    buckets: dict[str, list[GalleryItem]] = {}
    for item in items:
        buckets.setdefault(item.date_group, []).append(item)

    def _sort_key(label: str) -> tuple[int, int]:
        parsed = parse_date_group(label)
        if parsed is None:
            return (1, 0)
        return (0, -parsed.toordinal())

    # sorted() is stable, so ties fall back to insertion order of `buckets`.
    return [DateGroup(date=label, items=buckets[label]) for label in sorted(buckets, key=_sort_key)]
