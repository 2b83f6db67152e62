"""Utility helpers for the EntInfo service."""

from __future__ import annotations

import locale
import os
import re
from typing import Iterable, TypeVar

from .models import MediaItem, TrendingItem

DEFAULT_REGION = "US"

_LOCALE_REGION_RE = re.compile(r"^[A-Za-z]{2,3}[_-]([A-Za-z]{2})(?![A-Za-z])")

T = TypeVar("T")


def first(items: Iterable[T], count: int, *, offset: int = 0) -> list[T]:
    """Return up to ``count`` items starting at ``offset``."""

    return list(items)[offset : offset + count]


def exclude_people(entries: Iterable[TrendingItem]) -> list[MediaItem]:
    """Map mixed-type results to media items, dropping person entries."""

    return [
        MediaItem.from_trending(entry)
        for entry in entries
        if entry.media_type != "person"
    ]


def parse_release_year(date_value: str | None) -> str | None:
    """Return the year part of an ISO date such as ``2014-11-05``."""

    if not date_value:
        return None
    year = date_value.split("-", 1)[0].strip()
    if len(year) != 4 or not year.isdigit():
        return None
    return year


def device_region(locale_name: str | None = None) -> str:
    """Return the two-letter region of the host locale, ``US`` if unknown."""

    if locale_name is None:
        locale_name = locale.getlocale()[0] or os.environ.get("LC_ALL") or os.environ.get("LANG")
    if not locale_name:
        return DEFAULT_REGION
    match = _LOCALE_REGION_RE.match(locale_name.strip())
    if not match:
        return DEFAULT_REGION
    return match.group(1).upper()
