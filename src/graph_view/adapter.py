from __future__ import annotations

from datetime import timezone, tzinfo
from typing import Iterable

from diary_entries.filters import entry_datetime, entry_entities, entry_place, entry_tags
from diary_entries.models import DiaryEntry

from .models import GraphEntry

UNKNOWN = "Unknown"


def adapt_entry(entry: DiaryEntry, tz: tzinfo = timezone.utc) -> GraphEntry:
    # A group key used as a filter value must match every entry in the group.
    return GraphEntry(
        id=entry.id,
        when=entry_datetime(entry, tz),
        mood=entry.mood or UNKNOWN,
        tags=entry_tags(entry),
        entities=entry_entities(entry),
        country=entry_place(entry.country),
        city=entry_place(entry.city),
        source=entry,
    )


def adapt_entries(entries: Iterable[DiaryEntry], tz: tzinfo = timezone.utc) -> list[GraphEntry]:
    return [adapt_entry(entry, tz) for entry in entries]
