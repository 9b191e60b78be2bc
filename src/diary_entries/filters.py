"""Entry filter predicate service.

Every active criterion must hold (AND across criteria). Inside a list
criterion a single match is enough (OR across selected values). Malformed
date bounds are ignored rather than rejected.
"""

from __future__ import annotations

from datetime import date, datetime, time, timezone, tzinfo
from typing import Iterable

from .models import DiaryEntry, FilterState

MEDIA_IMAGE = "hasImage"
MEDIA_AUDIO = "hasAudio"
MEDIA_LOCATION = "hasLocation"
DEFAULT_ENTITY_TYPE = "Other"


def entry_datetime(entry: DiaryEntry, tz: tzinfo = timezone.utc) -> datetime:
    return datetime.fromtimestamp(entry.timestamp / 1000.0, tz=tz)


def entry_tags(entry: DiaryEntry) -> list[str]:
    """Stripped, non-empty, first-seen-unique manual tags."""
    seen: dict[str, None] = {}
    for tag in entry.manual_tags:
        tag = (tag or "").strip()
        if tag:
            seen.setdefault(tag, None)
    return list(seen)


def entry_entities(entry: DiaryEntry) -> list[tuple[str, str]]:
    """Deduplicated (name, type) pairs; a blank type reads as "Other"."""
    seen: dict[tuple[str, str], None] = {}
    for entity in entry.entities:
        name = (entity.name or "").strip()
        if name:
            seen.setdefault((name, (entity.type or "").strip() or DEFAULT_ENTITY_TYPE), None)
    return list(seen)


def entry_place(value: str | None) -> str | None:
    return (value or "").strip() or None


def _parse_day(value: str) -> date | None:
    if not value:
        return None
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        return None


def _searchable_text(entry: DiaryEntry) -> str:
    parts = [
        entry.content,
        entry.summary,
        *entry_tags(entry),
        *(name for name, _ in entry_entities(entry)),
        entry.city or "",
        entry.country or "",
    ]
    return " ".join(parts).lower()


def _matches_text(entry: DiaryEntry, text: str) -> bool:
    terms = text.lower().split()
    if not terms:
        return True
    haystack = _searchable_text(entry)
    return all(term in haystack for term in terms)


def _matches_media(entry: DiaryEntry, media: list[str]) -> bool:
    if MEDIA_IMAGE in media and not entry.images:
        return False
    if MEDIA_AUDIO in media and not entry.audio:
        return False
    if MEDIA_LOCATION in media and (entry.location is None or not entry.location.lat):
        return False
    return True


def matches(entry: DiaryEntry, filters: FilterState, tz: tzinfo = timezone.utc) -> bool:
    if filters.text.strip() and not _matches_text(entry, filters.text):
        return False

    start = _parse_day(filters.start_date)
    end = _parse_day(filters.end_date)
    if start or end:
        when = entry_datetime(entry, tz)
        if start and when < datetime.combine(start, time.min, tzinfo=tz):
            return False
        if end and when > datetime.combine(end, time.max, tzinfo=tz):
            return False

    if filters.selected_moods and entry.mood not in filters.selected_moods:
        return False

    tags = entry_tags(entry)
    if filters.selected_tags and not any(tag in tags for tag in filters.selected_tags):
        return False

    entities = entry_entities(entry)
    names = [name for name, _ in entities]
    if filters.selected_entities and not any(name in names for name in filters.selected_entities):
        return False

    types = [kind for _, kind in entities]
    if filters.selected_entity_types and not any(kind in types for kind in filters.selected_entity_types):
        return False

    if filters.selected_countries and entry_place(entry.country) not in filters.selected_countries:
        return False
    if filters.selected_cities and entry_place(entry.city) not in filters.selected_cities:
        return False

    if filters.media and not _matches_media(entry, filters.media):
        return False

    return True


def filter_entries(
    entries: Iterable[DiaryEntry],
    filters: FilterState,
    tz: tzinfo = timezone.utc,
) -> list[DiaryEntry]:
    return [entry for entry in entries if matches(entry, filters, tz)]


def available_options(entries: list[DiaryEntry], filters: FilterState) -> dict[str, list[str]]:
    """Distinct values offered by the filter panel for the loaded entries."""
    entity_types = set(filters.selected_entity_types)
    tags: set[str] = set()
    entities: set[str] = set()
    types: set[str] = set()
    countries: set[str] = set()
    cities: set[str] = set()

    for entry in entries:
        tags.update(entry_tags(entry))
        for name, kind in entry_entities(entry):
            types.add(kind)
            if not entity_types or kind in entity_types:
                entities.add(name)
        country = entry_place(entry.country)
        city = entry_place(entry.city)
        if country:
            countries.add(country)
        if city and (not filters.selected_countries or country in filters.selected_countries):
            cities.add(city)

    return {
        "tags": sorted(tags),
        "entities": sorted(entities),
        "entity_types": sorted(types),
        "countries": sorted(countries),
        "cities": sorted(cities),
    }
