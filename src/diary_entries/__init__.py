from .filters import available_options, entry_datetime, entry_entities, entry_place, entry_tags, filter_entries
from .models import DiaryEntry, EntityReference, FilterState, GeoPoint
from .sources import EntrySource, InMemoryEntrySource, JsonFileEntrySource
from .wire_models import DiaryEntryValue, FilterStateValue

__all__ = [
    "DiaryEntry",
    "DiaryEntryValue",
    "EntityReference",
    "EntrySource",
    "FilterState",
    "FilterStateValue",
    "GeoPoint",
    "InMemoryEntrySource",
    "JsonFileEntrySource",
    "available_options",
    "entry_datetime",
    "entry_entities",
    "entry_place",
    "entry_tags",
    "filter_entries",
]
