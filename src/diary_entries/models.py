from __future__ import annotations

import copy
from dataclasses import dataclass, field


@dataclass(slots=True)
class EntityReference:
    name: str
    type: str = "Other"


@dataclass(slots=True)
class GeoPoint:
    lat: float
    lng: float


@dataclass(slots=True)
class DiaryEntry:
    id: str
    timestamp: int
    mood: str | None = None
    sentiment_score: float = 0.0
    manual_tags: list[str] = field(default_factory=list)
    entities: list[EntityReference] = field(default_factory=list)
    country: str | None = None
    city: str | None = None
    user_id: str = ""
    content: str = ""
    summary: str = ""
    location: GeoPoint | None = None
    images: list[str] = field(default_factory=list)
    audio: list[str] = field(default_factory=list)


@dataclass(slots=True)
class FilterState:
    start_date: str = ""
    end_date: str = ""
    text: str = ""
    selected_moods: list[str] = field(default_factory=list)
    selected_tags: list[str] = field(default_factory=list)
    selected_entities: list[str] = field(default_factory=list)
    selected_entity_types: list[str] = field(default_factory=list)
    selected_countries: list[str] = field(default_factory=list)
    selected_cities: list[str] = field(default_factory=list)
    media: list[str] = field(default_factory=list)

    def copy(self) -> FilterState:
        return copy.deepcopy(self)

    def is_empty(self) -> bool:
        return self == FilterState()
