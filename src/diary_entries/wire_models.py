from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from . import models


class WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")


class InboundModel(WireModel):
    # Entries come from the diary store and carry fields this service never reads.
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class EntityReferenceValue(InboundModel):
    name: str
    type: str = "Other"

    @classmethod
    def from_domain(cls, entity: models.EntityReference) -> "EntityReferenceValue":
        return cls(name=entity.name, type=entity.type)

    def to_domain(self) -> models.EntityReference:
        return models.EntityReference(name=self.name, type=self.type)


class AnalysisValue(InboundModel):
    sentiment_score: float = 0.0
    mood: str | None = None
    entities: list[EntityReferenceValue] | None = None
    manual_tags: list[str] | None = None
    summary: str = ""


class GeoPointValue(InboundModel):
    lat: float
    lng: float


class DiaryEntryValue(InboundModel):
    id: str
    user_id: str = ""
    timestamp: int = Field(description="timestamp-millis")
    content: str = ""
    analysis: AnalysisValue = Field(default_factory=AnalysisValue)
    country: str | None = None
    city: str | None = None
    location: GeoPointValue | None = None
    image: str | None = None
    images: list[str] | None = None
    audio: list[str] | None = None

    @classmethod
    def from_domain(cls, entry: models.DiaryEntry) -> "DiaryEntryValue":
        return cls(
            id=entry.id,
            user_id=entry.user_id,
            timestamp=entry.timestamp,
            content=entry.content,
            analysis=AnalysisValue(
                sentiment_score=entry.sentiment_score,
                mood=entry.mood,
                entities=[EntityReferenceValue.from_domain(item) for item in entry.entities],
                manual_tags=list(entry.manual_tags),
                summary=entry.summary,
            ),
            country=entry.country,
            city=entry.city,
            location=GeoPointValue(lat=entry.location.lat, lng=entry.location.lng) if entry.location else None,
            images=list(entry.images),
            audio=list(entry.audio),
        )

    def to_domain(self) -> models.DiaryEntry:
        images = list(self.images or [])
        if self.image and self.image not in images:
            images.insert(0, self.image)
        return models.DiaryEntry(
            id=self.id,
            timestamp=self.timestamp,
            mood=self.analysis.mood,
            sentiment_score=self.analysis.sentiment_score,
            manual_tags=list(self.analysis.manual_tags or []),
            entities=[item.to_domain() for item in self.analysis.entities or []],
            country=self.country or None,
            city=self.city or None,
            user_id=self.user_id,
            content=self.content,
            summary=self.analysis.summary,
            location=models.GeoPoint(lat=self.location.lat, lng=self.location.lng) if self.location else None,
            images=images,
            audio=list(self.audio or []),
        )


class FilterStateValue(WireModel):
    start_date: str = ""
    end_date: str = ""
    text: str = ""
    selected_moods: list[str] = Field(default_factory=list)
    selected_tags: list[str] = Field(default_factory=list)
    selected_entities: list[str] = Field(default_factory=list)
    selected_entity_types: list[str] = Field(default_factory=list)
    selected_countries: list[str] = Field(default_factory=list)
    selected_cities: list[str] = Field(default_factory=list)
    media: list[str] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, filters: models.FilterState) -> "FilterStateValue":
        return cls(
            start_date=filters.start_date,
            end_date=filters.end_date,
            text=filters.text,
            selected_moods=list(filters.selected_moods),
            selected_tags=list(filters.selected_tags),
            selected_entities=list(filters.selected_entities),
            selected_entity_types=list(filters.selected_entity_types),
            selected_countries=list(filters.selected_countries),
            selected_cities=list(filters.selected_cities),
            media=list(filters.media),
        )

    def to_domain(self) -> models.FilterState:
        return models.FilterState(**self.model_dump())
