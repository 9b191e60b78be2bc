from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from diary_entries.models import DiaryEntry


class Dimension(str, Enum):
    DATE = "date"
    DAY = "day"
    MOOD = "mood"
    TAG = "tag"
    ENTITY = "entity"
    ENTITY_TYPE = "entityType"
    COUNTRY = "country"
    CITY = "city"


class NodeKind(str, Enum):
    ENTRY = "entry"
    TAG = "tag"
    ENTITY = "entity"
    CLUSTER = "cluster"


@dataclass(slots=True)
class GraphEntry:
    """Normalized view of one diary entry as the graph consumes it."""

    id: str
    when: datetime
    mood: str
    tags: list[str]
    entities: list[tuple[str, str]]
    country: str | None
    city: str | None
    source: DiaryEntry


@dataclass(slots=True)
class Node:
    id: str
    kind: NodeKind
    x: float
    y: float
    radius: float
    color: str
    label: str
    vx: float = 0.0
    vy: float = 0.0
    entity_type: str | None = None
    payload: Any = None

    @property
    def is_cluster(self) -> bool:
        return self.kind is NodeKind.CLUSTER


@dataclass(slots=True, frozen=True)
class Edge:
    source_id: str
    target_id: str


@dataclass(slots=True)
class Cluster:
    key: str
    label: str
    color: str
    entries: list[GraphEntry] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.entries)


@dataclass(slots=True)
class ClusterPayload:
    key: str
    count: int
    entries: list[DiaryEntry]


@dataclass(slots=True)
class ClusterPlan:
    clustered: bool
    effective_mode: Dimension
    clusters: list[Cluster] = field(default_factory=list)
    links: list[tuple[str, str]] = field(default_factory=list)


@dataclass(slots=True)
class GraphGeneration:
    nodes: list[Node]
    edges: list[Edge]
    effective_mode: Dimension
    clustered: bool


@dataclass(slots=True)
class DrillStep:
    mode: Dimension
    value: str
    label: str
    # Bookkeeping for an exact undo of the filter change made on entry.
    added_value: bool = False
    previous_range: tuple[str, str] = ("", "")
