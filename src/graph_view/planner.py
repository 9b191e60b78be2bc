"""Cluster planning: detailed vs clustered rendering and cluster aggregates.

Math notes:
- Cluster radius grows logarithmically and is capped:
  r = 25 + min(60, ln(count + 1) * 12), so r never exceeds 85.
- Chronological dimensions (date, day) link clusters as a chain over sorted
  group keys.
- Scalar dimensions (mood, country, city) link clusters through chronological
  transitions between consecutive entries.
- Multi-valued dimensions (tag, entity, entityType) link clusters through
  co-occurrence inside a single entry.
Link counts are tallied but only presence produces an edge.
"""

from __future__ import annotations

import logging
import math
from collections import Counter
from itertools import combinations
from typing import Collection, Iterable, Sequence

from .adapter import UNKNOWN
from .config import GraphViewConfig
from .models import Cluster, ClusterPlan, Dimension, DrillStep, GraphEntry
from .palette import SENTINEL_COLOR, category_color, mood_color

logger = logging.getLogger("graph-view-planner")

UNTAGGED = "Untagged"
NO_ENTITIES = "No Entities"

CHRONOLOGICAL = frozenset({Dimension.DATE, Dimension.DAY})
TRANSITIONAL = frozenset({Dimension.MOOD, Dimension.COUNTRY, Dimension.CITY})
CO_OCCURRING = frozenset({Dimension.TAG, Dimension.ENTITY, Dimension.ENTITY_TYPE})

ESCALATION_OVERRIDES: dict[Dimension, Dimension] = {
    Dimension.ENTITY_TYPE: Dimension.ENTITY,
    Dimension.ENTITY: Dimension.DATE,
    Dimension.DATE: Dimension.DAY,
    Dimension.DAY: Dimension.MOOD,
}
ESCALATION_PRIORITY: tuple[Dimension, ...] = (
    Dimension.DATE,
    Dimension.MOOD,
    Dimension.TAG,
    Dimension.ENTITY,
    Dimension.COUNTRY,
)
FALLBACK_DIMENSION = Dimension.MOOD


def get_next_dimension(current: Dimension, used: Collection[Dimension]) -> Dimension:
    """Pick the grouping for the next drill level, never reusing one from the path."""
    taken = set(used) | {current}
    override = ESCALATION_OVERRIDES.get(current)
    if override is not None and override not in taken:
        return override
    for candidate in ESCALATION_PRIORITY:
        if candidate not in taken:
            return candidate
    return FALLBACK_DIMENSION


def cluster_radius(count: int) -> float:
    return 25.0 + min(60.0, math.log(count + 1) * 12.0)


def dominant_mood(entries: Iterable[GraphEntry]) -> str:
    counts = Counter(entry.mood for entry in entries)
    if not counts:
        return "Neutral"
    # most_common keeps first-seen order among ties.
    return counts.most_common(1)[0][0]


class ClusterPlanner:
    def __init__(self, config: GraphViewConfig) -> None:
        self.config = config

    def effective_mode(self, requested: Dimension, drill_path: Sequence[DrillStep]) -> Dimension:
        if not drill_path:
            return requested
        return get_next_dimension(drill_path[-1].mode, {step.mode for step in drill_path})

    def should_cluster(self, entry_count: int, force_detailed: bool) -> bool:
        return entry_count > self.config.cluster_threshold and not force_detailed

    def plan(
        self,
        entries: list[GraphEntry],
        requested: Dimension | str,
        drill_path: Sequence[DrillStep] = (),
        force_detailed: bool = False,
        entity_types: Collection[str] = (),
    ) -> ClusterPlan:
        requested = Dimension(requested)
        if not self.should_cluster(len(entries), force_detailed):
            return ClusterPlan(clustered=False, effective_mode=requested)

        mode = self.effective_mode(requested, drill_path)
        clusters = self.group(entries, mode, entity_types)
        links = self.link(entries, clusters, mode, entity_types)
        if mode is not requested:
            logger.debug("escalated grouping requested=%s effective=%s depth=%d", requested.value, mode.value, len(drill_path))
        return ClusterPlan(clustered=True, effective_mode=mode, clusters=clusters, links=links)

    @staticmethod
    def _memberships(entry: GraphEntry, mode: Dimension, allowed: set[str]) -> list[tuple[str, str]]:
        when = entry.when
        if mode is Dimension.DATE:
            return [(f"{when.year:04d}-{when.month:02d}", when.strftime("%b %Y"))]
        if mode is Dimension.DAY:
            return [(f"{when.year:04d}-{when.month:02d}-{when.day:02d}", f"{when.month}/{when.day}")]
        if mode is Dimension.MOOD:
            return [(entry.mood, entry.mood)]
        if mode is Dimension.COUNTRY:
            value = entry.country or UNKNOWN
            return [(value, value)]
        if mode is Dimension.CITY:
            value = entry.city or UNKNOWN
            return [(value, value)]
        if mode is Dimension.TAG:
            if not entry.tags:
                return [(UNTAGGED, UNTAGGED)]
            return [(tag, tag) for tag in entry.tags]

        kept = [(name, kind) for name, kind in entry.entities if not allowed or kind in allowed]
        if mode is Dimension.ENTITY:
            values = list(dict.fromkeys(name for name, _ in kept))
        else:
            values = list(dict.fromkeys(kind for _, kind in kept))
        if not values:
            return [(NO_ENTITIES, NO_ENTITIES)]
        return [(value, value) for value in values]

    @staticmethod
    def _base_color(mode: Dimension, key: str) -> str:
        if key in (UNTAGGED, NO_ENTITIES) and mode in CO_OCCURRING:
            return SENTINEL_COLOR
        if mode is Dimension.MOOD:
            return mood_color(key)
        return category_color(key)

    def group(
        self,
        entries: list[GraphEntry],
        mode: Dimension,
        entity_types: Collection[str] = (),
    ) -> list[Cluster]:
        allowed = set(entity_types)
        clusters: dict[str, Cluster] = {}
        for entry in entries:
            for key, label in self._memberships(entry, mode, allowed):
                cluster = clusters.get(key)
                if cluster is None:
                    cluster = Cluster(key=key, label=label, color=self._base_color(mode, key))
                    clusters[key] = cluster
                cluster.entries.append(entry)

        ordered = list(clusters.values())
        if mode in CHRONOLOGICAL:
            ordered.sort(key=lambda item: item.key)
            for cluster in ordered:
                cluster.color = mood_color(dominant_mood(cluster.entries))
        return ordered

    def link(
        self,
        entries: list[GraphEntry],
        clusters: list[Cluster],
        mode: Dimension,
        entity_types: Collection[str] = (),
    ) -> list[tuple[str, str]]:
        if mode in CHRONOLOGICAL:
            return [(left.key, right.key) for left, right in zip(clusters, clusters[1:])]

        keys = {cluster.key for cluster in clusters}
        allowed = set(entity_types)
        counts: Counter[tuple[str, str]] = Counter()

        if mode in TRANSITIONAL:
            timeline = sorted(entries, key=lambda item: item.when)
            for previous, current in zip(timeline, timeline[1:]):
                left = self._memberships(previous, mode, allowed)[0][0]
                right = self._memberships(current, mode, allowed)[0][0]
                if left != right:
                    counts[(left, right)] += 1
        else:
            for entry in entries:
                values = sorted({key for key, _ in self._memberships(entry, mode, allowed)})
                for left, right in combinations(values, 2):
                    counts[(left, right)] += 1

        return [pair for pair in counts if pair[0] in keys and pair[1] in keys]
