from __future__ import annotations

import random
from typing import Collection

from .config import GraphViewConfig
from .models import (
    ClusterPayload,
    ClusterPlan,
    Edge,
    GraphEntry,
    GraphGeneration,
    Node,
    NodeKind,
)
from .palette import ENTITY_COLOR, TAG_COLOR, mood_color
from .planner import cluster_radius

ENTRY_RADIUS = 12.0
TAG_RADIUS = 6.0
ENTITY_RADIUS = 8.0


def cluster_node_id(key: str) -> str:
    return f"cluster-{key}"


def normalize_label(value: str) -> str:
    return value.strip().lower()


def entity_glyph(entity_type: str | None) -> str:
    if entity_type == "Person":
        return "P"
    if entity_type == "Location":
        return "L"
    return "E"


class GraphBuilder:
    """Turns a cluster plan (or the raw working set) into a fresh node/edge arena.

    Positions are scattered uniformly inside +/- spawn_extent; the simulation
    is responsible for untangling them.
    """

    def __init__(self, config: GraphViewConfig, rng: random.Random | None = None) -> None:
        self.config = config
        self._rng = rng or random.Random(config.seed)

    def _spawn(self) -> tuple[float, float]:
        extent = self.config.spawn_extent
        return self._rng.uniform(-extent, extent), self._rng.uniform(-extent, extent)

    def build(
        self,
        plan: ClusterPlan,
        entries: list[GraphEntry],
        entity_types: Collection[str] = (),
    ) -> GraphGeneration:
        if plan.clustered:
            nodes, edges = self.build_clustered(plan)
        else:
            nodes, edges = self.build_detailed(entries, entity_types)
        return GraphGeneration(nodes=nodes, edges=edges, effective_mode=plan.effective_mode, clustered=plan.clustered)

    def build_clustered(self, plan: ClusterPlan) -> tuple[list[Node], list[Edge]]:
        nodes: list[Node] = []
        for cluster in plan.clusters:
            x, y = self._spawn()
            nodes.append(
                Node(
                    id=cluster_node_id(cluster.key),
                    kind=NodeKind.CLUSTER,
                    x=x,
                    y=y,
                    radius=cluster_radius(cluster.count),
                    color=cluster.color,
                    label=cluster.label,
                    payload=ClusterPayload(
                        key=cluster.key,
                        count=cluster.count,
                        entries=[entry.source for entry in cluster.entries],
                    ),
                )
            )
        edges = [Edge(cluster_node_id(left), cluster_node_id(right)) for left, right in plan.links]
        return nodes, edges

    def build_detailed(
        self,
        entries: list[GraphEntry],
        entity_types: Collection[str] = (),
    ) -> tuple[list[Node], list[Edge]]:
        allowed = set(entity_types)
        nodes: list[Node] = []
        edges: list[Edge] = []
        satellites: dict[str, Node] = {}

        for entry in entries:
            x, y = self._spawn()
            when = entry.when
            nodes.append(
                Node(
                    id=entry.id,
                    kind=NodeKind.ENTRY,
                    x=x,
                    y=y,
                    radius=ENTRY_RADIUS,
                    color=mood_color(entry.mood),
                    label=f"{when.month}/{when.day}/{when.year}",
                    payload=entry.source,
                )
            )
            linked: set[str] = set()

            for tag in entry.tags:
                normalized = normalize_label(tag)
                if not normalized:
                    continue
                node_id = f"tag-{normalized}"
                if node_id not in satellites:
                    x, y = self._spawn()
                    satellites[node_id] = Node(
                        id=node_id, kind=NodeKind.TAG, x=x, y=y, radius=TAG_RADIUS, color=TAG_COLOR, label=tag
                    )
                    nodes.append(satellites[node_id])
                if node_id not in linked:
                    linked.add(node_id)
                    edges.append(Edge(entry.id, node_id))

            for name, kind in entry.entities:
                if allowed and kind not in allowed:
                    continue
                normalized = normalize_label(name)
                if not normalized:
                    continue
                node_id = f"ent-{normalized}"
                if node_id not in satellites:
                    x, y = self._spawn()
                    satellites[node_id] = Node(
                        id=node_id,
                        kind=NodeKind.ENTITY,
                        x=x,
                        y=y,
                        radius=ENTITY_RADIUS,
                        color=ENTITY_COLOR,
                        label=name,
                        entity_type=kind,
                    )
                    nodes.append(satellites[node_id])
                if node_id not in linked:
                    linked.add(node_id)
                    edges.append(Edge(entry.id, node_id))

        return nodes, edges
