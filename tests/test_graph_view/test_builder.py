from __future__ import annotations

import random
from datetime import datetime, timezone

from diary_entries.models import DiaryEntry, EntityReference
from graph_view.adapter import adapt_entries
from graph_view.builder import ENTRY_RADIUS, GraphBuilder, entity_glyph
from graph_view.config import GraphViewConfig
from graph_view.models import ClusterPayload, Dimension, NodeKind
from graph_view.palette import MOOD_COLORS
from graph_view.planner import ClusterPlanner, cluster_radius


def make_entry(i: int, **kwargs) -> DiaryEntry:
    when = datetime(2024, 3, 1 + i, 9, 30, tzinfo=timezone.utc)
    return DiaryEntry(id=f"e{i}", timestamp=int(when.timestamp() * 1000), **kwargs)


def make_builder(seed: int = 7) -> GraphBuilder:
    return GraphBuilder(GraphViewConfig(), rng=random.Random(seed))


def build(entries: list[DiaryEntry], mode: Dimension = Dimension.MOOD, entity_types: tuple[str, ...] = ()):
    cfg = GraphViewConfig()
    working = adapt_entries(entries)
    plan = ClusterPlanner(cfg).plan(working, mode, entity_types=entity_types)
    return make_builder().build(plan, working, entity_types)


def test_detailed_graph_with_satellites() -> None:
    entries = [
        make_entry(0, mood="Happy", manual_tags=["Work", "work "], entities=[EntityReference("Alice", "Person")]),
        make_entry(1, mood="Sad", manual_tags=["work"]),
        make_entry(2, mood="Joyful", entities=[EntityReference("alice", "Person")]),
        make_entry(3, mood="Tired"),
        make_entry(4),
    ]

    generation = build(entries)

    assert not generation.clustered
    kinds = [node.kind for node in generation.nodes]
    assert kinds.count(NodeKind.ENTRY) == 5
    assert kinds.count(NodeKind.TAG) == 1
    assert kinds.count(NodeKind.ENTITY) == 1

    ids = {node.id for node in generation.nodes}
    assert {"tag-work", "ent-alice"} <= ids
    pairs = sorted((edge.source_id, edge.target_id) for edge in generation.edges)
    assert pairs == [("e0", "ent-alice"), ("e0", "tag-work"), ("e1", "tag-work"), ("e2", "ent-alice")]


def test_entry_nodes_carry_mood_color_and_label() -> None:
    generation = build([make_entry(0, mood="Happy"), make_entry(1)])
    first, second = generation.nodes

    assert first.label == "3/1/2024"
    assert first.radius == ENTRY_RADIUS
    assert first.color == MOOD_COLORS["Happy"]
    assert first.payload.id == "e0"
    assert second.color == "#94a3b8"


def test_entity_type_filter_drops_satellites() -> None:
    entries = [
        make_entry(0, entities=[EntityReference("Alice", "Person"), EntityReference("Paris", "Location")]),
    ]

    generation = build(entries, entity_types=("Person",))

    assert [node.id for node in generation.nodes if node.kind is NodeKind.ENTITY] == ["ent-alice"]
    assert entity_glyph("Person") == "P"
    assert entity_glyph("Location") == "L"
    assert entity_glyph("Organization") == "E"


def test_clustered_graph_nodes_and_edges() -> None:
    entries = [make_entry(i, mood="Happy" if i < 8 else "Sad") for i in range(14)]

    generation = build(entries, mode=Dimension.MOOD)

    assert generation.clustered
    assert [node.id for node in generation.nodes] == ["cluster-Happy", "cluster-Sad"]
    happy = generation.nodes[0]
    assert happy.kind is NodeKind.CLUSTER
    assert isinstance(happy.payload, ClusterPayload)
    assert happy.payload.count == 8
    assert [entry.id for entry in happy.payload.entries] == [f"e{i}" for i in range(8)]
    assert happy.radius == cluster_radius(8)
    assert [(edge.source_id, edge.target_id) for edge in generation.edges] == [("cluster-Happy", "cluster-Sad")]


def test_spawn_positions_stay_inside_extent() -> None:
    generation = build([make_entry(i, manual_tags=[f"t{i}"]) for i in range(10)])

    extent = GraphViewConfig().spawn_extent
    assert all(-extent <= node.x <= extent and -extent <= node.y <= extent for node in generation.nodes)
    assert all(node.vx == 0.0 and node.vy == 0.0 for node in generation.nodes)


def test_empty_working_set_builds_empty_graph() -> None:
    generation = build([])
    assert generation.nodes == []
    assert generation.edges == []
