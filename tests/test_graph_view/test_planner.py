from __future__ import annotations

import math
from datetime import datetime, timezone

from diary_entries.models import DiaryEntry, EntityReference
from graph_view.adapter import adapt_entries
from graph_view.config import GraphViewConfig
from graph_view.models import Dimension, DrillStep
from graph_view.palette import MOOD_COLORS, SENTINEL_COLOR, category_color
from graph_view.planner import (
    NO_ENTITIES,
    UNTAGGED,
    ClusterPlanner,
    cluster_radius,
    get_next_dimension,
)


def make_entry(i: int, month: int = 3, day: int = 1, hour: int = 12, **kwargs) -> DiaryEntry:
    when = datetime(2024, month, day, hour, 0, tzinfo=timezone.utc)
    return DiaryEntry(id=f"e{i}", timestamp=int(when.timestamp() * 1000), **kwargs)


def make_planner() -> ClusterPlanner:
    return ClusterPlanner(GraphViewConfig())


def test_escalation_overrides_and_priority() -> None:
    assert get_next_dimension(Dimension.ENTITY_TYPE, {Dimension.ENTITY_TYPE}) is Dimension.ENTITY
    assert get_next_dimension(Dimension.ENTITY, {Dimension.ENTITY}) is Dimension.DATE
    assert get_next_dimension(Dimension.DATE, {Dimension.DATE}) is Dimension.DAY
    assert get_next_dimension(Dimension.DAY, {Dimension.DATE, Dimension.DAY}) is Dimension.MOOD
    assert get_next_dimension(Dimension.MOOD, {Dimension.MOOD}) is Dimension.DATE
    assert get_next_dimension(Dimension.TAG, {Dimension.TAG}) is Dimension.DATE
    assert get_next_dimension(Dimension.MOOD, {Dimension.MOOD, Dimension.DATE}) is Dimension.TAG


def test_escalation_falls_back_to_mood_when_everything_is_used() -> None:
    used = {Dimension.DATE, Dimension.DAY, Dimension.MOOD, Dimension.TAG, Dimension.ENTITY, Dimension.COUNTRY}
    assert get_next_dimension(Dimension.COUNTRY, used) is Dimension.MOOD


def test_escalation_terminates_without_repeats() -> None:
    for start in Dimension:
        used = {start}
        current = start
        path: list[Dimension] = []
        for _ in range(len(Dimension)):
            nxt = get_next_dimension(current, used)
            if nxt in used:
                assert nxt is Dimension.MOOD
                break
            used.add(nxt)
            path.append(nxt)
            current = nxt
        else:
            raise AssertionError(f"escalation from {start.value} did not settle")

        assert start is Dimension.MOOD or path.index(Dimension.MOOD) < 6


def test_cluster_radius_is_monotonic_and_capped() -> None:
    radii = [cluster_radius(count) for count in range(0, 5000, 7)]
    assert radii == sorted(radii)
    assert max(radii) <= 85.0
    assert cluster_radius(10**9) == 85.0
    assert math.isclose(cluster_radius(20), 25.0 + math.log(21) * 12.0)


def test_threshold_switches_between_detailed_and_clustered() -> None:
    planner = make_planner()
    twelve = adapt_entries([make_entry(i, mood="Happy") for i in range(12)])
    thirteen = adapt_entries([make_entry(i, mood="Happy") for i in range(13)])

    assert not planner.plan(twelve, Dimension.MOOD).clustered
    assert planner.plan(thirteen, Dimension.MOOD).clustered
    assert not planner.plan(thirteen, Dimension.MOOD, force_detailed=True).clustered


def test_single_mood_group() -> None:
    entries = adapt_entries([make_entry(i, day=i + 1, mood="Happy") for i in range(20)])

    plan = make_planner().plan(entries, Dimension.MOOD)

    assert plan.clustered
    assert plan.effective_mode is Dimension.MOOD
    assert [(cluster.label, cluster.count) for cluster in plan.clusters] == [("Happy", 20)]
    assert plan.clusters[0].color == MOOD_COLORS["Happy"]
    assert round(cluster_radius(plan.clusters[0].count), 1) == 61.5
    assert plan.links == []


def test_tag_co_occurrence() -> None:
    tag_sets = [["A"]] * 3 + [["B"]] * 3 + [["A", "B"]] * 3 + [["C"]] * 6
    entries = adapt_entries([make_entry(i, day=i + 1, manual_tags=tags) for i, tags in enumerate(tag_sets)])

    plan = make_planner().plan(entries, Dimension.TAG)

    assert {cluster.key: cluster.count for cluster in plan.clusters} == {"A": 6, "B": 6, "C": 6}
    assert plan.links == [("A", "B")]
    assert plan.clusters[0].color == category_color("A")


def test_partition_for_scalar_dimensions() -> None:
    raw = [
        make_entry(i, month=1 + i % 3, day=1 + i, mood=["Happy", "Sad"][i % 2], country=["France", None][i % 2])
        for i in range(15)
    ]
    entries = adapt_entries(raw)
    planner = make_planner()

    for mode in (Dimension.DATE, Dimension.DAY, Dimension.MOOD, Dimension.COUNTRY, Dimension.CITY):
        plan = planner.plan(entries, mode)
        members = [entry.id for cluster in plan.clusters for entry in cluster.entries]
        assert sorted(members) == sorted(entry.id for entry in entries)

    by_country = {cluster.key: cluster.count for cluster in planner.plan(entries, Dimension.COUNTRY).clusters}
    assert by_country == {"France": 8, "Unknown": 7}


def test_tag_membership_counts_and_sentinel() -> None:
    raw = [make_entry(i, day=i + 1, manual_tags=["x", "y"] if i % 2 else []) for i in range(14)]
    entries = adapt_entries(raw)

    plan = make_planner().plan(entries, Dimension.TAG)
    membership: dict[str, int] = {}
    for cluster in plan.clusters:
        for entry in cluster.entries:
            membership[entry.id] = membership.get(entry.id, 0) + 1

    assert all(membership[entry.id] == max(1, len(entry.tags)) for entry in entries)
    untagged = next(cluster for cluster in plan.clusters if cluster.key == UNTAGGED)
    assert untagged.count == 7
    assert untagged.color == SENTINEL_COLOR


def test_date_clusters_are_chained_in_order() -> None:
    raw = [make_entry(i, month=[5, 3, 4][i % 3], day=1 + i, mood="Sad") for i in range(15)]

    plan = make_planner().plan(adapt_entries(raw), Dimension.DATE)

    assert [cluster.key for cluster in plan.clusters] == ["2024-03", "2024-04", "2024-05"]
    assert [cluster.label for cluster in plan.clusters] == ["Mar 2024", "Apr 2024", "May 2024"]
    assert plan.links == [("2024-03", "2024-04"), ("2024-04", "2024-05")]
    assert all(cluster.color == MOOD_COLORS["Sad"] for cluster in plan.clusters)


def test_mood_transitions_follow_chronology() -> None:
    moods = ["Happy"] * 7 + ["Sad"] * 6
    raw = [make_entry(i, day=1 + i, mood=mood) for i, mood in enumerate(moods)]

    plan = make_planner().plan(adapt_entries(raw), Dimension.MOOD)

    assert plan.links == [("Happy", "Sad")]


def test_entity_type_filter_applies_inside_grouping() -> None:
    raw = [
        make_entry(
            i,
            day=1 + i,
            entities=[EntityReference("Alice", "Person"), EntityReference("Paris", "Location")] if i < 10 else [],
        )
        for i in range(14)
    ]

    plan = make_planner().plan(adapt_entries(raw), Dimension.ENTITY, entity_types=["Person"])

    assert {cluster.key: cluster.count for cluster in plan.clusters} == {"Alice": 10, NO_ENTITIES: 4}
    assert plan.links == []


def test_drill_path_escalates_effective_mode() -> None:
    entries = adapt_entries([make_entry(i, day=1 + i, mood="Happy") for i in range(13)])
    path = [DrillStep(mode=Dimension.DATE, value="2024-03", label="Mar 2024")]

    plan = make_planner().plan(entries, Dimension.DATE, drill_path=path)

    assert plan.effective_mode is Dimension.DAY
    assert len(plan.clusters) == 13


def test_empty_working_set() -> None:
    plan = make_planner().plan([], Dimension.TAG)
    assert not plan.clustered
    assert plan.clusters == []
