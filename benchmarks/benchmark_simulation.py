from __future__ import annotations

import random
import time

from diary_entries.models import DiaryEntry, EntityReference
from graph_view.config import GraphViewConfig
from graph_view.controller import GraphViewController

MOODS = ["Joyful", "Happy", "Neutral", "Sad", "Anxious", "Angry", "Reflective", "Tired"]


def make_entry(i: int, tags: list[str], names: list[str], start_ms: int) -> DiaryEntry:
    return DiaryEntry(
        id=f"bench-{i}",
        timestamp=start_ms + i * 6 * 3600 * 1000,
        mood=random.choice(MOODS),
        manual_tags=random.sample(tags, 2),
        entities=[EntityReference(name=name, type="Person") for name in random.sample(names, 2)],
        country="Germany",
        city=random.choice(["Berlin", "Hamburg", "Munich"]),
    )


def main(entry_count: int = 200, ticks: int = 300) -> None:
    random.seed(42)
    tags = [f"tag-{i}" for i in range(30)]
    names = [f"Person-{i}" for i in range(60)]
    entries = [make_entry(i, tags, names, 1_700_000_000_000) for i in range(entry_count)]

    controller = GraphViewController(GraphViewConfig(seed=42))
    controller.load_entries(entries)
    controller.set_force_detailed(True)

    start = time.perf_counter()
    for _ in range(ticks):
        controller.tick()
    elapsed = time.perf_counter() - start

    print(f"entries={entry_count}")
    print(f"node_count={len(controller.nodes)}")
    print(f"edge_count={len(controller.edges)}")
    print(f"ticks={ticks}")
    print(f"elapsed_sec={elapsed:.4f}")
    print(f"ticks_per_second={ticks/elapsed:.2f}")


if __name__ == "__main__":
    main()
