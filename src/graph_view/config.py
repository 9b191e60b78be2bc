from __future__ import annotations

import math
import os
from dataclasses import dataclass
from datetime import timezone, tzinfo
from zoneinfo import ZoneInfo


@dataclass(slots=True)
class GraphViewConfig:
    cluster_threshold: int = 12
    default_cluster_mode: str = "date"
    repulsion: float = 800.0
    repulsion_cutoff: float = 500.0
    collision_padding: float = 10.0
    collision_strength: float = 0.2
    spring_length: float = 150.0
    spring_strength: float = 0.05
    centering: float = 0.002
    damping: float = 0.80
    min_distance: float = 1.0
    spawn_extent: float = 400.0
    fit_padding: float = 50.0
    fit_delay_ms: int = 600
    frame_interval_ms: int = 16
    viewport_width: float = 800.0
    viewport_height: float = 600.0
    timezone: str = "UTC"
    seed: int | None = None
    frame_loop_enabled: bool = True
    entries_path: str | None = None

    @property
    def fit_delay_ticks(self) -> int:
        return max(1, math.ceil(self.fit_delay_ms / max(1, self.frame_interval_ms)))

    def tzinfo(self) -> tzinfo:
        if self.timezone.upper() == "UTC":
            return timezone.utc
        return ZoneInfo(self.timezone)


def load_config() -> GraphViewConfig:
    seed = os.getenv("GRAPH_SEED", "")
    return GraphViewConfig(
        cluster_threshold=int(os.getenv("GRAPH_CLUSTER_THRESHOLD", "12")),
        default_cluster_mode=os.getenv("GRAPH_DEFAULT_CLUSTER_MODE", "date"),
        repulsion=float(os.getenv("GRAPH_REPULSION", "800")),
        repulsion_cutoff=float(os.getenv("GRAPH_REPULSION_CUTOFF", "500")),
        collision_padding=float(os.getenv("GRAPH_COLLISION_PADDING", "10")),
        collision_strength=float(os.getenv("GRAPH_COLLISION_STRENGTH", "0.2")),
        spring_length=float(os.getenv("GRAPH_SPRING_LENGTH", "150")),
        spring_strength=float(os.getenv("GRAPH_SPRING_STRENGTH", "0.05")),
        centering=float(os.getenv("GRAPH_CENTERING", "0.002")),
        damping=float(os.getenv("GRAPH_DAMPING", "0.80")),
        min_distance=float(os.getenv("GRAPH_MIN_DISTANCE", "1.0")),
        spawn_extent=float(os.getenv("GRAPH_SPAWN_EXTENT", "400")),
        fit_padding=float(os.getenv("GRAPH_FIT_PADDING", "50")),
        fit_delay_ms=int(os.getenv("GRAPH_FIT_DELAY_MS", "600")),
        frame_interval_ms=int(os.getenv("GRAPH_FRAME_INTERVAL_MS", "16")),
        viewport_width=float(os.getenv("GRAPH_VIEWPORT_WIDTH", "800")),
        viewport_height=float(os.getenv("GRAPH_VIEWPORT_HEIGHT", "600")),
        timezone=os.getenv("GRAPH_TIMEZONE", "UTC"),
        seed=int(seed) if seed else None,
        frame_loop_enabled=os.getenv("GRAPH_FRAME_LOOP_ENABLED", "true").lower() == "true",
        entries_path=os.getenv("GRAPH_ENTRIES_PATH") or None,
    )
