from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Callable, Optional

from diary_entries.filters import available_options, filter_entries
from diary_entries.models import DiaryEntry, FilterState

from .adapter import adapt_entries
from .builder import GraphBuilder, normalize_label
from .config import GraphViewConfig
from .drill import DrillNavigator, narrow_filters
from .models import ClusterPayload, Dimension, DrillStep, Edge, Node, NodeKind
from .planner import ClusterPlanner
from .simulation import ForceSimulation
from .viewport import InteractionController, Viewport


@dataclass(slots=True)
class NavigationRequest:
    filters: FilterState
    entry_id: str | None = None


HistoryCallback = Callable[[FilterState, Optional[str]], None]


class GraphViewController:
    """Single owner of the graph view state.

    Every mutation of nodes, edges, camera, selection and drill path goes
    through this object and is expected to run on one thread; a tick runs to
    completion before the next input handler is applied.
    """

    def __init__(
        self,
        config: GraphViewConfig,
        on_history: HistoryCallback | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.config = config
        self.logger = logging.getLogger("graph-view")
        self._tz = config.tzinfo()
        self._on_history = on_history

        self.planner = ClusterPlanner(config)
        self.builder = GraphBuilder(config, rng=rng)
        self.simulation = ForceSimulation(config)
        self.navigator = DrillNavigator()
        self.viewport = Viewport(width=config.viewport_width, height=config.viewport_height)
        self.viewport.center()
        self.interaction = InteractionController(self.viewport)

        self.entries: list[DiaryEntry] = []
        self.filters = FilterState()
        self.cluster_mode = Dimension(config.default_cluster_mode)
        self.effective_mode = self.cluster_mode
        self.clustered = False
        self.force_detailed = False
        self.selected_id: str | None = None
        self.filtered: list[DiaryEntry] = []
        self._fit_countdown = 0
        self.generation = 0

    # -- read side ---------------------------------------------------------

    @property
    def nodes(self) -> list[Node]:
        return self.simulation.nodes

    @property
    def edges(self) -> list[Edge]:
        return self.simulation.edges

    @property
    def selected_node(self) -> Node | None:
        return self.simulation.node(self.selected_id)

    @property
    def drill_path(self) -> list[DrillStep]:
        return list(self.navigator.steps)

    def options(self) -> dict[str, list[str]]:
        return available_options(self.entries, self.filters)

    def summary(self) -> str:
        text = f"{len(self.nodes)} nodes"
        if self.clustered and self.effective_mode is not self.cluster_mode:
            return f"{text} (Grouped by {self.effective_mode.value})"
        if self.clustered:
            return f"{text} (Clustered)"
        return text

    # -- node-set regeneration ----------------------------------------------

    def regenerate(self) -> None:
        self.filtered = filter_entries(self.entries, self.filters, self._tz)
        working = adapt_entries(self.filtered, self._tz)
        entity_types = self.filters.selected_entity_types
        plan = self.planner.plan(
            working,
            self.cluster_mode,
            drill_path=self.navigator.steps,
            force_detailed=self.force_detailed,
            entity_types=entity_types,
        )
        generation = self.builder.build(plan, working, entity_types)

        self.interaction.release(self.simulation)
        self.simulation.replace(generation.nodes, generation.edges)
        self.effective_mode = generation.effective_mode
        self.clustered = generation.clustered
        self.generation += 1
        if self.simulation.node(self.selected_id) is None:
            self.selected_id = None
        self._fit_countdown = self.config.fit_delay_ticks if generation.nodes else 0

        self.logger.info(
            "graph regenerated entries=%d clustered=%s mode=%s effective=%s nodes=%d edges=%d depth=%d",
            len(working),
            self.clustered,
            self.cluster_mode.value,
            self.effective_mode.value,
            len(generation.nodes),
            len(generation.edges),
            self.navigator.depth,
        )

    def load_entries(self, entries: list[DiaryEntry]) -> None:
        self.entries = list(entries)
        self.regenerate()

    def set_filters(self, filters: FilterState) -> None:
        self.filters = filters.copy()
        self.regenerate()

    def set_cluster_mode(self, mode: Dimension | str) -> None:
        if not self.navigator.at_root:
            raise ValueError("cluster mode can only be changed at the root of the drill path")
        self.cluster_mode = Dimension(mode)
        self.logger.info("cluster mode set mode=%s", self.cluster_mode.value)
        self.regenerate()

    def set_force_detailed(self, enabled: bool) -> None:
        self.force_detailed = enabled
        self.regenerate()

    # -- simulation loop ----------------------------------------------------

    def tick(self) -> bool:
        """Advance one frame; returns False once there is nothing to simulate."""
        if not self.simulation.running:
            return False
        self.simulation.tick(self.interaction.dragged_id)
        if self._fit_countdown > 0:
            self._fit_countdown -= 1
            if self._fit_countdown == 0:
                self.fit_to_screen()
        return True

    # -- pointer input ------------------------------------------------------

    def pointer_down(self, sx: float, sy: float) -> Node | None:
        hit = self.interaction.pointer_down(self.simulation, sx, sy)
        if hit is not None:
            self.selected_id = hit.id
        return hit

    def pointer_move(self, sx: float, sy: float) -> None:
        self.interaction.pointer_move(self.simulation, sx, sy)

    def pointer_up(self) -> None:
        self.interaction.release(self.simulation)

    def double_click(self, sx: float, sy: float) -> bool:
        hit = self.interaction.hit_test(self.simulation.nodes, sx, sy)
        if hit is None or not hit.is_cluster:
            return False
        return self.enter_cluster(hit.id)

    def select_node(self, node_id: str | None) -> Node | None:
        if node_id is None:
            self.selected_id = None
            return None
        node = self.simulation.node(node_id)
        if node is None:
            raise ValueError(f"unknown node '{node_id}'")
        self.selected_id = node.id
        return node

    # -- drill navigation ---------------------------------------------------

    def enter_cluster(self, node_id: str) -> bool:
        node = self.simulation.node(node_id)
        if node is None or not node.is_cluster or not isinstance(node.payload, ClusterPayload):
            return False
        self.filters = self.navigator.enter(self.filters, self.effective_mode, node.payload.key, node.label)
        self.selected_id = None
        self.viewport.center()
        self.regenerate()
        return True

    def back(self) -> bool:
        if self.navigator.at_root:
            return False
        self.filters = self.navigator.back(self.filters)
        self.regenerate()
        return True

    def reset(self) -> None:
        self.filters = self.navigator.reset()
        self.force_detailed = False
        self.cluster_mode = Dimension(self.config.default_cluster_mode)
        self.selected_id = None
        self.viewport.center()
        self.regenerate()

    # -- camera -------------------------------------------------------------

    def zoom_in(self) -> None:
        self.viewport.zoom_in()

    def zoom_out(self) -> None:
        self.viewport.zoom_out()

    def fit_to_screen(self) -> None:
        self.viewport.fit(self.simulation.nodes, self.config.fit_padding)

    def reset_view(self) -> None:
        self.viewport.center()

    def resize(self, width: float, height: float) -> None:
        self.viewport.resize(width, height)

    # -- outbound navigation ------------------------------------------------

    def open_history(self) -> NavigationRequest:
        node = self.selected_node
        request = NavigationRequest(
            filters=self._history_filters(node),
            entry_id=node.id if node is not None and node.kind is NodeKind.ENTRY else None,
        )
        self.logger.info("open history entry=%s", request.entry_id)
        if self._on_history is not None:
            self._on_history(request.filters, request.entry_id)
        return request

    def _history_filters(self, node: Node | None) -> FilterState:
        if node is None or node.kind is NodeKind.ENTRY:
            return self.filters.copy()
        if node.kind is NodeKind.CLUSTER and isinstance(node.payload, ClusterPayload):
            narrowed, _ = narrow_filters(self.filters, self.effective_mode, node.payload.key)
            return narrowed
        if node.kind is NodeKind.TAG:
            return self._with_label(Dimension.TAG, node.label)
        return self._with_label(Dimension.ENTITY, node.label)

    def _with_label(self, mode: Dimension, label: str) -> FilterState:
        wanted = normalize_label(label)
        pool = self.options()["tags" if mode is Dimension.TAG else "entities"]
        value = next((item for item in pool if normalize_label(item) == wanted), label)
        narrowed, _ = narrow_filters(self.filters, mode, value)
        return narrowed
