from __future__ import annotations

from dataclasses import dataclass

from .models import Node
from .simulation import ForceSimulation

MIN_ZOOM = 0.1
MAX_ZOOM = 3.0
MIN_BUTTON_ZOOM = 0.2
ZOOM_STEP = 1.2
HIT_SLOP = 5.0


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


@dataclass(slots=True)
class Viewport:
    """Camera over world space: screen = world * zoom + offset."""

    width: float
    height: float
    zoom: float = 1.0
    offset_x: float = 0.0
    offset_y: float = 0.0

    def screen_to_world(self, sx: float, sy: float) -> tuple[float, float]:
        return (sx - self.offset_x) / self.zoom, (sy - self.offset_y) / self.zoom

    def world_to_screen(self, x: float, y: float) -> tuple[float, float]:
        return x * self.zoom + self.offset_x, y * self.zoom + self.offset_y

    def resize(self, width: float, height: float) -> None:
        self.width = max(1.0, width)
        self.height = max(1.0, height)

    def center(self) -> None:
        self.zoom = 1.0
        self.offset_x = self.width / 2.0
        self.offset_y = self.height / 2.0

    def zoom_in(self) -> None:
        self.zoom = _clamp(self.zoom * ZOOM_STEP, MIN_BUTTON_ZOOM, MAX_ZOOM)

    def zoom_out(self) -> None:
        # Never zooms in, even when a fit left the camera below the button floor.
        self.zoom = max(min(self.zoom, MIN_BUTTON_ZOOM), min(MAX_ZOOM, self.zoom / ZOOM_STEP))

    def pan(self, dx: float, dy: float) -> None:
        self.offset_x += dx
        self.offset_y += dy

    def fit(self, nodes: list[Node], padding: float) -> None:
        if not nodes:
            self.center()
            return

        min_x = min(node.x for node in nodes)
        max_x = max(node.x for node in nodes)
        min_y = min(node.y for node in nodes)
        max_y = max(node.y for node in nodes)

        span_x = max_x - min_x
        span_y = max_y - min_y
        usable_w = max(1.0, self.width - 2.0 * padding)
        usable_h = max(1.0, self.height - 2.0 * padding)
        scale_x = usable_w / span_x if span_x > 0 else MAX_ZOOM
        scale_y = usable_h / span_y if span_y > 0 else MAX_ZOOM

        self.zoom = _clamp(min(scale_x, scale_y), MIN_ZOOM, MAX_ZOOM)
        center_x = (min_x + max_x) / 2.0
        center_y = (min_y + max_y) / 2.0
        self.offset_x = self.width / 2.0 - center_x * self.zoom
        self.offset_y = self.height / 2.0 - center_y * self.zoom


class InteractionController:
    """Pointer session handling: either a node drag or a canvas pan, never both."""

    def __init__(self, viewport: Viewport) -> None:
        self.viewport = viewport
        self.dragged_id: str | None = None
        self._grab_dx = 0.0
        self._grab_dy = 0.0
        self._pan_anchor: tuple[float, float] | None = None

    @property
    def panning(self) -> bool:
        return self._pan_anchor is not None

    def hit_test(self, nodes: list[Node], sx: float, sy: float) -> Node | None:
        x, y = self.viewport.screen_to_world(sx, sy)
        for node in reversed(nodes):
            dx = node.x - x
            dy = node.y - y
            reach = node.radius + HIT_SLOP
            if dx * dx + dy * dy < reach * reach:
                return node
        return None

    def pointer_down(self, simulation: ForceSimulation, sx: float, sy: float) -> Node | None:
        self.release(simulation)
        hit = self.hit_test(simulation.nodes, sx, sy)
        if hit is None:
            self._pan_anchor = (sx, sy)
            return None

        x, y = self.viewport.screen_to_world(sx, sy)
        self.dragged_id = hit.id
        self._grab_dx = hit.x - x
        self._grab_dy = hit.y - y
        hit.vx = 0.0
        hit.vy = 0.0
        return hit

    def pointer_move(self, simulation: ForceSimulation, sx: float, sy: float) -> None:
        if self.dragged_id is not None:
            node = simulation.node(self.dragged_id)
            if node is None:
                self.dragged_id = None
                return
            x, y = self.viewport.screen_to_world(sx, sy)
            node.x = x + self._grab_dx
            node.y = y + self._grab_dy
            node.vx = 0.0
            node.vy = 0.0
            return

        if self._pan_anchor is not None:
            last_x, last_y = self._pan_anchor
            self.viewport.pan(sx - last_x, sy - last_y)
            self._pan_anchor = (sx, sy)

    def release(self, simulation: ForceSimulation) -> None:
        node = simulation.node(self.dragged_id)
        if node is not None:
            node.vx = 0.0
            node.vy = 0.0
        self.dragged_id = None
        self._pan_anchor = None
