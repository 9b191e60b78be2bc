from __future__ import annotations

import math

from .config import GraphViewConfig
from .models import Edge, Node

GOLDEN_ANGLE = math.pi * (3.0 - math.sqrt(5.0))


class ForceSimulation:
    """Owns the node/edge arena and relaxes node positions one tick at a time.

    Math notes:
    - Repulsion is inverse-square, F = k / d^2, doubled when either node is a
      cluster, and skipped beyond the cutoff (axis check first, then d^2).
    - Collision resolution moves positions directly by
      strength * overlap, split between the two nodes, where
      overlap = r_a + r_b + padding - d.
    - Springs are linear, F = (d - rest) * c, with the rest length stretched
      x1.5 when either endpoint is a cluster.
    - Integration: v -= x * centering (x1.5 for clusters), v *= damping, x += v.
    Distances below min_distance are floored; coincident nodes get a
    deterministic separation direction derived from their arena indices.

    The dragged node is never moved or accelerated here and its velocity is
    forced to zero every tick. It still pushes and pulls other nodes.
    """

    def __init__(self, config: GraphViewConfig, nodes: list[Node] | None = None, edges: list[Edge] | None = None) -> None:
        self.config = config
        self.nodes: list[Node] = []
        self.edges: list[Edge] = []
        self.ticks = 0
        self._index: dict[str, int] = {}
        self.replace(nodes or [], edges or [])

    @property
    def running(self) -> bool:
        return bool(self.nodes)

    def replace(self, nodes: list[Node], edges: list[Edge]) -> None:
        self.nodes = nodes
        self.edges = edges
        self.ticks = 0
        self._reindex()

    def _reindex(self) -> None:
        self._index = {node.id: idx for idx, node in enumerate(self.nodes)}

    def node(self, node_id: str | None) -> Node | None:
        if node_id is None:
            return None
        idx = self._index.get(node_id)
        if idx is None or idx >= len(self.nodes) or self.nodes[idx].id != node_id:
            return None
        return self.nodes[idx]

    def _separate(self, dx: float, dy: float, dist_sq: float, i: int, j: int) -> tuple[float, float, float]:
        floor = self.config.min_distance
        if dist_sq >= floor * floor:
            return dx, dy, dist_sq
        if dist_sq == 0.0:
            angle = GOLDEN_ANGLE * (i * 31 + j + 1)
            return math.cos(angle) * floor, math.sin(angle) * floor, floor * floor
        scale = floor / math.sqrt(dist_sq)
        return dx * scale, dy * scale, floor * floor

    def tick(self, dragged_id: str | None = None) -> None:
        if not self.nodes:
            return
        self._reindex()
        self._apply_repulsion(dragged_id)
        self._resolve_collisions(dragged_id)
        self._apply_springs(dragged_id)
        self._integrate(dragged_id)
        self.ticks += 1

    def _apply_repulsion(self, dragged_id: str | None) -> None:
        cutoff = self.config.repulsion_cutoff
        cutoff_sq = cutoff * cutoff
        nodes = self.nodes
        count = len(nodes)

        for i in range(count):
            a = nodes[i]
            for j in range(i + 1, count):
                b = nodes[j]
                dx = b.x - a.x
                dy = b.y - a.y
                if abs(dx) > cutoff or abs(dy) > cutoff:
                    continue
                dist_sq = dx * dx + dy * dy
                if dist_sq > cutoff_sq:
                    continue

                dx, dy, dist_sq = self._separate(dx, dy, dist_sq, i, j)
                dist = math.sqrt(dist_sq)
                strength = self.config.repulsion * (2.0 if a.is_cluster or b.is_cluster else 1.0)
                force = strength / dist_sq
                fx = dx / dist * force
                fy = dy / dist * force

                if a.id != dragged_id:
                    a.vx -= fx
                    a.vy -= fy
                if b.id != dragged_id:
                    b.vx += fx
                    b.vy += fy

    def _resolve_collisions(self, dragged_id: str | None) -> None:
        padding = self.config.collision_padding
        share = self.config.collision_strength / 2.0
        nodes = self.nodes
        count = len(nodes)

        for i in range(count):
            a = nodes[i]
            for j in range(i + 1, count):
                b = nodes[j]
                min_sep = a.radius + b.radius + padding
                dx = b.x - a.x
                dy = b.y - a.y
                if abs(dx) >= min_sep or abs(dy) >= min_sep:
                    continue
                dist_sq = dx * dx + dy * dy
                if dist_sq >= min_sep * min_sep:
                    continue

                dx, dy, dist_sq = self._separate(dx, dy, dist_sq, i, j)
                dist = math.sqrt(dist_sq)
                push = (min_sep - dist) * share
                ux = dx / dist
                uy = dy / dist

                if a.id != dragged_id:
                    a.x -= ux * push
                    a.y -= uy * push
                if b.id != dragged_id:
                    b.x += ux * push
                    b.y += uy * push

    def _apply_springs(self, dragged_id: str | None) -> None:
        floor = self.config.min_distance
        for edge in self.edges:
            source = self.node(edge.source_id)
            target = self.node(edge.target_id)
            # Dangling endpoints happen for a frame while the arena is swapped.
            if source is None or target is None or source is target:
                continue

            dx = target.x - source.x
            dy = target.y - source.y
            dist = max(math.sqrt(dx * dx + dy * dy), floor)
            rest = self.config.spring_length * (1.5 if source.is_cluster or target.is_cluster else 1.0)
            force = (dist - rest) * self.config.spring_strength
            fx = dx / dist * force
            fy = dy / dist * force

            if source.id != dragged_id:
                source.vx += fx
                source.vy += fy
            if target.id != dragged_id:
                target.vx -= fx
                target.vy -= fy

    def _integrate(self, dragged_id: str | None) -> None:
        damping = self.config.damping
        for node in self.nodes:
            if node.id == dragged_id:
                node.vx = 0.0
                node.vy = 0.0
                continue
            centering = self.config.centering * (1.5 if node.is_cluster else 1.0)
            node.vx -= node.x * centering
            node.vy -= node.y * centering
            node.vx *= damping
            node.vy *= damping
            node.x += node.vx
            node.y += node.vy
