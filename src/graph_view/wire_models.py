from __future__ import annotations

from typing import Any

from pydantic import Field

from diary_entries.models import DiaryEntry
from diary_entries.wire_models import DiaryEntryValue, FilterStateValue, WireModel

from . import models
from .builder import entity_glyph
from .controller import GraphViewController, NavigationRequest
from .viewport import Viewport


def _entry_payload(entry: DiaryEntry) -> dict[str, Any]:
    return {
        "entry_id": entry.id,
        "timestamp": entry.timestamp,
        "mood": entry.mood,
        "summary": entry.summary,
        "tags": list(entry.manual_tags),
    }


class NodeValue(WireModel):
    id: str
    kind: models.NodeKind
    x: float
    y: float
    radius: float
    color: str
    label: str
    entity_type: str | None = None
    glyph: str | None = None
    count: int | None = None
    payload: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_domain(cls, node: models.Node) -> "NodeValue":
        glyph = entity_glyph(node.entity_type) if node.kind is models.NodeKind.ENTITY else None
        count = None
        payload: dict[str, Any] = {}
        if isinstance(node.payload, models.ClusterPayload):
            count = node.payload.count
            payload = {"key": node.payload.key, "entry_ids": [entry.id for entry in node.payload.entries]}
        elif isinstance(node.payload, DiaryEntry):
            payload = _entry_payload(node.payload)
        return cls(
            id=node.id,
            kind=node.kind,
            x=node.x,
            y=node.y,
            radius=node.radius,
            color=node.color,
            label=node.label,
            entity_type=node.entity_type,
            glyph=glyph,
            count=count,
            payload=payload,
        )


class EdgeValue(WireModel):
    source: str
    target: str
    dashed: bool = False

    @classmethod
    def from_domain(cls, edge: models.Edge, dashed: bool = False) -> "EdgeValue":
        return cls(source=edge.source_id, target=edge.target_id, dashed=dashed)


class DrillStepValue(WireModel):
    mode: models.Dimension
    value: str
    label: str

    @classmethod
    def from_domain(cls, step: models.DrillStep) -> "DrillStepValue":
        return cls(mode=step.mode, value=step.value, label=step.label)


class ViewportValue(WireModel):
    width: float
    height: float
    zoom: float
    offset_x: float
    offset_y: float

    @classmethod
    def from_domain(cls, viewport: Viewport) -> "ViewportValue":
        return cls(
            width=viewport.width,
            height=viewport.height,
            zoom=viewport.zoom,
            offset_x=viewport.offset_x,
            offset_y=viewport.offset_y,
        )


class GraphViewValue(WireModel):
    generation: int
    ticks: int
    cluster_mode: models.Dimension
    effective_mode: models.Dimension
    clustered: bool
    force_detailed: bool
    summary: str
    node_count: int
    edge_count: int
    entry_count: int
    nodes: list[NodeValue]
    edges: list[EdgeValue]
    selected: NodeValue | None = None
    drill_path: list[DrillStepValue] = Field(default_factory=list)
    viewport: ViewportValue
    filters: FilterStateValue

    @classmethod
    def from_controller(cls, controller: GraphViewController) -> "GraphViewValue":
        selected = controller.selected_node
        return cls(
            generation=controller.generation,
            ticks=controller.simulation.ticks,
            cluster_mode=controller.cluster_mode,
            effective_mode=controller.effective_mode,
            clustered=controller.clustered,
            force_detailed=controller.force_detailed,
            summary=controller.summary(),
            node_count=len(controller.nodes),
            edge_count=len(controller.edges),
            entry_count=len(controller.filtered),
            nodes=[NodeValue.from_domain(node) for node in controller.nodes],
            edges=[EdgeValue.from_domain(edge, dashed=controller.clustered) for edge in controller.edges],
            selected=NodeValue.from_domain(selected) if selected is not None else None,
            drill_path=[DrillStepValue.from_domain(step) for step in controller.drill_path],
            viewport=ViewportValue.from_domain(controller.viewport),
            filters=FilterStateValue.from_domain(controller.filters),
        )


class PointerValue(WireModel):
    x: float
    y: float


class ViewportSizeValue(WireModel):
    width: float = Field(gt=0)
    height: float = Field(gt=0)


class ClusterModeValue(WireModel):
    mode: models.Dimension


class DetailedValue(WireModel):
    enabled: bool


class LoadEntriesValue(WireModel):
    user_id: str | None = None
    entries: list[DiaryEntryValue] | None = None


class NavigationRequestValue(WireModel):
    filters: FilterStateValue
    entry_id: str | None = None

    @classmethod
    def from_domain(cls, request: NavigationRequest) -> "NavigationRequestValue":
        return cls(filters=FilterStateValue.from_domain(request.filters), entry_id=request.entry_id)
