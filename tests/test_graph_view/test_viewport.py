from __future__ import annotations

import math

from graph_view.config import GraphViewConfig
from graph_view.models import Node, NodeKind
from graph_view.simulation import ForceSimulation
from graph_view.viewport import InteractionController, Viewport


def make_node(node_id: str, x: float, y: float, radius: float = 12.0) -> Node:
    return Node(id=node_id, kind=NodeKind.ENTRY, x=x, y=y, radius=radius, color="#94a3b8", label=node_id)


def make_viewport() -> Viewport:
    viewport = Viewport(width=800.0, height=600.0)
    viewport.center()
    return viewport


def test_screen_world_round_trip() -> None:
    viewport = make_viewport()
    viewport.zoom = 2.0

    assert viewport.world_to_screen(0.0, 0.0) == (400.0, 300.0)
    assert viewport.screen_to_world(420.0, 280.0) == (10.0, -10.0)
    sx, sy = viewport.world_to_screen(-37.5, 12.25)
    assert viewport.screen_to_world(sx, sy) == (-37.5, 12.25)


def test_zoom_buttons_are_clamped() -> None:
    viewport = make_viewport()
    for _ in range(20):
        viewport.zoom_in()
    assert viewport.zoom == 3.0

    for _ in range(40):
        viewport.zoom_out()
    assert viewport.zoom == 0.2

    viewport.center()
    viewport.zoom_in()
    assert math.isclose(viewport.zoom, 1.2)


def test_fit_frames_nodes_with_padding() -> None:
    viewport = make_viewport()
    viewport.fit([make_node("a", -1000.0, -10.0), make_node("b", 1000.0, 10.0)], padding=50.0)

    assert math.isclose(viewport.zoom, 700.0 / 2000.0)
    assert math.isclose(viewport.offset_x, 400.0)
    assert math.isclose(viewport.offset_y, 300.0)


def test_fit_clamps_zoom() -> None:
    viewport = make_viewport()
    viewport.fit([make_node("a", 0.0, 0.0), make_node("b", 10.0, 5.0)], padding=50.0)
    assert viewport.zoom == 3.0
    assert math.isclose(viewport.offset_x, 400.0 - 5.0 * 3.0)
    assert math.isclose(viewport.offset_y, 300.0 - 2.5 * 3.0)

    viewport.fit([make_node("a", -50_000.0, 0.0), make_node("b", 50_000.0, 0.0)], padding=50.0)
    assert viewport.zoom == 0.1


def test_fit_single_node_and_empty_set() -> None:
    viewport = make_viewport()
    viewport.fit([make_node("a", 100.0, -40.0)], padding=50.0)
    assert viewport.zoom == 3.0
    assert viewport.world_to_screen(100.0, -40.0) == (400.0, 300.0)

    viewport.fit([], padding=50.0)
    assert (viewport.zoom, viewport.offset_x, viewport.offset_y) == (1.0, 400.0, 300.0)


def test_hit_test_uses_slop_and_topmost_node() -> None:
    controller = InteractionController(make_viewport())
    bottom = make_node("bottom", 0.0, 0.0)
    top = make_node("top", 0.0, 0.0)

    assert controller.hit_test([bottom, top], 400.0, 300.0) is top
    assert controller.hit_test([bottom], 416.0, 300.0) is bottom
    assert controller.hit_test([bottom], 418.0, 300.0) is None


def test_pointer_down_on_empty_canvas_pans() -> None:
    viewport = make_viewport()
    controller = InteractionController(viewport)
    sim = ForceSimulation(GraphViewConfig(), [make_node("a", 0.0, 0.0)], [])

    assert controller.pointer_down(sim, 10.0, 10.0) is None
    assert controller.panning
    controller.pointer_move(sim, 30.0, 40.0)
    assert (viewport.offset_x, viewport.offset_y) == (420.0, 330.0)

    controller.release(sim)
    assert not controller.panning
    controller.pointer_move(sim, 100.0, 100.0)
    assert (viewport.offset_x, viewport.offset_y) == (420.0, 330.0)


def test_drag_keeps_grab_offset_and_does_not_pan() -> None:
    viewport = make_viewport()
    controller = InteractionController(viewport)
    node = make_node("a", 0.0, 0.0)
    node.vx, node.vy = 4.0, -2.0
    sim = ForceSimulation(GraphViewConfig(), [node], [])

    assert controller.pointer_down(sim, 402.0, 301.0) is node
    assert controller.dragged_id == "a"
    assert not controller.panning
    assert (node.vx, node.vy) == (0.0, 0.0)

    controller.pointer_move(sim, 500.0, 350.0)
    assert (node.x, node.y) == (98.0, 49.0)
    assert (viewport.offset_x, viewport.offset_y) == (400.0, 300.0)

    controller.release(sim)
    assert controller.dragged_id is None


def test_zoom_out_never_zooms_in_below_button_floor() -> None:
    viewport = make_viewport()
    viewport.zoom = 0.15

    viewport.zoom_out()
    assert viewport.zoom == 0.15

    viewport.zoom_in()
    assert viewport.zoom == 0.2
    viewport.zoom_out()
    assert viewport.zoom == 0.2
