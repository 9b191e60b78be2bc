from __future__ import annotations

import logging

from fastapi import FastAPI, HTTPException, Query

from diary_entries.sources import InMemoryEntrySource, JsonFileEntrySource
from diary_entries.wire_models import DiaryEntryValue, FilterStateValue

from .config import load_config
from .controller import GraphViewController
from .session import GraphViewSession
from .wire_models import (
    ClusterModeValue,
    DetailedValue,
    GraphViewValue,
    LoadEntriesValue,
    NavigationRequestValue,
    NodeValue,
    PointerValue,
    ViewportSizeValue,
)
from .worker import FrameLoopWorker

logger = logging.getLogger("graph-view-api")

cfg = load_config()
app = FastAPI(title="Graph View Service")
source = JsonFileEntrySource(cfg.entries_path) if cfg.entries_path else InMemoryEntrySource()
session = GraphViewSession(GraphViewController(cfg), source=source)
worker = FrameLoopWorker(session, interval_ms=cfg.frame_interval_ms)


@app.on_event("startup")
async def startup() -> None:
    if cfg.frame_loop_enabled:
        await worker.start()


@app.on_event("shutdown")
async def shutdown() -> None:
    await worker.stop()


async def _snapshot() -> GraphViewValue:
    return await session.apply(GraphViewValue.from_controller)


@app.get("/health")
def health_check() -> dict:
    return {"status": "ok"}


@app.get("/graph/current", response_model=GraphViewValue)
async def get_graph_current() -> GraphViewValue:
    return await _snapshot()


@app.get("/graph/entries", response_model=list[DiaryEntryValue])
async def get_graph_entries() -> list[DiaryEntryValue]:
    entries = await session.apply(lambda ctl: list(ctl.filtered))
    return [DiaryEntryValue.from_domain(entry) for entry in entries]


@app.get("/graph/options")
async def get_graph_options() -> dict[str, list[str]]:
    return await session.apply(lambda ctl: ctl.options())


@app.post("/graph/entries", response_model=GraphViewValue)
async def post_graph_entries(payload: LoadEntriesValue) -> GraphViewValue:
    if payload.entries is not None:
        entries = [item.to_domain() for item in payload.entries]
        await session.apply(lambda ctl: ctl.load_entries(entries))
    elif payload.user_id:
        await session.load(payload.user_id)
    else:
        raise HTTPException(status_code=422, detail="either entries or userId is required")
    return await _snapshot()


@app.put("/graph/filters", response_model=GraphViewValue)
async def put_graph_filters(payload: FilterStateValue) -> GraphViewValue:
    filters = payload.to_domain()
    await session.apply(lambda ctl: ctl.set_filters(filters))
    return await _snapshot()


@app.post("/graph/cluster-mode", response_model=GraphViewValue)
async def post_cluster_mode(payload: ClusterModeValue) -> GraphViewValue:
    try:
        await session.apply(lambda ctl: ctl.set_cluster_mode(payload.mode))
    except ValueError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    return await _snapshot()


@app.post("/graph/detailed", response_model=GraphViewValue)
async def post_detailed(payload: DetailedValue) -> GraphViewValue:
    await session.apply(lambda ctl: ctl.set_force_detailed(payload.enabled))
    return await _snapshot()


@app.post("/graph/tick")
async def post_tick(count: int = Query(1, ge=1, le=10_000)) -> dict:
    ran = await session.tick(count)
    return {"ticks": ran}


@app.post("/graph/pointer/down")
async def post_pointer_down(payload: PointerValue) -> dict:
    hit = await session.apply(lambda ctl: ctl.pointer_down(payload.x, payload.y))
    return {"hit": NodeValue.from_domain(hit).model_dump(by_alias=True) if hit is not None else None}


@app.post("/graph/pointer/move")
async def post_pointer_move(payload: PointerValue) -> dict:
    await session.apply(lambda ctl: ctl.pointer_move(payload.x, payload.y))
    return {"ok": True}


@app.post("/graph/pointer/up")
async def post_pointer_up() -> dict:
    await session.apply(lambda ctl: ctl.pointer_up())
    return {"ok": True}


@app.post("/graph/double-click", response_model=GraphViewValue)
async def post_double_click(payload: PointerValue) -> GraphViewValue:
    await session.apply(lambda ctl: ctl.double_click(payload.x, payload.y))
    return await _snapshot()


@app.post("/graph/select/{node_id}", response_model=NodeValue)
async def post_select(node_id: str) -> NodeValue:
    try:
        node = await session.apply(lambda ctl: ctl.select_node(node_id))
    except ValueError as exc:
        raise HTTPException(status_code=404, detail=f"Node '{node_id}' not found") from exc
    return NodeValue.from_domain(node)


@app.post("/graph/drill/enter/{node_id}", response_model=GraphViewValue)
async def post_drill_enter(node_id: str) -> GraphViewValue:
    entered = await session.apply(lambda ctl: ctl.enter_cluster(node_id))
    if not entered:
        raise HTTPException(status_code=404, detail=f"Cluster '{node_id}' not found")
    return await _snapshot()


@app.post("/graph/drill/back", response_model=GraphViewValue)
async def post_drill_back() -> GraphViewValue:
    await session.apply(lambda ctl: ctl.back())
    return await _snapshot()


@app.post("/graph/reset", response_model=GraphViewValue)
async def post_reset() -> GraphViewValue:
    await session.apply(lambda ctl: ctl.reset())
    return await _snapshot()


@app.post("/graph/zoom/in", response_model=GraphViewValue)
async def post_zoom_in() -> GraphViewValue:
    await session.apply(lambda ctl: ctl.zoom_in())
    return await _snapshot()


@app.post("/graph/zoom/out", response_model=GraphViewValue)
async def post_zoom_out() -> GraphViewValue:
    await session.apply(lambda ctl: ctl.zoom_out())
    return await _snapshot()


@app.post("/graph/fit", response_model=GraphViewValue)
async def post_fit() -> GraphViewValue:
    await session.apply(lambda ctl: ctl.fit_to_screen())
    return await _snapshot()


@app.post("/graph/view/reset", response_model=GraphViewValue)
async def post_view_reset() -> GraphViewValue:
    await session.apply(lambda ctl: ctl.reset_view())
    return await _snapshot()


@app.post("/graph/viewport", response_model=GraphViewValue)
async def post_viewport(payload: ViewportSizeValue) -> GraphViewValue:
    await session.apply(lambda ctl: ctl.resize(payload.width, payload.height))
    return await _snapshot()


@app.post("/graph/history", response_model=NavigationRequestValue)
async def post_history() -> NavigationRequestValue:
    request = await session.apply(lambda ctl: ctl.open_history())
    value = NavigationRequestValue.from_domain(request)
    logger.info("history navigation requested entry=%s", value.entry_id)
    return value
