from __future__ import annotations

import logging
import os

import uvicorn


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    uvicorn.run(
        "graph_view.api:app",
        host=os.getenv("GRAPH_VIEW_HOST", "0.0.0.0"),
        port=int(os.getenv("GRAPH_VIEW_PORT", "8090")),
        log_config=None,
    )


if __name__ == "__main__":
    main()
