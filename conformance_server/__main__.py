"""Run the conformance server with uvicorn."""

from __future__ import annotations

import uvicorn

from conformance_server.config import load_config
from conformance_server.logging_setup import configure_logging


def serve() -> None:
    cfg = load_config()
    configure_logging(cfg.server.log_level)
    uvicorn.run(
        "conformance_server.main:create_app",
        factory=True,
        host=cfg.server.host,
        port=cfg.server.port,
        log_level=cfg.server.log_level.lower(),
    )


if __name__ == "__main__":
    serve()
