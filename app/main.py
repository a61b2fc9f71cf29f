# app/main.py
from __future__ import annotations

import logging

from fastapi import FastAPI

from app.api.board import router as board_router
from app.api.health import router as health_router
from app.config.settings import get_settings
from app.jobs.refresh import RefreshController

logger = logging.getLogger("crypto_board")

app = FastAPI(title="Crypto Price Board")

# Routers
app.include_router(health_router)
app.include_router(board_router)

app.state.refresh = None

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s | %(message)s"


def configure_logging(level: str) -> None:
    """Route crypto_board.* records to stderr at `level` (handler added once)."""
    logger.setLevel(level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)


@app.get("/")
def root() -> dict[str, str]:
    return {"message": "Crypto prices, refreshed every 3 minutes"}


@app.on_event("startup")
async def on_startup() -> None:
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)

    if not settings.REFRESH_ENABLED:
        logger.info("board refresh disabled (REFRESH_ENABLED=false)")
        app.state.refresh = None
        return

    controller = RefreshController()
    controller.start()
    app.state.refresh = controller


@app.on_event("shutdown")
async def on_shutdown() -> None:
    controller = app.state.refresh
    app.state.refresh = None
    if controller is not None:
        await controller.stop()
