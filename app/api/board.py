from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, HTTPException, Request

from app.jobs.refresh import RefreshController
from app.schemas.market import BoardResponse
from app.services.board import build_board

router = APIRouter(prefix="/board", tags=["board"])


def get_controller(request: Request) -> RefreshController:
    controller = getattr(request.app.state, "refresh", None)
    if controller is None:
        raise HTTPException(status_code=503, detail="Board refresh is not running")
    return controller


@router.get("", response_model=BoardResponse)
async def get_board(request: Request) -> BoardResponse:
    """
    Current display list, formatted for rendering.
    Empty rows and last_updated="" until the first successful fetch.
    """
    state = get_controller(request).state
    return build_board(state.display_list, state.last_updated)


@router.get("/status")
async def get_board_status(request: Request) -> Dict[str, Any]:
    return get_controller(request).info()
