# app/api/health.py
from __future__ import annotations

import time
from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter, Request, Response

from app.utils.readiness import annotate_refresh_status

router = APIRouter(tags=["health"])

APP_STARTED_AT = time.time()


def _now_meta() -> Dict[str, Any]:
    now_ts = time.time()
    now_dt = datetime.fromtimestamp(now_ts, tz=timezone.utc)
    return {
        "now_ts": now_ts,
        "now_iso": now_dt.isoformat().replace("+00:00", "Z"),
        "uptime_s": int(now_ts - APP_STARTED_AT),
    }


@router.get("/health")
async def health() -> Dict[str, Any]:
    return {"ok": True, **_now_meta()}


@router.get("/ready")
async def ready(request: Request, response: Response) -> Dict[str, Any]:
    meta = _now_meta()
    controller = getattr(request.app.state, "refresh", None)

    if controller is None:
        response.status_code = 503
        return {"ok": False, "refresh": None, "error": "refresh controller not attached", **meta}

    refresh = annotate_refresh_status(controller.info(), now_ts=meta["now_ts"])
    ok = bool(refresh["ready"])
    if not ok:
        response.status_code = 503
    return {"ok": ok, "refresh": refresh, **meta}
