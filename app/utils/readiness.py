# app/utils/readiness.py
from __future__ import annotations

import time
from typing import Any, Dict, Optional

# refresh is stale if age > STALL_MULTIPLIER * interval_s
STALL_MULTIPLIER_DEFAULT = 2.5


def _coerce_float(value: Any, default: float = 0.0) -> float:
    try:
        if value is None:
            return default
        return float(value)
    except (TypeError, ValueError):
        return default


def annotate_refresh_status(
    status: Dict[str, Any],
    now_ts: float | None = None,
    stall_multiplier: float = STALL_MULTIPLIER_DEFAULT,
) -> Dict[str, Any]:
    """
    Adds stall detection to a RefreshController.info() payload (in place).

    Reference timestamp: last_success_ts, else started_at_ts. The refresh is
    stalled when now - reference > stall_multiplier * interval_s.

    Added keys: age_s, allowed_age_s, ref_ts_key, stalled, stalled_by_s,
    never_succeeded, ready.
    """
    now = float(now_ts) if now_ts is not None else time.time()
    interval_s = _coerce_float(status.get("interval_s"))
    allowed_age_s = interval_s * stall_multiplier if interval_s > 0 else None

    ref_ts: Optional[float] = None
    ref_key: Optional[str] = None
    if status.get("last_success_ts") is not None:
        ref_ts, ref_key = _coerce_float(status["last_success_ts"]), "last_success_ts"
    elif status.get("started_at_ts") is not None:
        ref_ts, ref_key = _coerce_float(status["started_at_ts"]), "started_at_ts"

    age_s = max(0.0, now - ref_ts) if ref_ts is not None else None

    stalled = False
    stalled_by_s = 0.0
    if allowed_age_s is not None and age_s is not None and age_s > allowed_age_s:
        stalled = True
        stalled_by_s = age_s - allowed_age_s

    status["age_s"] = age_s
    status["allowed_age_s"] = allowed_age_s
    status["ref_ts_key"] = ref_key
    status["stalled"] = stalled
    status["stalled_by_s"] = stalled_by_s
    status["never_succeeded"] = status.get("last_success_ts") is None
    status["ready"] = bool(status.get("running")) and not stalled
    return status
