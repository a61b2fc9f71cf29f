"""Selection rule turning a raw market page into the display list."""

from __future__ import annotations

from typing import Any, List, Sequence, TypeVar

from app.config.board import DESIGNATED_COIN_ID, MAX_PRIMARY_ENTRIES, STABLECOIN_IDS

R = TypeVar("R")


def _record_id(record: Any) -> Any:
    if isinstance(record, dict):
        return record.get("id")
    return getattr(record, "id", None)


def select_display_list(records: Sequence[R]) -> List[R]:
    """
    Drop stablecoins, keep the first MAX_PRIMARY_ENTRIES survivors in input
    order, then append the designated coin if the unfiltered input has it.

    The append does not deduplicate: when the designated coin is already one
    of the kept entries it appears twice.
    """
    selected = [r for r in records if _record_id(r) not in STABLECOIN_IDS][:MAX_PRIMARY_ENTRIES]

    designated = next((r for r in records if _record_id(r) == DESIGNATED_COIN_ID), None)
    if designated is not None:
        selected.append(designated)

    return selected
