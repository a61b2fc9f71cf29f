from __future__ import annotations

from typing import Iterable

from app.schemas.market import BoardResponse, BoardRow, MarketRecord
from app.services.formatting import change_direction, format_change, format_market_cap, format_price


def to_board_row(record: MarketRecord) -> BoardRow:
    change = record.price_change_percentage_24h
    return BoardRow(
        id=record.id,
        name=record.name,
        symbol=record.symbol.upper(),
        image=record.image,
        price=format_price(record.current_price),
        market_cap=format_market_cap(record.market_cap),
        change_24h=format_change(change),
        direction=change_direction(change),
    )


def build_board(records: Iterable[MarketRecord], last_updated: str) -> BoardResponse:
    return BoardResponse(
        last_updated=last_updated,
        rows=[to_board_row(r) for r in records],
    )
