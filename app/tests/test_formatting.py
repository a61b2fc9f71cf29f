from __future__ import annotations

from datetime import datetime

import pytest

from app.schemas.market import MarketRecord
from app.services.board import build_board, to_board_row
from app.services.formatting import change_direction, format_change, format_market_cap, format_price
from app.utils.time import local_time_of_day


@pytest.mark.parametrize(
    "value,expected",
    [
        (67234.5, "$67,234.5"),
        (1234567.0, "$1,234,567"),
        (1.0, "$1"),
        (0.07312, "$0.073"),
        (0.0, "$0"),
        (2999.999, "$2,999.999"),
    ],
)
def test_format_price(value, expected):
    assert format_price(value) == expected


def test_format_market_cap_in_billions():
    assert format_market_cap(1_325_420_000_000) == "$1325.42B"
    assert format_market_cap(9_870_000_000) == "$9.87B"
    assert format_market_cap(0) == "$0.00B"


@pytest.mark.parametrize(
    "change,text,direction",
    [
        (2.345678, "+2.35%", "up"),
        (0.0, "+0.00%", "up"),
        (-1.0712, "-1.07%", "down"),
        (None, "n/a", None),
    ],
)
def test_format_change(change, text, direction):
    assert format_change(change) == text
    assert change_direction(change) == direction


def test_board_row_uppercases_symbol():
    record = MarketRecord(
        id="dogecoin",
        symbol="doge",
        name="Dogecoin",
        image="https://assets.example/doge.png",
        current_price=0.1234,
        market_cap=17_900_000_000,
        price_change_percentage_24h=-3.5,
    )
    row = to_board_row(record)
    assert row.symbol == "DOGE"
    assert row.price == "$0.123"
    assert row.market_cap == "$17.90B"
    assert row.change_24h == "-3.50%"
    assert row.direction == "down"

    board = build_board([record, record], "3:04:05 PM")
    assert board.last_updated == "3:04:05 PM"
    assert [r.id for r in board.rows] == ["dogecoin", "dogecoin"]


def test_local_time_of_day_twelve_hour_clock():
    assert local_time_of_day(datetime(2024, 5, 1, 15, 4, 5)) == "3:04:05 PM"
    assert local_time_of_day(datetime(2024, 5, 1, 0, 0, 9)) == "12:00:09 AM"
    assert local_time_of_day(datetime(2024, 5, 1, 12, 30, 0)) == "12:30:00 PM"
