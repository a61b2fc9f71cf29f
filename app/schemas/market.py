"""Pydantic models for market records and the rendered board."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class MarketRecord(BaseModel):
    """Subset of the CoinGecko /coins/markets payload used by the board."""

    id: str
    symbol: str
    name: str
    image: str
    current_price: float = Field(..., ge=0)
    market_cap: float = Field(..., ge=0)
    price_change_percentage_24h: Optional[float] = None


class BoardRow(BaseModel):
    """One display-ready row; every value is already formatted."""

    id: str
    name: str
    symbol: str
    image: str
    price: str
    market_cap: str
    change_24h: str
    direction: Optional[str] = None


class BoardResponse(BaseModel):
    last_updated: str
    rows: list[BoardRow]
