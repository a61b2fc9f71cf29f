"""Helpers for interacting with the public CoinGecko API."""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import TypeAdapter, ValidationError

from app.config.board import MARKET_QUERY
from app.config.settings import get_settings
from app.schemas.market import MarketRecord

logger = logging.getLogger("crypto_board.coingecko")

_RECORDS = TypeAdapter(list[MarketRecord])


class MarketDataError(RuntimeError):
    """Raised when the market page cannot be fetched or does not parse."""


async def _get_json(client: httpx.AsyncClient, url: str, query: dict[str, Any]) -> Any:
    response = await client.get(url, params=query)
    response.raise_for_status()
    return response.json()


async def fetch_raw_market_data(client: httpx.AsyncClient | None = None) -> Any:
    """Return the decoded JSON body of one /coins/markets page."""

    settings = get_settings()
    query = dict(MARKET_QUERY)

    try:
        if client is not None:
            return await _get_json(client, settings.COINGECKO_URL, query)

        async with httpx.AsyncClient(timeout=settings.HTTP_TIMEOUT_SECONDS) as own_client:
            return await _get_json(own_client, settings.COINGECKO_URL, query)
    except httpx.HTTPError as exc:
        raise MarketDataError(f"Unable to reach CoinGecko: {exc!r}") from exc
    except ValueError as exc:
        # json.JSONDecodeError
        raise MarketDataError("CoinGecko returned a non-JSON body") from exc


def parse_market_records(payload: Any) -> list[MarketRecord]:
    try:
        return _RECORDS.validate_python(payload)
    except ValidationError as exc:
        raise MarketDataError(f"Unexpected CoinGecko payload: {exc.error_count()} error(s)") from exc


async def fetch_market_records(client: httpx.AsyncClient | None = None) -> list[MarketRecord]:
    """Fetch the first market page (top PAGE_SIZE by market cap) as validated records."""

    payload = await fetch_raw_market_data(client=client)
    records = parse_market_records(payload)
    logger.debug("fetched %d market records", len(records))
    return records
