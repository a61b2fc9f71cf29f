# app/config/board.py
from __future__ import annotations

from typing import Dict, FrozenSet, Union

# Known stablecoin ids (CoinGecko), excluded from the primary rows.
STABLECOIN_IDS: FrozenSet[str] = frozenset(
    {
        "tether",
        "usd-coin",
        "binance-usd",
        "dai",
        "trueusd",
    }
)

# Always appended when the upstream page contains it.
DESIGNATED_COIN_ID = "dogecoin"

MAX_PRIMARY_ENTRIES = 4

PAGE_SIZE = 15

REFRESH_INTERVAL_SECONDS = 180

MARKET_QUERY: Dict[str, Union[str, int]] = {
    "vs_currency": "usd",
    "order": "market_cap_desc",
    "per_page": PAGE_SIZE,
    "page": 1,
    "sparkline": "false",
    "price_change_percentage": "24h",
}
