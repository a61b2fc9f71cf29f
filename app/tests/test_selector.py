from __future__ import annotations

import random

from app.config.board import STABLECOIN_IDS
from app.schemas.market import MarketRecord
from app.services.selector import select_display_list


def _record(coin_id: str, rank: int = 1) -> MarketRecord:
    return MarketRecord(
        id=coin_id,
        symbol=coin_id[:3],
        name=coin_id.title(),
        image=f"https://assets.example/{coin_id}.png",
        current_price=100.0 / rank,
        market_cap=1e12 / rank,
        price_change_percentage_24h=1.5,
    )


def _records(ids: list[str]) -> list[MarketRecord]:
    return [_record(coin_id, rank=i + 1) for i, coin_id in enumerate(ids)]


def _ids(records) -> list[str]:
    return [r.id for r in records]


MARKET_PAGE = [
    "bitcoin",
    "ethereum",
    "tether",
    "binancecoin",
    "solana",
    "usd-coin",
    "ripple",
    "binance-usd",
    "cardano",
    "dogecoin",
    "tron",
    "dai",
    "polkadot",
    "trueusd",
    "litecoin",
]


def test_top_four_non_stablecoins_plus_dogecoin():
    out = select_display_list(_records(MARKET_PAGE))
    assert _ids(out) == ["bitcoin", "ethereum", "binancecoin", "solana", "dogecoin"]


def test_no_dogecoin_keeps_first_four_in_order():
    page = _records(["bitcoin", "ethereum", "solana", "cardano", "ripple"])
    out = select_display_list(page)
    assert _ids(out) == ["bitcoin", "ethereum", "solana", "cardano"]
    assert out == page[:4]


def test_empty_input():
    assert select_display_list([]) == []


def test_dogecoin_appended_when_few_survivors():
    out = select_display_list(_records(["tether", "usd-coin", "ripple", "dogecoin"]))
    # dogecoin survives the filter and is appended again
    assert _ids(out) == ["ripple", "dogecoin", "dogecoin"]


def test_dogecoin_within_top_four_is_duplicated():
    out = select_display_list(_records(["bitcoin", "dogecoin", "tether", "ethereum", "solana", "cardano"]))
    assert _ids(out) == ["bitcoin", "dogecoin", "ethereum", "solana", "dogecoin"]
    assert len(out) == 5
    assert out[1] is out[4]


def test_only_stablecoins():
    assert select_display_list(_records(sorted(STABLECOIN_IDS))) == []


def test_exclusion_is_case_sensitive():
    out = select_display_list(_records(["Tether", "tether", "DAI"]))
    assert _ids(out) == ["Tether", "DAI"]


def test_accepts_plain_mappings():
    page = [{"id": "tether"}, {"id": "bitcoin"}, {"id": "dogecoin"}]
    out = select_display_list(page)
    assert out == [{"id": "bitcoin"}, {"id": "dogecoin"}, {"id": "dogecoin"}]


def test_does_not_mutate_input_and_is_repeatable():
    page = _records(MARKET_PAGE)
    before = list(page)
    first = select_display_list(page)
    second = select_display_list(page)
    assert first == second
    assert page == before


def test_properties_over_random_pages():
    rng = random.Random(1234)
    pool = sorted(STABLECOIN_IDS) + ["bitcoin", "ethereum", "solana", "ripple", "cardano", "tron", "dogecoin"]

    for _ in range(200):
        ids = [rng.choice(pool) for _ in range(rng.randint(0, 15))]
        out = select_display_list(_records(ids))

        assert len(out) <= 5
        assert not any(r.id in STABLECOIN_IDS for r in out[:4])
        if "dogecoin" in ids:
            assert out[-1].id == "dogecoin"
        else:
            assert "dogecoin" not in _ids(out)
