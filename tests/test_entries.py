from __future__ import annotations

import dataclasses

import pytest

from ratefeed.entries import code_for_key, normalize_entry

SOURCE = "https://example.test/feed.json"


def _now() -> str:
    return "2026-01-01T00:00:00+00:00"


def test_prefers_current_then_price_fields() -> None:
    entry = normalize_entry("price_eur", {"current": "bad", "price": "64,100"}, source=SOURCE)
    assert entry.price == 64100

    entry = normalize_entry("price_eur", {"current": "65,000", "price": "1"}, source=SOURCE)
    assert entry.price == 65000


def test_scalar_value_is_the_price() -> None:
    entry = normalize_entry("price_usd", "58,000", source=SOURCE, now_fn=_now)
    assert entry.code == "usd"
    assert entry.price == 58000
    assert entry.change == "0"
    assert entry.low is None
    assert entry.high is None
    assert entry.ts == "2026-01-01T00:00:00+00:00"
    assert entry.source == SOURCE
    assert entry.raw_key == "price_usd"


def test_missing_price_defaults_to_zero() -> None:
    entry = normalize_entry("price_gbp", {"diff": "12"}, source=SOURCE)
    assert entry.price == 0
    assert entry.change == "12"

    assert normalize_entry("price_gbp", None, source=SOURCE).price == 0


def test_inverted_bounds_are_swapped() -> None:
    entry = normalize_entry(
        "price_usd",
        {"current": "75", "tolerance_low": 100, "tolerance_high": "50"},
        source=SOURCE,
    )
    assert (entry.low, entry.high) == (50, 100)


def test_single_bound_is_kept() -> None:
    entry = normalize_entry("price_usd", {"current": 1, "h": "۹۰"}, source=SOURCE)
    assert entry.low is None
    assert entry.high == 90


def test_timestamp_uses_first_populated_alias() -> None:
    item = {"current": 1, "dt": "", "ts": "   ", "date": "1405/01/01", "last": "x"}
    entry = normalize_entry("price_usd", item, source=SOURCE, now_fn=_now)
    assert entry.ts == "1405/01/01"


def test_timestamp_defaults_to_now() -> None:
    item = {"current": 1, "ts": 1700000000}
    entry = normalize_entry("price_usd", item, source=SOURCE, now_fn=_now)
    assert entry.ts == _now()


def test_change_keeps_upstream_text() -> None:
    entry = normalize_entry("price_usd", {"current": 1, "diff": 250}, source=SOURCE)
    assert entry.change == "250"

    entry = normalize_entry("price_usd", {"current": 1, "d": "-1.2%"}, source=SOURCE)
    assert entry.change == "-1.2%"


def test_alias_codes_and_labels() -> None:
    assert code_for_key("price_dollar_rl") == "usd"
    assert code_for_key("PRICE_EUR_EX") == "eur_official"

    entry = normalize_entry("price_dollar_ex", "1", source=SOURCE)
    assert entry.code == "usd_official"
    assert entry.label == "دلار رسمی"
    assert entry.raw_key == "price_dollar_ex"


def test_label_falls_back_to_upstream_then_code() -> None:
    entry = normalize_entry("sekee", {"current": 1, "title": "Emami coin"}, source=SOURCE)
    assert entry.label == "Emami coin"

    entry = normalize_entry("btc-irr", {"current": 1}, source=SOURCE)
    assert entry.label == "btc-irr"


def test_entries_are_immutable() -> None:
    entry = normalize_entry("price_usd", "1", source=SOURCE)
    with pytest.raises(dataclasses.FrozenInstanceError):
        entry.price = 2  # type: ignore[misc]
