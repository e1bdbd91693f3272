"""Canonical price entry built from one upstream key/value pair."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable

from .classify import PRICE_PREFIX
from .parsing import to_number, to_text

# Upstream quirks: several keys describe variants of the same currency.
SPECIAL_CODE_MAP: dict[str, str] = {
    "dollar_rl": "usd",
    "dollar_ex": "usd_official",
    "dollar_sm": "usd_sm",
    "eur_ex": "eur_official",
}

LABELS: dict[str, str] = {
    "usd": "دلار",
    "eur": "یورو",
    "gbp": "پوند",
    "aed": "درهم",
    "try": "لیر",
    "cad": "دلار کانادا",
    "sar": "ریال عربستان",
    "qar": "ریال قطر",
    "kwd": "دینار کویت",
    "bhd": "دینار بحرین",
    "iqd": "دینار عراق",
    "cny": "یوان چین",
    "jpy": "ین ژاپن",
    "chf": "فرانک سوئیس",
    "rub": "روبل روسیه",
    "usd_official": "دلار رسمی",
}

PRICE_FIELDS = ("current", "price")
CHANGE_FIELDS = ("diff", "change", "d")
LOW_FIELDS = ("tolerance_low", "low", "l")
HIGH_FIELDS = ("tolerance_high", "high", "h")
LABEL_FIELDS = ("label", "title", "name")
TS_FIELDS = ("dt", "ts", "date", "time", "last")

DEFAULT_PRICE = 0
DEFAULT_CHANGE = "0"


def _utcnow_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass(frozen=True, slots=True)
class NormalizedEntry:
    """One priced instrument in the shape served to callers."""

    code: str
    label: str
    price: int | float
    change: str
    low: int | float | None
    high: int | float | None
    ts: str
    source: str
    raw_key: str


def code_for_key(key: str) -> str:
    """Derive the public code: lower-case, drop ``price_``, apply aliases."""
    code = key.strip().lower()
    if code.startswith(PRICE_PREFIX):
        code = code[len(PRICE_PREFIX) :]
    return SPECIAL_CODE_MAP.get(code, code)


def is_aliased_key(key: str) -> bool:
    code = key.strip().lower()
    if code.startswith(PRICE_PREFIX):
        code = code[len(PRICE_PREFIX) :]
    return code in SPECIAL_CODE_MAP


def _first_number(item: Mapping[str, Any], fields: tuple[str, ...]) -> int | float | None:
    for field in fields:
        number = to_number(item.get(field))
        if number is not None:
            return number
    return None


def _first_text(item: Mapping[str, Any], fields: tuple[str, ...]) -> str:
    for field in fields:
        text = to_text(item.get(field))
        if text:
            return text
    return ""


def _resolve_change(item: Mapping[str, Any]) -> str:
    for field in CHANGE_FIELDS:
        value = item.get(field)
        if value is not None and not isinstance(value, (dict, list)):
            return str(value)
    return DEFAULT_CHANGE


def normalize_entry(
    key: str,
    raw: Any,
    *,
    source: str,
    now_fn: Callable[[], str] = _utcnow_iso,
) -> NormalizedEntry:
    """Build a NormalizedEntry from ``raw``; missing data falls back to defaults.

    ``raw`` is either a scalar price or a mapping with any subset of the
    price, change, bound, label and timestamp fields.
    """
    code = code_for_key(key)
    item: Mapping[str, Any] = raw if isinstance(raw, Mapping) else {}

    price = _first_number(item, PRICE_FIELDS)
    if price is None:
        price = to_number(raw)
    if price is None:
        price = DEFAULT_PRICE

    low = _first_number(item, LOW_FIELDS)
    high = _first_number(item, HIGH_FIELDS)
    if low is not None and high is not None and low > high:
        low, high = high, low

    label = LABELS.get(code) or _first_text(item, LABEL_FIELDS) or code
    ts = _first_text(item, TS_FIELDS) or now_fn()

    return NormalizedEntry(
        code=code,
        label=label,
        price=price,
        change=_resolve_change(item),
        low=low,
        high=high,
        ts=ts,
        source=source,
        raw_key=key,
    )
