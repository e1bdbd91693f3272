"""Key classification rules for upstream price entries.

Upstream keys are an uncontrolled vocabulary, so classification is a list
of ``(predicate, group)`` rules evaluated first-match-wins. Gold runs before
crypto before fiat; reordering ``RULES`` changes results.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Callable

PRICE_PREFIX = "price_"
IRR_SUFFIXES = ("-irr", "_irr")

GOLD_KEYWORDS = frozenset(
    {
        "gold",
        "silver",
        "xau",
        "sekke",
        "sekee",
        "sekeb",
        "rob",
        "nim",
        "gerami",
        "emami",
        "bahar",
        "mesghal",
        "ons",
        "coin",
        "tala",
        "sime",
        "abshode",
        "tgju_gold",
    }
)

CRYPTO_TICKERS = frozenset(
    {
        "btc",
        "eth",
        "usdt",
        "tether",
        "xrp",
        "trx",
        "ltc",
        "bch",
        "bnb",
        "ada",
        "doge",
        "dot",
        "sol",
        "matic",
        "shib",
        "avax",
        "atom",
        "link",
        "xlm",
        "eos",
        "etc",
        "omg",
        "xaut",
        "ton",
    }
)

# Remainders after ``price_`` that are fiat even though they are not ISO codes.
FIAT_ALIASES = frozenset({"dollar_rl", "dollar_ex", "dollar_sm", "eur_ex"})

_SEGMENT_SEPARATORS = re.compile(r"[-_.\s]+")
_ISO_CODE = re.compile(r"[a-z]{3}")


class Group(str, Enum):
    FIAT = "fiat"
    CRYPTO = "crypto"
    GOLD = "gold"


def _segments(key: str) -> list[str]:
    return [part for part in _SEGMENT_SEPARATORS.split(key) if part]


def looks_gold(key: str) -> bool:
    return any(word in key for word in GOLD_KEYWORDS)


def looks_crypto(key: str) -> bool:
    """Match IRR pairs, ``price_<ticker>`` and delimited ticker segments."""
    for suffix in IRR_SUFFIXES:
        if key.endswith(suffix):
            stem = _segments(key[: -len(suffix)])
            if stem and stem[-1] in CRYPTO_TICKERS:
                return True
    if key.startswith(PRICE_PREFIX) and key[len(PRICE_PREFIX) :] in CRYPTO_TICKERS:
        return True
    return any(part in CRYPTO_TICKERS for part in _segments(key))


def looks_fiat(key: str) -> bool:
    if not key.startswith(PRICE_PREFIX):
        return False
    remainder = key[len(PRICE_PREFIX) :]
    return remainder in FIAT_ALIASES or bool(_ISO_CODE.fullmatch(remainder))


RULES: tuple[tuple[Callable[[str], bool], Group], ...] = (
    (looks_gold, Group.GOLD),
    (looks_crypto, Group.CRYPTO),
    (looks_fiat, Group.FIAT),
)


def classify_key(key: str) -> Group | None:
    """Return the group for a lower-cased upstream key, or None to ignore it."""
    for predicate, group in RULES:
        if predicate(key):
            return group
    return None
