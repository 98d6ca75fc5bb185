"""Expand sentinel tokens from samples.synthesize() into concrete values."""

from __future__ import annotations

import datetime
import math
import random
import re
from typing import Any

_WORDS = (
    "lorem ipsum dolor sit amet consectetur adipiscing elit sed do eiusmod "
    "tempor incididunt ut labore et dolore magna aliqua"
).split()

_RANGE_TOKEN = re.compile(r"^@(Number|Float)\|(-?[0-9.eE+-]+)~(-?[0-9.eE+-]+)$")

# Dates are drawn from this window
_EPOCH = datetime.datetime(2000, 1, 1, tzinfo=datetime.timezone.utc)
_SPAN_SECONDS = 30 * 365 * 24 * 3600


def expand(value: Any, rng: random.Random | None = None) -> Any:
    """Copy of value with every sentinel string replaced; others unchanged."""
    rng = rng or random.Random()
    if isinstance(value, dict):
        return {k: expand(v, rng) for k, v in value.items()}
    if isinstance(value, list):
        return [expand(v, rng) for v in value]
    if isinstance(value, str):
        return expand_token(value, rng)
    return value


def expand_token(token: str, rng: random.Random) -> Any:
    if token == "@Date":
        return _random_datetime(rng).date().isoformat()
    if token == "@DateTime":
        return _random_datetime(rng).isoformat().replace("+00:00", "Z")
    if token == "@Sentence":
        count = rng.randint(3, 8)
        return " ".join(rng.choice(_WORDS) for _ in range(count)).capitalize() + "."
    if token == "@Bool":
        return rng.random() < 0.5

    match = _RANGE_TOKEN.match(token)
    if match is None:
        return token
    kind, lo, hi = match.groups()
    if kind == "Number":
        low, high = _to_int(lo), _to_int(hi)
        if low > high:
            low, high = high, low
        return rng.randint(low, high)
    low_f, high_f = float(lo), float(hi)
    return rng.uniform(min(low_f, high_f), max(low_f, high_f))


def _to_int(text: str) -> int:
    try:
        return int(text)
    except ValueError:
        return math.ceil(float(text))


def _random_datetime(rng: random.Random) -> datetime.datetime:
    seconds = rng.randrange(_SPAN_SECONDS)
    return _EPOCH + datetime.timedelta(seconds=seconds)
