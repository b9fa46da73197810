"""
spof_atlas/graph/noise.py — Deterministic pseudo-randomness and small numeric helpers.

The synthetic builder never touches the random module: every "random" value
is noise(seed) for a seed derived from the entity, member and time range, so
identical inputs always produce identical graphs.
"""

import math
import re
import struct

_WHITESPACE = re.compile(r"\s+")


def noise(seed: float) -> float:
    """Sine-hash noise in [0, 1): frac(sin(seed * 9999) * 10000)."""
    value = math.sin(seed * 9999) * 10000
    return value - math.floor(value)


def seed_from_text(text: str) -> int:
    """
    Position-weighted character sum: sum(code_unit_i * (i + 1)).

    Code units are UTF-16, so characters outside the BMP count as two
    surrogate units, matching the dashboard that consumes these graphs.
    Unpaired surrogates are accepted and count as one unit.
    """
    raw = text.encode("utf-16-le", errors="surrogatepass")
    units = struct.unpack(f"<{len(raw) // 2}H", raw)
    return sum(unit * (index + 1) for index, unit in enumerate(units))


def clamp(value: float, lo: float, hi: float) -> float:
    return min(hi, max(lo, value))


def normalize_developer_name(name: str) -> str:
    """Lowercase and collapse whitespace runs to hyphens: 'Ada Lovelace' → 'ada-lovelace'."""
    return _WHITESPACE.sub("-", name.lower())


def round_half_up(value: float, digits: int = 2) -> float:
    # round() is banker's rounding; the dashboard rounds .5 upward.
    scale = 10 ** digits
    return math.floor(value * scale + 0.5) / scale
