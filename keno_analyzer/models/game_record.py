"""
keno_analyzer/models/game_record.py
One keno game line: date, time, draw id, 20 winning numbers and side fields.
Side fields stay raw; numeric views return NaN when a field does not parse.
"""
from __future__ import annotations

import math
import re
from dataclasses import dataclass, field

_DIGITS_RE = re.compile(r"^[0-9]+$")
_INT_RE = re.compile(r"^[+-]?[0-9]+$")
_DECIMAL_RE = re.compile(r"^[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)$")

# Longer digit runs are never a keno value; int() would refuse past 4300 digits
MAX_TOKEN_DIGITS = 9
OVERSIZED = 10 ** MAX_TOKEN_DIGITS


def is_digit_token(token: str) -> bool:
    """ASCII digits only: '07' yes, '٧' and '²' no."""
    return bool(_DIGITS_RE.match(token))


def _significant(digits: str) -> str:
    return digits.lstrip("0") or "0"


def parse_digits(digits: str) -> int:
    """
    int() of an ASCII digit run; runs longer than MAX_TOKEN_DIGITS (ignoring
    leading zeros) become OVERSIZED, which is outside every number range.
    """
    significant = _significant(digits)
    if len(significant) > MAX_TOKEN_DIGITS:
        return OVERSIZED
    return int(significant)


def parse_bullseye(raw: str | None) -> float:
    """'7' -> 7.0, anything else -> NaN."""
    if raw is None:
        return math.nan
    text = raw.strip()
    if not _INT_RE.match(text) or len(_significant(text.lstrip("+-"))) > MAX_TOKEN_DIGITS:
        return math.nan
    return float(int(text))


def parse_multiplier(raw: str | None) -> float:
    """
    'x3' -> 3.0, '3' -> 3.0, 'x1.5' -> 1.5.
    A single leading non-digit marker is stripped before parsing.
    """
    if raw is None:
        return math.nan
    text = raw.strip()
    if text and not is_digit_token(text[0]) and text[0] != ".":
        text = text[1:]
    if not _DECIMAL_RE.match(text):
        return math.nan
    whole = _significant(text.lstrip("+-").split(".")[0])
    if len(whole) > MAX_TOKEN_DIGITS:
        return math.nan
    return float(text)


@dataclass(frozen=True)
class GameRecord:
    date: str = ""
    time: str = ""
    draw_id: str = ""
    numbers: tuple[int, ...] = field(default_factory=tuple)
    bullseye: str = ""
    multiplier: str = ""
    bonus: str = ""

    @property
    def bullseye_value(self) -> float:
        return parse_bullseye(self.bullseye)

    @property
    def multiplier_value(self) -> float:
        return parse_multiplier(self.multiplier)

    def to_dict(self) -> dict:
        return {
            "date": self.date,
            "time": self.time,
            "draw_id": self.draw_id,
            "numbers": list(self.numbers),
            "bullseye": self.bullseye,
            "multiplier": self.multiplier,
            "bonus": self.bonus,
        }
