"""
keno_analyzer/models/statistical/frequency_analyzer.py
Hot/cold numbers and side-field averages over trailing windows of draws.
Records are expected newest first: window W = the first W records.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Union

import numpy as np

from keno_analyzer.models.game_record import GameRecord
from keno_analyzer.utils.config import AVERAGE_POLICIES
from keno_analyzer.utils.logger import get_logger

log = get_logger("stats.frequency")

Draw = Sequence[int]
DrawLike = Union[GameRecord, Draw]

DEFAULT_WINDOWS: list[tuple[str, int | None]] = [
    ("All Games", None),
    ("Last 10 Games", 10),
    ("Last 20 Games", 20),
    ("Last 50 Games", 50),
    ("Last 100 Games", 100),
]


@dataclass(frozen=True)
class NumberFrequency:
    number: int
    frequency: int


@dataclass(frozen=True)
class WindowAnalysis:
    label: str
    draw_count: int
    hot_numbers: tuple[NumberFrequency, ...]
    cold_numbers: tuple[NumberFrequency, ...]
    average_multiplier: float | None
    average_bullseye: float | None


@dataclass(frozen=True)
class DrawSummary:
    """Least frequent numbers over every draw, with the draw total."""
    total_draws: int
    least_frequent: tuple[NumberFrequency, ...]


def _numbers_of(item: DrawLike) -> Sequence[int]:
    return item.numbers if isinstance(item, GameRecord) else item


class FrequencyAnalyzer:
    """Count how often each number appears and rank numbers within windows."""

    def __init__(
        self,
        number_range: tuple[int, int] = (1, 80),
        hot_count: int = 10,
        cold_count: int = 10,
        average_policy: str = "window",
    ):
        if average_policy not in AVERAGE_POLICIES:
            raise ValueError(f"Unknown average policy: {average_policy}")
        self.lo, self.hi = number_range
        self.hot_count = hot_count
        self.cold_count = cold_count
        self.average_policy = average_policy

    # ── Counting ──────────────────────────────────────────────────

    def frequency_table(self, draws: Sequence[DrawLike]) -> dict[int, int]:
        """
        Returns {number: count} for every number in range, zero included.
        Out-of-range numbers are ignored.
        """
        table: dict[int, int] = {n: 0 for n in range(self.lo, self.hi + 1)}
        for draw in draws:
            for num in _numbers_of(draw):
                if self.lo <= num <= self.hi:
                    table[num] += 1
        return table

    # ── Ranking ───────────────────────────────────────────────────
    # Equal counts are ordered by ascending number in both directions.

    @staticmethod
    def hot_numbers(table: dict[int, int], top_n: int = 10) -> list[NumberFrequency]:
        ranked = sorted(table.items(), key=lambda kv: (-kv[1], kv[0]))
        return [NumberFrequency(n, c) for n, c in ranked[:top_n]]

    @staticmethod
    def cold_numbers(table: dict[int, int], bottom_n: int = 10) -> list[NumberFrequency]:
        """Least frequent first."""
        ranked = sorted(table.items(), key=lambda kv: (kv[1], kv[0]))
        return [NumberFrequency(n, c) for n, c in ranked[:bottom_n]]

    def least_frequent(self, draws: Sequence[DrawLike], n: int = 4) -> DrawSummary:
        table = self.frequency_table(draws)
        return DrawSummary(total_draws=len(draws), least_frequent=tuple(self.cold_numbers(table, n)))

    # ── Averages ──────────────────────────────────────────────────

    def average(self, values: Sequence[float], window_size: int) -> float:
        """
        Mean of parseable values (NaN = unparseable).
        'window' divides by window_size, 'parsed' by the parseable count.
        """
        arr = np.asarray(values, dtype=float)
        parsed = int(np.count_nonzero(~np.isnan(arr)))
        if parsed < len(arr):
            log.debug(f"{len(arr) - parsed} of {len(arr)} side fields did not parse")
        if self.average_policy == "parsed":
            if parsed == 0:
                return 0.0
            return float(np.nanmean(arr))
        if window_size == 0:
            return 0.0
        return float(np.nansum(arr) / window_size)

    # ── Windows ───────────────────────────────────────────────────

    def analyze_window(self, label: str, items: Sequence[DrawLike]) -> WindowAnalysis:
        table = self.frequency_table(items)
        records = [item for item in items if isinstance(item, GameRecord)]

        avg_multiplier = avg_bullseye = None
        if records:
            avg_multiplier = self.average([r.multiplier_value for r in records], len(items))
            avg_bullseye = self.average([r.bullseye_value for r in records], len(items))

        return WindowAnalysis(
            label=label,
            draw_count=len(items),
            hot_numbers=tuple(self.hot_numbers(table, self.hot_count)),
            cold_numbers=tuple(self.cold_numbers(table, self.cold_count)),
            average_multiplier=avg_multiplier,
            average_bullseye=avg_bullseye,
        )

    def analyze_windows(
        self,
        items: Sequence[DrawLike],
        windows: Sequence[tuple[str, int | None]] = DEFAULT_WINDOWS,
    ) -> list[WindowAnalysis]:
        """
        One WindowAnalysis per window that fits, in the given order.
        A window larger than the record count is skipped, never clamped.
        """
        analyses: list[WindowAnalysis] = []
        for label, size in windows:
            count = len(items) if size is None else size
            if count <= 0 or count > len(items):
                log.debug(f"Skipping window '{label}' (size {count}, {len(items)} records)")
                continue
            analyses.append(self.analyze_window(label, items[:count]))
        log.info(f"Analyzed {len(analyses)}/{len(windows)} windows over {len(items)} records")
        return analyses
