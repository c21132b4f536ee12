"""
keno_analyzer/extractors/base_extractor.py
Abstract base extractor with shared draw validation and lenient-parse results.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from collections import Counter
from dataclasses import dataclass, field
from typing import Any

from keno_analyzer.utils.config import get_draw_size, get_number_range


@dataclass(frozen=True)
class ParseDiagnostic:
    """A line (or fragment) the extractor skipped or only partly understood."""
    line_no: int
    line: str
    reason: str


@dataclass(frozen=True)
class ExtractionResult:
    """
    draws:       winning-number lists in the order the extractor emits them
    records:     GameRecords (field parser only, else empty)
    draw_count:  lines that matched as a draw
    diagnostics: skipped or partly parsed lines, in source order
    """
    draws: tuple[tuple[int, ...], ...] = ()
    records: tuple[Any, ...] = ()
    draw_count: int = 0
    diagnostics: tuple[ParseDiagnostic, ...] = field(default_factory=tuple)


class BaseExtractor(ABC):
    """Abstract base class for all text-to-draw extractors."""

    def __init__(self, number_range: tuple[int, int] | None = None, draw_size: int | None = None):
        self.lo, self.hi = number_range or get_number_range()
        self.draw_size = draw_size or get_draw_size()

    def in_range(self, num: int) -> bool:
        return self.lo <= num <= self.hi

    # ── Validation ────────────────────────────────────────────────

    def check_draw(self, nums: list[int] | tuple[int, ...]) -> str | None:
        """Return why a draw is malformed, or None if it is a well-formed draw."""
        if len(nums) != self.draw_size:
            return f"expected {self.draw_size} numbers, got {len(nums)}"
        dupes = sorted(n for n, c in Counter(nums).items() if c > 1)
        if dupes:
            return f"duplicate numbers: {dupes}"
        out_of_range = [n for n in nums if not self.in_range(n)]
        if out_of_range:
            return f"numbers out of range [{self.lo},{self.hi}]: {out_of_range}"
        return None

    # ── Abstract interface ────────────────────────────────────────

    @abstractmethod
    def extract(self, text: str) -> ExtractionResult:
        """Turn raw text into draws, never raising on malformed input."""
        ...
