"""
keno_analyzer/extractors/stream_extractor.py
Strategy B: recover draws from unstructured number streams (PDF text dumps).
A draw is a run of exactly `draw_size` in-range integers inside one fragment.
"""
from __future__ import annotations

import re

from keno_analyzer.extractors.base_extractor import (
    BaseExtractor,
    ExtractionResult,
    ParseDiagnostic,
)
from keno_analyzer.models.game_record import parse_digits
from keno_analyzer.utils.logger import get_logger

log = get_logger("extractor.stream")

# Newlines always split; other whitespace only when two or more in a row
_FRAGMENT_SPLIT_RE = re.compile(r"\n|\s{2,}")
_DIGITS_RE = re.compile(r"[0-9]+")


# ── Scanner steps ─────────────────────────────────────────────────

def split_fragments(text: str) -> list[str]:
    return [frag for frag in _FRAGMENT_SPLIT_RE.split(text) if frag]


def extract_integers(fragment: str) -> list[int]:
    """Every maximal digit run as an int: 'p.12/2024' -> [12, 2024]."""
    return [parse_digits(m) for m in _DIGITS_RE.findall(fragment)]


def filter_in_range(values: list[int], lo: int, hi: int) -> list[int]:
    return [v for v in values if lo <= v <= hi]


def find_draw_run(values: list[int], size: int) -> list[int] | None:
    """First contiguous window of `size` elements, or None if there are fewer."""
    if size <= 0 or len(values) < size:
        return None
    return values[:size]


def find_unbroken_run(values: list[int], size: int, lo: int, hi: int) -> list[int] | None:
    """
    First `size` consecutive in-range values of the unfiltered list.
    Any out-of-range value resets the run.
    """
    run: list[int] = []
    for v in values:
        if lo <= v <= hi:
            run.append(v)
            if len(run) == size:
                return run
        else:
            run = []
    return None


class StreamExtractor(BaseExtractor):
    """
    Scan text fragment by fragment, accept at most one draw per fragment and
    return the history newest first (the source is read oldest first).

    require_unbroken=False filters out-of-range values before looking for the
    run, so noise never interrupts a draw. require_unbroken=True makes any
    out-of-range value break the run instead.
    """

    def __init__(self, require_unbroken: bool = False, **kwargs):
        super().__init__(**kwargs)
        self.require_unbroken = require_unbroken

    def scan_fragment(self, fragment: str) -> list[int] | None:
        values = extract_integers(fragment)
        if self.require_unbroken:
            return find_unbroken_run(values, self.draw_size, self.lo, self.hi)
        return find_draw_run(filter_in_range(values, self.lo, self.hi), self.draw_size)

    def extract(self, text: str) -> ExtractionResult:
        history: list[tuple[int, ...]] = []
        diagnostics: list[ParseDiagnostic] = []

        for frag_no, fragment in enumerate(split_fragments(text), start=1):
            run = self.scan_fragment(fragment)
            if run is None:
                if len(filter_in_range(extract_integers(fragment), self.lo, self.hi)) >= 2:
                    diagnostics.append(ParseDiagnostic(
                        frag_no, fragment.strip(), f"no run of {self.draw_size} in-range numbers"
                    ))
                continue

            problem = self.check_draw(run)
            if problem:
                diagnostics.append(ParseDiagnostic(frag_no, fragment.strip(), problem))
                log.debug(f"Fragment {frag_no}: kept draw with {problem}")
            history.append(tuple(run))

        history.reverse()
        log.info(f"Stream scan: {len(history)} draws recovered, {len(diagnostics)} fragments reported")
        return ExtractionResult(
            draws=tuple(history),
            draw_count=len(history),
            diagnostics=tuple(diagnostics),
        )
