"""
keno_analyzer/extractors/record_parser.py
Field parser for full game lines:

    <date> <time> <am/pm> <draw id> <n1> ... <n20> <bullseye> <multiplier> <bonus>

Positions are fixed: no token is validated, malformed lines still yield a
record (with empty fields) plus a diagnostic.
"""
from __future__ import annotations

import re

from keno_analyzer.extractors.base_extractor import (
    BaseExtractor,
    ExtractionResult,
    ParseDiagnostic,
)
from keno_analyzer.models.game_record import GameRecord, is_digit_token, parse_digits
from keno_analyzer.utils.logger import get_logger

log = get_logger("extractor.records")

DRAW_ID_INDEX = 3
TRAILING_FIELDS = 3
# Multiplier tokens carry one marker character before the value: x3, X2, *1.5
_MULTIPLIER_RE = re.compile(r"^[^0-9\s.][0-9]+(\.[0-9]+)?$")


def is_multiplier_token(token: str) -> bool:
    return bool(_MULTIPLIER_RE.match(token))


class RecordParser(BaseExtractor):
    """
    skip_draw_id=True starts the winning-number search after the draw id slot,
    so a bare numeric draw id (e.g. "1234") is not read as a winning number.
    skip_draw_id=False searches from the first token, which misreads such ids.
    """

    def __init__(self, skip_draw_id: bool = True, **kwargs):
        super().__init__(**kwargs)
        self.skip_draw_id = skip_draw_id

    # ── Line parsing ──────────────────────────────────────────────

    def _find_numbers_start(self, parts: list[str]) -> int | None:
        first = DRAW_ID_INDEX + 1 if self.skip_draw_id else 0
        for i in range(first, len(parts)):
            if is_digit_token(parts[i]):
                return i
        return None

    @staticmethod
    def _find_trailing(parts: list[str], numbers_start: int) -> tuple[int, int, list[int]]:
        """
        Return (bullseye index, multiplier index, unassigned indexes).

        A marker-prefixed multiplier among the last four tokens anchors the
        tail: bullseye sits right before it, bonus is the last token. Without
        one, the last three tokens are bullseye, multiplier, bonus.
        """
        last = len(parts) - 1
        for idx in range(last - 1, max(numbers_start + 1, last - 3) - 1, -1):
            if is_multiplier_token(parts[idx]):
                return idx - 1, idx, list(range(idx + 1, last))
        return last - 2, last - 1, []

    def parse_line(self, line: str) -> tuple[GameRecord, list[str]]:
        """Parse one line; returns the record and the problems found on it."""
        parts = line.split()
        problems: list[str] = []

        if len(parts) <= DRAW_ID_INDEX:
            problems.append(f"expected at least {DRAW_ID_INDEX + 1} tokens, got {len(parts)}")
            return GameRecord(date=parts[0] if parts else ""), problems

        date = parts[0]
        time = f"{parts[1]} {parts[2]}"
        draw_id = parts[DRAW_ID_INDEX]

        start = self._find_numbers_start(parts)
        if start is None:
            problems.append("no numeric run found")
            return GameRecord(date=date, time=time, draw_id=draw_id), problems

        if len(parts) - start < TRAILING_FIELDS:
            problems.append("missing trailing bullseye/multiplier/bonus fields")
            numbers = tuple(parse_digits(p) for p in parts[start:] if is_digit_token(p))
            return GameRecord(date=date, time=time, draw_id=draw_id, numbers=numbers), problems

        bullseye_idx, multiplier_idx, unassigned = self._find_trailing(parts, start)
        numbers = tuple(parse_digits(p) for p in parts[start:bullseye_idx] if is_digit_token(p))
        skipped = [p for p in parts[start:bullseye_idx] if not is_digit_token(p)]

        if skipped:
            problems.append(f"skipped non-numeric tokens {skipped}")
        if unassigned:
            problems.append(f"unassigned tokens {[parts[i] for i in unassigned]}")
        draw_problem = self.check_draw(numbers)
        if draw_problem:
            problems.append(draw_problem)

        record = GameRecord(
            date=date,
            time=time,
            draw_id=draw_id,
            numbers=numbers,
            bullseye=parts[bullseye_idx],
            multiplier=parts[multiplier_idx],
            bonus=parts[-1],
        )
        return record, problems

    # ── Whole text ────────────────────────────────────────────────

    def extract(self, text: str) -> ExtractionResult:
        records: list[GameRecord] = []
        diagnostics: list[ParseDiagnostic] = []

        for line_no, line in enumerate(text.split("\n"), start=1):
            if not line.strip():
                continue
            record, problems = self.parse_line(line)
            records.append(record)
            for problem in problems:
                diagnostics.append(ParseDiagnostic(line_no, line.strip(), problem))
            if problems:
                log.debug(f"Line {line_no}: {'; '.join(problems)}")

        log.info(f"Record parse: {len(records)} records, {len(diagnostics)} diagnostics")
        return ExtractionResult(
            draws=tuple(r.numbers for r in records),
            records=tuple(records),
            draw_count=len(records),
            diagnostics=tuple(diagnostics),
        )
