"""
keno_analyzer/extractors/marker_extractor.py
Strategy A: lines of the shape "... Draw <n> <n> ... <n> BullsEye ...".
Every matching line counts as one draw, however many of its numbers are usable.
"""
from __future__ import annotations

from keno_analyzer.extractors.base_extractor import (
    BaseExtractor,
    ExtractionResult,
    ParseDiagnostic,
)
from keno_analyzer.models.game_record import is_digit_token, parse_digits
from keno_analyzer.utils.logger import get_logger

log = get_logger("extractor.marker")

DRAW_MARKER = "Draw"
BULLSEYE_MARKER = "BullsEye"


def find_marked_run(line: str) -> list[int] | None:
    """
    Return the integers between a "Draw" token and a "BullsEye" token, or None.

    "Draw" may end a token ("NextDraw") and "BullsEye" may start one
    ("BullsEye:"); at least one integer token must sit between them.
    """
    tokens = line.split()
    for start, token in enumerate(tokens):
        if not token.endswith(DRAW_MARKER):
            continue
        end = start + 1
        while end < len(tokens) and is_digit_token(tokens[end]):
            end += 1
        if end > start + 1 and end < len(tokens) and tokens[end].startswith(BULLSEYE_MARKER):
            return [parse_digits(t) for t in tokens[start + 1:end]]
    return None


class MarkerExtractor(BaseExtractor):
    """Extract draws from lines carrying explicit Draw ... BullsEye markers."""

    def extract(self, text: str) -> ExtractionResult:
        draws: list[tuple[int, ...]] = []
        diagnostics: list[ParseDiagnostic] = []

        for line_no, line in enumerate(text.split("\n"), start=1):
            run = find_marked_run(line)
            if run is None:
                continue
            draws.append(tuple(run))

            problem = self.check_draw(run)
            if problem:
                diagnostics.append(ParseDiagnostic(line_no, line.strip(), problem))
                log.debug(f"Line {line_no}: tolerated malformed draw ({problem})")

        log.info(f"Marker scan: {len(draws)} draws, {len(diagnostics)} malformed")
        return ExtractionResult(
            draws=tuple(draws),
            draw_count=len(draws),
            diagnostics=tuple(diagnostics),
        )
