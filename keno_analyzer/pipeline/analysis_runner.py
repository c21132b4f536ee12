"""
keno_analyzer/pipeline/analysis_runner.py
Full analysis flow for one uploaded file:
1. Read the file (plain text or PDF)
2. Extract draws with the strategy the caller chose
3. Window statistics + least-frequent summary
4. Return an immutable result (success or error, never partial)
"""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from keno_analyzer.extractors.base_extractor import BaseExtractor, ExtractionResult, ParseDiagnostic
from keno_analyzer.extractors.marker_extractor import MarkerExtractor
from keno_analyzer.extractors.record_parser import RecordParser
from keno_analyzer.extractors.stream_extractor import StreamExtractor
from keno_analyzer.models.statistical.frequency_analyzer import (
    DrawSummary,
    FrequencyAnalyzer,
    WindowAnalysis,
)
from keno_analyzer.pipeline.source_loader import SourceError, read_source
from keno_analyzer.utils.config import (
    DEFAULT_GAME,
    get_average_policy,
    get_cold_count,
    get_draw_size,
    get_hot_count,
    get_least_frequent_count,
    get_number_range,
    get_record_parser_options,
    get_stream_extractor_options,
    get_windows,
)
from keno_analyzer.utils.logger import get_logger

log = get_logger("pipeline.runner")

# records: "date time draw-id numbers bullseye multiplier bonus" lines
# marker:  "Draw <numbers> BullsEye" lines
# stream:  unstructured number streams (PDF dumps)
MODES = ("records", "marker", "stream")


@dataclass(frozen=True)
class AnalysisResult:
    success: bool
    mode: str
    error: str = ""
    draw_count: int = 0
    analyses: tuple[WindowAnalysis, ...] = ()
    summary: DrawSummary | None = None
    diagnostics: tuple[ParseDiagnostic, ...] = field(default_factory=tuple)


def build_extractor(mode: str, game: str = DEFAULT_GAME) -> BaseExtractor:
    if mode not in MODES:
        raise ValueError(f"Unknown mode: {mode} (expected one of {', '.join(MODES)})")
    common = {"number_range": get_number_range(game), "draw_size": get_draw_size(game)}
    if mode == "records":
        return RecordParser(**get_record_parser_options(game), **common)
    if mode == "marker":
        return MarkerExtractor(**common)
    return StreamExtractor(**get_stream_extractor_options(game), **common)


def build_analyzer(game: str = DEFAULT_GAME) -> FrequencyAnalyzer:
    return FrequencyAnalyzer(
        number_range=get_number_range(game),
        hot_count=get_hot_count(game),
        cold_count=get_cold_count(game),
        average_policy=get_average_policy(game),
    )


def analyze_text(text: str, mode: str = "records", game: str = DEFAULT_GAME) -> AnalysisResult:
    """Text already in memory -> statistics. Malformed lines never fail the run."""
    extractor = build_extractor(mode, game)
    analyzer = build_analyzer(game)

    extraction: ExtractionResult = extractor.extract(text)
    items = extraction.records if mode == "records" else extraction.draws

    analyses = analyzer.analyze_windows(items, get_windows(game))
    summary = analyzer.least_frequent(items, get_least_frequent_count(game))
    if extraction.draw_count == 0:
        log.warning(f"[ANALYZE] mode={mode}: no draws found in input")

    return AnalysisResult(
        success=True,
        mode=mode,
        draw_count=extraction.draw_count,
        analyses=tuple(analyses),
        summary=summary,
        diagnostics=extraction.diagnostics,
    )


def run_analysis(path: str | Path | None, mode: str = "records", game: str = DEFAULT_GAME) -> AnalysisResult:
    """Read `path` and analyze it. Read problems come back as a failed result."""
    log.info(f"[ANALYZE] file={path} mode={mode} game={game}")
    try:
        text = read_source(path)
    except SourceError as exc:
        log.warning(str(exc))
        return AnalysisResult(success=False, mode=mode, error=str(exc))

    result = analyze_text(text, mode=mode, game=game)
    log.info(
        f"[ANALYZE] {result.draw_count} draws, {len(result.analyses)} windows, "
        f"{len(result.diagnostics)} diagnostics"
    )
    return result
