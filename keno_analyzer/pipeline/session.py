"""
keno_analyzer/pipeline/session.py
Upload state for one viewer: idle -> loading -> success | error.
State is an immutable snapshot replaced as a whole; listeners get each new one.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path
from typing import Callable

from keno_analyzer.extractors.base_extractor import ParseDiagnostic
from keno_analyzer.models.statistical.frequency_analyzer import DrawSummary, WindowAnalysis
from keno_analyzer.pipeline.analysis_runner import AnalysisResult, run_analysis
from keno_analyzer.utils.config import DEFAULT_GAME
from keno_analyzer.utils.logger import get_logger

log = get_logger("pipeline.session")


class AnalysisStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class AnalysisState:
    status: AnalysisStatus = AnalysisStatus.IDLE
    analyses: tuple[WindowAnalysis, ...] = ()
    summary: DrawSummary | None = None
    draw_count: int = 0
    diagnostics: tuple[ParseDiagnostic, ...] = ()
    error: str = ""
    source: str = ""


class AnalysisSession:
    """Holds the latest AnalysisState; a failed upload keeps the previous results."""

    def __init__(self, mode: str = "records", game: str = DEFAULT_GAME):
        self.mode = mode
        self.game = game
        self._state = AnalysisState()
        self._listeners: list[Callable[[AnalysisState], None]] = []

    @property
    def state(self) -> AnalysisState:
        return self._state

    def subscribe(self, callback: Callable[[AnalysisState], None]) -> None:
        self._listeners.append(callback)

    def _publish(self, state: AnalysisState) -> None:
        self._state = state
        log.debug(f"Session state -> {state.status.value}")
        for listener in self._listeners:
            listener(state)

    def apply(self, result: AnalysisResult, source: str = "") -> AnalysisState:
        """Fold one finished run into the state."""
        if result.success:
            self._publish(AnalysisState(
                status=AnalysisStatus.SUCCESS,
                analyses=result.analyses,
                summary=result.summary,
                draw_count=result.draw_count,
                diagnostics=result.diagnostics,
                source=source,
            ))
        else:
            self._publish(replace(self._state, status=AnalysisStatus.ERROR, error=result.error))
        return self._state

    def upload(self, path: str | Path | None) -> AnalysisState:
        self._publish(replace(self._state, status=AnalysisStatus.LOADING, error=""))
        result = run_analysis(path, mode=self.mode, game=self.game)
        return self.apply(result, source=str(path or ""))
