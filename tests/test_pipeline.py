"""tests/test_pipeline.py"""
import pytest
from unittest.mock import MagicMock, patch

from keno_analyzer.pipeline.analysis_runner import analyze_text, build_extractor, run_analysis
from keno_analyzer.pipeline.session import AnalysisSession, AnalysisStatus
from keno_analyzer.pipeline.source_loader import InputError, ReadError, read_source


DRAW_A = [5, 9, 14, 22, 31, 40, 48, 55, 61, 67, 70, 2, 74, 78, 11, 17, 25, 33, 44, 58]
DRAW_B = [1, 3, 6, 8, 12, 15, 19, 21, 27, 30, 36, 39, 42, 47, 51, 56, 60, 66, 72, 80]


def _game_lines(count: int) -> str:
    lines = []
    for i in range(count):
        draw = DRAW_A if i % 2 == 0 else DRAW_B
        mult = "x2" if i % 2 == 0 else "x4"
        lines.append(f"01/01/2024 12:{i:02d} PM {5000 - i} {' '.join(map(str, draw))} 10 {mult} N")
    return "\n".join(lines)


def _mock_pdf(mock_pdfplumber, page_texts):
    pages = []
    for text in page_texts:
        page = MagicMock()
        page.extract_text.return_value = text
        pages.append(page)
    mock_pdfplumber.open.return_value.__enter__.return_value.pages = pages


class TestSourceLoader:
    def test_no_file_selected(self):
        with pytest.raises(InputError, match="No file selected"):
            read_source(None)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ReadError):
            read_source(tmp_path / "nope.txt")

    def test_plain_text(self, tmp_path):
        path = tmp_path / "results.txt"
        path.write_text("Draw 5 12 47 BullsEye\n", encoding="utf-8")
        assert read_source(path) == "Draw 5 12 47 BullsEye\n"

    @patch("keno_analyzer.pipeline.source_loader.pdfplumber")
    def test_pdf_pages_joined(self, mock_pdfplumber, tmp_path):
        path = tmp_path / "results.pdf"
        path.write_bytes(b"%PDF-1.4")
        _mock_pdf(mock_pdfplumber, ["page one", None, "page three"])
        assert read_source(path) == "page one\n\npage three"

    @patch("keno_analyzer.pipeline.source_loader.pdfplumber")
    def test_broken_pdf(self, mock_pdfplumber, tmp_path):
        path = tmp_path / "results.PDF"
        path.write_bytes(b"not a pdf")
        mock_pdfplumber.open.side_effect = ValueError("no /Root object")
        with pytest.raises(ReadError, match="Error reading file"):
            read_source(path)


class TestAnalysisRunner:
    def test_records_mode(self):
        result = analyze_text(_game_lines(12), mode="records")
        assert result.success is True
        assert result.draw_count == 12
        assert [a.label for a in result.analyses] == ["All Games", "Last 10 Games"]
        all_games = result.analyses[0]
        assert all_games.average_multiplier == pytest.approx(3.0)
        assert all_games.average_bullseye == pytest.approx(10.0)
        assert result.diagnostics == ()

    def test_marker_mode_summary(self):
        text = "Draw 5 12 47 BullsEye\nDraw 5 12 BullsEye\nnoise"
        result = analyze_text(text, mode="marker")
        assert result.draw_count == 2
        assert result.summary.total_draws == 2
        assert [p.frequency for p in result.summary.least_frequent] == [0, 0, 0, 0]
        assert len(result.diagnostics) == 2

    def test_stream_mode_newest_first(self):
        text = f"Page 1\n{' '.join(map(str, DRAW_A))}\n{' '.join(map(str, DRAW_B))}\nPrinted 2024"
        result = analyze_text(text, mode="stream")
        assert result.draw_count == 2
        assert result.analyses[0].draw_count == 2
        assert result.analyses[0].average_multiplier is None
        assert result.diagnostics == ()

    @pytest.mark.parametrize("mode", ["records", "marker", "stream"])
    def test_huge_digit_runs_do_not_fail(self, mode):
        huge = "9" * 5000
        draw = " ".join(map(str, DRAW_A))
        text = f"01/01/2024 12:00 PM 1234 {draw} {huge} x3 N\nDraw {draw} {huge} BullsEye\n{huge} {draw}"
        result = analyze_text(text, mode=mode)
        assert result.success is True
        assert result.draw_count >= 1

    def test_huge_bullseye_averages_as_unparsed(self):
        text = f"01/01/2024 12:00 PM 1234 {' '.join(map(str, DRAW_A))} {'9' * 400} x3 N"
        result = analyze_text(text, mode="records")
        assert result.draw_count == 1
        assert result.analyses[0].average_bullseye == 0.0
        assert result.analyses[0].average_multiplier == pytest.approx(3.0)

    def test_stream_options_from_config(self):
        assert build_extractor("stream").require_unbroken is False

    @patch("keno_analyzer.pipeline.analysis_runner.get_stream_extractor_options",
           return_value={"require_unbroken": True})
    def test_stream_options_override(self, _mock_options):
        assert build_extractor("stream").require_unbroken is True

    def test_unknown_mode(self):
        with pytest.raises(ValueError):
            build_extractor("csv")

    def test_run_analysis_file(self, tmp_path):
        path = tmp_path / "keno.txt"
        path.write_text(_game_lines(3), encoding="utf-8")
        result = run_analysis(path, mode="records")
        assert result.success is True
        assert result.analyses[0].draw_count == 3

    def test_run_analysis_no_file(self):
        result = run_analysis(None)
        assert result.success is False
        assert result.error == "No file selected"
        assert result.analyses == ()

    @patch("keno_analyzer.pipeline.source_loader.pdfplumber")
    def test_run_analysis_pdf_stream(self, mock_pdfplumber, tmp_path):
        path = tmp_path / "keno.pdf"
        path.write_bytes(b"%PDF-1.4")
        _mock_pdf(mock_pdfplumber, [" ".join(map(str, DRAW_A)), " ".join(map(str, DRAW_B))])
        result = run_analysis(path, mode="stream")
        assert result.success is True
        assert result.draw_count == 2


class TestAnalysisSession:
    def setup_method(self):
        self.session = AnalysisSession(mode="records")

    def test_starts_idle(self):
        assert self.session.state.status == AnalysisStatus.IDLE
        assert self.session.state.analyses == ()

    def test_upload_success(self, tmp_path):
        path = tmp_path / "keno.txt"
        path.write_text(_game_lines(10), encoding="utf-8")
        seen = []
        self.session.subscribe(lambda state: seen.append(state.status))
        state = self.session.upload(path)
        assert state.status == AnalysisStatus.SUCCESS
        assert len(state.analyses) == 2
        assert seen == [AnalysisStatus.LOADING, AnalysisStatus.SUCCESS]

    def test_failed_upload_keeps_previous_results(self, tmp_path):
        path = tmp_path / "keno.txt"
        path.write_text(_game_lines(10), encoding="utf-8")
        first = self.session.upload(path)
        state = self.session.upload(tmp_path / "missing.txt")
        assert state.status == AnalysisStatus.ERROR
        assert state.error.startswith("Error reading file")
        assert state.analyses == first.analyses

    def test_success_clears_error(self, tmp_path):
        self.session.upload(None)
        assert self.session.state.error == "No file selected"
        path = tmp_path / "keno.txt"
        path.write_text(_game_lines(2), encoding="utf-8")
        state = self.session.upload(path)
        assert state.status == AnalysisStatus.SUCCESS
        assert state.error == ""

    def test_state_carries_count_and_diagnostics(self, tmp_path):
        path = tmp_path / "keno.txt"
        path.write_text(_game_lines(3) + "\nDate Time Draw Numbers\n", encoding="utf-8")
        state = self.session.upload(path)
        assert state.draw_count == 4
        assert [d.line_no for d in state.diagnostics] == [4]

        failed = self.session.upload(tmp_path / "missing.txt")
        assert failed.status == AnalysisStatus.ERROR
        assert failed.draw_count == 4
        assert failed.diagnostics == state.diagnostics
