"""
scripts/01_analyze_file.py
Analyze one keno results file (text or PDF) and print window statistics.
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from keno_analyzer.pipeline.analysis_runner import MODES, run_analysis
from keno_analyzer.utils.config import DEFAULT_GAME, GAME_CONFIG_FILES, GAME_LABELS
from keno_analyzer.utils.logger import get_logger

log = get_logger("analyze_file")


def _fmt_pairs(pairs) -> str:
    return "  ".join(f"{p.number:2d}({p.frequency}x)" for p in pairs)


def main():
    parser = argparse.ArgumentParser(description="Keno results frequency analysis")
    parser.add_argument("path", nargs="?", default=None, help="Results file (.txt, .csv or .pdf)")
    parser.add_argument("--mode", choices=MODES, default="records",
                        help="records: full game lines | marker: 'Draw .. BullsEye' lines | stream: PDF number dump")
    parser.add_argument("--game", choices=list(GAME_CONFIG_FILES.keys()), default=DEFAULT_GAME)
    parser.add_argument("--show-diagnostics", action="store_true", help="List skipped or malformed lines")
    args = parser.parse_args()

    result = run_analysis(args.path, mode=args.mode, game=args.game)
    if not result.success:
        print(result.error)
        sys.exit(1)

    print("\n" + "=" * 60)
    print(f"{GAME_LABELS.get(args.game, args.game).upper()} ANALYSIS ({result.draw_count} draws)")
    print("=" * 60)
    for a in result.analyses:
        print(f"\n{a.label} ({a.draw_count} draws)")
        print(f"  Hot : {_fmt_pairs(a.hot_numbers)}")
        print(f"  Cold: {_fmt_pairs(a.cold_numbers)}")
        if a.average_multiplier is not None:
            print(f"  Avg multiplier: {a.average_multiplier:.2f}x | Avg BullsEye: {a.average_bullseye:.1f}")

    if result.summary:
        print(f"\nLeast frequent: {_fmt_pairs(result.summary.least_frequent)}"
              f" (based on {result.summary.total_draws} draws)")

    if result.diagnostics:
        log.warning(f"{len(result.diagnostics)} lines were skipped or only partly parsed")
        if args.show_diagnostics:
            for d in result.diagnostics:
                print(f"  line {d.line_no:5d}: {d.reason} | {d.line[:60]}")
    print("=" * 60)


if __name__ == "__main__":
    main()
