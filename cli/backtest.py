#!/usr/bin/env python3
"""
Multi-timeframe backtest CLI.

Backtests the MTF strategy on a daily bar file and compares it with the
single-timeframe baseline and buy & hold.
"""
import argparse
import logging
import sys
from pathlib import Path

from mtf.data.loader import DataLoader
from mtf.evaluation.analysis import MultiTimeframeAnalyzer
from mtf.shared.defaults import RECENT_SIGNALS

from .common import add_common_arguments, resolve_config, setup_logging
from .report import (
    format_backtest,
    format_comparison,
    format_score,
    format_signals,
    format_timeframe_table,
    section,
)


def main():
    parser = argparse.ArgumentParser(
        description="Backtest the multi-timeframe strategy on a daily bar file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Baseline configuration
    python -m cli.backtest data/AAPL.csv

    # Preset with tighter risk
    python -m cli.backtest data/AAPL.csv --preset conservative

    # YAML config plus an override
    python -m cli.backtest data/AAPL.csv --config configs/baseline.yaml --stop-loss 4
        """
    )
    add_common_arguments(parser)
    parser.add_argument(
        "--recent",
        type=int,
        default=RECENT_SIGNALS,
        help=f"Number of recent entry signals to list (default: {RECENT_SIGNALS})",
    )
    args = parser.parse_args()

    setup_logging(Path(args.log_file) if args.log_file else None, args.verbose)
    logger = logging.getLogger(__name__)

    try:
        config = resolve_config(args)
        bars = DataLoader(args.data).load(start_date=args.start_date, end_date=args.end_date)
        report = MultiTimeframeAnalyzer(config).analyze(bars, run_backtest=True)
    except (FileNotFoundError, ValueError) as e:
        logger.error(str(e))
        sys.exit(1)

    lines = section("TIMEFRAME ANALYSIS")
    lines += format_timeframe_table(report)
    lines.append("")
    lines += format_score(report.score)
    lines.append("")
    lines += section(f"BACKTEST ({config.name})")
    lines += format_backtest("Multi-Timeframe Strategy Results", report.backtest)
    lines.append("")
    lines += format_comparison(report.backtest, report.baseline)
    lines.append("")
    lines += format_signals(report.backtest.recent_signals(args.recent))
    print("\n".join(lines))


if __name__ == "__main__":
    main()
