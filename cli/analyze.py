#!/usr/bin/env python3
"""
Multi-timeframe snapshot CLI.

Shows monthly / weekly / daily indicator state for a daily bar file and the
combined signal at the latest bar.
"""
import argparse
import logging
import sys
from pathlib import Path

from mtf.data.loader import DataLoader
from mtf.evaluation.analysis import MultiTimeframeAnalyzer

from .common import add_common_arguments, resolve_config, setup_logging
from .report import format_bar_counts, format_score, format_timeframe_table, section


def main():
    parser = argparse.ArgumentParser(
        description="Analyze daily, weekly and monthly timeframes of a bar file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Current signal with default parameters
    python -m cli.analyze data/AAPL.csv

    # Custom RSI thresholds
    python -m cli.analyze data/AAPL.json --rsi-oversold 25 --rsi-overbought 75
        """
    )
    add_common_arguments(parser)
    args = parser.parse_args()

    setup_logging(Path(args.log_file) if args.log_file else None, args.verbose)
    logger = logging.getLogger(__name__)

    try:
        config = resolve_config(args)
        bars = DataLoader(args.data).load(start_date=args.start_date, end_date=args.end_date)
        report = MultiTimeframeAnalyzer(config).analyze(bars, run_backtest=False)
    except (FileNotFoundError, ValueError) as e:
        logger.error(str(e))
        sys.exit(1)

    lines = format_bar_counts(report)
    lines += section("TIMEFRAME ANALYSIS")
    lines += format_timeframe_table(report)
    lines.append("")
    lines += format_score(report.score)
    print("\n".join(lines))


if __name__ == "__main__":
    main()
