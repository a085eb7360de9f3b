"""
Plain-text rendering of analysis and backtest results.

Pure formatting: every function returns lines, callers decide where to print.
"""
from typing import List

from mtf.evaluation.analysis import AnalysisReport
from mtf.evaluation.backtest_types import BacktestResult, EntryEvent
from mtf.shared.types import Timeframe
from mtf.signals.scorer import ScoreResult

RULE = "=" * 63


def section(title: str) -> List[str]:
    return [RULE, title, RULE, ""]


def format_bar_counts(report: AnalysisReport) -> List[str]:
    return [
        "Data Points:",
        f"  Daily:   {report.bar_counts[Timeframe.DAILY]} bars",
        f"  Weekly:  {report.bar_counts[Timeframe.WEEKLY]} bars",
        f"  Monthly: {report.bar_counts[Timeframe.MONTHLY]} bars",
        "",
    ]


def format_timeframe_table(report: AnalysisReport) -> List[str]:
    lines = [
        "Timeframe | Trend   | MACD    | RSI   | Signal",
        "----------|---------|---------|-------|-----------",
    ]
    for snap in report.snapshots:
        rsi_text = f"{snap.rsi_value:.1f}" if snap.rsi_value is not None else "N/A"
        lines.append(
            f"{snap.label:<9} | {snap.trend.value:<7} | {snap.macd_signal.value:<7} "
            f"| {rsi_text:>5} | {snap.rsi_signal.value}"
        )
    return lines


def format_score(score: ScoreResult) -> List[str]:
    return [
        "Current Multi-Timeframe Signal:",
        f"  Action:     {score.action.value}",
        f"  Confidence: {score.confidence.value}",
        f"  Bull Score: {score.bull_score}",
        f"  Bear Score: {score.bear_score}",
        f"  Reasons:    {', '.join(score.reasons)}",
    ]


def format_backtest(label: str, result: BacktestResult) -> List[str]:
    lines = [
        f"{label}:",
        f"  Return:     {result.total_return_percent:.1f}%",
        f"  Buy & Hold: {result.buy_and_hold_percent:.1f}%",
        f"  Trades:     {result.trade_count}",
        f"  Win Rate:   {result.win_rate * 100:.0f}%",
    ]
    if result.open_at_end:
        lines.append("  (open position marked to market at last close)")
    return lines


def format_comparison(mtf: BacktestResult, baseline: BacktestResult) -> List[str]:
    return [
        "Comparison:",
        f"  Single TF (Daily Only): {baseline.total_return_percent:.1f}% "
        f"({baseline.trade_count} trades, {baseline.win_rate * 100:.0f}% win)",
        f"  Multi-TF (D+W+M):       {mtf.total_return_percent:.1f}% "
        f"({mtf.trade_count} trades, {mtf.win_rate * 100:.0f}% win)",
    ]


def format_signals(events: List[EntryEvent]) -> List[str]:
    lines = ["Recent MTF Entry Signals:"]
    if not events:
        lines.append("  No recent signals")
        return lines
    for event in events:
        when = event.timestamp.date() if event.timestamp is not None else f"bar {event.index}"
        lines.append(f"  {when}: Score={event.score}, Price={event.price:.2f}, Action={event.action}")
    return lines
