"""
Shared CLI plumbing: logging setup and strategy config resolution.
"""
import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Optional

from mtf.signals.config import PRESET_CONFIGS, StrategyConfig
from mtf.signals.config_loader import load_config_from_yaml

# CLI flag -> (config section, field)
OVERRIDES = {
    "initial_capital": ("backtest", "initial_capital"),
    "warmup_bars": ("backtest", "warmup_bars"),
    "sma_fast": ("indicators", "sma_fast_period"),
    "sma_slow": ("indicators", "sma_slow_period"),
    "rsi_period": ("indicators", "rsi_period"),
    "rsi_oversold": ("indicators", "rsi_oversold"),
    "rsi_overbought": ("indicators", "rsi_overbought"),
    "entry_score": ("backtest", "entry_score_threshold"),
    "exit_score": ("backtest", "exit_score_threshold"),
    "entry_rsi_max": ("backtest", "entry_rsi_max"),
    "stop_loss": ("backtest", "stop_loss_pct"),
    "take_profit": ("backtest", "take_profit_pct"),
}


def setup_logging(log_path: Optional[Path] = None, verbose: bool = False):
    """
    Setup logging to stdout and optionally to file.

    Args:
        log_path: Path to log file (None = stdout only)
        verbose: If True, use DEBUG level, otherwise INFO
    """
    level = logging.DEBUG if verbose else logging.INFO

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_path:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path)
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)


def add_common_arguments(parser: argparse.ArgumentParser) -> None:
    """Data file, config selection, logging and parameter overrides."""
    parser.add_argument("data", help="Daily bars file (.csv or .json)")
    parser.add_argument("--start-date", "-s", type=str, help="Start date (YYYY-MM-DD)")
    parser.add_argument("--end-date", "-e", type=str, help="End date (YYYY-MM-DD)")
    parser.add_argument(
        "--preset", "-p",
        type=str,
        choices=list(PRESET_CONFIGS.keys()),
        help="Use a preset configuration",
    )
    parser.add_argument("--config", type=str, help="Load configuration from YAML file")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging (DEBUG level)")
    parser.add_argument("--log-file", type=str, help="Also write logs to this file")

    overrides = parser.add_argument_group("parameter overrides")
    overrides.add_argument("--initial-capital", type=float, help="Starting cash")
    overrides.add_argument("--warmup-bars", type=int, help="First evaluated bar of the MTF backtest")
    overrides.add_argument("--sma-fast", type=int, help="Fast trend SMA period")
    overrides.add_argument("--sma-slow", type=int, help="Slow trend SMA period (--warmup-bars must cover it)")
    overrides.add_argument("--rsi-period", type=int, help="RSI period")
    overrides.add_argument("--rsi-oversold", type=float, help="RSI oversold threshold")
    overrides.add_argument("--rsi-overbought", type=float, help="RSI overbought threshold")
    overrides.add_argument("--entry-score", type=int, help="Net score required to enter")
    overrides.add_argument("--exit-score", type=int, help="Net score at or below which to exit")
    overrides.add_argument("--entry-rsi-max", type=float, help="Enter only while daily RSI is below this")
    overrides.add_argument("--stop-loss", type=float, help="Stop-loss percent")
    overrides.add_argument("--take-profit", type=float, help="Take-profit percent")


def resolve_config(args: argparse.Namespace) -> StrategyConfig:
    """
    Build the strategy config: YAML file, else preset, else baseline; then
    apply individual overrides.

    Raises:
        ValueError: If the resulting config is invalid
    """
    if getattr(args, "config", None):
        config = load_config_from_yaml(args.config)
    else:
        config = PRESET_CONFIGS[getattr(args, "preset", None) or "baseline"]

    sections = {"indicators": {}, "backtest": {}}
    for flag, (section, field_name) in OVERRIDES.items():
        value = getattr(args, flag, None)
        if value is not None:
            sections[section][field_name] = value

    if not any(sections.values()):
        return config
    return replace(
        config,
        indicators=replace(config.indicators, **sections["indicators"]),
        backtest=replace(config.backtest, **sections["backtest"]),
    )
