#!/usr/bin/env python3
"""
Single cycle CLI.

Loads a window of reconciled candles and the stored configuration, runs one
signal -> simulate -> learn cycle, prints the performance summary and stores
the adapted configuration.
"""
import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from adaptive_trader.automation.config_store import ConfigStore
from adaptive_trader.automation.runner import CycleRunner
from adaptive_trader.data.loader import load_candles
from adaptive_trader.evaluation.metrics import format_metrics
from adaptive_trader.shared.defaults import CANDLE_WINDOW
from adaptive_trader.signals.config import CONFIG_FIELDS


def setup_logging(log_path: Optional[Path] = None, verbose: bool = False):
    """
    Setup logging to stderr and optionally to file.

    Args:
        log_path: Path to log file (None = stderr only)
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

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_path:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path)
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Run one adaptive strategy cycle over a candle window",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Evaluate and adapt the stored configuration
    python -m cli.run_cycle --candles data/candles.csv

    # Evaluate only, keep the stored configuration
    python -m cli.run_cycle --candles data/candles.csv --no-learn
        """
    )
    parser.add_argument(
        "--candles", "-c",
        required=True,
        help="CSV file of reconciled candles",
    )
    parser.add_argument(
        "--config-file",
        default="configs/strategy.yaml",
        help="Stored configuration (default: configs/strategy.yaml)",
    )
    parser.add_argument(
        "--window",
        type=int,
        default=CANDLE_WINDOW,
        help=f"Number of most recent candles to evaluate (default: {CANDLE_WINDOW})",
    )
    parser.add_argument(
        "--no-learn",
        action="store_true",
        help="Do not adopt the adapted configuration",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Adapt the configuration but do not save it",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        help="Also write logs to this file",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging (DEBUG level)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    setup_logging(Path(args.log_file) if args.log_file else None, args.verbose)
    logger = logging.getLogger(__name__)

    try:
        candles = load_candles(args.candles, limit=args.window)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"Error: invalid candle data: {e}", file=sys.stderr)
        return 1

    store = ConfigStore(args.config_file)
    runner = CycleRunner(
        config=store.load(),
        auto_learn=not args.no_learn,
        store=None if args.dry_run else store,
    )

    previous = runner.config
    logger.info(f"Running cycle over {len(candles)} candles with {previous}")
    runner.run_once(candles)

    print(format_metrics(runner.metrics))
    print()
    print("Configuration:")
    current, before_all = runner.config.to_dict(), previous.to_dict()
    for name in CONFIG_FIELDS:
        value, before = current[name], before_all[name]
        marker = "" if value == before else f"  (was {before})"
        print(f"  {name}: {value}{marker}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
