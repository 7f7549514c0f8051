"""Breach Log Analyzer - Command line interface"""

import argparse
import json
import logging
import os
import sys

from rich.console import Console
from rich.logging import RichHandler

from .analyzer import LogAnalyzer
from .config import DetectionPolicy
from .exceptions import AnalyzerError
from .output import format_file_size, print_error, print_report
from .patterns import (
    ERROR_MESSAGE,
    MAX_MEAN_INTERVAL_MS,
    MIN_INTERVALS,
    REGULARITY_RATIO_THRESHOLD,
    SIMILARITY_WINDOW_MS,
    VERSION,
)

logger = logging.getLogger(__name__)

EXIT_SAFE = 0
EXIT_ERROR = 1
EXIT_BREACH = 3


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="breachlog",
        description="Breach Log Analyzer - flag external IPs and scripted user activity in block logs",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    parser.add_argument("logfile", help="Log file to analyze")
    parser.add_argument("-o", "--output", help="Output file (JSON)")
    parser.add_argument("-j", "--json", action="store_true", help="JSON output only")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("--similarity-window", type=float, default=SIMILARITY_WINDOW_MS,
                        metavar="MS", help="Max distance from the mean for a similar interval")
    parser.add_argument("--regularity-ratio", type=float, default=REGULARITY_RATIO_THRESHOLD,
                        metavar="RATIO", help="Share of similar intervals that must be exceeded")
    parser.add_argument("--max-mean-interval", type=float, default=MAX_MEAN_INTERVAL_MS,
                        metavar="MS", help="Mean interval must be below this to be suspicious")
    parser.add_argument("--min-intervals", type=int, default=MIN_INTERVALS,
                        metavar="N", help="Regularity is checked only with more intervals than this")
    parser.add_argument("--version", action="version", version=f"BreachLog v{VERSION}")
    return parser


def setup_logging(verbose: bool, console: Console):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True
    )


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    console = Console(stderr=args.json)
    setup_logging(args.verbose, Console(stderr=True))

    try:
        policy = DetectionPolicy(
            similarity_window_ms=args.similarity_window,
            regularity_ratio=args.regularity_ratio,
            max_mean_interval_ms=args.max_mean_interval,
            min_intervals=args.min_intervals
        )
    except ValueError as e:
        parser.error(str(e))

    analyzer = LogAnalyzer(policy=policy, console=None if args.json else console)

    if not args.json and os.path.isfile(args.logfile):
        size = os.path.getsize(args.logfile)
        console.print(f"Selected: [bold]{os.path.basename(args.logfile)}[/] ({format_file_size(size)})")

    try:
        result = analyzer.analyze_file(args.logfile)
    except AnalyzerError as e:
        logger.error("%s", e)
        print_error(ERROR_MESSAGE, console)
        return EXIT_ERROR

    report = result.to_dict()
    if args.output:
        try:
            with open(args.output, 'w') as f:
                json.dump(report, f, indent=2)
        except OSError as e:
            logger.error("Cannot write report to %s: %s", args.output, e)
            print_error(f"Could not save report to {args.output}", console)
            return EXIT_ERROR

    if args.json:
        print(json.dumps(report, indent=2))
    else:
        print_report(result, console)
        if args.output:
            console.print(f"\n[green]Report saved to:[/] {args.output}")

    return EXIT_BREACH if result.is_breach else EXIT_SAFE


if __name__ == "__main__":
    sys.exit(main())
