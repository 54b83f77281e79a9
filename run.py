"""Entry point for the Cache Policy Simulator.

Usage:
    python run.py                      # demo sequence through LRU, FIFO and LFU
    python run.py --policy LFU --capacity 3 --sequence "A,B,A,C,D"
    python run.py --interactive        # type keys one per line, then RUN
"""
import argparse
import sys

import structlog

from src.config import get_settings, split_keys
from src.data.stats_export import export_hit_rate_chart, export_stats_csv, export_stats_json
from src.logging_config import configure_logging
from src.simulation import Simulation, format_hit_rate
from src.simulation.console_input import read_access_sequence, read_capacity


def build_parser(settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Compare cache replacement policies on one access sequence')
    parser.add_argument('--capacity', type=int, default=settings.capacity, help='Cache capacity in keys')
    parser.add_argument('--policy', action='append', dest='policies',
                        help='Policy to run (LRU, FIFO, LFU); repeat for several')
    parser.add_argument('--sequence', type=str, default=None, help='Comma-separated access sequence')
    parser.add_argument('--interactive', action='store_true', help='Read capacity and keys from stdin')
    parser.add_argument('--export-json', type=str, default=None, help='Write stats and hit-rate history as JSON')
    parser.add_argument('--export-csv', type=str, default=None, help='Write stats as CSV')
    parser.add_argument('--chart', type=str, default=None, help='Save a hit-rate chart (pdf/png)')
    parser.add_argument('--log-level', type=str, default=settings.log_level, help='Logging level')
    parser.add_argument('--json-logs', action=argparse.BooleanOptionalAction, default=settings.json_logs,
                        help='Emit JSON logs (--no-json-logs for console output)')
    parser.add_argument('--quiet', action='store_true', help='Skip the per-step trace')
    return parser


def main(argv=None) -> int:
    settings = get_settings()
    args = build_parser(settings).parse_args(argv)
    configure_logging(args.log_level, args.json_logs)
    logger = structlog.get_logger('run')

    capacity = args.capacity
    if args.interactive:
        capacity = read_capacity(default=capacity)
        print("\nEnter your memory accesses one by one (e.g., A, B, C).")
        print("Type 'RUN' when you are finished:")
        keys = read_access_sequence()
        if not keys:
            logger.info("no_accesses_provided")
            return 0
    elif args.sequence is not None:
        keys = split_keys(args.sequence)
    else:
        keys = settings.demo_sequence_list

    policies = args.policies or settings.policies_list
    results = Simulation(capacity, policies, trace=not args.quiet).run_simulation(keys)

    for name, result in results.items():
        print(f"{name:<5} hits={result.stats.hits:<3} misses={result.stats.misses:<3} "
              f"hit rate={format_hit_rate(result.stats.hit_rate)}")

    stats = {name: result.stats for name, result in results.items()}
    history = {name: result.hit_rate_history for name, result in results.items()}
    try:
        if args.export_json:
            export_stats_json(args.export_json, stats, history)
        if args.export_csv:
            export_stats_csv(args.export_csv, stats)
        if args.chart:
            export_hit_rate_chart(args.chart, history)
    except OSError as exc:
        logger.error("export_failed", error=str(exc))
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
