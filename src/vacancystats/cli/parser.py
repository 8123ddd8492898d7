from __future__ import annotations

import argparse

from vacancystats.driver import DEFAULT_WORKERS
from vacancystats.io.shards import DEFAULT_SHARD_PATTERN
from vacancystats.io.writers import OUTPUT_FORMATS
from vacancystats.schema import STATISTIC_FIELDS


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="vacancystats")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    sub = parser.add_subparsers(dest="command", required=True)

    stats_parser = sub.add_parser(
        "stats",
        help="Compute statistics for one field over a JSON file or directory",
    )
    stats_parser.add_argument("--input", dest="input_path", required=True)
    # Validated downstream so unknown fields map to the config-error exit code.
    stats_parser.add_argument(
        "--field",
        required=True,
        help="One of: " + ", ".join(STATISTIC_FIELDS),
    )
    stats_parser.add_argument("--workers", type=int, default=DEFAULT_WORKERS)
    stats_parser.add_argument("--pattern", default=DEFAULT_SHARD_PATTERN)
    stats_parser.add_argument("--output", dest="output_path", default=None)
    stats_parser.add_argument("--format", dest="output_format", default=None, choices=OUTPUT_FORMATS)
    stats_parser.add_argument("--fail-fast", action="store_true")

    run_parser = sub.add_parser("run", help="Compute statistics from a TOML config")
    run_parser.add_argument("--config", required=True)

    config_parser = sub.add_parser("config", help="Stats config operations")
    config_sub = config_parser.add_subparsers(dest="config_command", required=True)
    config_validate = config_sub.add_parser("validate", help="Validate stats config")
    config_validate.add_argument("--config", required=True)

    return parser
