from __future__ import annotations

import logging
import sys

from vacancystats.cli.handlers import handle_config_validate, handle_run, handle_stats
from vacancystats.cli.parser import build_parser
from vacancystats.errors import (
    ConfigValidationError,
    ShardProcessingError,
    VacancyStatsError,
)

_EXIT_CONFIG = 2
_EXIT_SHARD = 4
_EXIT_GENERIC = 1


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        if args.command == "stats":
            return handle_stats(args)
        if args.command == "run":
            return handle_run(args)
        if args.command == "config" and args.config_command == "validate":
            return handle_config_validate(args)
    except ConfigValidationError as exc:
        print(str(exc), file=sys.stderr)
        return _EXIT_CONFIG
    except ShardProcessingError as exc:
        print(str(exc), file=sys.stderr)
        return _EXIT_SHARD
    except VacancyStatsError as exc:
        print(str(exc), file=sys.stderr)
        return _EXIT_GENERIC

    parser.error("unhandled command")
    return _EXIT_GENERIC


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
