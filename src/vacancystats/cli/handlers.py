from __future__ import annotations

import argparse
import json

from vacancystats.config import load_stats_config
from vacancystats.runtime import VacancyStatsRuntime

_EXIT_OK = 0


def handle_stats(args: argparse.Namespace) -> int:
    runtime = VacancyStatsRuntime.from_options(
        args.input_path,
        args.field,
        workers=args.workers,
        pattern=args.pattern,
        output_path=args.output_path,
        output_format=args.output_format,
        fail_fast=args.fail_fast,
    )
    result = runtime.run()
    print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
    return _EXIT_OK


def handle_run(args: argparse.Namespace) -> int:
    runtime = VacancyStatsRuntime.from_config(args.config)
    result = runtime.run()
    print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
    return _EXIT_OK


def handle_config_validate(args: argparse.Namespace) -> int:
    cfg = load_stats_config(args.config)
    print(json.dumps(cfg.model_dump(mode="json"), indent=2, sort_keys=True))
    return _EXIT_OK
