"""Command line entry point.

Usage:
    cito-exams --year 2023                 # all four periods
    cito-exams --year 2023 --period 2      # only period 2
    cito-exams --year 2023 --output-dir my_exams
"""

from __future__ import annotations

import argparse
from typing import Iterable, Optional

from pydantic import ValidationError

from cito_exams.core.config import DownloaderConfig
from cito_exams.core.log import LOG_LEVELS, get_pipeline_logger, set_log_level
from cito_exams.flows.exam_download import run_periods, summarize


def parse_args(argv: Optional[Iterable[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Download CITO VWO exam documents for one year."
    )
    parser.add_argument(
        "--year", "-y", type=int, required=True, help="Exam year, e.g. 2023."
    )
    parser.add_argument(
        "--period",
        "-p",
        default="all",
        choices=["1", "2", "3", "4", "all"],
        help="Exam period (tijdvak) to download (default: all).",
    )
    parser.add_argument(
        "--output-dir",
        "-o",
        default="downloads",
        help="Root folder for the downloaded tree (default: downloads).",
    )
    parser.add_argument(
        "--timeout", type=float, default=30.0, help="Per-request timeout in seconds."
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        type=str.upper,
        choices=LOG_LEVELS,
        help="Logging level (default: INFO).",
    )
    return parser.parse_args(list(argv) if argv is not None else None)


def main(argv: Optional[Iterable[str]] = None) -> int:
    args = parse_args(argv)
    set_log_level(args.log_level)
    logger = get_pipeline_logger(__name__)

    try:
        config = DownloaderConfig(
            year=args.year,
            period=args.period,
            download_root=args.output_dir,
            timeout=args.timeout,
        )
    except ValidationError as exc:
        logger.error("Invalid arguments: %s", exc)
        return 2

    results = run_periods(config)
    for period, count in summarize(results).items():
        logger.debug("Period %s: %s file(s)", period, "-" if count is None else count)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
