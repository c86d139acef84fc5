"""
Exam download flow

Runs the period orchestrator for every requested period of one exam year.

1. Validates the configuration (year, period, destination, retry policy).
2. Processes the periods one after the other, never concurrently: one task
   fetches the listing, one task parses it and downloads the documents.
3. A period whose listing cannot be reached, or that fails on a bad link or
   a disk error, becomes a log line; the remaining periods still run.
4. Always ends with "All periods processed." and returns one report (or
   None for a failed period) per period.
"""

from __future__ import annotations

from typing import Dict, Optional, Union

from prefect import flow
from pydantic import ValidationError

from cito_exams.core.config import DownloaderConfig
from cito_exams.core.errors import PeriodError
from cito_exams.core.log import get_pipeline_logger
from cito_exams.core.models import PeriodReport
from cito_exams.core.pipeline import PeriodProcessor
from cito_exams.core.scraping.prefect_tasks import (
    fetch_listing_task,
    process_listing_task,
)


@flow(name="CITO Exam Download", log_prints=True, validate_parameters=False)
def run_periods(
    config: Union[DownloaderConfig, dict],
    processor: Optional[PeriodProcessor] = None,
) -> Dict[str, Optional[PeriodReport]]:
    """Process every period selected by `config`.

    config: a `DownloaderConfig` or a dict that validates into one.
    """
    logger = get_pipeline_logger(__name__)

    if not isinstance(config, DownloaderConfig):
        try:
            config = DownloaderConfig(**config)
        except ValidationError as e:
            logger.error("Invalid config: %s", e)
            raise

    processor = processor or PeriodProcessor(config)
    results: Dict[str, Optional[PeriodReport]] = {}

    for period in config.periods:
        try:
            listing = fetch_listing_task(processor, period)
            report = process_listing_task(processor, period, listing)
        except PeriodError as exc:
            logger.info(
                "Period %s not found for year %s: %s", period, config.year, exc
            )
            results[period] = None
            continue

        logger.info("Period %s processed successfully.", period)
        if report.failed:
            logger.warning(
                "Period %s: %d document(s) could not be downloaded",
                period,
                len(report.failed),
            )
        results[period] = report

    logger.info("All periods processed.")
    return results


def summarize(results: Dict[str, Optional[PeriodReport]]) -> Dict[str, Optional[int]]:
    """Number of files written per period (None for a failed period)."""
    return {
        period: (len(report.downloaded) if report is not None else None)
        for period, report in results.items()
    }
