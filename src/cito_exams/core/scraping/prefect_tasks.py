"""Prefect tasks wrapping the period orchestrator.

The listing fetch and the processing of one period each run as a task so
they show up (with their logs) in the flow run. Neither task is retried by
Prefect: a missing listing is reported, not retried, and document retries
belong to the `Downloader` (fixed attempts, fixed pause).
"""

from __future__ import annotations

from prefect import task
from prefect.cache_policies import NO_CACHE

from cito_exams.core.log import get_pipeline_logger
from cito_exams.core.models import PeriodReport
from cito_exams.core.pipeline import PeriodProcessor
from cito_exams.core.scraping.fetcher import FetchResponse


@task(name="fetch_listing", retries=0, cache_policy=NO_CACHE)
def fetch_listing_task(processor: PeriodProcessor, period: str) -> FetchResponse:
    logger = get_pipeline_logger(__name__)
    url = processor.config.listing_url(period)
    logger.info("Fetching listing: %s", url)
    resp = processor.fetch_listing(period)
    logger.info("Fetched %s (status=%s)", url, resp.status_code)
    return resp


@task(name="process_period", retries=0, cache_policy=NO_CACHE)
def process_listing_task(
    processor: PeriodProcessor, period: str, listing: FetchResponse
) -> PeriodReport:
    logger = get_pipeline_logger(__name__)
    report = processor.process_listing(period, listing)
    logger.info(
        "Period %s: %d exam(s), %d file(s) saved, %d skipped, %d failed",
        period,
        len(report.exams),
        len(report.downloaded),
        len(report.skipped),
        len(report.failed),
    )
    return report
