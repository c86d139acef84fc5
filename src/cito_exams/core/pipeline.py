"""Period orchestrator: one listing page in, a tree of documents out.

fetch listing -> parse rows -> per exam and category: resolve each link and
hand it to the downloader.
"""

from __future__ import annotations

from typing import Optional

from cito_exams.core.config import DownloaderConfig
from cito_exams.core.errors import (
    DownloadError,
    FetchError,
    LayoutError,
    PeriodError,
    UrlError,
)
from cito_exams.core.layout import DownloadLayout
from cito_exams.core.log import get_pipeline_logger
from cito_exams.core.models import DownloadTask, ExamRow, PeriodReport
from cito_exams.core.scraping.downloader import Downloader
from cito_exams.core.scraping.fetcher import Fetcher, FetchResponse
from cito_exams.core.scraping.normalizer import filename_from_url, resolve_url
from cito_exams.core.scraping.parser import parse_listing


class PeriodProcessor:
    """Drives one exam period end to end.

    The fetcher (and its HTTP session) is shared by the listing request and
    every document download of the run.
    """

    def __init__(
        self,
        config: DownloaderConfig,
        fetcher: Optional[Fetcher] = None,
        downloader: Optional[Downloader] = None,
    ):
        self.config = config
        self.fetcher = fetcher or Fetcher(
            timeout=config.timeout, ua_pool=[config.user_agent]
        )
        self.downloader = downloader or Downloader(
            self.fetcher,
            max_attempts=config.max_attempts,
            retry_delay=config.retry_delay_seconds,
        )
        self.layout = DownloadLayout(config.download_root)

    def process(self, period: str) -> PeriodReport:
        """Process `period` of the configured year.

        Raises `PeriodError` when the listing is unreachable or when a URL or
        filesystem error makes the rest of the period pointless.
        """
        return self.process_listing(period, self.fetch_listing(period))

    def fetch_listing(self, period: str) -> FetchResponse:
        """GET the listing page of `period`.

        An error status is not fatal: the body is still parsed, it just
        usually holds no exam rows.
        """
        listing_url = self.config.listing_url(period)
        try:
            resp = self.fetcher.fetch(listing_url)
        except FetchError as exc:
            raise PeriodError(
                str(exc), year=self.config.year, period=period
            ) from exc
        if not resp.ok:
            get_pipeline_logger(__name__).warning(
                "Listing %s answered HTTP %s", listing_url, resp.status_code
            )
        return resp

    def process_listing(self, period: str, listing: FetchResponse) -> PeriodReport:
        """Download every document linked from an already fetched listing."""
        year = self.config.year
        listing_url = self.config.listing_url(period)
        report = PeriodReport(year=year, period=period, listing_url=listing_url)

        try:
            self.layout.period_dir(year, period)
            for row in parse_listing(listing.text, self.config.columns):
                get_pipeline_logger(__name__).info("Processing exam: %s", row.name)
                report.exams.append(row.name)
                self._process_exam(row, period, listing_url, report)
        except (UrlError, LayoutError, DownloadError) as exc:
            raise PeriodError(str(exc), year=year, period=period) from exc

        return report

    def _process_exam(
        self, row: ExamRow, period: str, listing_url: str, report: PeriodReport
    ) -> None:
        exam_dir = self.layout.exam_dir(self.config.year, period, row.name)
        categories = dict.fromkeys(c for _, c in sorted(self.config.columns.items()))
        for category in categories:
            category_dir = self.layout.category_dir(exam_dir, category)
            for href in row.links_for(category):
                url = resolve_url(listing_url, href)
                task = DownloadTask(
                    url=url,
                    dest_folder=category_dir,
                    category=category,
                    base_name=filename_from_url(url),
                )
                self._run_task(task, report)

    def _run_task(self, task: DownloadTask, report: PeriodReport) -> None:
        try:
            saved = self.downloader.download(task)
        except DownloadError as exc:
            if self.config.abort_on_download_error:
                raise
            get_pipeline_logger(__name__).error("Skipping %s: %s", task.url, exc)
            report.failed.append(task.url)
            return

        if saved is None:
            report.skipped.append(task.url)
        else:
            report.downloaded.append(saved)
