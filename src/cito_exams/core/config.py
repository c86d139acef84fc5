from typing import Dict, List

from pydantic import BaseModel, Field, field_validator

from cito_exams.core.models import DEFAULT_COLUMNS, PERIODS, Category, ExamPeriod

DEFAULT_LISTING_URL_TEMPLATE = (
    "https://www2.cito.nl/vo/ce/ex{year}_havovwo/vwo-tv{period}.htm"
)
DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; CitoExamDownloader/1.0)"


class DownloaderConfig(BaseModel):
    """
    Configuration contract for one downloader run.
    Everything needed to crawl the listing pages of one exam year.
    """

    year: int = Field(ge=0)
    period: str = Field(default="all", pattern="^(1|2|3|4|all)$")

    # Origin
    listing_url_template: str = DEFAULT_LISTING_URL_TEMPLATE
    user_agent: str = DEFAULT_USER_AGENT
    timeout: float = Field(default=30.0, gt=0)

    # Destination
    download_root: str = "downloads"

    # Download behaviour
    max_attempts: int = Field(default=3, ge=1)
    retry_delay_seconds: float = Field(default=2.0, ge=0)
    abort_on_download_error: bool = False

    # Table column (1-based) -> document category
    columns: Dict[int, Category] = Field(
        default_factory=lambda: dict(DEFAULT_COLUMNS)
    )

    @property
    def periods(self) -> List[str]:
        """Periods to process, in order."""
        if self.period == "all":
            return list(PERIODS)
        return [self.period]

    def listing_url(self, period: str) -> str:
        return ExamPeriod(year=self.year, period=period).listing_url(
            self.listing_url_template
        )

    @field_validator("listing_url_template")
    def template_must_have_placeholders(cls, v):
        if "{year}" not in v or "{period}" not in v:
            raise ValueError("listing_url_template needs {year} and {period}")
        return v

    @field_validator("columns")
    def columns_must_be_positive(cls, v):
        if not v:
            raise ValueError("at least one column mapping is required")
        if any(idx < 1 for idx in v):
            raise ValueError("column indexes start at 1")
        return v
