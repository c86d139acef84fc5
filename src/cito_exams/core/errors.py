"""Exception hierarchy for the exam downloader.

Every failure raised by the core derives from `ExamDownloaderError` so the
run driver can turn a failed period into a log line without catching
unrelated exceptions.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class ExamDownloaderError(Exception):
    """Base exception for the exam downloader."""


class FetchError(ExamDownloaderError):
    """Network, timeout or transport failure on a GET."""

    def __init__(self, message: str, url: Optional[str] = None):
        super().__init__(message)
        self.url = url


class UrlError(ExamDownloaderError):
    """Malformed base URL or href."""

    def __init__(self, message: str, base: Optional[str] = None, href: Optional[str] = None):
        super().__init__(message)
        self.base = base
        self.href = href


class DownloadError(ExamDownloaderError):
    """A document could not be fetched after all attempts."""

    def __init__(self, message: str, url: str, attempts: int):
        super().__init__(message)
        self.url = url
        self.attempts = attempts


class LayoutError(ExamDownloaderError):
    """Directory creation or file write failure."""

    def __init__(self, message: str, path: Optional[Path] = None):
        super().__init__(message)
        self.path = path


class PeriodError(ExamDownloaderError):
    """Processing of one exam period failed."""

    def __init__(self, message: str, year: int, period: str):
        super().__init__(message)
        self.year = year
        self.period = period
