"""Scraping primitives used by the period orchestrator.

Small building blocks: Fetcher, Listing parser, URL helpers, Content-Type
classifier and the retrying Downloader.
"""

from .detector import classify_content_type
from .downloader import Downloader
from .fetcher import Fetcher, FetchResponse
from .normalizer import filename_from_url, resolve_url
from .parser import parse_listing

__all__ = [
    "Fetcher",
    "FetchResponse",
    "classify_content_type",
    "parse_listing",
    "resolve_url",
    "filename_from_url",
    "Downloader",
]
