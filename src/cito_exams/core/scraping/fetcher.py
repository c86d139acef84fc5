"""HTTP fetcher with a hard overall timeout and no transport retries.

Provides a small `Fetcher` object exposing `fetch`. Retrying is left to the
caller (see `Downloader`).
"""

from __future__ import annotations

import random
import time
from dataclasses import dataclass
from typing import Dict, Mapping, Optional

import requests
from requests.adapters import HTTPAdapter
from requests.structures import CaseInsensitiveDict
from urllib3.util.retry import Retry

from cito_exams.core.config import DEFAULT_USER_AGENT
from cito_exams.core.errors import FetchError

DEFAULT_UA_POOL = [DEFAULT_USER_AGENT]


@dataclass
class FetchResponse:
    """Fully read HTTP response."""

    url: str
    status_code: int
    headers: Mapping[str, str]
    content: bytes
    encoding: Optional[str] = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def content_type(self) -> Optional[str]:
        return self.headers.get("content-type")

    @property
    def text(self) -> str:
        try:
            return self.content.decode(self.encoding or "utf-8", errors="replace")
        except LookupError:
            # unknown charset declared by the server
            return self.content.decode("utf-8", errors="replace")


class Fetcher:
    """Small HTTP client shared by every request of a run.

    Usage:
        f = Fetcher(timeout=30)
        resp = f.fetch(url)

    `timeout` bounds connecting and reading the whole body together.
    Status codes are returned as-is; only transport failures raise.
    """

    def __init__(
        self,
        timeout: float = 30.0,
        ua_pool: Optional[list[str]] = None,
        session: Optional[requests.Session] = None,
        chunk_size: int = 8192,
    ) -> None:
        self.timeout = timeout
        self.chunk_size = chunk_size
        self.session = session or requests.Session()
        adapter = HTTPAdapter(max_retries=Retry(total=0, raise_on_status=False))
        self.session.mount("https://", adapter)
        self.session.mount("http://", adapter)
        self.ua_pool = ua_pool or DEFAULT_UA_POOL

    def _headers(self, headers: Optional[Dict[str, str]] = None) -> Dict[str, str]:
        base = {"User-Agent": random.choice(self.ua_pool)}
        if headers:
            base.update(headers)
        return base

    def fetch(self, url: str, headers: Optional[Dict[str, str]] = None) -> FetchResponse:
        deadline = time.monotonic() + self.timeout
        try:
            resp = self.session.get(
                url,
                headers=self._headers(headers),
                timeout=self.timeout,
                stream=True,
            )
            with resp as r:
                chunks = []
                for chunk in r.iter_content(chunk_size=self.chunk_size):
                    if time.monotonic() > deadline:
                        raise FetchError(
                            f"Timed out after {self.timeout}s reading {url}", url=url
                        )
                    if chunk:
                        chunks.append(chunk)
                return FetchResponse(
                    url=url,
                    status_code=r.status_code,
                    headers=CaseInsensitiveDict(r.headers),
                    content=b"".join(chunks),
                    encoding=r.encoding,
                )
        except requests.RequestException as exc:
            raise FetchError(f"GET {url} failed: {exc}", url=url) from exc
