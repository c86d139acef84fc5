"""
Downloader

Fetches a single exam document and stores it under its category folder.
The main ideas:

- a transport failure (connection refused, timeout) is retried a fixed
  number of times with a fixed pause between attempts;
- a non-2xx answer is not retried: it is logged and the document skipped;
- the extension comes from the Content-Type header (`pdf`, `doc` or
  `unknown`), never from the URL;
- the body is written to a temporary file next to the target and then moved
  over it, so an interrupted run never leaves a half-written document under
  the final name.
"""

from __future__ import annotations

import os
import tempfile
import time
from pathlib import Path
from typing import Callable, Optional, Union

from cito_exams.core.errors import DownloadError, FetchError, LayoutError
from cito_exams.core.layout import sanitize_name
from cito_exams.core.log import get_pipeline_logger
from cito_exams.core.models import Category, DownloadedFile, DownloadTask
from cito_exams.core.scraping.detector import classify_content_type
from cito_exams.core.scraping.fetcher import Fetcher, FetchResponse


class Downloader:
    """Downloads one document per call and returns its metadata.

    - `Downloader().download_with_retry(url, folder, name)` stores the file
      and returns a `DownloadedFile`, or None when the server answered with
      an error status.
    - `fetcher` and `sleep` can be injected, so tests run without network and
      without actually waiting.
    """

    def __init__(
        self,
        fetcher: Fetcher | None = None,
        max_attempts: int = 3,
        retry_delay: float = 2.0,
        sleep: Callable[[float], None] = time.sleep,
    ):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.fetcher = fetcher or Fetcher()
        self.max_attempts = max_attempts
        self.retry_delay = retry_delay
        self.sleep = sleep

    def download(self, task: DownloadTask) -> Optional[DownloadedFile]:
        return self.download_with_retry(
            task.url, task.dest_folder, task.base_name, category=task.category
        )

    def download_with_retry(
        self,
        url: str,
        dest_folder: Union[str, Path],
        base_file_name: str,
        category: Optional[Category] = None,
    ) -> Optional[DownloadedFile]:
        """GET `url` up to `max_attempts` times and save the body.

        Raises `DownloadError` once every attempt failed at transport level.
        Between two attempts the downloader sleeps `retry_delay` seconds, so
        a download that never succeeds sleeps `max_attempts - 1` times.
        """
        attempt = 0
        while True:
            attempt += 1
            try:
                resp = self.fetcher.fetch(url)
                break
            except FetchError as exc:
                if attempt >= self.max_attempts:
                    raise DownloadError(
                        f"Giving up on {url} after {attempt} attempts: {exc}",
                        url=url,
                        attempts=attempt,
                    ) from exc
                get_pipeline_logger(__name__).warning("Retry %d for %s", attempt, url)
                self.sleep(self.retry_delay)

        if not resp.ok:
            get_pipeline_logger(__name__).warning(
                "Failed to download: %s (Status: %s)", url, resp.status_code
            )
            return None

        return self._save(resp, Path(dest_folder), base_file_name, category)

    def _save(
        self,
        resp: FetchResponse,
        dest_folder: Path,
        base_file_name: str,
        category: Optional[Category],
    ) -> DownloadedFile:
        kind = classify_content_type(resp.content_type)
        out_path = dest_folder / f"{sanitize_name(base_file_name)}.{kind.value}"

        # write next to the target, then swap it in
        tmp_name = None
        try:
            with tempfile.NamedTemporaryFile(
                dir=dest_folder, prefix=".part-", delete=False
            ) as fh:
                tmp_name = fh.name
                fh.write(resp.content)
            os.replace(tmp_name, out_path)
        except OSError as exc:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise LayoutError(
                f"Failed to write {out_path}: {exc}", path=out_path
            ) from exc

        get_pipeline_logger(__name__).info("Downloaded: %s", out_path)
        return DownloadedFile(
            path=out_path,
            url=resp.url,
            kind=kind,
            size=len(resp.content),
            status_code=resp.status_code,
            category=category,
        )
