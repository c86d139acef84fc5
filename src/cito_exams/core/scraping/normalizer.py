"""URL helpers: resolve listing hrefs and derive file names.
"""

from __future__ import annotations

from pathlib import PurePosixPath
from urllib.parse import urldefrag, urljoin, urlparse

from cito_exams.core.errors import UrlError

ALLOWED_SCHEMES = {"http", "https"}


def resolve_url(base_url: str, href: str) -> str:
    """Resolve a possibly relative `href` against the listing page URL.

    Relative paths, absolute paths and full URLs are all accepted; the
    fragment is dropped. Raises `UrlError` when the base is not absolute or
    the result is not an http(s) URL with a host.
    """
    try:
        base = urlparse(base_url)
        if base.scheme not in ALLOWED_SCHEMES or not base.netloc:
            raise UrlError(f"Base URL is not absolute: {base_url!r}", base_url, href)
        full, _ = urldefrag(urljoin(base_url, href.strip()))
        p = urlparse(full)
        # accessing .port validates it
        p.port
    except ValueError as exc:
        raise UrlError(
            f"Cannot resolve {href!r} against {base_url!r}: {exc}", base_url, href
        ) from exc

    if p.scheme not in ALLOWED_SCHEMES or not p.netloc:
        raise UrlError(f"Not a downloadable URL: {full!r}", base_url, href)
    return full


def filename_from_url(url: str) -> str:
    """Last non-empty path segment of `url`, or ``"unknown"``.

    - https://host/a/b/report.pdf -> 'report.pdf'
    - https://host/ -> 'unknown'
    """
    segments = [s for s in PurePosixPath(urlparse(url).path).parts if s != "/"]
    return segments[-1] if segments else "unknown"
