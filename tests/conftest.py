from typing import Dict, List, Optional, Union

import pytest

from cito_exams.core.scraping.fetcher import FetchResponse

Outcome = Union[FetchResponse, Exception]


class ScriptedFetcher:
    """Fetcher double: every URL answers with a scripted list of outcomes.

    An outcome is either a `FetchResponse` or an exception to raise. The last
    outcome of a list is repeated once the list is exhausted.
    """

    def __init__(self, script: Dict[str, Union[Outcome, List[Outcome]]]):
        self.script = {
            url: list(v) if isinstance(v, list) else [v] for url, v in script.items()
        }
        self.calls: List[str] = []

    def fetch(self, url: str) -> FetchResponse:
        self.calls.append(url)
        outcomes = self.script[url]
        outcome = outcomes.pop(0) if len(outcomes) > 1 else outcomes[0]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def _make_response(
    url: str = "https://example.org/file.pdf",
    status_code: int = 200,
    content: bytes = b"%PDF-1.4 test",
    content_type: Optional[str] = "application/pdf",
    encoding: Optional[str] = None,
) -> FetchResponse:
    headers = {"content-type": content_type} if content_type else {}
    return FetchResponse(
        url=url,
        status_code=status_code,
        headers=headers,
        content=content,
        encoding=encoding,
    )


@pytest.fixture
def make_response():
    return _make_response


@pytest.fixture
def scripted_fetcher():
    return ScriptedFetcher


class SleepRecorder:
    def __init__(self):
        self.calls: List[float] = []

    def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


@pytest.fixture
def sleeps():
    return SleepRecorder()


@pytest.fixture
def plain_flow(monkeypatch):
    """`run_periods` without a Prefect run: the flow body with its tasks called directly."""
    from cito_exams.flows import exam_download

    monkeypatch.setattr(
        exam_download, "fetch_listing_task", exam_download.fetch_listing_task.fn
    )
    monkeypatch.setattr(
        exam_download, "process_listing_task", exam_download.process_listing_task.fn
    )
    return exam_download.run_periods.fn
