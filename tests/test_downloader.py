import pytest

from cito_exams.core.errors import DownloadError, FetchError
from cito_exams.core.models import Category, DownloadTask, FileKind
from cito_exams.core.scraping.downloader import Downloader

URL = "https://www2.cito.nl/vo/ce/ex2023_havovwo/wia/opg.pdf"


def test_succeeds_on_third_attempt_after_two_sleeps(
    tmp_path, scripted_fetcher, make_response, sleeps
):
    fetcher = scripted_fetcher(
        {
            URL: [
                FetchError("reset", url=URL),
                FetchError("timeout", url=URL),
                make_response(url=URL),
            ]
        }
    )
    d = Downloader(fetcher, max_attempts=3, retry_delay=2.0, sleep=sleeps)

    saved = d.download_with_retry(URL, tmp_path, "opg.pdf")

    assert saved is not None
    assert saved.path == tmp_path / "opg_pdf.pdf"
    assert saved.path.read_bytes() == b"%PDF-1.4 test"
    assert saved.kind is FileKind.PDF
    assert saved.size == len(b"%PDF-1.4 test")
    assert fetcher.calls == [URL, URL, URL]
    assert sleeps.calls == [2.0, 2.0]


def test_gives_up_after_three_attempts(tmp_path, scripted_fetcher, sleeps):
    fetcher = scripted_fetcher({URL: FetchError("down", url=URL)})
    d = Downloader(fetcher, sleep=sleeps)

    with pytest.raises(DownloadError) as info:
        d.download_with_retry(URL, tmp_path, "opg.pdf")

    assert info.value.attempts == 3
    assert info.value.url == URL
    assert isinstance(info.value.__cause__, FetchError)
    assert len(fetcher.calls) == 3
    assert sleeps.calls == [2.0, 2.0]
    assert list(tmp_path.iterdir()) == []


def test_single_attempt_never_sleeps(tmp_path, scripted_fetcher, sleeps):
    fetcher = scripted_fetcher({URL: FetchError("down", url=URL)})
    d = Downloader(fetcher, max_attempts=1, sleep=sleeps)
    with pytest.raises(DownloadError):
        d.download_with_retry(URL, tmp_path, "opg.pdf")
    assert sleeps.calls == []


def test_error_status_is_a_soft_failure(
    tmp_path, scripted_fetcher, make_response, sleeps, caplog
):
    fetcher = scripted_fetcher({URL: make_response(url=URL, status_code=404)})
    d = Downloader(fetcher, sleep=sleeps)

    with caplog.at_level("INFO", logger="cito_exams"):
        assert d.download_with_retry(URL, tmp_path, "opg.pdf") is None

    assert fetcher.calls == [URL]
    assert sleeps.calls == []
    assert list(tmp_path.iterdir()) == []
    assert f"Failed to download: {URL} (Status: 404)" in caplog.text


@pytest.mark.parametrize(
    "content_type, expected_name",
    [
        ("application/msword", "cv_doc.doc"),
        (None, "cv_doc.unknown"),
    ],
)
def test_extension_comes_from_content_type(
    tmp_path, scripted_fetcher, make_response, content_type, expected_name
):
    fetcher = scripted_fetcher({URL: make_response(url=URL, content_type=content_type)})
    saved = Downloader(fetcher).download_with_retry(URL, tmp_path, "cv.doc")
    assert saved.path.name == expected_name


def test_existing_file_is_replaced_without_leftovers(
    tmp_path, scripted_fetcher, make_response
):
    (tmp_path / "opg_pdf.pdf").write_bytes(b"old")
    fetcher = scripted_fetcher({URL: make_response(url=URL, content=b"new")})

    Downloader(fetcher).download_with_retry(URL, tmp_path, "opg.pdf")

    assert (tmp_path / "opg_pdf.pdf").read_bytes() == b"new"
    assert [p.name for p in tmp_path.iterdir()] == ["opg_pdf.pdf"]


def test_download_task_carries_category(tmp_path, scripted_fetcher, make_response):
    fetcher = scripted_fetcher({URL: make_response(url=URL)})
    task = DownloadTask(
        url=URL, dest_folder=tmp_path, category=Category.CV, base_name="opg.pdf"
    )
    saved = Downloader(fetcher).download(task)
    assert saved.category is Category.CV
    assert saved.url == URL


def test_max_attempts_must_be_positive():
    with pytest.raises(ValueError):
        Downloader(max_attempts=0)
