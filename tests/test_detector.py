import pytest

from cito_exams.core.models import FileKind
from cito_exams.core.scraping.detector import classify_content_type


@pytest.mark.parametrize(
    "content_type, expected",
    [
        ("application/pdf", FileKind.PDF),
        ("application/PDF; charset=binary", FileKind.PDF),
        ("application/x-pdf", FileKind.PDF),
        ("application/msword", FileKind.DOC),
        (
            "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
            FileKind.DOC,
        ),
        ("text/html; charset=utf-8", FileKind.UNKNOWN),
        ("application/octet-stream", FileKind.UNKNOWN),
        ("", FileKind.UNKNOWN),
        (None, FileKind.UNKNOWN),
    ],
)
def test_classify_content_type(content_type, expected):
    assert classify_content_type(content_type) is expected


def test_file_kind_value_is_extension():
    assert [k.value for k in FileKind] == ["pdf", "doc", "unknown"]
