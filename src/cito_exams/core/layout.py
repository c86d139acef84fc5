"""Local directory layout for downloaded documents.

    downloads/<year>/<period>/<exam name>/<category>/<file>.<ext>

Every directory is created on demand, parents included.
"""

from __future__ import annotations

from pathlib import Path
from typing import Union

from cito_exams.core.errors import LayoutError
from cito_exams.core.models import Category


def sanitize_name(name: str) -> str:
    """Replace every character that is neither alphanumeric nor a space by `_`.

    The result has the same length as the input. Two names can sanitize to
    the same value; the later download then replaces the earlier one.
    """
    return "".join(c if c.isalnum() or c == " " else "_" for c in name)


def ensure_dir(path: Union[str, Path]) -> Path:
    """Create `path` and any missing parents; existing directories are fine."""
    p = Path(path)
    try:
        p.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise LayoutError(f"Failed to create directory {p}: {exc}", path=p) from exc
    return p


class DownloadLayout:
    """Computes and materializes the nested output folders."""

    def __init__(self, root: Union[str, Path] = "downloads"):
        self.root = Path(root)

    def period_dir(self, year: int, period: str) -> Path:
        return ensure_dir(self.root / str(year) / period)

    def exam_dir(self, year: int, period: str, exam_name: str) -> Path:
        return ensure_dir(self.period_dir(year, period) / sanitize_name(exam_name))

    def category_dir(self, exam_dir: Path, category: Category) -> Path:
        return ensure_dir(exam_dir / category.value)
