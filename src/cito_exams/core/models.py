"""Data contracts shared by the parser, downloader and orchestrator."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator


class Category(str, Enum):
    """Document kinds published per exam."""

    OPG = "Opg"  # opgaven (assignment)
    CV = "CV"  # correctievoorschrift (answer key)
    ANV_CV = "Anv. CV"  # aanvulling op het correctievoorschrift


class FileKind(str, Enum):
    """Extension derived from the declared content type."""

    PDF = "pdf"
    DOC = "doc"
    UNKNOWN = "unknown"


PERIODS = ("1", "2", "3", "4")

# 1-based listing table column -> category of the links found there
DEFAULT_COLUMNS: Dict[int, Category] = {
    2: Category.OPG,
    4: Category.CV,
    6: Category.ANV_CV,
}


class ExamPeriod(BaseModel):
    year: int
    period: str = Field(pattern="^[1-4]$")

    def listing_url(self, template: str) -> str:
        return template.format(year=self.year, period=self.period)


class ExamRow(BaseModel):
    """One exam parsed from a listing table row."""

    name: str
    links: Dict[Category, List[str]] = Field(default_factory=dict)

    @field_validator("name")
    def name_must_not_be_empty(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("exam name must not be empty")
        return v

    def links_for(self, category: Category) -> List[str]:
        return self.links.get(category, [])

    @property
    def assignment_links(self) -> List[str]:
        return self.links_for(Category.OPG)

    @property
    def answer_key_links(self) -> List[str]:
        return self.links_for(Category.CV)

    @property
    def revised_answer_key_links(self) -> List[str]:
        return self.links_for(Category.ANV_CV)


class DownloadTask(BaseModel):
    url: str
    dest_folder: Path
    category: Category
    base_name: str


class DownloadedFile(BaseModel):
    path: Path
    url: str
    kind: FileKind
    size: int
    status_code: int
    category: Optional[Category] = None


class PeriodReport(BaseModel):
    """Outcome of processing one period."""

    year: int
    period: str
    listing_url: str
    exams: List[str] = Field(default_factory=list)
    downloaded: List[DownloadedFile] = Field(default_factory=list)
    # URLs that answered with a non-2xx status
    skipped: List[str] = Field(default_factory=list)
    # URLs that exhausted their attempts
    failed: List[str] = Field(default_factory=list)
