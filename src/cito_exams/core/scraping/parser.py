"""HTML parsing helpers: turn a CITO listing table into exam rows.
"""

from __future__ import annotations

from typing import Dict, Iterator, List, Mapping, Optional

from bs4 import BeautifulSoup, ParserRejectedMarkup

from cito_exams.core.log import get_pipeline_logger
from cito_exams.core.models import DEFAULT_COLUMNS, Category, ExamRow


def parse_listing(
    html: str, columns: Optional[Mapping[int, Category]] = None
) -> Iterator[ExamRow]:
    """Yield one `ExamRow` per table row, in document order.

    - The trimmed text of the first cell is the exam name; rows without one
      are skipped.
    - `columns` maps a 1-based column position to the category whose links
      live there. Only anchors with an href are kept.
    - Markup the parser rejects yields no rows.
    """
    columns = columns or DEFAULT_COLUMNS
    try:
        soup = BeautifulSoup(html, "html.parser")
    except ParserRejectedMarkup as exc:
        get_pipeline_logger(__name__).warning("Unparseable listing page: %s", exc)
        return

    for tr in soup.find_all("tr"):
        first = tr.select_one("td:first-child")
        if first is None:
            continue
        name = first.get_text().strip()
        if not name:
            continue

        links: Dict[Category, List[str]] = {}
        for idx, category in sorted(columns.items()):
            hrefs = [
                str(a["href"])
                for a in tr.select(f"td:nth-child({idx}) a")
                if a.has_attr("href")
            ]
            links.setdefault(category, []).extend(hrefs)
        yield ExamRow(name=name, links=links)
