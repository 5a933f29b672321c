"""
assembler.py — Group flat word records into the Page → Line → Word hierarchy.
"""
import logging
from collections import defaultdict
from typing import Iterable

from .errors import PageNotFound
from .models import LINES_PER_PAGE, Line, Page, PageSummary, WordRecord

logger = logging.getLogger(__name__)


def summarize(records: Iterable[WordRecord]) -> PageSummary | None:
    """Verse summary computed from the records themselves."""
    verse_ids = {r.verse_id for r in records if r.verse_id is not None}
    if not verse_ids:
        return None
    return PageSummary(
        first_verse_id=min(verse_ids),
        last_verse_id=max(verse_ids),
        verse_count=len(verse_ids),
    )


def _ordinal_anomalies(line_number: int, words: list[WordRecord]) -> list[str]:
    problems = []
    positions = [w.position_in_line for w in words]
    for prev, cur in zip(positions, positions[1:]):
        if cur == prev:
            problems.append(f"line {line_number}: duplicate position {cur}")
        elif cur < prev:
            problems.append(f"line {line_number}: position {cur} after {prev}")
        elif cur != prev + 1:
            problems.append(f"line {line_number}: gap between positions {prev} and {cur}")
    return problems


def assemble_page(
    page_number: int,
    records: Iterable[WordRecord],
    summary: PageSummary | None = None,
) -> Page:
    """
    Build a 15-line page from records already sorted by (line, position).

    Args:
        page_number: Requested page.
        records:     Word records for that page, in store order.
        summary:     Precomputed verse summary; derived from the records if omitted.

    Returns:
        Page with exactly LINES_PER_PAGE lines.

    Raises:
        PageNotFound: If there are no records at all.
    """
    records = list(records)
    if not records:
        raise PageNotFound(f"Page {page_number} has no word records")

    anomalies: list[str] = []
    by_line: dict[int, list[WordRecord]] = defaultdict(list)

    for record in records:
        if record.page_number != page_number:
            anomalies.append(f"word {record.id} belongs to page {record.page_number}")
        elif not 1 <= record.line_number <= LINES_PER_PAGE:
            anomalies.append(f"word {record.id} has line number {record.line_number}")
        else:
            by_line[record.line_number].append(record)

    if not by_line:
        raise PageNotFound(f"Page {page_number} has no usable word records ({len(anomalies)} rejected)")

    lines = []
    missing = []
    for line_number in range(1, LINES_PER_PAGE + 1):
        words = by_line.get(line_number, [])
        if not words:
            missing.append(line_number)
        anomalies.extend(_ordinal_anomalies(line_number, words))
        lines.append(Line(line_number=line_number, words=tuple(words)))

    if missing:
        logger.warning(f"Page {page_number}: no words on lines {missing}")
    for problem in anomalies:
        logger.warning(f"Page {page_number}: {problem}")

    return Page(
        page_number=page_number,
        lines=tuple(lines),
        summary=summary if summary is not None else summarize(records),
        missing_lines=tuple(missing),
        anomalies=tuple(anomalies),
    )
