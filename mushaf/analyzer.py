"""
analyzer.py — Locate surah headers and bismillah lines on an assembled page.
"""
from dataclasses import dataclass

from .models import LINES_PER_PAGE, Page, WordRecord
from .quran_meta import get_sura_name, parse_verse_key, verse_key_for_id

# Al-Fatiha and the opening of Al-Baqarah use a decorated layout without
# separate header lines.
OPENING_PAGES = (1, 2)
NO_BISMILLAH  = (1, 9)


@dataclass(frozen=True)
class SurahStart:
    sura:           int
    name:           str
    first_line:     int   # first line carrying the sura's text
    name_line:      int | None
    bismillah_line: int | None


@dataclass(frozen=True)
class PageAnalysis:
    page_number:          int
    surah_starts:         tuple[SurahStart, ...]
    surah_name_lines:     tuple[int, ...]
    bismillah_lines:      tuple[int, ...]
    available_text_lines: int

    @property
    def header_lines(self) -> tuple[int, ...]:
        return tuple(sorted(self.surah_name_lines + self.bismillah_lines))


def word_verse(word: WordRecord) -> tuple[int, int] | None:
    if word.verse_key:
        try:
            return parse_verse_key(word.verse_key)
        except ValueError:
            return None
    if word.verse_id is not None:
        try:
            return verse_key_for_id(word.verse_id)
        except ValueError:
            return None
    return None


def _find_starts(page: Page) -> list[tuple[int, int]]:
    starts = {}
    for line in page.lines:
        for word in line.words:
            verse = word_verse(word)
            if verse is not None and verse[1] == 1 and verse[0] not in starts:
                starts[verse[0]] = line.line_number
    return sorted(starts.items(), key=lambda item: item[1])


def analyze_page(page: Page) -> PageAnalysis:
    if page.page_number in OPENING_PAGES:
        return PageAnalysis(page.page_number, (), (), (), LINES_PER_PAGE)

    surah_starts = []
    name_lines = []
    bismillah_lines = []

    for sura, first_line in _find_starts(page):
        if sura in NO_BISMILLAH:
            name_line, bismillah_line = first_line - 1, None
        else:
            name_line, bismillah_line = first_line - 2, first_line - 1

        name_line = name_line if name_line >= 1 else None
        if bismillah_line is not None and bismillah_line < 1:
            bismillah_line = None

        if name_line is not None:
            name_lines.append(name_line)
        if bismillah_line is not None:
            bismillah_lines.append(bismillah_line)
        surah_starts.append(SurahStart(sura, get_sura_name(sura), first_line, name_line, bismillah_line))

    available = LINES_PER_PAGE - len(name_lines) - len(bismillah_lines)
    return PageAnalysis(
        page_number=page.page_number,
        surah_starts=tuple(surah_starts),
        surah_name_lines=tuple(name_lines),
        bismillah_lines=tuple(bismillah_lines),
        available_text_lines=available,
    )
