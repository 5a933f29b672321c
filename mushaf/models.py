"""
Value objects shared by the local and remote layout paths.
"""
from dataclasses import dataclass, field
from enum import Enum

TOTAL_PAGES    = 604
LINES_PER_PAGE = 15


@dataclass(frozen=True)
class WordRecord:
    """One glyph/word unit with its page/line/position coordinates."""
    id:               int
    page_number:      int
    line_number:      int
    position_in_line: int
    text:             str
    char_type:        str = "word"
    verse_id:         int | None = None
    verse_key:        str | None = None
    word_id:          int | None = None
    css_style:        str | None = None
    css_class:        str | None = None

    def to_dict(self) -> dict:
        return {
            "id":             self.id,
            "text":           self.text,
            "charType":       self.char_type,
            "positionInLine": self.position_in_line,
            "verseId":        self.verse_id,
            "verseKey":       self.verse_key,
            "wordId":         self.word_id,
            "cssStyle":       self.css_style,
            "cssClass":       self.css_class,
        }


@dataclass(frozen=True)
class Line:
    line_number: int
    words:       tuple[WordRecord, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.words

    @property
    def text(self) -> str:
        return " ".join(w.text for w in self.words)

    def to_dict(self) -> dict:
        return {
            "lineNumber": self.line_number,
            "words":      [w.to_dict() for w in self.words],
        }


@dataclass(frozen=True)
class PageSummary:
    first_verse_id: int | None
    last_verse_id:  int | None
    verse_count:    int

    def to_dict(self) -> dict:
        return {
            "firstVerseId": self.first_verse_id,
            "lastVerseId":  self.last_verse_id,
            "verseCount":   self.verse_count,
        }


@dataclass(frozen=True)
class Page:
    """
    A fully assembled Mushaf page.

    ``lines`` always holds exactly LINES_PER_PAGE entries. Lines that came back
    without words are listed in ``missing_lines`` so that data gaps stay
    visible to the caller instead of being compacted away.
    """
    page_number:   int
    lines:         tuple[Line, ...]
    summary:       PageSummary | None = None
    missing_lines: tuple[int, ...] = ()
    anomalies:     tuple[str, ...] = ()

    @property
    def words(self) -> list[WordRecord]:
        return [w for line in self.lines for w in line.words]

    @property
    def is_complete(self) -> bool:
        return not self.missing_lines and not self.anomalies

    def line(self, line_number: int) -> Line:
        return self.lines[line_number - 1]


class Breakpoint(str, Enum):
    NARROW = "narrow"
    MEDIUM = "medium"
    WIDE   = "wide"

    @property
    def rank(self) -> int:
        return _BREAKPOINT_RANK[self]


_BREAKPOINT_RANK = {
    Breakpoint.NARROW: 0,
    Breakpoint.MEDIUM: 1,
    Breakpoint.WIDE:   2,
}


@dataclass(frozen=True)
class TypographyProfile:
    canvas_width:   int
    canvas_height:  int
    font_size:      float
    line_height:    float
    word_spacing:   float
    letter_spacing: float

    def to_dict(self) -> dict:
        return {
            "canvasWidth":   self.canvas_width,
            "canvasHeight":  self.canvas_height,
            "fontSize":      self.font_size,
            "lineHeight":    self.line_height,
            "wordSpacing":   self.word_spacing,
            "letterSpacing": self.letter_spacing,
        }


class Source(str, Enum):
    LOCAL  = "local"
    REMOTE = "remote"


@dataclass(frozen=True)
class PageLayout:
    """Composite result handed to the rendering layer."""
    page:       Page
    typography: TypographyProfile
    breakpoint: Breakpoint
    source:     Source
    notes:      tuple[str, ...] = field(default=())

    @property
    def page_number(self) -> int:
        return self.page.page_number

    @property
    def lines(self) -> tuple[Line, ...]:
        return self.page.lines

    @property
    def summary(self) -> PageSummary | None:
        return self.page.summary

    def to_dict(self) -> dict:
        return {
            "pageNumber":   self.page.page_number,
            "lines":        [line.to_dict() for line in self.page.lines],
            "summary":      self.page.summary.to_dict() if self.page.summary else None,
            "missingLines": list(self.page.missing_lines),
            "anomalies":    list(self.page.anomalies),
            "typography":   self.typography.to_dict(),
            "breakpoint":   self.breakpoint.value,
            "source":       self.source.value,
            "notes":        list(self.notes),
        }
