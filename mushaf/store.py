"""
store.py — Read-only access to the word-level Mushaf layout database.

The database is a SQLite file extracted from the Quranic Universal Library
(QUL) holding one row per glyph/word unit of each Mushaf edition.
"""
import logging
import threading
from pathlib import Path
from urllib.parse import quote

from sqlalchemy import (
    Column,
    Integer,
    String,
    Text,
    UniqueConstraint,
    create_engine,
    distinct,
    func,
    inspect,
)
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker

from .errors import InvalidHandle, OutOfRange, StoreNotFound
from .models import TOTAL_PAGES, PageSummary, WordRecord

logger = logging.getLogger(__name__)

DB_FILENAME = "quran_dev.db"

# Tried in order, relative to the working directory.
DEFAULT_CANDIDATES = (
    Path("app") / "data" / DB_FILENAME,
    Path("data") / DB_FILENAME,
    Path(DB_FILENAME),
)

Base = declarative_base()


class MushafWord(Base):
    __tablename__ = "mushaf_words"
    __table_args__ = (
        UniqueConstraint("mushaf_id", "page_number", "line_number", "position_in_line"),
    )

    id                = Column(Integer, primary_key=True)
    mushaf_id         = Column(Integer, nullable=False, index=True)
    word_id           = Column(Integer)
    verse_id          = Column(Integer)
    text              = Column(Text, nullable=False)
    char_type_id      = Column(Integer)
    char_type_name    = Column(String, default="word")
    line_number       = Column(Integer, nullable=False)
    page_number       = Column(Integer, nullable=False, index=True)
    position_in_verse = Column(Integer)
    position_in_line  = Column(Integer)
    position_in_page  = Column(Integer)
    css_style         = Column(String)
    css_class         = Column(String)

    def to_record(self) -> WordRecord:
        return WordRecord(
            id=self.id,
            page_number=self.page_number,
            line_number=self.line_number,
            position_in_line=self.position_in_line if self.position_in_line is not None else 0,
            text=self.text,
            char_type=self.char_type_name or "word",
            verse_id=self.verse_id,
            word_id=self.word_id,
            css_style=self.css_style,
            css_class=self.css_class,
        )


class StoreHandle:
    """An open, read-only connection to one layout database file."""

    def __init__(self, path: Path):
        self.path = path
        uri = f"sqlite:///file:{quote(path.resolve().as_posix())}?mode=ro&uri=true"
        self._engine  = create_engine(uri, connect_args={"check_same_thread": False})
        self._Session = sessionmaker(bind=self._engine)
        self._closed  = False

    @property
    def closed(self) -> bool:
        return self._closed

    def session(self):
        if self._closed:
            raise InvalidHandle(f"Store handle for {self.path} is closed")
        return self._Session()

    def close(self) -> None:
        if self._closed:
            return
        self._engine.dispose()
        self._closed = True
        logger.info(f"Closed word store: {self.path}")

    def _verify(self) -> None:
        try:
            if not inspect(self._engine).has_table(MushafWord.__tablename__):
                raise StoreNotFound(f"{self.path} has no {MushafWord.__tablename__} table")
        except SQLAlchemyError as e:
            raise StoreNotFound(f"Cannot read word store {self.path}: {e}") from e


def validate_page_number(page_number: int) -> int:
    if not isinstance(page_number, int) or isinstance(page_number, bool):
        raise OutOfRange(f"Page number must be an integer, got {page_number!r}")
    if not 1 <= page_number <= TOTAL_PAGES:
        raise OutOfRange(f"Page number must be between 1 and {TOTAL_PAGES}, got {page_number}")
    return page_number


def find_store(candidates=DEFAULT_CANDIDATES, base_dir: Path | None = None) -> Path | None:
    """Return the first candidate path that exists, or None."""
    root = Path(base_dir) if base_dir is not None else Path.cwd()
    for candidate in candidates:
        path = candidate if Path(candidate).is_absolute() else root / candidate
        if path.is_file():
            return path
    return None


def open_store(
    path: Path | str | None = None,
    candidates=DEFAULT_CANDIDATES,
    base_dir: Path | None = None,
) -> StoreHandle:
    """
    Open the layout database read-only.

    Args:
        path:       Explicit database file. When omitted the candidates are searched.
        candidates: Ordered fallback locations, relative to *base_dir*.
        base_dir:   Directory the candidates are resolved against (default: cwd).

    Raises:
        StoreNotFound: If no database exists or it cannot be read.
    """
    resolved = Path(path) if path is not None else find_store(candidates, base_dir)
    if resolved is None or not resolved.is_file():
        raise StoreNotFound(f"Word store not found ({resolved or 'no candidate location exists'})")

    handle = StoreHandle(resolved)
    try:
        handle._verify()
    except StoreNotFound:
        handle.close()
        raise
    logger.info(f"Opened word store: {resolved}")
    return handle


def close_store(handle: StoreHandle | None) -> None:
    if handle is not None:
        handle.close()


def _require_open(handle: StoreHandle | None) -> StoreHandle:
    if handle is None or handle.closed:
        raise InvalidHandle("Word store handle is closed or was never opened")
    return handle


def get_page_words(handle: StoreHandle, mushaf_id: int, page_number: int) -> list[WordRecord]:
    """All word records of a page ordered by (line_number, position_in_line)."""
    validate_page_number(page_number)
    handle = _require_open(handle)
    try:
        with handle.session() as session:
            rows = (
                session.query(MushafWord)
                .filter_by(mushaf_id=mushaf_id, page_number=page_number)
                .order_by(MushafWord.line_number, MushafWord.position_in_line)
                .all()
            )
            return [row.to_record() for row in rows]
    except SQLAlchemyError as e:
        raise StoreNotFound(f"Failed to read page {page_number} from {handle.path}: {e}") from e


def get_page_summary(handle: StoreHandle, mushaf_id: int, page_number: int) -> PageSummary | None:
    """First/last verse id and distinct verse count for a page, or None if it has no rows."""
    validate_page_number(page_number)
    handle = _require_open(handle)
    try:
        with handle.session() as session:
            first, last, verses, rows = (
                session.query(
                    func.min(MushafWord.verse_id),
                    func.max(MushafWord.verse_id),
                    func.count(distinct(MushafWord.verse_id)),
                    func.count(MushafWord.id),
                )
                .filter_by(mushaf_id=mushaf_id, page_number=page_number)
                .one()
            )
    except SQLAlchemyError as e:
        raise StoreNotFound(f"Failed to summarise page {page_number} from {handle.path}: {e}") from e

    if not rows:
        return None
    return PageSummary(first_verse_id=first, last_verse_id=last, verse_count=verses)


class WordStore:
    """
    Service-scoped owner of a single store handle.

    The handle is opened lazily on first use and shared by all readers until
    close() is called on shutdown. A store constructed with enabled=False
    never touches the filesystem and behaves as if no database exists.
    """

    def __init__(
        self,
        path: Path | str | None = None,
        enabled: bool = True,
        candidates=DEFAULT_CANDIDATES,
        base_dir: Path | None = None,
    ):
        self.path = Path(path) if path is not None else None
        self.enabled = enabled
        self.candidates = candidates
        self.base_dir = base_dir
        self.handles_opened = 0
        self._handle: StoreHandle | None = None
        self._lock = threading.Lock()

    def available(self) -> bool:
        if not self.enabled:
            return False
        if self.path is not None:
            return self.path.is_file()
        return find_store(self.candidates, self.base_dir) is not None

    def open(self) -> StoreHandle:
        if not self.enabled:
            raise StoreNotFound("Local word store is disabled")
        with self._lock:
            if self._handle is None or self._handle.closed:
                self._handle = open_store(self.path, self.candidates, self.base_dir)
                self.handles_opened += 1
            return self._handle

    @property
    def is_open(self) -> bool:
        return self._handle is not None and not self._handle.closed

    def page_words(self, mushaf_id: int, page_number: int) -> list[WordRecord]:
        validate_page_number(page_number)
        return get_page_words(self.open(), mushaf_id, page_number)

    def page_summary(self, mushaf_id: int, page_number: int) -> PageSummary | None:
        validate_page_number(page_number)
        return get_page_summary(self.open(), mushaf_id, page_number)

    def close(self) -> None:
        with self._lock:
            close_store(self._handle)
            self._handle = None
