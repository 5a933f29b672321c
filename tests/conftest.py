import io
import json
import sys
import time
from pathlib import Path

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

# Add the repository root to sys.path so we can import mushaf and the CLI modules
ROOT_PATH = Path(__file__).resolve().parent.parent
if ROOT_PATH.as_posix() not in sys.path:
    sys.path.insert(0, ROOT_PATH.as_posix())

from mushaf.store import Base, MushafWord  # noqa: E402

MUSHAF_ID = 5
EMPTY_MUSHAF_ID = 99


def page_rows(mushaf_id, page_number, first_verse_id, verse_count, lines=range(1, 16), words_per_line=3):
    """
    Synthetic rows for one page: words are spread over *lines* in order and
    verses advance every few words. Positions start at 1 like QUL data.
    """
    rows = []
    lines = list(lines)
    total_words = len(lines) * words_per_line
    per_verse = max(1, total_words // verse_count)
    word_index = 0
    for line_number in lines:
        for position in range(1, words_per_line + 1):
            verse_offset = min(word_index // per_verse, verse_count - 1)
            rows.append(dict(
                mushaf_id=mushaf_id,
                page_number=page_number,
                line_number=line_number,
                position_in_line=position,
                text=f"w{page_number}-{line_number}-{position}",
                char_type_name="word",
                verse_id=first_verse_id + verse_offset,
                word_id=word_index + 1,
            ))
            word_index += 1
    return rows


def write_store(path: Path, rows) -> Path:
    engine = create_engine(f"sqlite:///{path}")
    Base.metadata.create_all(engine)
    Session = sessionmaker(bind=engine)
    session = Session()
    session.add_all(MushafWord(**row) for row in rows)
    session.commit()
    session.close()
    engine.dispose()
    return path


@pytest.fixture
def store_path(tmp_path: Path) -> Path:
    """A word store holding Al-Fatiha on page 1 and a gappy page 3."""
    rows = page_rows(MUSHAF_ID, 1, first_verse_id=1, verse_count=7)
    # Page 3 is missing lines 7 and 8
    rows += page_rows(MUSHAF_ID, 3, first_verse_id=13, verse_count=4,
                      lines=[n for n in range(1, 16) if n not in (7, 8)])
    return write_store(tmp_path / "quran_dev.db", rows)


class FakeResponse:
    def __init__(self, body: bytes):
        self._body = io.BytesIO(body)

    def read(self):
        return self._body.read()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


class FakeOpener:
    """Stands in for urllib.request.urlopen, serving canned payloads in order."""

    def __init__(self, *payloads, delay: float = 0.0):
        self.payloads = list(payloads)
        self.delay = delay
        self.urls = []
        self.timeouts = []

    def __call__(self, url, timeout=None):
        self.urls.append(url)
        self.timeouts.append(timeout)
        if self.delay:
            time.sleep(self.delay)
        payload = self.payloads.pop(0) if len(self.payloads) > 1 else self.payloads[0]
        if isinstance(payload, Exception):
            raise payload
        if isinstance(payload, bytes):
            return FakeResponse(payload)
        return FakeResponse(json.dumps(payload).encode("utf-8"))


def remote_page_payload(page_number=2, first_verse_id=8, sura=2, verse_count=5, next_page=None):
    """Quran.com style payload covering all 15 lines, three words per verse."""
    verses = []
    line_number = 1
    word_id = 1000
    for offset in range(verse_count):
        aya = offset + 1
        words = []
        for position in range(1, 4):
            words.append({
                "id": word_id,
                "position": position,
                "text_uthmani": f"{sura}:{aya}:{position}",
                "line_number": line_number,
                "page_number": page_number,
                "char_type_name": "word" if position < 3 else "end",
            })
            word_id += 1
            line_number += 1
        verses.append({"id": first_verse_id + offset, "verse_key": f"{sura}:{aya}", "words": words})
    return {
        "verses": verses,
        "pagination": {"per_page": 50, "current_page": 1, "next_page": next_page},
    }


@pytest.fixture
def page_two_payload():
    return remote_page_payload()
