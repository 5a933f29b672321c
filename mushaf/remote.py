"""
remote.py — Fetch page layouts from the Quran.com v4 API.

The API returns verses with per-word line numbers; they are reshaped into the
same WordRecord/Page contract produced by the local store so that callers
cannot tell the two sources apart.
"""
import http.client
import json
import logging
import time
import urllib.error
import urllib.request
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from dataclasses import replace
from urllib.parse import urlencode

from .assembler import assemble_page
from .errors import RemoteUnavailable
from .models import Page, WordRecord
from .quran_meta import parse_verse_key, verse_id_for_key

logger = logging.getLogger(__name__)

WORD_FIELDS = "text_uthmani,line_number,position,code_v2,char_type_name,page_number"


def _verse_sort_key(verse_key: str) -> tuple[int, int]:
    try:
        return parse_verse_key(verse_key)
    except (ValueError, AttributeError):
        raise RemoteUnavailable(f"Malformed verse key in payload: {verse_key!r}") from None


def reshape_payload(page_number: int, verses) -> list[WordRecord]:
    """
    Turn API verses into WordRecords ordered by (line_number, position_in_line).

    Words are ordered within a line by (sura, aya, position) and renumbered
    with contiguous ordinals starting at 0.
    """
    if not isinstance(verses, list):
        raise RemoteUnavailable(f"Expected a list of verses for page {page_number}")

    lines: dict[int, list[tuple[tuple[int, int, int], WordRecord]]] = {}
    for verse in verses:
        if not isinstance(verse, dict) or not isinstance(verse.get("words", []), list):
            raise RemoteUnavailable(f"Malformed verse entry for page {page_number}")
        verse_key = verse.get("verse_key")
        sura, aya = _verse_sort_key(verse_key)
        verse_id = verse.get("id")
        if not isinstance(verse_id, int):
            try:
                verse_id = verse_id_for_key(sura, aya)
            except ValueError:
                raise RemoteUnavailable(f"Unknown verse in payload: {verse_key}") from None

        for word in verse.get("words") or []:
            if not isinstance(word, dict):
                raise RemoteUnavailable(f"Malformed word entry in {verse_key}")
            word_page = word.get("page_number")
            if word_page is not None and word_page != page_number:
                continue
            line_number = word.get("line_number")
            position = word.get("position")
            word_id = word.get("id")
            if not isinstance(line_number, int) or not isinstance(position, int):
                raise RemoteUnavailable(f"Word in {verse_key} lacks line number or position")
            if not isinstance(word_id, int):
                raise RemoteUnavailable(f"Word {position} of {verse_key} has no id")

            record = WordRecord(
                id=word_id,
                page_number=page_number,
                line_number=line_number,
                position_in_line=0,
                text=word.get("text_uthmani") or word.get("text") or "",
                char_type=word.get("char_type_name") or "word",
                verse_id=verse_id,
                verse_key=verse_key,
                word_id=word_id,
                css_class=word.get("code_v2"),
            )
            lines.setdefault(line_number, []).append(((sura, aya, position), record))

    records = []
    for line_number in sorted(lines):
        ordered = sorted(lines[line_number], key=lambda item: item[0])
        for ordinal, (_, record) in enumerate(ordered):
            records.append(replace(record, position_in_line=ordinal))
    return records


class RemoteLayoutFetcher:
    """
    Page layout client for the Quran.com API.

    Every fetch is bounded by an overall deadline. The HTTP calls run in a
    worker thread; once the deadline passes the caller gets RemoteUnavailable
    and the worker is abandoned.
    """

    def __init__(self, base_url: str, timeout: float = 10.0, per_page: int = 50, opener=None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.per_page = per_page
        self._opener = opener or urllib.request.urlopen

    def page_url(self, page_number: int, api_page: int = 1) -> str:
        query = urlencode({
            "words":       "true",
            "word_fields": WORD_FIELDS,
            "per_page":    self.per_page,
            "page":        api_page,
        })
        return f"{self.base_url}/verses/by_page/{page_number}?{query}"

    def _get_json(self, url: str, timeout: float) -> dict:
        with self._opener(url, timeout=timeout) as response:
            return json.loads(response.read())

    def _download(self, page_number: int, deadline_at: float) -> list:
        verses = []
        api_page = 1
        while api_page:
            remaining = deadline_at - time.monotonic()
            if remaining <= 0:
                raise TimeoutError(f"deadline exceeded for page {page_number}")

            data = self._get_json(self.page_url(page_number, api_page), remaining)
            if not isinstance(data, dict) or not isinstance(data.get("verses"), list):
                raise RemoteUnavailable(f"Unexpected payload shape for page {page_number}")
            verses.extend(data["verses"])

            pagination = data.get("pagination")
            if pagination is None:
                break
            if not isinstance(pagination, dict):
                raise RemoteUnavailable(f"Malformed pagination block for page {page_number}")
            next_page = pagination.get("next_page")
            api_page = next_page if isinstance(next_page, int) and next_page > api_page else None
        return verses

    def fetch_verses(self, page_number: int, timeout: float | None = None) -> list:
        timeout = self.timeout if timeout is None else timeout
        executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="mushaf-remote")
        future = executor.submit(self._download, page_number, time.monotonic() + timeout)
        try:
            return future.result(timeout=timeout)
        except FutureTimeoutError as e:
            future.cancel()
            logger.warning(f"Remote layout for page {page_number} timed out after {timeout}s")
            raise RemoteUnavailable(f"Remote layout service timed out after {timeout}s") from e
        except RemoteUnavailable:
            raise
        except (urllib.error.URLError, http.client.HTTPException, OSError, ValueError) as e:
            logger.warning(f"Remote layout fetch failed for page {page_number}: {e}")
            raise RemoteUnavailable(f"Remote layout service unavailable: {e}") from e
        finally:
            executor.shutdown(wait=False, cancel_futures=True)

    def fetch_page(self, page_number: int, timeout: float | None = None) -> Page:
        """
        Fetch and assemble one page.

        Raises:
            RemoteUnavailable: On network errors, timeouts or malformed payloads.
            PageNotFound:      If the service returned no words for the page.
        """
        verses = self.fetch_verses(page_number, timeout)
        records = reshape_payload(page_number, verses)
        logger.info(f"Fetched page {page_number} from remote: {len(records)} words")
        return assemble_page(page_number, records)
