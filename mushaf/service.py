"""
service.py — Single entry point combining page structure and typography.
"""
import logging

from .analyzer import PageAnalysis, analyze_page
from .assembler import assemble_page
from .errors import PageNotFound, RemoteUnavailable, StoreNotFound
from .models import Page, PageLayout, Source
from .remote import RemoteLayoutFetcher
from .store import WordStore, validate_page_number
from .typography import resolve_typography
from .utils import LRUCache

logger = logging.getLogger(__name__)

DEFAULT_MUSHAF_ID = 5  # KFGQPC Hafs, 15 lines

RECOVERABLE = (StoreNotFound, PageNotFound, RemoteUnavailable)


class PageLayoutService:
    """
    Resolve a Mushaf page from the local store or the remote API and attach
    the typography profile for the requested device class.

    Source selection belongs to the caller. The other source is only tried
    when ``fallback=True`` is passed to get_page().
    """

    def __init__(
        self,
        store: WordStore | None = None,
        fetcher: RemoteLayoutFetcher | None = None,
        mushaf_id: int = DEFAULT_MUSHAF_ID,
        default_deadline: float = 10.0,
        cache_size: int = 0,
    ):
        self.store = store
        self.fetcher = fetcher
        self.mushaf_id = mushaf_id
        self.default_deadline = default_deadline
        self._remote_cache = LRUCache(cache_size) if cache_size > 0 else None

    def _load_local(self, page_number: int) -> Page:
        if self.store is None:
            raise StoreNotFound("No local word store configured")
        records = self.store.page_words(self.mushaf_id, page_number)
        if not records:
            raise PageNotFound(f"Page {page_number} has no rows for mushaf {self.mushaf_id}")
        summary = self.store.page_summary(self.mushaf_id, page_number)
        return assemble_page(page_number, records, summary)

    def _load_remote(self, page_number: int, deadline: float) -> Page:
        if self.fetcher is None:
            raise RemoteUnavailable("No remote layout service configured")
        if self._remote_cache is not None:
            cached = self._remote_cache.get(page_number)
            if cached is not None:
                return cached
        page = self.fetcher.fetch_page(page_number, timeout=deadline)
        if self._remote_cache is not None:
            self._remote_cache.set(page_number, page)
        return page

    def _load(self, source: Source, page_number: int, deadline: float) -> Page:
        if source is Source.REMOTE:
            return self._load_remote(page_number, deadline)
        return self._load_local(page_number)

    def get_page(
        self,
        page_number: int,
        use_remote: bool = False,
        width_or_breakpoint=None,
        *,
        viewport: bool = False,
        deadline: float | None = None,
        fallback: bool = False,
    ) -> PageLayout:
        """
        Build the composite layout for one page.

        Args:
            page_number:         Page in 1..604.
            use_remote:          Read from the remote API instead of the local store.
            width_or_breakpoint: Container width, breakpoint or breakpoint name.
            viewport:            Interpret a numeric width as a window width.
            deadline:            Seconds allowed for a remote fetch.
            fallback:            Try the other source once on a recoverable error.

        Raises:
            OutOfRange, StoreNotFound, PageNotFound, RemoteUnavailable
        """
        validate_page_number(page_number)
        breakpoint, profile = resolve_typography(width_or_breakpoint, viewport=viewport)
        deadline = self.default_deadline if deadline is None else deadline

        source = Source.REMOTE if use_remote else Source.LOCAL
        notes = []
        try:
            page = self._load(source, page_number, deadline)
        except RECOVERABLE as e:
            if not fallback:
                raise
            other = Source.LOCAL if source is Source.REMOTE else Source.REMOTE
            logger.info(
                f"Page {page_number}: {source.value} source failed ({e.code}), "
                f"falling back to {other.value}"
            )
            notes.append(f"{source.value}: {e.message}")
            page = self._load(other, page_number, deadline)
            source = other

        logger.info(f"Page {page_number} served from {source.value} ({breakpoint.value})")
        return PageLayout(
            page=page,
            typography=profile,
            breakpoint=breakpoint,
            source=source,
            notes=tuple(notes),
        )

    def analyze(self, page_number: int, use_remote: bool = False, **kwargs) -> PageAnalysis:
        layout = self.get_page(page_number, use_remote, **kwargs)
        return analyze_page(layout.page)

    def close(self) -> None:
        if self.store is not None:
            self.store.close()
