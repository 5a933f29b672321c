"""
mushaf: Page-layout reconstruction and typography for the printed Mushaf.
"""

from .analyzer import PageAnalysis, SurahStart, analyze_page
from .assembler import assemble_page, summarize
from .errors import (
    InvalidHandle,
    MushafError,
    OutOfRange,
    PageNotFound,
    RemoteUnavailable,
    StoreNotFound,
)
from .models import (
    LINES_PER_PAGE,
    TOTAL_PAGES,
    Breakpoint,
    Line,
    Page,
    PageLayout,
    PageSummary,
    Source,
    TypographyProfile,
    WordRecord,
)
from .remote import RemoteLayoutFetcher, reshape_payload
from .service import PageLayoutService
from .store import (
    WordStore,
    close_store,
    get_page_summary,
    get_page_words,
    open_store,
)
from .typography import (
    PROFILES,
    breakpoint_for_container,
    breakpoint_for_viewport,
    profile_for,
    resolve_typography,
)

__all__ = [
    # Models
    "WordRecord",
    "Line",
    "Page",
    "PageSummary",
    "PageLayout",
    "Breakpoint",
    "TypographyProfile",
    "Source",
    "TOTAL_PAGES",
    "LINES_PER_PAGE",
    # Errors
    "MushafError",
    "OutOfRange",
    "StoreNotFound",
    "PageNotFound",
    "InvalidHandle",
    "RemoteUnavailable",
    # Store
    "WordStore",
    "open_store",
    "close_store",
    "get_page_words",
    "get_page_summary",
    # Assembly
    "assemble_page",
    "summarize",
    "analyze_page",
    "PageAnalysis",
    "SurahStart",
    # Typography
    "PROFILES",
    "breakpoint_for_container",
    "breakpoint_for_viewport",
    "profile_for",
    "resolve_typography",
    # Remote
    "RemoteLayoutFetcher",
    "reshape_payload",
    # Facade
    "PageLayoutService",
]
