"""
In-memory catalog: one-time parse of the catalog PDF, then lock-free reads.

Flow on first access (per record kind):

    ensure_document -> read_pages -> normalize_text -> extract -> dedup -> cache

Failure policy (nothing is raised to callers):
- document cannot be fetched     -> empty catalog
- one page cannot be read/parsed -> page skipped
- anything else during the parse -> records gathered so far are kept

Every failure ends up in the ParseReport for that kind (see last_report()).
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, Dict, Generic, Iterable, List, Optional, Tuple, TypeVar

from catalogsearch.config import Settings
from catalogsearch.document import PageReader, read_pages
from catalogsearch.extract import extract_courses
from catalogsearch.fetch import ensure_document
from catalogsearch.model import COURSE, PROGRAM, CatalogRecord, SearchResult
from catalogsearch.normalize import normalize_text
from catalogsearch.programs import extract_programs
from catalogsearch.results import Failure, FailureKind, FetchResult, PageText, ParseReport
from catalogsearch.search import search, split_query


logger = logging.getLogger(__name__)

T = TypeVar("T")

PROGRESS_EVERY = 100


class CatalogCache(Generic[T]):
    """
    Populate-once holder.

    The loader runs at most once, even when several threads call get() before
    the first load finishes; they block on the lock and then share the result.
    """

    def __init__(self, loader: Callable[[], Iterable[T]], name: str = "records") -> None:
        self._loader = loader
        self._name = name
        self._lock = threading.Lock()
        self._items: Optional[Tuple[T, ...]] = None
        self.load_count = 0

    @property
    def loaded(self) -> bool:
        return self._items is not None

    def get(self) -> Tuple[T, ...]:
        items = self._items
        if items is not None:
            logger.debug("Returning cached %s: %d", self._name, len(items))
            return items

        with self._lock:
            if self._items is None:
                self.load_count += 1
                self._items = tuple(self._loader())
                logger.info("Loaded %d %s", len(self._items), self._name)
            return self._items


# ---------------------------------------------------------------------------
# Pipelines
# ---------------------------------------------------------------------------


def build_course_catalog(pages: Iterable[PageText]) -> ParseReport:
    """
    Extract courses page by page; first occurrence of an identifier wins.
    """
    report = ParseReport()
    courses: Dict[str, CatalogRecord] = {}

    try:
        for page in pages:
            if page.failure is not None:
                report.failures.append(page.failure)
                if page.failure.kind == FailureKind.WHOLE_PARSE:
                    break
                continue

            report.pages_read += 1
            text = normalize_text(page.text)
            if not text.strip():
                continue

            try:
                found = extract_courses(text, page.page_number)
            except Exception as exc:
                logger.warning("Error extracting courses from page %d: %s", page.page_number, exc)
                report.failures.append(Failure(FailureKind.PAGE_EXTRACTION, str(exc), page=page.page_number))
                continue

            for record in found:
                courses.setdefault(record.identifier, record)

            if page.page_number % PROGRESS_EVERY == 0:
                logger.info(
                    "Processing page %d, found %d unique courses so far...", page.page_number, len(courses)
                )
    except Exception as exc:
        logger.exception("Error parsing PDF: %s", exc)
        report.failures.append(Failure(FailureKind.WHOLE_PARSE, str(exc)))

    report.records = tuple(courses.values())
    logger.info("Parsing complete. Extracted %d courses from PDF", len(report.records))
    return report


def build_program_catalog(pages: Iterable[PageText]) -> ParseReport:
    """
    Join all readable pages, then extract programs from the whole text.
    """
    report = ParseReport()
    chunks: List[str] = []

    try:
        for page in pages:
            if page.failure is not None:
                report.failures.append(page.failure)
                if page.failure.kind == FailureKind.WHOLE_PARSE:
                    break
                continue
            report.pages_read += 1
            chunks.append(page.text)

        if chunks:
            report.records = tuple(extract_programs(normalize_text("\n".join(chunks))))
    except Exception as exc:
        logger.exception("Error parsing PDF: %s", exc)
        report.failures.append(Failure(FailureKind.WHOLE_PARSE, str(exc)))

    logger.info("Parsing complete. Extracted %d programs from PDF", len(report.records))
    for program in report.records[:3]:
        logger.debug("Sample program: %s | %s...", program.identifier, program.description[:100])
    return report


_PIPELINES: Dict[str, Callable[[Iterable[PageText]], ParseReport]] = {
    COURSE: build_course_catalog,
    PROGRAM: build_program_catalog,
}


# ---------------------------------------------------------------------------
# Catalog service
# ---------------------------------------------------------------------------


class Catalog:
    """
    Owns the course and program caches for one catalog PDF.

    Construct once and hand it to whatever serves searches.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        reader: PageReader = read_pages,
        fetcher: Callable[[str, object, float], FetchResult] = ensure_document,
    ) -> None:
        self.settings = settings if settings is not None else Settings.from_env()
        self._reader = reader
        self._fetcher = fetcher
        self._fetch_lock = threading.Lock()
        self._reports: Dict[str, ParseReport] = {}
        self._caches: Dict[str, CatalogCache[CatalogRecord]] = {
            COURSE: CatalogCache(lambda: self._load(COURSE), name="courses"),
            PROGRAM: CatalogCache(lambda: self._load(PROGRAM), name="programs"),
        }
        logger.info("PDF path configured: %s", self.settings.pdf_path)

    def _load(self, kind: str) -> Tuple[CatalogRecord, ...]:
        # Both kinds read the same file; only one download may run at a time.
        with self._fetch_lock:
            fetched = self._fetcher(self.settings.catalog_url, self.settings.pdf_path, self.settings.fetch_timeout)

        if fetched.failure is not None:
            logger.error("Catalog unavailable, serving empty %s list: %s", kind, fetched.failure)
            report = ParseReport(failures=[fetched.failure])
        else:
            pages = self._reader(fetched.path)
            try:
                report = _PIPELINES[kind](pages)
            finally:
                close = getattr(pages, "close", None)
                if close is not None:
                    close()

        self._reports[kind] = report
        return report.records

    # -- accessors ----------------------------------------------------------

    def courses(self) -> Tuple[CatalogRecord, ...]:
        return self._caches[COURSE].get()

    def programs(self) -> Tuple[CatalogRecord, ...]:
        return self._caches[PROGRAM].get()

    def is_loaded(self, kind: str = COURSE) -> bool:
        return self._caches[kind].loaded

    def last_report(self, kind: str = COURSE) -> Optional[ParseReport]:
        return self._reports.get(kind)

    # -- search -------------------------------------------------------------

    def search_courses(self, query: Optional[str]) -> List[SearchResult]:
        """
        Ranked course matches. A blank query returns [] without loading the catalog.
        """
        terms = split_query(query)
        if not terms:
            return []
        results = search(self.courses(), terms)
        logger.info("Search for %r returned %d results", query, len(results))
        return results

    def search_programs(self, query: Optional[str]) -> List[SearchResult]:
        terms = split_query(query)
        if not terms:
            return []
        results = search(self.programs(), terms)
        logger.info("Program search for %r returned %d results", query, len(results))
        return results
