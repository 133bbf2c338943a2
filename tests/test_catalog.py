"""
Unit tests for the catalog pipeline and the populate-once cache.

No network, no PDF: the fetcher and the page reader are replaced by fakes.
"""

import threading
import time
import unittest
from pathlib import Path
from unittest import mock

from catalogsearch.catalog import Catalog, CatalogCache, build_course_catalog, build_program_catalog
from catalogsearch.config import Settings
from catalogsearch.results import Failure, FailureKind, FetchResult, PageText


PAGES = [
    PageText(1, "ACCT6217Corporate Governance and Ethics\n"),
    PageText(2, failure=Failure(FailureKind.PAGE_EXTRACTION, "bad page", page=2)),
    PageText(3, "ACCT 6217 Something Else Entirely\nCS 5800 Algorithms\n"),
]

PROGRAM_PAGES = [
    PageText(1, "Data Science, MS\n"),
    PageText(
        2,
        "The program prepares students to analyze large datasets and build predictive models.\n"
        "Program Requirements\n",
    ),
]


def _ok_fetcher(url, path, timeout):
    return FetchResult(path=Path(path))


def _failed_fetcher(url, path, timeout):
    return FetchResult(path=Path(path), failure=Failure(FailureKind.DOCUMENT_FETCH, "connection refused"))


class FakeReader:
    def __init__(self, pages):
        self.pages = pages
        self.calls = 0
        self.closed = False

    def __call__(self, path):
        self.calls += 1
        return self._generate()

    def _generate(self):
        try:
            for page in self.pages:
                yield page
        finally:
            self.closed = True


def _catalog(reader, fetcher=_ok_fetcher):
    return Catalog(Settings(pdf_path=Path("catalog.pdf")), reader=reader, fetcher=fetcher)


class TestCatalogCache(unittest.TestCase):
    def test_loader_runs_once(self) -> None:
        loader = mock.Mock(return_value=["a", "b"])
        cache = CatalogCache(loader)
        self.assertFalse(cache.loaded)

        first = cache.get()
        second = cache.get()

        self.assertEqual(first, ("a", "b"))
        self.assertIs(first, second)
        self.assertTrue(cache.loaded)
        loader.assert_called_once()

    def test_concurrent_first_access_loads_once(self) -> None:
        def slow_loader():
            time.sleep(0.05)
            return ["x"]

        cache = CatalogCache(slow_loader)
        results = []
        threads = [threading.Thread(target=lambda: results.append(cache.get())) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        self.assertEqual(cache.load_count, 1)
        self.assertEqual(len(results), 8)
        self.assertTrue(all(r is results[0] for r in results))


class TestBuildCourseCatalog(unittest.TestCase):
    def test_first_occurrence_wins_and_failed_page_is_skipped(self) -> None:
        report = build_course_catalog(PAGES)

        ids = [r.identifier for r in report.records]
        self.assertEqual(ids, ["ACCT 6217", "CS 5800"])
        self.assertEqual(report.records[0].name, "Corporate Governance and Ethics")
        self.assertEqual(report.records[0].page, 1)

        self.assertEqual(report.pages_read, 2)
        self.assertEqual(len(report.failures_of(FailureKind.PAGE_EXTRACTION)), 1)
        self.assertFalse(report.complete)

    def test_ligatures_normalized_before_extraction(self) -> None:
        # "ffi" ligature inside the title
        report = build_course_catalog([PageText(1, "CS 5200 Eﬃcient Database Systems\n")])
        self.assertEqual([r.name for r in report.records], ["Efficient Database Systems"])

    def test_extraction_error_skips_page(self) -> None:
        calls = []

        def flaky(text, page_number=None):
            calls.append(page_number)
            if page_number == 1:
                raise ValueError("boom")
            return []

        with mock.patch("catalogsearch.catalog.extract_courses", side_effect=flaky):
            report = build_course_catalog([PageText(1, "x"), PageText(2, "y")])

        self.assertEqual(calls, [1, 2])
        failures = report.failures_of(FailureKind.PAGE_EXTRACTION)
        self.assertEqual([f.page for f in failures], [1])

    def test_unexpected_error_keeps_partial_results(self) -> None:
        def pages():
            yield PageText(1, "CS 5800 Algorithms\n")
            raise RuntimeError("corrupt stream")

        report = build_course_catalog(pages())

        self.assertEqual([r.identifier for r in report.records], ["CS 5800"])
        self.assertEqual(len(report.failures_of(FailureKind.WHOLE_PARSE)), 1)

    def test_unreadable_document_stops_parse(self) -> None:
        report = build_course_catalog([PageText(0, failure=Failure(FailureKind.WHOLE_PARSE, "not a pdf"))])
        self.assertEqual(report.records, ())
        self.assertEqual(report.pages_read, 0)

    def test_blank_pages(self) -> None:
        report = build_course_catalog([PageText(1, ""), PageText(2, "   \n")])
        self.assertEqual(report.records, ())
        self.assertTrue(report.complete)


class TestBuildProgramCatalog(unittest.TestCase):
    def test_programs_span_pages(self) -> None:
        report = build_program_catalog(PROGRAM_PAGES)
        self.assertEqual([r.identifier for r in report.records], ["Data Science, MS"])
        self.assertEqual(report.pages_read, 2)


class TestCatalog(unittest.TestCase):
    def test_fetch_failure_gives_empty_catalog(self) -> None:
        reader = FakeReader(PAGES)
        catalog = _catalog(reader, fetcher=_failed_fetcher)

        self.assertEqual(catalog.courses(), ())
        self.assertEqual(catalog.search_courses("machine learning"), [])
        self.assertEqual(reader.calls, 0)

        report = catalog.last_report()
        self.assertEqual(len(report.failures_of(FailureKind.DOCUMENT_FETCH)), 1)

    def test_parses_once(self) -> None:
        reader = FakeReader(PAGES)
        catalog = _catalog(reader)
        self.assertFalse(catalog.is_loaded())

        first = catalog.courses()
        second = catalog.courses()

        self.assertIs(first, second)
        self.assertEqual(reader.calls, 1)
        self.assertTrue(catalog.is_loaded())
        self.assertTrue(reader.closed)

    def test_blank_query_does_not_load(self) -> None:
        reader = FakeReader(PAGES)
        catalog = _catalog(reader)

        self.assertEqual(catalog.search_courses("   "), [])
        self.assertEqual(catalog.search_programs(""), [])
        self.assertFalse(catalog.is_loaded())
        self.assertEqual(reader.calls, 0)

    def test_search_courses(self) -> None:
        catalog = _catalog(FakeReader(PAGES))
        results = catalog.search_courses("algorithms")

        self.assertEqual([r.identifier for r in results], ["CS 5800"])
        self.assertIn("title contains 'algorithms'", results[0].justification)

    def test_programs_parsed_separately(self) -> None:
        reader = FakeReader(PROGRAM_PAGES)
        catalog = _catalog(reader)

        results = catalog.search_programs("data science")
        self.assertEqual([r.identifier for r in results], ["Data Science, MS"])
        self.assertTrue(catalog.is_loaded("program"))
        self.assertFalse(catalog.is_loaded("course"))
        self.assertEqual(reader.calls, 1)


if __name__ == "__main__":
    unittest.main()
