"""
Unit tests for reading catalog pages with pdfplumber (pdfplumber.open is mocked).

Covers the recovery rules of the real reader:
- a document that cannot be opened -> one WHOLE_PARSE failure, nothing else
- a page whose text cannot be extracted -> PAGE_EXTRACTION failure, reading continues
- the document handle is released, also when the consumer stops early
"""

import unittest
from unittest import mock

from catalogsearch.document import read_pages
from catalogsearch.results import FailureKind


def _page(text=None, error=None):
    page = mock.Mock()
    if error is not None:
        page.extract_text.side_effect = error
    else:
        page.extract_text.return_value = text
    return page


def _pdf(*pages):
    pdf = mock.MagicMock()
    pdf.pages = list(pages)
    return pdf


class TestReadPages(unittest.TestCase):
    def test_unopenable_document(self) -> None:
        with mock.patch("catalogsearch.document.pdfplumber.open", side_effect=OSError("not a PDF")):
            pages = list(read_pages("broken.pdf"))

        self.assertEqual(len(pages), 1)
        self.assertEqual(pages[0].page_number, 0)
        self.assertFalse(pages[0].ok)
        self.assertEqual(pages[0].failure.kind, FailureKind.WHOLE_PARSE)
        self.assertIn("not a PDF", pages[0].failure.message)

    def test_bad_page_is_reported_and_reading_continues(self) -> None:
        bad = _page(error=ValueError("corrupt content stream"))
        pdf = _pdf(_page("CS 5800 Algorithms"), bad, _page(None))

        with mock.patch("catalogsearch.document.pdfplumber.open", return_value=pdf):
            pages = list(read_pages("catalog.pdf"))

        self.assertEqual([p.page_number for p in pages], [1, 2, 3])
        self.assertEqual(pages[0].text, "CS 5800 Algorithms")

        self.assertEqual(pages[1].failure.kind, FailureKind.PAGE_EXTRACTION)
        self.assertEqual(pages[1].failure.page, 2)

        # extract_text() may return None for an empty page
        self.assertTrue(pages[2].ok)
        self.assertEqual(pages[2].text, "")

        pdf.__exit__.assert_called_once()

    def test_each_page_is_closed_after_reading(self) -> None:
        good = _page("text")
        bad = _page(error=RuntimeError("boom"))

        with mock.patch("catalogsearch.document.pdfplumber.open", return_value=_pdf(good, bad)):
            list(read_pages("catalog.pdf"))

        good.close.assert_called_once()
        bad.close.assert_called_once()

    def test_document_closed_when_consumer_stops_early(self) -> None:
        pdf = _pdf(_page("one"), _page("two"))

        with mock.patch("catalogsearch.document.pdfplumber.open", return_value=pdf):
            pages = read_pages("catalog.pdf")
            self.assertEqual(next(pages).text, "one")
            pages.close()

        pdf.__exit__.assert_called_once()
        pdf.pages[1].extract_text.assert_not_called()


if __name__ == "__main__":
    unittest.main()
