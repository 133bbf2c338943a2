"""
Page-by-page text reading of the catalog PDF (pdfplumber).

Yields raw `PageText` values instead of raising:
- a page that cannot be read -> PAGE_EXTRACTION failure for that page, reading continues
- a document that cannot be opened -> one WHOLE_PARSE failure (page 0), then stop

The PDF handle is held only inside the `with` block, so it is released on
every exit path including a consumer that stops iterating early.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Iterator

import pdfplumber

from catalogsearch.results import Failure, FailureKind, PageText


logger = logging.getLogger(__name__)


# Anything that turns a path into a stream of pages; tests pass fakes.
PageReader = Callable[[Path], Iterator[PageText]]


def read_pages(path: str | Path) -> Iterator[PageText]:
    """
    Yield raw extracted text for every page (1-based page numbers).
    """
    try:
        pdf = pdfplumber.open(str(path))
    except Exception as exc:
        logger.error("Could not open PDF %s: %s", path, exc)
        yield PageText(page_number=0, failure=Failure(FailureKind.WHOLE_PARSE, f"cannot open document: {exc}"))
        return

    with pdf:
        logger.info("PDF opened successfully. Total pages: %d", len(pdf.pages))
        for page_number, page in enumerate(pdf.pages, start=1):
            try:
                text = page.extract_text() or ""
            except Exception as exc:
                logger.warning("Error reading page %d: %s", page_number, exc)
                yield PageText(
                    page_number=page_number,
                    failure=Failure(FailureKind.PAGE_EXTRACTION, str(exc), page=page_number),
                )
                continue
            finally:
                # drop the page's parsed objects; pdf.pages keeps every Page alive
                page.close()
            yield PageText(page_number=page_number, text=text)
