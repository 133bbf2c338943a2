"""
Result values returned at the I/O boundaries (fetch, open document, read page).

Nothing in the parsing pipeline raises to its caller. Failures are collected
as `Failure` values so the partial-failure policy stays visible:

- DOCUMENT_FETCH  -> empty catalog
- PAGE_EXTRACTION -> page skipped, parse continues
- WHOLE_PARSE     -> whatever was accumulated so far is kept
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional, Tuple

from catalogsearch.model import CatalogRecord


class FailureKind(str, Enum):
    DOCUMENT_FETCH = "document_fetch"
    PAGE_EXTRACTION = "page_extraction"
    WHOLE_PARSE = "whole_parse"


@dataclass(frozen=True)
class Failure:
    kind: FailureKind
    message: str
    page: Optional[int] = None

    def __str__(self) -> str:
        where = f" (page {self.page})" if self.page is not None else ""
        return f"{self.kind.value}{where}: {self.message}"


@dataclass(frozen=True)
class FetchResult:
    """
    Outcome of making sure the source document exists locally.
    """

    path: Path
    downloaded: bool = False
    size: int = 0
    failure: Optional[Failure] = None

    @property
    def ok(self) -> bool:
        return self.failure is None


@dataclass(frozen=True)
class PageText:
    """
    Text of one page (1-based), or the failure reading it.
    """

    page_number: int
    text: str = ""
    failure: Optional[Failure] = None

    @property
    def ok(self) -> bool:
        return self.failure is None


@dataclass
class ParseReport:
    """
    Everything one parse produced: records, page count and failures.
    """

    records: Tuple[CatalogRecord, ...] = ()
    pages_read: int = 0
    failures: List[Failure] = field(default_factory=list)

    def failures_of(self, kind: FailureKind) -> List[Failure]:
        return [f for f in self.failures if f.kind == kind]

    @property
    def complete(self) -> bool:
        return not self.failures
