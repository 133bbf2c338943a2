"""
Central data model definitions used across the project.

This module defines the canonical structure of catalog records and search
results so that:
- extraction, search and CLI layers share the same field names
- records stay immutable once the catalog has been parsed
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Optional, Tuple


COURSE = "course"
PROGRAM = "program"


@dataclass(frozen=True)
class CatalogRecord:
    """
    One parsed course or graduate program.

    For courses `category` is the department and `group` the college.
    For programs `category` is the degree type (MS, MBA, ...) and `group` the college.
    """

    identifier: str
    name: str
    description: str = ""
    category: str = ""
    group: str = ""
    keywords: FrozenSet[str] = field(default_factory=frozenset)
    kind: str = COURSE
    credits: Optional[str] = None
    concentrations: Tuple[str, ...] = ()
    prerequisites: Tuple[str, ...] = ()
    page: Optional[int] = None

    @property
    def prefix(self) -> str:
        return self.identifier.split(" ", 1)[0] if self.identifier else ""

    def to_dict(self) -> dict:
        return {
            "identifier": self.identifier,
            "name": self.name,
            "description": self.description,
            "category": self.category,
            "group": self.group,
            "keywords": sorted(self.keywords),
            "kind": self.kind,
            "credits": self.credits,
            "concentrations": list(self.concentrations),
            "prerequisites": list(self.prerequisites),
            "page": self.page,
        }


@dataclass(frozen=True)
class SearchResult:
    """
    A record plus how well it matched a query.
    """

    record: CatalogRecord
    score: float
    matched_terms: Tuple[str, ...]
    justification: str

    @property
    def identifier(self) -> str:
        return self.record.identifier
