"""
Weighted keyword search over catalog records.

Per record and query term, each field the term hits adds its weight:

    identifier      +10   (substring)
    name            +8    (substring)
    category/group  +4    (substring, department/college or degree/college)
    keywords        +5    (exact membership)
    description     +3    (substring)

Ranking: score descending, then identifier ascending.
"""

from __future__ import annotations

import logging
import re
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

from catalogsearch.model import CatalogRecord, SearchResult


logger = logging.getLogger(__name__)


MIN_TERM_LENGTH = 2
PREVIEW_LENGTH = 150
MAX_REASONS = 3

IDENTIFIER = "identifier"
NAME = "name"
CLASSIFICATION = "classification"
KEYWORDS = "keywords"
DESCRIPTION = "description"

_PHRASE_SPLIT = re.compile(r"[,+]")
_WORD_SPLIT = re.compile(r"[,+\s]")


def _hits_identifier(record: CatalogRecord, term: str) -> bool:
    return term in record.identifier.lower()


def _hits_name(record: CatalogRecord, term: str) -> bool:
    return term in record.name.lower()


def _hits_classification(record: CatalogRecord, term: str) -> bool:
    return term in record.category.lower() or term in record.group.lower()


def _hits_keywords(record: CatalogRecord, term: str) -> bool:
    return term in record.keywords


def _hits_description(record: CatalogRecord, term: str) -> bool:
    return bool(record.description) and term in record.description.lower()


# (field, weight, test) in priority order
FIELDS: Tuple[Tuple[str, float, Callable[[CatalogRecord, str], bool]], ...] = (
    (IDENTIFIER, 10.0, _hits_identifier),
    (NAME, 8.0, _hits_name),
    (CLASSIFICATION, 4.0, _hits_classification),
    (KEYWORDS, 5.0, _hits_keywords),
    (DESCRIPTION, 3.0, _hits_description),
)

_REASONS = {
    IDENTIFIER: "{label} matches '{term}'",
    NAME: "title contains '{term}'",
    CLASSIFICATION: "offered by '{term}'",
    KEYWORDS: "related to '{term}'",
    DESCRIPTION: "covers topics in '{term}'",
}

_IDENTIFIER_LABELS = {"course": "course number", "program": "program"}


def normalize_terms(terms: Iterable[Optional[str]]) -> List[str]:
    """
    Lower-case terms and collapse their whitespace; drop short and repeated ones.
    """
    out: List[str] = []
    for raw in terms:
        term = " ".join((raw or "").lower().split())
        if len(term) >= MIN_TERM_LENGTH and term not in out:
            out.append(term)
    return out


def split_query(query: Optional[str]) -> List[str]:
    """
    Turn free text into distinct, lower-cased search terms.

    Commas and plus signs separate phrases ("machine learning, ai"); a query
    without either is split on whitespace ("robotics vision").
    Terms shorter than 2 characters are dropped.
    """
    if not query or not query.strip():
        return []

    splitter = _PHRASE_SPLIT if _PHRASE_SPLIT.search(query) else _WORD_SPLIT
    return normalize_terms(splitter.split(query))


def score_record(record: CatalogRecord, terms: Sequence[str]) -> Tuple[float, List[str], dict]:
    """
    Score one record.

    Returns (score, matched terms in query order, term -> first field hit).
    Terms are compared lower-cased.
    """
    score = 0.0
    matched: List[str] = []
    best_field: dict = {}

    for term in normalize_terms(terms):
        for field_name, weight, hits in FIELDS:
            if not hits(record, term):
                continue
            score += weight
            if term not in best_field:
                best_field[term] = field_name
                matched.append(term)

    return score, matched, best_field


def description_preview(description: str) -> str:
    if not description:
        return ""
    if len(description) > PREVIEW_LENGTH:
        return description[:PREVIEW_LENGTH] + "..."
    return description


def build_justification(record: CatalogRecord, matched: Sequence[str], best_field: dict) -> str:
    """
    "This course is relevant because title contains 'x', related to 'y'. <preview>"
    """
    label = _IDENTIFIER_LABELS.get(record.kind, "identifier")
    reasons = [_REASONS[best_field[term]].format(label=label, term=term) for term in matched]
    reason_text = ", ".join(reasons[:MAX_REASONS])

    text = f"This {record.kind} is relevant because {reason_text}."
    preview = description_preview(record.description)
    return f"{text} {preview}" if preview else text


def rank(results: Iterable[SearchResult]) -> List[SearchResult]:
    return sorted(results, key=lambda r: (-r.score, r.record.identifier))


def search(records: Iterable[CatalogRecord], terms: Sequence[str]) -> List[SearchResult]:
    """
    Score every record against already-split terms and return ranked matches.
    Matching ignores case, so ["CS", "AI"] behaves like ["cs", "ai"].
    """
    terms = normalize_terms(terms)
    if not terms:
        return []

    results: List[SearchResult] = []
    for record in records:
        score, matched, best_field = score_record(record, terms)
        if not matched:
            continue
        results.append(
            SearchResult(
                record=record,
                score=score,
                matched_terms=tuple(matched),
                justification=build_justification(record, matched, best_field),
            )
        )

    ranked = rank(results)
    for r in ranked[:5]:
        logger.debug("Match: %s - Score: %s", r.record.identifier, r.score)
    return ranked


def search_query(records: Iterable[CatalogRecord], query: Optional[str]) -> List[SearchResult]:
    """
    Split a free-text query and search. Blank input gives [].
    """
    terms = split_query(query)
    logger.debug("Search terms: %s", ", ".join(terms))
    return search(records, terms)
