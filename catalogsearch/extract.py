"""
Course extraction (normalized page text -> course records).

PDF-to-text output is inconsistent about spacing, so a page is scanned with an
ordered list of strategies, each tolerating one layout:

- adjacent: "ACCT6217Corporate Governance and Ethics"
- spaced:   "ACCT 6217 Corporate Governance and Ethics"
- camel:    "ACCT6217CorporateGovernanceAndEthics"
- entry:    "CS 5100. Foundations of Artificial Intelligence. (4 Hours)"
            followed by the course description

Rules:
- identifier = "<PREFIX> <NUMBER>"
- first strategy / first match wins within a page
- a candidate needs a cleaned name longer than 5 characters
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator, List, Optional, Pattern, Sequence, Tuple

from catalogsearch.classify import classify
from catalogsearch.keywords import generate_keywords
from catalogsearch.model import COURSE, CatalogRecord


DEFAULT_CREDITS = "4"
MIN_NAME_LENGTH = 6

_NAME_TAIL = r"[A-Z][a-z]+(?:[ \t]*[A-Z][a-z]+|[ \t]+[a-z]+)*"


@dataclass(frozen=True)
class CourseEntry:
    """
    One raw hit from a strategy, before classification.
    """

    identifier: str
    name: str
    credits: Optional[str] = None
    description: str = ""
    prerequisites: Tuple[str, ...] = ()
    strategy: str = ""


# ---------------------------------------------------------------------------
# Name cleanup
# ---------------------------------------------------------------------------

_CONCAT_CONJUNCTION = re.compile(r"(?<=[a-z])(And|For|Of|In|With|To|The)(?=[A-Z])")
_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")
_WHITESPACE = re.compile(r"\s+")

_TRIMS: Tuple[Pattern[str], ...] = (
    re.compile(r"^(?:and|or|for|of|in|with|to)\s+", re.IGNORECASE),
    re.compile(r"\s+(?:and|or|for|of|in|with|to|the)$", re.IGNORECASE),
    re.compile(r"^(?:Code|Title|Hours|Elective|Required|Complete|Course)\s+", re.IGNORECASE),
    re.compile(r"\s*[A-Z]{2,6}\s*\d{4}\s*$"),
    re.compile(r"\s*\d+\s*$"),
)


def clean_name(raw: str) -> str:
    """
    Turn a matched name group into a display name.

    "CorporateGovernanceAndEthics" -> "Corporate Governance and Ethics"
    """
    if not raw or not raw.strip():
        return ""

    name = _CONCAT_CONJUNCTION.sub(lambda m: f" {m.group(1).lower()} ", raw)
    name = _CAMEL_BOUNDARY.sub(" ", name)
    name = _WHITESPACE.sub(" ", name).strip()

    # Trimming one artifact can expose another ("Design and 12" -> "Design and")
    while True:
        before = name
        for pattern in _TRIMS:
            name = pattern.sub("", name).strip()
        if name == before:
            return name


# ---------------------------------------------------------------------------
# Credits / description helpers
# ---------------------------------------------------------------------------


def extract_credits(text: str, identifier: str) -> Optional[str]:
    """
    Look for "<code> ... 4 Credits|Hours|SH|CH" shortly after the course code.
    """
    parts = identifier.split()
    if len(parts) != 2:
        return None
    prefix, number = (re.escape(p) for p in parts)
    pattern = rf"{prefix}\s*{number}[^0-9]{{0,120}}?(\d+(?:\.\d+)?)\s*(?:Credits?|Hours?|SH|CH)\b"
    m = re.search(pattern, text, re.IGNORECASE)
    return m.group(1) if m else None


_CODE_REF = re.compile(r"\b([A-Z]{2,6})\s*(\d{4})\b")
_SECTION_MARKERS = re.compile(r"(Prerequisite\(s\):|Corequisite\(s\):|Attribute\(s\):)")


def split_entry_body(body: str) -> Tuple[str, Tuple[str, ...]]:
    """
    Split the text below an entry header into (description, prerequisites).
    """
    body = _WHITESPACE.sub(" ", body).strip()
    chunks = _SECTION_MARKERS.split(body)

    description = chunks[0].strip()
    prerequisites: List[str] = []

    # chunks: [desc, marker, text, marker, text, ...]
    for i in range(1, len(chunks) - 1, 2):
        if chunks[i] != "Prerequisite(s):":
            continue
        for prefix, number in _CODE_REF.findall(chunks[i + 1]):
            code = f"{prefix} {number}"
            if code not in prerequisites:
                prerequisites.append(code)

    return description, tuple(prerequisites)


# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------


class ExtractionStrategy:
    """
    One named pattern. Group 1 = prefix, group 2 = number, group 3 = name.
    """

    def __init__(self, name: str, pattern: str, flags: int = 0) -> None:
        self.name = name
        self.pattern = re.compile(pattern, flags)

    def __repr__(self) -> str:
        return f"ExtractionStrategy({self.name!r})"

    def find(self, text: str) -> Iterator[CourseEntry]:
        for m in self.pattern.finditer(text):
            yield CourseEntry(
                identifier=f"{m.group(1)} {m.group(2)}",
                name=m.group(3),
                strategy=self.name,
            )


class EntryStrategy(ExtractionStrategy):
    """
    Catalog entry headers; the text up to the next header is the description.
    Group 4 holds the credit hours.
    """

    def find(self, text: str) -> Iterator[CourseEntry]:
        matches = list(self.pattern.finditer(text))
        for i, m in enumerate(matches):
            end = matches[i + 1].start() if i + 1 < len(matches) else len(text)
            description, prerequisites = split_entry_body(text[m.end():end])
            yield CourseEntry(
                identifier=f"{m.group(1)} {m.group(2)}",
                name=m.group(3),
                credits=m.group(4),
                description=description,
                prerequisites=prerequisites,
                strategy=self.name,
            )


STRATEGIES: Tuple[ExtractionStrategy, ...] = (
    ExtractionStrategy("adjacent", rf"([A-Z]{{2,6}})\s*(\d{{4}})({_NAME_TAIL})"),
    ExtractionStrategy("spaced", rf"([A-Z]{{2,6}})[ \t]+(\d{{4}})[ \t]+({_NAME_TAIL})"),
    ExtractionStrategy("camel", r"([A-Z]{2,6})(\d{4})([A-Z][a-z]+(?:[A-Z][a-z]+)*)"),
    EntryStrategy(
        "entry",
        r"^[ \t]*([A-Z]{2,6})[ \t]+(\d{4})\.[ \t]+([^\n]+?)\.[ \t]*"
        r"\((\d+(?:\.\d+)?)(?:[ \t]*-[ \t]*\d+(?:\.\d+)?)?[ \t]*(?:Semester[ \t]+)?(?:Hours?|Credits?|SH)\)",
        re.MULTILINE,
    ),
)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def extract_entries(
    text: str,
    strategies: Sequence[ExtractionStrategy] = STRATEGIES,
) -> List[CourseEntry]:
    """
    Run all strategies over one page of normalized text.

    Returns cleaned entries, at most one per identifier, in discovery order.
    """
    out: List[CourseEntry] = []
    seen: set[str] = set()

    for strategy in strategies:
        for entry in strategy.find(text):
            if entry.identifier in seen:
                continue

            name = clean_name(entry.name)
            if len(name) < MIN_NAME_LENGTH:
                continue

            credits = entry.credits or extract_credits(text, entry.identifier) or DEFAULT_CREDITS
            seen.add(entry.identifier)
            out.append(
                CourseEntry(
                    identifier=entry.identifier,
                    name=name,
                    credits=credits,
                    description=entry.description,
                    prerequisites=entry.prerequisites,
                    strategy=entry.strategy,
                )
            )

    return out


def build_course_record(entry: CourseEntry, page_number: Optional[int] = None) -> CatalogRecord:
    """
    Classify an entry and attach its keywords.
    """
    department, college = classify(entry.identifier)
    prefix = entry.identifier.split(" ", 1)[0]
    return CatalogRecord(
        identifier=entry.identifier,
        name=entry.name,
        description=entry.description,
        category=department,
        group=college,
        keywords=generate_keywords(prefix, department, entry.name),
        kind=COURSE,
        credits=entry.credits,
        prerequisites=entry.prerequisites,
        page=page_number,
    )


def extract_courses(text: str, page_number: Optional[int] = None) -> List[CatalogRecord]:
    """
    Extract course records from one page of normalized text.
    """
    return [build_course_record(entry, page_number) for entry in extract_entries(text)]
