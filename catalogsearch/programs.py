"""
Graduate program extraction (whole-document text -> program records).

Programs are found as "<Name>, <Degree>" headings (in a few layouts) or as
"Master of Science in <Name>". The description is taken from the prose that
follows the heading, up to the first requirements table / URL / next program.
"""

from __future__ import annotations

import logging
import re
from typing import List, Optional, Pattern, Tuple

from catalogsearch.keywords import generate_keywords
from catalogsearch.model import PROGRAM, CatalogRecord


logger = logging.getLogger(__name__)


DEFAULT_COLLEGE = "Northeastern University"

_DEGREES = {
    "ms": "MS",
    "ma": "MA",
    "mba": "MBA",
    "med": "MEd",
    "mfa": "MFA",
    "phd": "PhD",
    "mpa": "MPA",
    "mps": "MPS",
    "graduate certificate": "Graduate Certificate",
    "certificate": "Certificate",
}

_FALLBACK_DEGREES = ("MS", "MA", "MBA", "MEd", "MFA", "PhD", "MPA", "MPS")

_NAME_CHARS = r"[A-Za-z \t\-&,]"
_FLAGS = re.IGNORECASE | re.MULTILINE

# (pattern, fixed degree or None when group 2 holds the degree)
PROGRAM_PATTERNS: Tuple[Tuple[Pattern[str], Optional[str]], ...] = (
    (
        re.compile(
            rf"^({_NAME_CHARS}+?)[ \t]*[, \t][ \t]*"
            r"(MS|MA|MBA|MEd|MFA|PhD|MPA|MPS|Graduate Certificate|Certificate)\b",
            _FLAGS,
        ),
        None,
    ),
    (
        re.compile(
            r"(?i:Master[ \t]+of[ \t]+Science[ \t]+in)[ \t]+"
            r"([A-Z][A-Za-z\-&]*(?:[ \t]+(?:and|of|in|for|&|[A-Z][A-Za-z\-&]*))*)",
            re.MULTILINE,
        ),
        "MS",
    ),
    (
        re.compile(rf"^#+[ \t]*({_NAME_CHARS}+?)[ \t]*,[ \t]*(MS|MA|MBA|MEd|MFA|PhD|MPA|MPS)\b", _FLAGS),
        None,
    ),
    (
        re.compile(rf"\*\*({_NAME_CHARS}+?)[ \t]*,[ \t]*(MS|MA|MBA|MEd|MFA|PhD|MPA|MPS)\*\*", _FLAGS),
        None,
    ),
    (
        re.compile(rf"([A-Za-z]{_NAME_CHARS}{{2,50}})[ \t]*,[ \t]*(MS|MA|MBA|MEd|PhD|MPA|MPS)[ \t]*$", _FLAGS),
        None,
    ),
)

_REJECT_NAME_PARTS = ("Professor", "University", "College,")

_DESCRIPTION_END_PATTERNS: Tuple[Pattern[str], ...] = tuple(
    re.compile(p, re.IGNORECASE | re.MULTILINE)
    for p in (
        r"Program Requirements",
        r"Core Requirements",
        r"Admission Requirements",
        r"Code\s+Title\s+Hours",
        r"Complete all courses",
        r"semester hours required",
        r"University Faculty",
        r"\d+\s*(?:total\s+)?semester\s+hours",
        r"Minimum.*GPA",
        r"Concentration Options",
        r"Electives",
        r"^\s*•",
        r"https?://",
        r"\([A-Za-z]+://[^)]+\)",
        r"\d{3}[A-Za-z]",
        r"\.{5,}",
        r"\s+\d{3,4}\s*$",
        r",\s*(?:MS|MA|MBA|PhD|MFA)\b",
    )
)

_DESCRIPTIVE_WORDS = (
    "program",
    "master",
    "degree",
    "student",
    "curriculum",
    "designed",
    "provides",
    "prepares",
    "focuses",
    "offers",
)

_COLLEGE_PATTERNS: Tuple[Tuple[Pattern[str], str], ...] = tuple(
    (re.compile(p, re.IGNORECASE), college)
    for p, college in (
        (r"Khoury College(?:\s+of Computer Sciences)?", "Khoury College of Computer Sciences"),
        (r"College of Engineering", "College of Engineering"),
        (r"College of Science", "College of Science"),
        (r"D['’]Amore[\s-]McKim(?:\s+School of Business)?", "D'Amore-McKim School of Business"),
        (r"Bouvé College(?:\s+of Health Sciences)?", "Bouvé College of Health Sciences"),
        (r"College of Arts,?\s*Media(?:\s+and Design)?", "College of Arts, Media and Design"),
        (r"School of Law", "School of Law"),
        (r"College of Social Sciences(?:\s+and Humanities)?", "College of Social Sciences and Humanities"),
    )
)

_SENTENCE = re.compile(r"[A-Z][^.!?]*[.!?]")
_MANY_DIGITS = re.compile(r"\d{3,}")


def _clean_program_name(raw: str) -> str:
    name = re.sub(r"\s+", " ", raw).strip(" \t,-&")
    return re.sub(r"\s+(?:and|of|in|for|&)$", "", name)


def _is_valid_name(name: str) -> bool:
    if len(name) < 3 or len(name) > 100:
        return False
    return not any(part in name for part in _REJECT_NAME_PARTS)


def infer_college(text: str) -> str:
    """
    Find the owning college in free text; falls back to subject hints in the name.
    """
    for pattern, college in _COLLEGE_PATTERNS:
        if pattern.search(text):
            return college

    lowered = text.lower()
    if any(w in lowered for w in ("computer", "artificial intelligence", "data science", "cybersecurity")):
        return "Khoury College of Computer Sciences"
    if "engineering" in lowered:
        return "College of Engineering"
    if any(w in lowered for w in ("business", "management", "finance", "marketing")):
        return "D'Amore-McKim School of Business"
    return DEFAULT_COLLEGE


def extract_program_description(text: str, start: int) -> str:
    """
    Pull a short description from the text following a program heading.

    Prefers up to three sentences that read like program prose
    ("The program prepares students ..."), otherwise the raw cleaned chunk.
    """
    if start >= len(text):
        return ""

    tail = text[start:].lstrip()
    end = min(2000, len(tail))
    for pattern in _DESCRIPTION_END_PATTERNS:
        m = pattern.search(tail, 0, end)
        if m and 20 < m.start() < end:
            end = m.start()

    raw = tail[:end].strip()
    raw = re.sub(r"\s+", " ", raw)
    raw = re.sub(r"\.{2,}", "", raw)
    raw = re.sub(r"\d{3,4}(?=[A-Z])", " ", raw)
    raw = re.sub(r"\([^)]*https?://[^)]+\)", "", raw, flags=re.IGNORECASE)
    raw = re.sub(r"https?://\S+", "", raw, flags=re.IGNORECASE)
    raw = re.sub(r"\s+", " ", raw).strip()

    sentences: List[str] = []
    for m in _SENTENCE.finditer(raw):
        sentence = m.group(0).strip()
        if len(sentence) <= 30:
            continue
        if "Professor" in sentence or "PhD," in sentence or "University," in sentence:
            continue
        if _MANY_DIGITS.search(sentence):
            continue
        lowered = sentence.lower()
        if any(w in lowered for w in _DESCRIPTIVE_WORDS):
            sentences.append(sentence)
            if len(sentences) >= 3:
                break

    if sentences:
        return " ".join(sentences)
    return raw if len(raw) > 50 else ""


def build_program_record(name: str, degree: str, description: str, college: str) -> CatalogRecord:
    return CatalogRecord(
        identifier=f"{name}, {degree}",
        name=name,
        description=description,
        category=degree,
        group=college,
        keywords=generate_keywords(degree, college, name),
        kind=PROGRAM,
    )


def _extract_from_lines(text: str) -> List[CatalogRecord]:
    """
    Last resort: lines ending in ", <degree>", description from the next long line.
    """
    out: List[CatalogRecord] = []
    lines = [ln for ln in text.splitlines() if ln.strip()]

    for i, raw_line in enumerate(lines):
        line = raw_line.strip()
        for degree in _FALLBACK_DEGREES:
            if not (line.endswith(f", {degree}") or line.endswith(f",{degree}")):
                continue

            name = _clean_program_name(line.rsplit(",", 1)[0])
            if 3 < len(name) < 100 and "Professor" not in name:
                description = ""
                for follow in lines[i + 1 : i + 10]:
                    if len(follow) > 50 and not any(w in follow for w in ("Code", "Hours", "Professor")):
                        description = follow.strip()
                        break
                out.append(build_program_record(name, degree, description, infer_college(name + " " + description)))
                logger.debug("Found program (direct): %s, %s", name, degree)
            break

    return out


def extract_programs(text: str) -> List[CatalogRecord]:
    """
    Extract program records from normalized whole-document text.

    Deduplicated case-insensitively on (name, degree); first occurrence wins.
    """
    programs: List[CatalogRecord] = []
    seen: set[Tuple[str, str]] = set()

    for pattern, fixed_degree in PROGRAM_PATTERNS:
        matches = list(pattern.finditer(text))
        logger.debug("Pattern %r found %d matches", pattern.pattern[:50], len(matches))

        for m in matches:
            name = _clean_program_name(m.group(1))
            degree = fixed_degree or _DEGREES.get(m.group(2).lower(), m.group(2).upper())

            if not _is_valid_name(name):
                continue

            key = (name.casefold(), degree.casefold())
            if key in seen:
                continue

            description = extract_program_description(text, m.end())
            if len(description) <= 50:
                continue

            seen.add(key)
            programs.append(build_program_record(name, degree, description, infer_college(description + " " + name)))
            logger.debug("Found program: %s, %s", name, degree)

    if not programs:
        logger.info("No programs found with patterns, trying direct line search...")
        for record in _extract_from_lines(text):
            key = (record.name.casefold(), record.category.casefold())
            if key not in seen:
                seen.add(key)
                programs.append(record)

    return programs
