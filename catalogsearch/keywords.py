"""
Keyword expansion for catalog records.

Keywords are derived only from a record's prefix, its classification label and
its lower-cased name. Previously generated keywords are never fed back in, so
expanding the same record twice gives the same set.
"""

from __future__ import annotations

from typing import FrozenSet


# substring of the (lower-cased) name -> keywords it implies
KEYWORD_MAPPINGS: dict[str, tuple[str, ...]] = {
    "artificial intelligence": ("ai", "artificial intelligence", "machine learning"),
    "machine learning": ("ml", "machine learning", "ai", "data science"),
    "deep learning": ("deep learning", "neural networks", "ai", "ml"),
    "neural network": ("neural networks", "deep learning", "ai", "ml"),
    "data science": ("data science", "analytics", "data", "statistics"),
    "data mining": ("data mining", "machine learning", "analytics", "data science"),
    "data visual": ("data visualization", "visualization", "data", "analytics"),
    "algorithm": ("algorithms", "programming", "computer science"),
    "pattern recognition": ("pattern recognition", "ml", "computer vision", "ai"),
    "computer vision": ("computer vision", "ai", "ml", "image processing"),
    "natural language": ("nlp", "natural language processing", "ai", "text mining"),
    "human-computer": ("hci", "human-computer interaction", "interaction", "ux"),
    "robotics": ("robotics", "robots", "engineering", "ai"),
    "database": ("database", "data", "sql", "data management"),
    "software": ("software", "programming", "development"),
    "programming": ("programming", "software", "coding"),
    "statistics": ("statistics", "statistical", "data", "analytics"),
    "numerical": ("numerical methods", "optimization", "mathematics"),
    "control": ("control systems", "engineering", "automation"),
    "mechanics": ("mechanics", "mechanical", "engineering"),
    "mixed reality": ("mixed reality", "vr", "ar", "virtual reality", "augmented reality"),
    "empirical": ("research methods", "empirical research", "data analysis"),
    "analytics": ("analytics", "data analytics", "business analytics", "data science"),
    "bioinformatics": ("bioinformatics", "computational biology", "data science"),
    "cybersecurity": ("cybersecurity", "security", "information security"),
    "cloud": ("cloud computing", "distributed systems", "aws", "azure"),
    "big data": ("big data", "data engineering", "hadoop", "spark"),
}


def generate_keywords(prefix: str, label: str, name: str) -> FrozenSet[str]:
    """
    Build the keyword set for one record.

    - prefix: identifier prefix ("CS") or degree type for programs
    - label: department (or college for programs)
    - name: display name; synonym keys are matched as substrings of it
    """
    out: set[str] = set()

    for value in (prefix, label):
        value = (value or "").strip().lower()
        if value:
            out.add(value)

    lowered = (name or "").lower()
    for key, synonyms in KEYWORD_MAPPINGS.items():
        if key in lowered:
            out.update(synonyms)

    return frozenset(out)
