"""
Text normalization for PDF-extracted text.

PDF text layers often keep typographic ligatures and non-breaking spaces,
which break plain regex matching ("Classiﬁcation" vs "Classification").
"""

from __future__ import annotations

from typing import Optional


_REPLACEMENTS = (
    ("\ufb01", "fi"),
    ("\ufb02", "fl"),
    ("\u00a0", " "),
    ("\ufb00", "ff"),
    ("\ufb03", "ffi"),
    ("\ufb04", "ffl"),
)


def normalize_text(text: Optional[str]) -> str:
    """
    Replace ligatures and non-breaking spaces with plain ASCII.

    Idempotent: no replacement produces a character that is itself replaced.
    """
    if not text:
        return ""
    for src, dst in _REPLACEMENTS:
        text = text.replace(src, dst)
    return text
