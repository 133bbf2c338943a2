"""
JSON snapshots of parsed catalog records.

Parsing the full catalog PDF takes a while. An exported snapshot
(data/processed/courses.json by default) can be searched directly with
`catalogsearch search --snapshot ...` without touching the PDF.

Schema:

    {"kind": "course", "records": [{...CatalogRecord fields...}, ...]}
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable, Tuple

from catalogsearch.model import COURSE, CatalogRecord


def export_records(records: Iterable[CatalogRecord], path: str | Path, kind: str = COURSE) -> int:
    """
    Write records to a JSON snapshot. Returns the number written.

    Creates parent directories if needed.
    """
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)

    rows = [r.to_dict() for r in records]
    payload = {"kind": kind, "records": rows}
    out.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
    return len(rows)


def _record_from_dict(row: dict[str, Any]) -> CatalogRecord:
    keywords = row.get("keywords") or []
    return CatalogRecord(
        identifier=str(row["identifier"]),
        name=str(row.get("name") or ""),
        description=str(row.get("description") or ""),
        category=str(row.get("category") or ""),
        group=str(row.get("group") or ""),
        keywords=frozenset(str(k).lower() for k in keywords),
        kind=str(row.get("kind") or COURSE),
        credits=row.get("credits"),
        concentrations=tuple(row.get("concentrations") or ()),
        prerequisites=tuple(row.get("prerequisites") or ()),
        page=row.get("page"),
    )


def load_records(path: str | Path) -> Tuple[CatalogRecord, ...]:
    """
    Load a snapshot written by export_records().

    Returns an empty tuple if the file does not exist or is invalid;
    rows without an identifier are skipped.
    """
    snapshot = Path(path)
    if not snapshot.exists():
        return ()

    try:
        data = json.loads(snapshot.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError, UnicodeDecodeError):
        return ()

    rows = data.get("records", []) if isinstance(data, dict) else []
    if not isinstance(rows, list):
        return ()

    out = []
    seen: set[str] = set()
    for row in rows:
        if not isinstance(row, dict) or not str(row.get("identifier") or "").strip():
            continue
        record = _record_from_dict(row)
        if record.identifier in seen:
            continue
        seen.add(record.identifier)
        out.append(record)
    return tuple(out)
