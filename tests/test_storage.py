"""
Unit tests for JSON snapshots of catalog records.
"""

import json
import tempfile
import unittest
from pathlib import Path

from catalogsearch.model import PROGRAM, CatalogRecord
from catalogsearch.storage import export_records, load_records


RECORDS = [
    CatalogRecord(
        identifier="CS 5100",
        name="Foundations of Artificial Intelligence",
        description="Introduces the fundamental problems of AI.",
        category="Computer Science",
        group="Khoury College of Computer Sciences",
        keywords=frozenset({"cs", "ai"}),
        credits="4",
        prerequisites=("CS 5004",),
        page=12,
    ),
    CatalogRecord(identifier="ACCT 6217", name="Corporate Governance and Ethics", category="ACCT"),
]


class TestSnapshot(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.dir = Path(self._tmp.name)

    def test_export_then_load(self) -> None:
        path = self.dir / "processed" / "courses.json"
        n = export_records(RECORDS, path)
        self.assertEqual(n, 2)

        payload = json.loads(path.read_text(encoding="utf-8"))
        self.assertEqual(payload["kind"], "course")
        self.assertEqual(payload["records"][0]["keywords"], ["ai", "cs"])

        loaded = load_records(path)
        self.assertEqual(list(loaded), RECORDS)

    def test_program_kind(self) -> None:
        path = self.dir / "programs.json"
        program = CatalogRecord(identifier="Data Science, MS", name="Data Science", kind=PROGRAM)
        export_records([program], path, kind=PROGRAM)

        self.assertEqual(json.loads(path.read_text(encoding="utf-8"))["kind"], PROGRAM)
        self.assertEqual(load_records(path)[0].kind, PROGRAM)

    def test_missing_file(self) -> None:
        self.assertEqual(load_records(self.dir / "nope.json"), ())

    def test_invalid_json(self) -> None:
        path = self.dir / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        self.assertEqual(load_records(path), ())

    def test_rows_without_identifier_and_duplicates_skipped(self) -> None:
        path = self.dir / "rows.json"
        rows = [
            {"identifier": "CS 5800", "name": "Algorithms"},
            {"name": "No identifier"},
            {"identifier": "CS 5800", "name": "Duplicate"},
            "garbage",
        ]
        path.write_text(json.dumps({"records": rows}), encoding="utf-8")

        loaded = load_records(path)
        self.assertEqual([(r.identifier, r.name) for r in loaded], [("CS 5800", "Algorithms")])


if __name__ == "__main__":
    unittest.main()
