"""
CLI (Command Line Interface).

Thin layer over catalogsearch.catalog.Catalog, e.g.:

    catalogsearch search "machine learning, ai"
    catalogsearch programs "data science"
    catalogsearch stats
    catalogsearch status
    catalogsearch fetch [--force]
    catalogsearch export <file.json> [--programs]

Global options (--pdf, --url, --timeout) override the CATALOG_* environment
variables. The first search parses the whole PDF, which can take minutes.
"""

from __future__ import annotations

import argparse
import dataclasses
from collections import Counter
from datetime import datetime
from pathlib import Path
from typing import Sequence

from rich import box
from rich.console import Console
from rich.table import Table

from catalogsearch.catalog import Catalog
from catalogsearch.config import PROCESSED_DIR, Settings
from catalogsearch.fetch import fetch_document
from catalogsearch.log import setup_logging
from catalogsearch.model import COURSE, PROGRAM, SearchResult
from catalogsearch.search import search_query
from catalogsearch.storage import export_records, load_records


console = Console()


def _settings_from_args(args: argparse.Namespace) -> Settings:
    """
    Environment first, then explicit CLI flags on top.
    """
    settings = Settings.from_env()
    overrides = {}
    if args.pdf:
        overrides["pdf_path"] = Path(args.pdf).expanduser()
    if args.url:
        overrides["catalog_url"] = args.url
    if args.timeout is not None and args.timeout > 0:
        overrides["fetch_timeout"] = args.timeout
    return dataclasses.replace(settings, **overrides) if overrides else settings


def _print_results(results: Sequence[SearchResult], limit: int, kind: str) -> None:
    table = Table(box=box.SIMPLE_HEAVY, show_lines=False)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Program" if kind == PROGRAM else "Course", style="bold cyan", no_wrap=True)
    if kind == COURSE:
        table.add_column("Name")
    table.add_column("Degree" if kind == PROGRAM else "Department", style="green")
    table.add_column("Score", justify="right", style="yellow")
    table.add_column("Why relevant")

    for i, r in enumerate(results[:limit], start=1):
        rec = r.record
        cells = [str(i), rec.identifier]
        if kind == COURSE:
            cells.append(rec.name)
        cells.extend([rec.category, f"{r.score:g}", r.justification])
        table.add_row(*cells)

    console.print(table)
    if len(results) > limit:
        console.print(f"... and {len(results) - limit} more results")


def _cmd_search(args: argparse.Namespace, catalog: Catalog) -> int:
    """
    Ranked course search (from the PDF, or from an exported snapshot).
    """
    text = (args.text or "").strip()
    if not text:
        console.print("Please provide a search text.")
        return 1

    if args.snapshot:
        results = search_query(load_records(args.snapshot), text)
    else:
        results = catalog.search_courses(text)

    if not results:
        console.print("No results.")
        return 0

    console.print(f"Found {len(results)} courses for '{text}'")
    _print_results(results, args.limit, COURSE)
    return 0


def _cmd_programs(args: argparse.Namespace, catalog: Catalog) -> int:
    text = (args.text or "").strip()
    if not text:
        console.print("Please provide a search text.")
        return 1

    results = catalog.search_programs(text)
    if not results:
        console.print("No results.")
        return 0

    console.print(f"Found {len(results)} programs for '{text}'")
    _print_results(results, args.limit, PROGRAM)
    return 0


def _cmd_stats(args: argparse.Namespace, catalog: Catalog) -> int:
    """
    Parse overview: totals, sample records and per-department counts.
    """
    courses = catalog.courses()
    console.print(f"Total courses: {len(courses)}")

    report = catalog.last_report(COURSE)
    if report is not None:
        console.print(f"Pages read: {report.pages_read} | Failures: {len(report.failures)}")
        for failure in report.failures[:5]:
            console.print(f"  - {failure}")

    if not courses:
        return 0

    sample = Table(title="Sample courses", box=box.SIMPLE)
    sample.add_column("Course", style="bold cyan")
    sample.add_column("Name")
    sample.add_column("Credits", justify="right")
    sample.add_column("Keywords", justify="right")
    for c in courses[:10]:
        sample.add_row(c.identifier, c.name, c.credits or "", str(len(c.keywords)))
    console.print(sample)

    counts = Counter(c.category for c in courses)
    by_dept = Table(title="Courses per department", box=box.SIMPLE)
    by_dept.add_column("Department", style="green")
    by_dept.add_column("Count", justify="right", style="yellow")
    for dept, n in counts.most_common():
        by_dept.add_row(dept, str(n))
    console.print(by_dept)
    return 0


def _cmd_status(args: argparse.Namespace, catalog: Catalog) -> int:
    """
    Show where the PDF lives and whether it is there.
    """
    path = catalog.settings.pdf_path
    exists = path.exists()
    size = path.stat().st_size if exists else 0

    console.print(f"PDF path      : {path}")
    console.print(f"Exists        : {exists}")
    console.print(f"Data folder   : {'yes' if path.parent.exists() else 'no'}")
    if exists:
        modified = datetime.fromtimestamp(path.stat().st_mtime).isoformat(timespec="seconds")
        console.print(f"File size     : {size} bytes ({size / 1024 / 1024:.2f} MB)")
        console.print(f"Last modified : {modified}")
    console.print(f"Source URL    : {catalog.settings.catalog_url}")
    return 0


def _cmd_fetch(args: argparse.Namespace, catalog: Catalog) -> int:
    settings = catalog.settings
    if settings.pdf_path.exists() and not args.force:
        console.print(f"PDF already present: {settings.pdf_path} (use --force to re-download)")
        return 0

    result = fetch_document(settings.catalog_url, settings.pdf_path, timeout=settings.fetch_timeout)
    if not result.ok:
        console.print(f"Download failed: {result.failure}")
        return 1

    console.print(f"Downloaded {result.size} bytes ({result.size / 1024 / 1024:.2f} MB) to: {result.path}")
    return 0


def _cmd_export(args: argparse.Namespace, catalog: Catalog) -> int:
    out_path = (args.out or "").strip()
    if not out_path:
        console.print("Please provide output .json path.")
        return 1

    kind = PROGRAM if args.programs else COURSE
    records = catalog.programs() if kind == PROGRAM else catalog.courses()
    n = export_records(records, out_path, kind=kind)
    console.print(f"Exported {n} {kind} records to: {out_path}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argparse CLI parser with sub-commands.
    """
    parser = argparse.ArgumentParser(prog="catalogsearch", description="Course catalog search CLI")
    parser.add_argument("--pdf", type=str, default=None, help="Local catalog PDF path")
    parser.add_argument("--url", type=str, default=None, help="Catalog PDF download URL")
    parser.add_argument("--timeout", type=float, default=None, help="Download timeout in seconds")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p_search = sub.add_parser("search", help="Search courses")
    p_search.add_argument("text", type=str, help="Search text, e.g. 'machine learning, ai'")
    p_search.add_argument("--limit", type=int, default=20, help="Max rows to show")
    p_search.add_argument("--snapshot", type=str, default=None, help="Search an exported JSON snapshot instead")

    p_programs = sub.add_parser("programs", help="Search graduate programs")
    p_programs.add_argument("text", type=str, help="Search text")
    p_programs.add_argument("--limit", type=int, default=20, help="Max rows to show")

    sub.add_parser("stats", help="Parse the catalog and show an overview")
    sub.add_parser("status", help="Show catalog PDF status")

    p_fetch = sub.add_parser("fetch", help="Download the catalog PDF")
    p_fetch.add_argument("--force", action="store_true", help="Re-download even if the PDF exists")

    p_export = sub.add_parser("export", help="Export parsed records to JSON")
    p_export.add_argument(
        "out", type=str, nargs="?", default=str(PROCESSED_DIR / "courses.json"), help="Output file path"
    )
    p_export.add_argument("--programs", action="store_true", help="Export programs instead of courses")

    return parser


def main(argv: list[str] | None = None) -> None:
    """
    CLI entry point. Parses args, dispatches to command handlers,
    and exits via SystemExit with a return code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = _settings_from_args(args)
    setup_logging("DEBUG" if args.verbose else settings.log_level)

    catalog = Catalog(settings)

    handlers = {
        "search": _cmd_search,
        "programs": _cmd_programs,
        "stats": _cmd_stats,
        "status": _cmd_status,
        "fetch": _cmd_fetch,
        "export": _cmd_export,
    }
    handler = handlers.get(args.command)
    if handler is None:
        raise SystemExit(2)
    raise SystemExit(handler(args, catalog))
