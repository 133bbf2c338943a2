"""
Source document acquisition.

The catalog PDF is large (>1000 pages, tens of MB), so it is streamed to a
temporary ".part" file and moved into place only once complete. A partially
downloaded file never ends up at the configured path.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Optional

import requests

from catalogsearch.results import Failure, FailureKind, FetchResult


logger = logging.getLogger(__name__)


DEFAULT_TIMEOUT = 300.0
CHUNK_SIZE = 1024 * 1024


def fetch_document(
    url: str,
    path: str | Path,
    timeout: float = DEFAULT_TIMEOUT,
    session: Optional[requests.Session] = None,
) -> FetchResult:
    """
    Download `url` to `path`. Never raises for network / HTTP / disk errors;
    those come back as a DOCUMENT_FETCH failure.

    `timeout` bounds the whole download, not just each socket read.
    """
    out = Path(path)
    part = out.with_name(out.name + ".part")
    getter = session.get if session is not None else requests.get

    logger.info("Downloading from: %s", url)
    started = time.monotonic()
    size = 0

    try:
        out.parent.mkdir(parents=True, exist_ok=True)
        resp = getter(url, stream=True, timeout=timeout)
        try:
            resp.raise_for_status()
            with open(part, "wb") as f:
                for chunk in resp.iter_content(chunk_size=CHUNK_SIZE):
                    if time.monotonic() - started > timeout:
                        raise requests.exceptions.Timeout(f"download exceeded {timeout:.0f}s")
                    if chunk:
                        f.write(chunk)
                        size += len(chunk)
        finally:
            resp.close()
        part.replace(out)
    except (requests.RequestException, OSError) as exc:
        part.unlink(missing_ok=True)
        logger.error("Error downloading PDF: %s", exc)
        return FetchResult(path=out, failure=Failure(FailureKind.DOCUMENT_FETCH, str(exc)))

    logger.info("Downloaded %d bytes, saved to: %s", size, out)
    return FetchResult(path=out, downloaded=True, size=size)


def ensure_document(url: str, path: str | Path, timeout: float = DEFAULT_TIMEOUT) -> FetchResult:
    """
    Return the local document, downloading it first if it is missing.
    """
    out = Path(path)
    if out.exists():
        logger.info("PDF exists, parsing...")
        return FetchResult(path=out, size=out.stat().st_size)

    logger.info("PDF not found, downloading...")
    return fetch_document(url, out, timeout=timeout)
