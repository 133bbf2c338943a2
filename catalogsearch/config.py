"""
Runtime settings.

Defaults keep all data inside the package (data/raw/course_catalog.pdf), like
the rest of the project's data files. Each value can be overridden from the
environment (or a .env file):

    CATALOG_PDF_URL        where to download the catalog PDF from
    CATALOG_PDF_PATH       local path of the PDF
    CATALOG_FETCH_TIMEOUT  seconds allowed for the whole download
    CATALOG_LOG_LEVEL      DEBUG / INFO / WARNING / ...
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

from catalogsearch.fetch import DEFAULT_TIMEOUT


logger = logging.getLogger(__name__)


PACKAGE_DIR = Path(__file__).resolve().parent
RAW_DIR = PACKAGE_DIR / "data" / "raw"
PROCESSED_DIR = PACKAGE_DIR / "data" / "processed"

DEFAULT_PDF_PATH = RAW_DIR / "course_catalog.pdf"
DEFAULT_CATALOG_URL = (
    "https://catalog.northeastern.edu/pdf/Northeastern%20University%202024-2025%20Graduate%20Catalog.pdf"
)
DEFAULT_LOG_LEVEL = "INFO"


@dataclass(frozen=True)
class Settings:
    catalog_url: str = DEFAULT_CATALOG_URL
    pdf_path: Path = DEFAULT_PDF_PATH
    fetch_timeout: float = DEFAULT_TIMEOUT
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Build settings from `env`, or from os.environ after loading .env.

        A malformed timeout falls back to the default instead of failing.
        """
        if env is None:
            load_dotenv()
            env = os.environ

        timeout = DEFAULT_TIMEOUT
        raw_timeout = (env.get("CATALOG_FETCH_TIMEOUT") or "").strip()
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError:
                logger.warning("Ignoring invalid CATALOG_FETCH_TIMEOUT=%r", raw_timeout)
            else:
                if timeout <= 0:
                    logger.warning("Ignoring non-positive CATALOG_FETCH_TIMEOUT=%r", raw_timeout)
                    timeout = DEFAULT_TIMEOUT

        raw_path = (env.get("CATALOG_PDF_PATH") or "").strip()

        return cls(
            catalog_url=(env.get("CATALOG_PDF_URL") or "").strip() or DEFAULT_CATALOG_URL,
            pdf_path=Path(raw_path).expanduser() if raw_path else DEFAULT_PDF_PATH,
            fetch_timeout=timeout,
            log_level=(env.get("CATALOG_LOG_LEVEL") or "").strip().upper() or DEFAULT_LOG_LEVEL,
        )
