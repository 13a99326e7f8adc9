"""
Site list import.

Adds study sites from a site list document (CSV/Excel) to a ResearchStudy.
Each row becomes a contained Location referenced from ``ResearchStudy.site``.

Expected columns (case and spacing are normalised):
- Site Name (or Name), Phone, Email
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import pandas as pd

from .study import ResearchStudy
from .types import Location

logger = logging.getLogger(__name__)

_NAME_COLUMNS = ("site_name", "name", "facility")


@dataclass
class SiteRow:
    """One usable row of a site list."""
    name: str
    phone: Optional[str] = None
    email: Optional[str] = None


@dataclass
class SitesImportResult:
    """Result container for a site list import."""
    success: bool
    sites: List[Location] = field(default_factory=list)
    skipped_rows: int = 0
    error: Optional[str] = None
    source_file: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        result = {
            "success": self.success,
            "sourceFile": self.source_file,
            "summary": {
                "siteCount": len(self.sites),
                "skippedRows": self.skipped_rows,
            },
        }
        if self.error:
            result["error"] = self.error
        return result


def _cell(row: pd.Series, *columns: str) -> Optional[str]:
    for column in columns:
        value = row.get(column)
        if value is not None and not pd.isna(value) and str(value).strip():
            return str(value).strip()
    return None


def read_site_rows(df: pd.DataFrame) -> List[Optional[SiteRow]]:
    """Turn a site list frame into rows; rows without a name become None."""
    df = df.copy()
    df.columns = [str(c).lower().strip().replace(' ', '_') for c in df.columns]
    rows: List[Optional[SiteRow]] = []
    for _, row in df.iterrows():
        name = _cell(row, *_NAME_COLUMNS)
        if not name:
            rows.append(None)
            continue
        rows.append(SiteRow(
            name=name,
            phone=_cell(row, "phone", "telephone"),
            email=_cell(row, "email", "e-mail"),
        ))
    return rows


def load_sites(study: ResearchStudy, sites_path: str) -> SitesImportResult:
    """
    Add every site in a CSV/Excel site list to ``study``.

    Missing files, unsupported formats and unreadable files are reported in
    the result rather than raised. Rows are read in full before any site is
    added, so a failed import leaves ``study`` untouched.
    """
    logger.info(f"Loading sites list: {sites_path}")

    path = Path(sites_path)
    if not path.exists():
        return SitesImportResult(
            success=False,
            error=f"Sites file not found: {sites_path}",
            source_file=sites_path,
        )

    suffix = path.suffix.lower()
    if suffix not in ['.xlsx', '.xls', '.csv']:
        return SitesImportResult(
            success=False,
            error=f"Unsupported file format: {path.suffix}",
            source_file=sites_path,
        )

    try:
        if suffix == '.csv':
            df = pd.read_csv(sites_path, dtype=str)
        else:
            df = pd.read_excel(sites_path, dtype=str)
        rows = read_site_rows(df)
    except ImportError:
        return SitesImportResult(
            success=False,
            error="Excel support not installed. Run: pip install openpyxl",
            source_file=sites_path,
        )
    except Exception as e:
        logger.error(f"Sites import failed: {e}", extra={"source_file": sites_path})
        return SitesImportResult(
            success=False,
            error=str(e),
            source_file=sites_path,
        )

    result = SitesImportResult(success=True, source_file=sites_path)
    for index, row in enumerate(rows):
        if row is None:
            logger.warning(f"  Skipping row {index + 1}: no site name")
            result.skipped_rows += 1
            continue
        result.sites.append(study.add_site(row.name, row.phone, row.email))

    logger.info(f"  Added {len(result.sites)} sites to {study.id}")
    return result
