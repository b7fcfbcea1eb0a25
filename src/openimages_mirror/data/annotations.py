"""Bounding Box Annotation Tables.

This module loads the per-split bounding box tables
(``<section>-annotations-bbox.csv``) and reduces them to the columns
needed to pick images:

    ImageID, LabelName, XMin, XMax, YMin, YMax

The tables are large (the train split holds ~14M rows), so a cache
directory should be used whenever more than one run is expected.
"""

import io
import logging
from pathlib import Path

import pandas as pd
import requests

from openimages_mirror.config import SECTIONS, Settings, annotations_csv_name, get_settings
from openimages_mirror.data.sources import fetch_csv, write_table_atomic

logger = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

QUALITY_COLUMNS: tuple[str, ...] = (
    "IsOccluded",
    "IsTruncated",
    "IsGroupOf",
    "IsDepiction",
    "IsInside",
    "Source",
    "Confidence",
)
"""Quality and provenance columns that play no part in image selection."""

STRING_COLUMNS: dict[str, type] = {"ImageID": str, "LabelName": str}
"""Identifier columns, kept as strings (image IDs may look numeric)."""


# =============================================================================
# Projection
# =============================================================================

def project_annotations(table: pd.DataFrame) -> pd.DataFrame:
    """Drop the quality/provenance columns.

    Returns a new frame; the input is left untouched. Columns that are
    already absent are ignored.
    """
    drop = [column for column in QUALITY_COLUMNS if column in table.columns]
    return table.drop(columns=drop)


# =============================================================================
# Loading
# =============================================================================

def _read_annotations(source) -> pd.DataFrame:
    return pd.read_csv(source, dtype=STRING_COLUMNS)


def load_split(
    section: str,
    cache_dir: Path | None = None,
    *,
    settings: Settings | None = None,
    session: requests.Session | None = None,
) -> pd.DataFrame:
    """Load the bounding box table for one split.

    A cached file in ``cache_dir`` is parsed without network access.
    Otherwise the table is fetched and, when ``cache_dir`` is given,
    written there before returning. A failed cache write is reported as
    a CacheWriteWarning and does not prevent the table from being returned.

    Args:
        section: Split name ("train", "validation" or "test")
        cache_dir: Cache directory (None = no caching)
        settings: Source settings (default: get_settings())
        session: Optional HTTP session

    Returns:
        Projected table with one row per bounding box

    Raises:
        ValueError: If section is not a known split
        FetchError: If the table is not cached and cannot be fetched
    """
    if section not in SECTIONS:
        raise ValueError(f"Unknown section '{section}'. Expected one of {list(SECTIONS)}")

    settings = settings or get_settings()
    cache_path = Path(cache_dir) / annotations_csv_name(section) if cache_dir is not None else None

    if cache_path is not None and cache_path.exists():
        logger.info(f"Using cached {section} annotations: {cache_path}")
        table = _read_annotations(cache_path)
    else:
        body = fetch_csv(
            settings.annotations_url(section),
            session=session,
            timeout=settings.HTTP_TIMEOUT,
        )
        table = _read_annotations(io.BytesIO(body))
        if cache_path is not None:
            write_table_atomic(table, cache_path)

    logger.info(f"Loaded {len(table)} {section} bounding boxes", extra={"section": section})
    return project_annotations(table)
