"""Index File Sources.

This module wraps the two collaborators used for the CSV index files:

- HTTP: ``requests`` fetches the raw CSV payloads
- Cache: ``pandas`` tables are written atomically into the cache directory

Functions:
    fetch_csv: Download a CSV payload, raising FetchError on failure
    write_table_atomic: Persist a table without leaving partial files
"""

import logging
import os
import tempfile
import warnings
from pathlib import Path

import pandas as pd
import requests

from openimages_mirror.errors import CacheWriteWarning, FetchError

logger = logging.getLogger(__name__)


# =============================================================================
# HTTP
# =============================================================================

def fetch_csv(
    url: str,
    session: requests.Session | None = None,
    timeout: float | None = None,
) -> bytes:
    """Download a CSV payload.

    Redirects are followed. Any status other than 200 is a failure.

    Args:
        url: Source URL
        session: Optional session to reuse connections (and to mock in tests)
        timeout: Request timeout in seconds (None = no timeout)

    Returns:
        Raw response body

    Raises:
        FetchError: If the request fails or returns a non-200 status
    """
    http = session or requests
    logger.info(f"Fetching {url}")

    try:
        response = http.get(url, timeout=timeout, allow_redirects=True)
    except requests.RequestException as e:
        raise FetchError(url, reason=str(e)) from e

    if response.status_code != 200:
        raise FetchError(url, status_code=response.status_code, reason=response.reason or "")

    return response.content


# =============================================================================
# Cache Files
# =============================================================================

def write_table_atomic(table: pd.DataFrame, path: Path, header: bool = True) -> bool:
    """Persist a table to ``path`` via a temporary file and rename.

    A failed write never leaves a partial cache file behind. The failure is
    logged and surfaced as a CacheWriteWarning instead of raised, so callers
    can keep using the in-memory table.

    Args:
        table: Table to write
        path: Destination cache file
        header: Write the column names as the first row

    Returns:
        True if the cache file was written
    """
    path = Path(path)
    tmp_name = None

    try:
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{path.name}.", suffix=".tmp", dir=path.parent
        )
        with os.fdopen(fd, "w", newline="") as f:
            table.to_csv(f, header=header, index=False)
        os.replace(tmp_name, path)

    except OSError as e:
        if tmp_name is not None:
            Path(tmp_name).unlink(missing_ok=True)
        logger.error(f"Could not write cache file {path}: {e}")
        warnings.warn(
            f"Could not write cache file {path}: {e}",
            CacheWriteWarning,
            stacklevel=2,
        )
        return False

    logger.info(f"Cached {len(table)} rows to {path}")
    return True
