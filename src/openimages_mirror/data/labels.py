"""Class Label Resolution.

Maps human-readable class labels (e.g. "Helmet") to the dataset's class
codes (e.g. "/m/0zvk5") using the class description table.

The table is header-less with two columns, class code then display name.
It is read from the cache directory when present, otherwise fetched and
written there in the same layout.
"""

import io
import logging
from collections.abc import Iterable
from pathlib import Path

import pandas as pd
import requests

from openimages_mirror.config import CLASS_DESCRIPTIONS_CSV, Settings, get_settings
from openimages_mirror.data.sources import fetch_csv, write_table_atomic

logger = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

CLASS_COLUMNS: list[str] = ["LabelName", "DisplayName"]
"""Column names assigned to the header-less class description table."""


# =============================================================================
# Table Loading
# =============================================================================

def _read_class_table(source) -> pd.DataFrame:
    return pd.read_csv(
        source,
        header=None,
        names=CLASS_COLUMNS,
        dtype=str,
        keep_default_na=False,
    )


def load_class_descriptions(
    cache_dir: Path | None = None,
    *,
    settings: Settings | None = None,
    session: requests.Session | None = None,
) -> pd.DataFrame:
    """Load the class description table.

    Args:
        cache_dir: Cache directory (None = current working directory)
        settings: Source settings (default: get_settings())
        session: Optional HTTP session

    Returns:
        Table with columns LabelName (class code) and DisplayName (label)

    Raises:
        FetchError: If the table is not cached and cannot be fetched
    """
    settings = settings or get_settings()
    cache_dir = Path(cache_dir) if cache_dir is not None else Path.cwd()
    cache_path = cache_dir / CLASS_DESCRIPTIONS_CSV

    if cache_path.exists():
        logger.info(f"Using cached class descriptions: {cache_path}")
        return _read_class_table(cache_path)

    body = fetch_csv(
        settings.class_descriptions_url(),
        session=session,
        timeout=settings.HTTP_TIMEOUT,
    )
    table = _read_class_table(io.BytesIO(body))
    write_table_atomic(table, cache_path, header=False)

    return table


# =============================================================================
# Resolution
# =============================================================================

def build_label_code_map(
    class_table: pd.DataFrame,
    class_labels: Iterable[str],
) -> dict[str, str]:
    """Select the codes of the requested labels from a class table.

    Keys follow the table's row order. If a label appears more than once
    the first code wins.
    """
    requested = set(class_labels)
    labels_to_codes: dict[str, str] = {}

    for code, label in zip(class_table["LabelName"], class_table["DisplayName"]):
        if label not in requested:
            continue
        if label in labels_to_codes:
            if labels_to_codes[label] != code:
                logger.warning(
                    f"Label '{label}' listed with several codes, "
                    f"keeping {labels_to_codes[label]} over {code}"
                )
            continue
        labels_to_codes[label] = code

    return labels_to_codes


def resolve_label_codes(
    class_labels: Iterable[str],
    cache_dir: Path | None = None,
    *,
    settings: Settings | None = None,
    session: requests.Session | None = None,
) -> dict[str, str]:
    """Map class labels to dataset class codes.

    Labels absent from the class table get no entry; use missing_labels()
    to detect them.

    Args:
        class_labels: Labels to resolve
        cache_dir: Cache directory (None = current working directory)
        settings: Source settings (default: get_settings())
        session: Optional HTTP session

    Returns:
        Dictionary of label -> class code

    Raises:
        FetchError: If the class table cannot be fetched

    Example:
        >>> resolve_label_codes(["Helmet"], Path("csv/"))
        {'Helmet': '/m/0zvk5'}
    """
    class_labels = {class_labels} if isinstance(class_labels, str) else set(class_labels)
    class_table = load_class_descriptions(cache_dir, settings=settings, session=session)
    labels_to_codes = build_label_code_map(class_table, class_labels)

    logger.info(f"Resolved {len(labels_to_codes)}/{len(class_labels)} class labels")
    return labels_to_codes


def missing_labels(class_labels: Iterable[str], labels_to_codes: dict[str, str]) -> list[str]:
    """Requested labels that did not resolve to a code, sorted."""
    return sorted(set(class_labels) - set(labels_to_codes))
