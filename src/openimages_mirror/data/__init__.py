"""Data Module - Open Images index files.

This module provides:
- labels: Resolve class labels to class codes
- annotations: Load and cache per-split bounding box tables
- grouping: Filter bounding boxes by class and group them by image
- sources: HTTP fetching and atomic cache writes
"""

from openimages_mirror.data.annotations import (
    QUALITY_COLUMNS,
    load_split,
    project_annotations,
)
from openimages_mirror.data.grouping import (
    group_bounding_boxes,
    group_label_boxes,
    image_ids,
)
from openimages_mirror.data.labels import (
    build_label_code_map,
    load_class_descriptions,
    missing_labels,
    resolve_label_codes,
)
from openimages_mirror.data.sources import fetch_csv, write_table_atomic

__all__ = [
    # Labels
    "resolve_label_codes",
    "load_class_descriptions",
    "build_label_code_map",
    "missing_labels",
    # Annotations
    "load_split",
    "project_annotations",
    "QUALITY_COLUMNS",
    # Grouping
    "group_bounding_boxes",
    "group_label_boxes",
    "image_ids",
    # Sources
    "fetch_csv",
    "write_table_atomic",
]
