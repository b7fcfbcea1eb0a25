"""Bounding Box Grouping.

Filters a split table to the requested class codes and groups the
surviving boxes by image, per label:

    {label: {image_id: DataFrame[ImageID, XMin, XMax, YMin, YMax]}}

Images appear in the order of their first box in the split table, and
boxes keep their table order within an image.
"""

import pandas as pd


def group_label_boxes(table: pd.DataFrame, code: str) -> dict[str, pd.DataFrame]:
    """Group the boxes of one class code by image.

    Args:
        table: Projected split table
        code: Class code to select

    Returns:
        Dictionary of image_id -> boxes of that class in the image
        (empty if the code has no boxes in the table)
    """
    selected = table[table["LabelName"] == code].drop(columns=["LabelName"])

    return {
        image_id: boxes.reset_index(drop=True)
        for image_id, boxes in selected.groupby("ImageID", sort=False)
    }


def group_bounding_boxes(
    table: pd.DataFrame,
    label_codes: dict[str, str],
) -> dict[str, dict[str, pd.DataFrame]]:
    """Group a split table's boxes by image for every requested label.

    Args:
        table: Projected split table
        label_codes: Dictionary of label -> class code

    Returns:
        Dictionary of label -> (image_id -> boxes), in label_codes order

    Example:
        >>> groups = group_bounding_boxes(table, {"Helmet": "/m/0zvk5"})
        >>> list(groups["Helmet"])[:2]
        ['000002b66c9c498e', '000002b97e5471a0']
    """
    return {label: group_label_boxes(table, code) for label, code in label_codes.items()}


def image_ids(groups: dict[str, pd.DataFrame]) -> list[str]:
    """Image IDs of one label's groups, in grouping order."""
    return list(groups.keys())
