"""
Open Images Mirror - Capped per-label downloads of the Open Images dataset

This package builds a filtered local mirror of Open Images:

- data: Class label resolution, bounding box tables and grouping
- storage: Anonymous image downloads from the dataset bucket
- downloader: Per-split, per-label download orchestration with limits
- config: Environment-based settings
- logger: JSON structured logging

Usage:
    from openimages_mirror import download_images

    directories = download_images("data/", ["Helmet"], cache_dir="data/csv", limit=100)
"""

from openimages_mirror.downloader import (
    DownloadConfig,
    DownloadReport,
    OpenImagesDownloader,
    download_images,
)
from openimages_mirror.errors import (
    CacheWriteWarning,
    FetchError,
    ImageFetchError,
    OpenImagesError,
    UnknownLabelError,
)

__all__ = [
    "download_images",
    "OpenImagesDownloader",
    "DownloadConfig",
    "DownloadReport",
    "OpenImagesError",
    "FetchError",
    "ImageFetchError",
    "UnknownLabelError",
    "CacheWriteWarning",
]

__version__ = "0.1.0"
