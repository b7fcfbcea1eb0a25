"""Storage Module - Image downloads from the dataset bucket."""

from openimages_mirror.storage.fetcher import (
    FetchResult,
    ImageFetcher,
    image_object_key,
)

__all__ = [
    "FetchResult",
    "ImageFetcher",
    "image_object_key",
]
