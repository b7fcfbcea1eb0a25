"""Configuration for the Open Images mirror.

This module provides environment-based settings for dataset sources and
object storage access. Uses pydantic-settings for validation and type
coercion.

Usage:
    from openimages_mirror.config import get_settings

    settings = get_settings()
    settings.annotations_url("train")
    # 'https://storage.googleapis.com/openimages/v5/train-annotations-bbox.csv'
"""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


# =============================================================================
# Constants
# =============================================================================

OID_URLS: dict[str, str] = {
    "v4": "https://storage.googleapis.com/openimages/2018_04/",
    "v5": "https://storage.googleapis.com/openimages/v5/",
}
"""Root URLs of the published CSV index files, per dataset version."""

SECTIONS: tuple[str, ...] = ("train", "validation", "test")
"""Dataset splits, in processing order."""

CLASS_DESCRIPTIONS_CSV: str = "class-descriptions-boxable.csv"
"""File name of the class description table (source and cache)."""

ANNOTATIONS_CSV_SUFFIX: str = "-annotations-bbox.csv"
"""Suffix of the per-split bounding box table (source and cache)."""


def annotations_csv_name(section: str) -> str:
    """File name of the bounding box table for a split."""
    return f"{section}{ANNOTATIONS_CSV_SUFFIX}"


# =============================================================================
# Settings
# =============================================================================

class Settings(BaseSettings):
    """Mirror settings.

    Every field can be overridden with an ``OPENIMAGES_`` prefixed
    environment variable (e.g. ``OPENIMAGES_OID_VERSION=v4``).

    Attributes:
        LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR)
        OID_VERSION: Dataset version whose index files are used
        OID_BASE_URL: Explicit index root, overrides OID_VERSION
        BUCKET: Object storage bucket holding the images
        S3_ENDPOINT: Object storage endpoint
        S3_REGION: Bucket region (avoids a bucket location lookup)
        S3_SECURE: Use HTTPS for object storage
        HTTP_TIMEOUT: Timeout in seconds for index downloads (None = no timeout)
    """

    LOG_LEVEL: str = "INFO"
    OID_VERSION: Literal["v4", "v5"] = "v5"
    OID_BASE_URL: str | None = None
    BUCKET: str = "open-images-dataset"
    S3_ENDPOINT: str = "s3.amazonaws.com"
    S3_REGION: str = "us-east-1"
    S3_SECURE: bool = True
    HTTP_TIMEOUT: float | None = None

    model_config = SettingsConfigDict(
        env_prefix="OPENIMAGES_",
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    @property
    def base_url(self) -> str:
        """Effective root URL of the index files, always ending in '/'."""
        url = self.OID_BASE_URL or OID_URLS[self.OID_VERSION]
        return url if url.endswith("/") else url + "/"

    def class_descriptions_url(self) -> str:
        """URL of the class description table."""
        return self.base_url + CLASS_DESCRIPTIONS_CSV

    def annotations_url(self, section: str) -> str:
        """URL of the bounding box table for a split."""
        return self.base_url + annotations_csv_name(section)


@lru_cache
def get_settings() -> Settings:
    """Get cached Settings instance (singleton pattern).

    Returns:
        Validated Settings instance
    """
    return Settings()
