"""Image Fetcher.

Downloads single images from the public ``open-images-dataset`` bucket.
Images are stored under ``<section>/<image_id>.jpg``.

The bucket allows anonymous reads, so the MinIO client is created
without credentials. Failures never propagate: every call returns a
FetchResult describing the outcome.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from minio import Minio

from openimages_mirror.config import Settings, get_settings
from openimages_mirror.errors import ImageFetchError

logger = logging.getLogger(__name__)


def image_object_key(section: str, image_id: str) -> str:
    """Object key of an image in the dataset bucket."""
    return f"{section}/{image_id}.jpg"


# =============================================================================
# Data Classes
# =============================================================================

@dataclass
class FetchResult:
    """Outcome of one image download.

    Attributes:
        object_key: Object key in the bucket (e.g. "train/000002b66c9c498e.jpg")
        dest_path: Local destination file
        ok: True if the image is present at dest_path
        skipped: True if the file already existed and was not downloaded
        error: Failure details when ok is False
    """

    object_key: str
    dest_path: Path
    ok: bool
    skipped: bool = False
    error: ImageFetchError | None = None


# =============================================================================
# Fetcher
# =============================================================================

class ImageFetcher:
    """Anonymous object storage client for dataset images.

    Example:
        >>> fetcher = ImageFetcher()
        >>> result = fetcher.fetch_image("train", "000002b66c9c498e", Path("Helmet/images"))
        >>> result.ok
        True
    """

    def __init__(
        self,
        settings: Settings | None = None,
        client: Minio | None = None,
        skip_existing: bool = False,
    ) -> None:
        """Initialize fetcher.

        Args:
            settings: Storage settings (default: get_settings())
            client: Preconfigured MinIO client (default: anonymous client)
            skip_existing: Do not download images already on disk
        """
        self.settings = settings or get_settings()
        self.bucket = self.settings.BUCKET
        self.skip_existing = skip_existing
        self.client = client or Minio(
            self.settings.S3_ENDPOINT,
            secure=self.settings.S3_SECURE,
            region=self.settings.S3_REGION,
        )

    def fetch(self, object_key: str, dest_path: Path) -> FetchResult:
        """Download one object to a local file.

        Args:
            object_key: Object key in the bucket
            dest_path: Local destination file

        Returns:
            FetchResult; errors are captured, never raised
        """
        dest_path = Path(dest_path)

        if self.skip_existing and dest_path.exists():
            logger.debug(f"Skipping existing {dest_path}", extra={"object_key": object_key})
            return FetchResult(object_key=object_key, dest_path=dest_path, ok=True, skipped=True)

        try:
            self.client.fget_object(self.bucket, object_key, str(dest_path))
        except Exception as e:
            error = ImageFetchError(object_key, str(e))
            logger.warning(str(error), extra={"object_key": object_key})
            return FetchResult(object_key=object_key, dest_path=dest_path, ok=False, error=error)

        return FetchResult(object_key=object_key, dest_path=dest_path, ok=True)

    def fetch_image(self, section: str, image_id: str, image_dir: Path) -> FetchResult:
        """Download ``<section>/<image_id>.jpg`` into ``image_dir``."""
        return self.fetch(
            image_object_key(section, image_id),
            Path(image_dir) / f"{image_id}.jpg",
        )
