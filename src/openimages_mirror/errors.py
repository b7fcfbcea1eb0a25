"""Exceptions and warnings raised by the Open Images mirror."""


class OpenImagesError(Exception):
    """Base class for mirror errors."""


class FetchError(OpenImagesError):
    """An index file (class table or split table) could not be fetched.

    Attributes:
        url: Requested URL
        status_code: HTTP status, None for transport failures
    """

    def __init__(self, url: str, status_code: int | None = None, reason: str = "") -> None:
        self.url = url
        self.status_code = status_code
        self.reason = reason
        detail = f"HTTP {status_code}" if status_code is not None else "request failed"
        if reason:
            detail = f"{detail}: {reason}"
        super().__init__(f"Failed to fetch {url} ({detail})")


class ImageFetchError(OpenImagesError):
    """A single image could not be downloaded from object storage.

    Never raised past the image fetcher; recorded in its FetchResult.
    """

    def __init__(self, object_key: str, reason: str = "") -> None:
        self.object_key = object_key
        self.reason = reason
        super().__init__(f"Failed to fetch image {object_key}: {reason}")


class UnknownLabelError(OpenImagesError, ValueError):
    """Requested class labels are missing from the class description table."""

    def __init__(self, missing: list[str]) -> None:
        self.missing = list(missing)
        super().__init__(
            f"Unknown class labels: {self.missing}. "
            "Labels must match the DisplayName column of the class descriptions."
        )


class CacheWriteWarning(UserWarning):
    """A table was loaded but could not be persisted to the cache directory."""
