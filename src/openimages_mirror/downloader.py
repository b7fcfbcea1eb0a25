"""Open Images Downloader.

This module builds a capped local mirror of Open Images for a set of
class labels.

The download process:
1. Resolve class labels to class codes (class description table)
2. Create ``<dest_dir>/<label>/images`` for every label
3. For each split (train, validation, test):
   a. Load the split's bounding box table (cached when possible)
   b. Group the boxes of each label by image
   c. Download the images of each label until its limit is reached
4. Return the image directory of every label

The limit is checked before every label in every split, so a label that
reached its limit in an earlier split is skipped in the later ones, and
splits are not loaded at all once every label is done.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

import requests

from openimages_mirror.config import SECTIONS, Settings, get_settings
from openimages_mirror.data.annotations import load_split
from openimages_mirror.data.grouping import group_bounding_boxes, image_ids
from openimages_mirror.data.labels import missing_labels, resolve_label_codes
from openimages_mirror.errors import UnknownLabelError
from openimages_mirror.storage.fetcher import FetchResult, ImageFetcher

logger = logging.getLogger(__name__)


# =============================================================================
# Data Classes
# =============================================================================

@dataclass
class DownloadConfig:
    """Configuration for a download run.

    Attributes:
        limit: Maximum images per label across all splits (None = no limit)
        sections: Splits to process, in order
        skip_existing: Do not re-download images already on disk
    """

    limit: int | None = None
    sections: tuple[str, ...] = SECTIONS
    skip_existing: bool = False

    def __post_init__(self) -> None:
        if self.limit is not None:
            if not isinstance(self.limit, int) or isinstance(self.limit, bool):
                raise ValueError(f"limit must be an integer or None, got {self.limit!r}")
            if self.limit < 0:
                raise ValueError(f"limit must be non-negative, got {self.limit}")
        unknown = [s for s in self.sections if s not in SECTIONS]
        if unknown:
            raise ValueError(f"Unknown sections {unknown}. Expected a subset of {list(SECTIONS)}")


@dataclass
class DownloadReport:
    """Result of a download run.

    Attributes:
        label_codes: Resolved label -> class code map
        class_directories: Image directory per label
        download_counts: Images queued per label (attempted, not necessarily fetched)
        results: FetchResult of every queued image, in download order
        sections_loaded: Splits whose tables were loaded
    """

    label_codes: dict[str, str] = field(default_factory=dict)
    class_directories: dict[str, Path] = field(default_factory=dict)
    download_counts: dict[str, int] = field(default_factory=dict)
    results: dict[str, list[FetchResult]] = field(default_factory=dict)
    sections_loaded: list[str] = field(default_factory=list)

    def succeeded(self, label: str) -> int:
        """Number of images of a label present on disk after the run."""
        return sum(1 for r in self.results.get(label, []) if r.ok)

    def failed(self, label: str) -> int:
        """Number of images of a label that could not be fetched."""
        return sum(1 for r in self.results.get(label, []) if not r.ok)

    @property
    def total_failed(self) -> int:
        return sum(self.failed(label) for label in self.results)


# =============================================================================
# Downloader
# =============================================================================

class OpenImagesDownloader:
    """Downloads Open Images images for a set of class labels.

    Run state (label codes, directories, counts) lives on the DownloadReport
    returned by run(); the downloader itself can be reused.

    Example:
        >>> downloader = OpenImagesDownloader(
        ...     dest_dir=Path("data/"),
        ...     cache_dir=Path("data/csv/"),
        ...     config=DownloadConfig(limit=100),
        ... )
        >>> report = downloader.run(["Helmet", "Glove"])
        >>> report.download_counts
        {'Glove': 100, 'Helmet': 100}
    """

    def __init__(
        self,
        dest_dir: Path,
        cache_dir: Path | None = None,
        config: DownloadConfig | None = None,
        settings: Settings | None = None,
        session: requests.Session | None = None,
        fetcher: ImageFetcher | None = None,
    ) -> None:
        """Initialize downloader.

        Args:
            dest_dir: Base directory for the per-label image directories
            cache_dir: Directory for cached index files (None = no split caching)
            config: Download configuration
            settings: Source and storage settings (default: get_settings())
            session: Optional HTTP session for index downloads
            fetcher: Image fetcher (default: anonymous ImageFetcher honoring
                config.skip_existing; an injected fetcher keeps its own
                skip_existing setting)
        """
        self.dest_dir = Path(dest_dir)
        self.cache_dir = Path(cache_dir) if cache_dir is not None else None
        self.config = config or DownloadConfig()
        self.settings = settings or get_settings()
        self.session = session
        self.fetcher = fetcher or ImageFetcher(
            settings=self.settings,
            skip_existing=self.config.skip_existing,
        )

    def run(self, class_labels: Iterable[str]) -> DownloadReport:
        """Download images for the given class labels.

        Args:
            class_labels: Labels to download (DisplayName values); a single
                label string is treated as one label

        Returns:
            DownloadReport with directories, counts and per-image results

        Raises:
            UnknownLabelError: If a label is not in the class description table
            FetchError: If an index file cannot be fetched
            OSError: If a directory cannot be created
        """
        class_labels = {class_labels} if isinstance(class_labels, str) else set(class_labels)

        if self.cache_dir is not None:
            self.cache_dir.mkdir(parents=True, exist_ok=True)

        label_codes = resolve_label_codes(
            class_labels,
            self.cache_dir,
            settings=self.settings,
            session=self.session,
        )
        missing = missing_labels(class_labels, label_codes)
        if missing:
            raise UnknownLabelError(missing)

        report = DownloadReport(
            label_codes=label_codes,
            class_directories=self.prepare_directories(label_codes),
            download_counts={label: 0 for label in label_codes},
            results={label: [] for label in label_codes},
        )

        logger.info(f"Downloading {len(label_codes)} labels into {self.dest_dir}")
        logger.info(f"  Limit per label: {self.config.limit}")

        for section in self.config.sections:
            if self._all_done(report):
                logger.info(f"No label needs more images, skipping {section}")
                continue
            self._download_section(section, report)

        self._log_summary(report)
        return report

    def prepare_directories(self, label_codes: dict[str, str]) -> dict[str, Path]:
        """Create ``<dest_dir>/<label>/images`` for every label."""
        class_directories = {}
        for label in label_codes:
            images_dir = self.dest_dir / label / "images"
            images_dir.mkdir(parents=True, exist_ok=True)
            class_directories[label] = images_dir
        return class_directories

    def remaining(self, report: DownloadReport, label: str) -> int | None:
        """Images still allowed for a label (None = no limit)."""
        if self.config.limit is None:
            return None
        return self.config.limit - report.download_counts[label]

    def _all_done(self, report: DownloadReport) -> bool:
        if not report.label_codes:
            return True
        if self.config.limit is None:
            return False
        return all(self.remaining(report, label) <= 0 for label in report.label_codes)

    def _download_section(self, section: str, report: DownloadReport) -> None:
        """Download the images of one split for every label."""
        table = load_split(
            section,
            self.cache_dir,
            settings=self.settings,
            session=self.session,
        )
        label_groups = group_bounding_boxes(table, report.label_codes)
        report.sections_loaded.append(section)

        for label in report.label_codes:
            ids = image_ids(label_groups[label])

            remaining = self.remaining(report, label)
            if remaining is not None:
                if remaining <= 0:
                    logger.info(
                        f"  {label}: limit reached, skipping {section}",
                        extra={"label": label, "section": section},
                    )
                    continue
                ids = ids[:remaining]

            logger.info(
                f"  {label}: downloading {len(ids)} {section} images",
                extra={"label": label, "section": section, "count": len(ids)},
            )

            image_dir = report.class_directories[label]
            for image_id in ids:
                result = self.fetcher.fetch_image(section, image_id, image_dir)
                report.results[label].append(result)

            report.download_counts[label] += len(ids)

    def _log_summary(self, report: DownloadReport) -> None:
        logger.info("Download complete")
        for label, count in report.download_counts.items():
            logger.info(
                f"  {label}: {count} queued, {report.failed(label)} failed",
                extra={"label": label, "count": count},
            )


# =============================================================================
# Entry Point
# =============================================================================

def download_images(
    dest_dir: Path,
    class_labels: Iterable[str],
    cache_dir: Path | None = None,
    limit: int | None = None,
) -> dict[str, Path]:
    """Download a capped set of Open Images images per class label.

    Args:
        dest_dir: Base directory under which ``<label>/images`` is created
        class_labels: Labels to download
        cache_dir: Directory for cached CSV index files; created if missing
        limit: Maximum images per label across all splits (None = all)

    Returns:
        Dictionary of label -> image directory, even if some downloads failed

    Example:
        >>> download_images(Path("data/"), ["Helmet"], Path("data/csv"), limit=50)
        {'Helmet': PosixPath('data/Helmet/images')}
    """
    downloader = OpenImagesDownloader(
        dest_dir=dest_dir,
        cache_dir=cache_dir,
        config=DownloadConfig(limit=limit),
    )
    return downloader.run(class_labels).class_directories
