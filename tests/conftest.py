"""
Pytest Fixtures - Shared Test Fixtures for the Open Images Mirror

This module provides reusable fixtures for all test modules.

Fixtures:
    temp_dir: Temporary directory
    settings: Settings pointing at a fake index root
    class_csv: Header-less class description payload
    split_csv: Factory for bounding box table payloads
    make_session: Factory for mocked HTTP sessions serving payloads by URL
"""

import tempfile
from collections.abc import Callable
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from openimages_mirror.config import Settings

BASE_URL = "https://example.test/openimages/v5/"

SPLIT_HEADER = [
    "ImageID", "Source", "LabelName", "Confidence",
    "XMin", "XMax", "YMin", "YMax",
    "IsOccluded", "IsTruncated", "IsGroupOf", "IsDepiction", "IsInside",
]


# =============================================================================
# Markers
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests (require network)"
    )


def pytest_collection_modifyitems(config, items):
    """Skip integration tests by default unless explicitly requested."""
    if config.getoption("-m") and "integration" in config.getoption("-m"):
        return

    skip_integration = pytest.mark.skip(
        reason="Integration tests skipped by default. Run with: pytest -m integration"
    )

    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip_integration)


# =============================================================================
# Directory and Settings Fixtures
# =============================================================================

@pytest.fixture
def temp_dir() -> Path:
    """Create temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def settings() -> Settings:
    """Settings with a fake index root and default storage."""
    return Settings(OID_BASE_URL=BASE_URL)


# =============================================================================
# Payload Fixtures
# =============================================================================

@pytest.fixture
def class_csv() -> bytes:
    """Class description table: code, display name (no header)."""
    return (
        b"/m/abc,Helmet\n"
        b"/m/def,Glove\n"
        b"/m/ghi,Boot\n"
        b"/m/jkl,Hard hat\n"
    )


def build_split_csv(rows: list[tuple[str, str]]) -> bytes:
    """Build a bounding box payload from (image_id, class_code) pairs.

    Coordinates encode the row position so row order can be checked.
    """
    lines = [",".join(SPLIT_HEADER)]
    for i, (image_id, code) in enumerate(rows):
        x = i / 100
        lines.append(
            f"{image_id},xclick,{code},1,{x},{x + 0.5},0.25,0.75,0,0,0,0,0"
        )
    return ("\n".join(lines) + "\n").encode()


@pytest.fixture
def split_csv() -> Callable[[list[tuple[str, str]]], bytes]:
    """Factory for bounding box table payloads."""
    return build_split_csv


# =============================================================================
# HTTP Fixtures
# =============================================================================

def _response(payload: bytes | int) -> MagicMock:
    response = MagicMock()
    if isinstance(payload, int):
        response.status_code = payload
        response.reason = "Not Found" if payload == 404 else "Error"
        response.content = b""
    else:
        response.status_code = 200
        response.reason = "OK"
        response.content = payload
    return response


@pytest.fixture
def make_session() -> Callable[[dict[str, bytes | int]], MagicMock]:
    """Factory for mocked HTTP sessions.

    Payloads are keyed by file name (e.g. "train-annotations-bbox.csv");
    an int payload is returned as that HTTP status. Unknown files return 404.
    """

    def factory(payloads: dict[str, bytes | int]) -> MagicMock:
        session = MagicMock()

        def get(url: str, **kwargs) -> MagicMock:
            name = url.rsplit("/", 1)[-1]
            return _response(payloads.get(name, 404))

        session.get.side_effect = get
        return session

    return factory


def requested_files(session: MagicMock) -> list[str]:
    """File names requested through a mocked session, in order."""
    return [c.args[0].rsplit("/", 1)[-1] for c in session.get.call_args_list]
