"""
Data Module Tests

Tests for the data module components:
- test_labels.py: Class label resolution
- test_annotations.py: Split table loading and caching
- test_grouping.py: Bounding box filtering and grouping
- test_sources.py: HTTP fetching and cache writes
"""
