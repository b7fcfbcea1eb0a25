"""
Open Images Mirror - Test Suite

Test modules are organized by package:
- tests/data/: Label resolution, split tables and grouping
- tests/storage/: Image fetcher
- tests/test_downloader.py: Download orchestration
- tests/test_config.py, tests/test_logger.py: Settings and logging
"""
