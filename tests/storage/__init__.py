"""
Storage Module Tests

- test_fetcher.py: Image downloads from the dataset bucket
"""
