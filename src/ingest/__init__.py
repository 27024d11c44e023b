"""Dataset import pipeline.

This package fetches dataset data and metadata from a source variant,
reformats the data, and caches both to the configured temp directory.
"""
