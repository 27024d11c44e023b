"""Concrete data source variants.

Each source implements the ``ingest.data_source.DataSource`` protocol.
"""
