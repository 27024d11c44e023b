"""Source data reformatting.

This package converts source-delimited data blocks into canonical
semicolon-delimited records with per-column padding.
"""
