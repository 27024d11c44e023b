"""NEMO report generation.

This package populates report and summary templates for imported
datasets and writes them under deterministic file names.
"""
