"""Report template population.

This package resolves ``%%tag%%`` placeholders against dataset values.
"""
