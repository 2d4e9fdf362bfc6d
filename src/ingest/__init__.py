"""Parquet filtering pipeline.

This package reads Parquet sources in batches, classifies rows by
language, and streams the retained rows to the store layer.
"""
