"""Output storage layer.

This package writes filtered Parquet files with Zstandard compression
and publishes them atomically once a file completes.
"""
