"""
Shared utilities for the cleaning pipeline.

Keep helpers here small and dependency-free so DAG parsing stays reliable.
"""

from .paths import build_clean_path, build_raw_path

__all__ = ["build_raw_path", "build_clean_path"]
