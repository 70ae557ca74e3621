"""Utility functions and helpers."""

from .logger import get_logger, configure_logger, StructuredLogger
from .normalizers import trim_cell, header_key

__all__ = [
    "get_logger",
    "configure_logger",
    "StructuredLogger",
    "trim_cell",
    "header_key",
]
