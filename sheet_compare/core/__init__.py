"""Reconciliation engine and column correspondence."""

from .correspondence import (
    ColumnPair,
    resolve_correspondence,
    columns_first,
    columns_second
)
from .reconciler import (
    ComparisonResult,
    FieldMismatch,
    MismatchEntry,
    compare_records,
    reconcile
)

__all__ = [
    "ColumnPair",
    "resolve_correspondence",
    "columns_first",
    "columns_second",
    "ComparisonResult",
    "FieldMismatch",
    "MismatchEntry",
    "compare_records",
    "reconcile",
]
