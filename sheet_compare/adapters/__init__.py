"""Adapters between tabular files and keyed datasets."""

from .cells import CellKind, CellValue, cell_from_excel
from .sources import TabularSource, ExcelSource, CsvSource, open_source
from .row_loader import (
    RowLoader,
    LoadedDataset,
    LoadWarning,
    DEFAULT_MAX_FILE_SIZE
)

__all__ = [
    "CellKind",
    "CellValue",
    "cell_from_excel",
    "TabularSource",
    "ExcelSource",
    "CsvSource",
    "open_source",
    "RowLoader",
    "LoadedDataset",
    "LoadWarning",
    "DEFAULT_MAX_FILE_SIZE",
]
