"""
Tabular data sources.
Single responsibility: yield raw cell rows from spreadsheet and CSV files.
"""

import zipfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterator, List, Union

import pandas as pd
from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from ..errors import SourceUnreadableError
from ..utils.logger import get_logger
from .cells import CellValue, cell_from_excel


logger = get_logger()


Row = List[CellValue]


class TabularSource(ABC):
    """A file whose first row is the header, followed by data rows."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    @abstractmethod
    def rows(self) -> Iterator[Row]:
        """
        Iterate rows of cells, header first.

        Raises:
            SourceUnreadableError: The container cannot be parsed
        """
        pass


class ExcelSource(TabularSource):
    """
    First worksheet of an xlsx workbook.

    The workbook is opened read-only without evaluating formulas.
    """

    def rows(self) -> Iterator[Row]:
        logger.info("source.excel.reading", file=str(self.path))

        try:
            workbook = load_workbook(self.path, read_only=True, data_only=False)
        except (InvalidFileException, zipfile.BadZipFile, KeyError, OSError) as e:
            raise SourceUnreadableError(self.path, str(e)) from e

        try:
            if not workbook.worksheets:
                return
            sheet = workbook.worksheets[0]
            for row in sheet.iter_rows():
                yield [cell_from_excel(cell.value, getattr(cell, "data_type", None))
                       for cell in row]
        finally:
            workbook.close()


class CsvSource(TabularSource):
    """
    Comma separated file read with pandas; every cell is text.
    """

    # Tried in order of likelihood
    ENCODINGS = ["utf-8-sig", "cp1252", "latin-1"]

    def _truncate_long_rows(self, width: int):
        """Cut rows that have more fields than the header row."""
        def handler(fields: List[str]) -> List[str]:
            logger.warning("source.csv.long_row",
                           file=str(self.path),
                           fields=len(fields),
                           kept=width)
            return fields[:width]
        return handler

    def _read_frame(self) -> pd.DataFrame:
        for encoding in self.ENCODINGS:
            try:
                width = pd.read_csv(self.path, dtype=str, header=None, nrows=1,
                                    keep_default_na=False, encoding=encoding).shape[1]
                df = pd.read_csv(self.path, dtype=str, header=None,
                                 keep_default_na=False, encoding=encoding,
                                 engine="python",
                                 on_bad_lines=self._truncate_long_rows(width))
                logger.debug("source.csv.decoded",
                             file=str(self.path),
                             encoding=encoding)
                return df
            except (UnicodeDecodeError, UnicodeError):
                continue
            except pd.errors.EmptyDataError:
                return pd.DataFrame()
            except (pd.errors.ParserError, OSError) as e:
                raise SourceUnreadableError(self.path, str(e)) from e

        raise SourceUnreadableError(self.path, "unsupported text encoding")

    def rows(self) -> Iterator[Row]:
        logger.info("source.csv.reading", file=str(self.path))

        df = self._read_frame()
        for values in df.itertuples(index=False, name=None):
            # Short rows are padded with NaN by pandas
            yield [CellValue.text(value if isinstance(value, str) else None)
                   for value in values]


SOURCE_TYPES = {
    ".xlsx": ExcelSource,
    ".xlsm": ExcelSource,
    ".csv": CsvSource,
}


def open_source(path: Union[str, Path]) -> TabularSource:
    """
    Pick a source implementation from the file extension.

    Args:
        path: Path to the file

    Returns:
        TabularSource

    Raises:
        SourceUnreadableError: Unsupported file type
    """
    path = Path(path)
    source_type = SOURCE_TYPES.get(path.suffix.lower())
    if source_type is None:
        raise SourceUnreadableError(path, f"unsupported file type '{path.suffix}'")
    return source_type(path)
