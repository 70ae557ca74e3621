"""
Row loader.
Single responsibility: turn a tabular source into a keyed dataset.
"""

from contextlib import closing
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Union

from ..errors import ColumnNotFoundError, SourceTooLargeError, SourceUnreadableError
from ..utils.logger import get_logger
from ..utils.normalizers import header_key, trim_cell
from .cells import BLANK, CellValue
from .sources import open_source


logger = get_logger()


DEFAULT_MAX_FILE_SIZE = 10 * 1024 * 1024  # 10 MiB


@dataclass
class LoadWarning:
    """Non-fatal issue found while loading a row."""

    row_number: int
    message: str


@dataclass
class LoadedDataset:
    """Keyed records extracted from one source."""

    source: str
    key_column: str
    records: Dict[str, Mapping[str, str]] = field(default_factory=dict)
    warnings: List[LoadWarning] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.records)


class RowLoader:
    """
    Load rows of a spreadsheet into key -> record mappings.

    Every record holds exactly the requested value columns, keyed by the
    declared column names, with trimmed text values.
    """

    def __init__(self, max_file_size: int = DEFAULT_MAX_FILE_SIZE):
        """
        Initialize row loader.

        Args:
            max_file_size: Largest accepted source, in bytes
        """
        self.max_file_size = max_file_size

    def check_size(self, path: Union[str, Path]) -> int:
        """
        Reject sources larger than the configured limit before parsing.

        Args:
            path: Path to the source file

        Returns:
            File size in bytes

        Raises:
            SourceUnreadableError: The path does not exist or cannot be read
            SourceTooLargeError: The file exceeds max_file_size
        """
        path = Path(path)
        try:
            size = path.stat().st_size
        except OSError as e:
            raise SourceUnreadableError(path, e.strerror or str(e)) from e

        if not path.is_file():
            raise SourceUnreadableError(path, "not a file")

        if size > self.max_file_size:
            logger.error("row_loader.too_large",
                         file=str(path),
                         size=size,
                         limit=self.max_file_size)
            raise SourceTooLargeError(path, size, self.max_file_size)

        return size

    def load(self, path: Union[str, Path], key_column: str,
             value_columns: Sequence[str]) -> LoadedDataset:
        """
        Load a spreadsheet or CSV file.

        Args:
            path: Path to the source file
            key_column: Header of the identifier column
            value_columns: Headers of the columns to extract

        Returns:
            LoadedDataset

        Raises:
            SourceTooLargeError: File exceeds the size guard
            SourceUnreadableError: Missing file or unparseable container
            ColumnNotFoundError: Key or value column absent from the header
        """
        path = Path(path)
        size = self.check_size(path)

        logger.info("row_loader.loading",
                    file=str(path),
                    size=size,
                    key_column=key_column,
                    columns=list(value_columns))

        source = open_source(path)
        with closing(source.rows()) as rows:
            return self.load_rows(rows, key_column, value_columns, str(path))

    def load_rows(self, rows: Iterable[Sequence[CellValue]], key_column: str,
                  value_columns: Sequence[str],
                  source: str = "<rows>") -> LoadedDataset:
        """
        Build a dataset from already-parsed rows, header first.

        Args:
            rows: Rows of cells; the first is the header row
            key_column: Header of the identifier column
            value_columns: Headers of the columns to extract
            source: Name used in errors and warnings

        Returns:
            LoadedDataset
        """
        iterator = iter(rows)
        header = next(iterator, None)
        if header is None:
            raise SourceUnreadableError(source, "no header row")

        key_index, value_indexes = self._resolve_columns(
            header, key_column, value_columns, source
        )

        dataset = LoadedDataset(source=source, key_column=key_column)

        # Row numbers are 1-based with the header as row 1
        for row_number, row in enumerate(iterator, 2):
            key = trim_cell(self._cell(row, key_index).as_text())
            if not key:
                self._warn(dataset, row_number, "row_loader.empty_key",
                           "Empty ID found in the spreadsheet, skipping row.")
                continue

            values = {
                name: trim_cell(self._cell(row, index).as_text())
                for name, index in value_indexes.items()
            }

            if key in dataset.records:
                self._warn(dataset, row_number, "row_loader.duplicate_key",
                           f"Duplicate ID {key} replaces an earlier row.")

            dataset.records[key] = MappingProxyType(values)

        logger.info("row_loader.loaded",
                    source=source,
                    records=len(dataset.records),
                    warnings=len(dataset.warnings))

        return dataset

    def _resolve_columns(self, header: Sequence[CellValue], key_column: str,
                         value_columns: Sequence[str], source: str):
        """
        Map declared column names to header positions, ignoring case.

        When several header cells match, the rightmost one wins.

        Returns:
            (key index, {declared value column name: index})
        """
        positions: Dict[str, int] = {}
        for index, cell in enumerate(header):
            positions[header_key(cell.as_text())] = index

        key_index = self._position(positions, key_column, source)
        value_indexes = {
            name: self._position(positions, name, source)
            for name in value_columns
        }

        logger.debug("row_loader.columns_resolved",
                     source=source,
                     key_index=key_index,
                     value_indexes=value_indexes)

        return key_index, value_indexes

    @staticmethod
    def _position(positions: Dict[str, int], column: str, source: str) -> int:
        index: Optional[int] = positions.get(header_key(column))
        if index is None:
            logger.error("row_loader.column_not_found",
                         source=source,
                         column=column)
            raise ColumnNotFoundError(source, column)
        return index

    @staticmethod
    def _cell(row: Sequence[CellValue], index: int) -> CellValue:
        if index < len(row):
            return row[index]
        return BLANK

    @staticmethod
    def _warn(dataset: LoadedDataset, row_number: int, event: str, message: str):
        dataset.warnings.append(LoadWarning(row_number, message))
        logger.warning(event,
                       source=dataset.source,
                       row=row_number,
                       detail=message)
