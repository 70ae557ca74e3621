"""
Cell value variant.
Single responsibility: stringify typed spreadsheet cells consistently.
"""

import datetime as dt
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class CellKind(Enum):
    TEXT = "text"
    NUMBER = "number"
    BOOLEAN = "boolean"
    FORMULA = "formula"
    DATE = "date"
    ERROR = "error"
    BLANK = "blank"


@dataclass(frozen=True)
class CellValue:
    """
    A raw cell as read from a tabular source.

    Formula cells keep their source text rather than a computed result, so two
    workbooks holding the same formula compare equal even when their cached
    values differ.
    """

    kind: CellKind
    raw: Any = None

    @classmethod
    def text(cls, value: Optional[str]) -> "CellValue":
        if value is None:
            return BLANK
        return cls(CellKind.TEXT, value)

    def as_text(self) -> str:
        """
        Render the cell as the string used for comparison.

        Returns:
            Text verbatim, numbers as a float decimal string ("1.0"),
            booleans as "true"/"false", formulas without the leading "=",
            dates in ISO-8601, blanks and errors as "".
        """
        if self.kind is CellKind.TEXT:
            return str(self.raw)
        if self.kind is CellKind.NUMBER:
            return str(float(self.raw))
        if self.kind is CellKind.BOOLEAN:
            return "true" if self.raw else "false"
        if self.kind is CellKind.FORMULA:
            formula = str(self.raw)
            return formula[1:] if formula.startswith("=") else formula
        if self.kind is CellKind.DATE:
            return self.raw.isoformat()
        return ""


BLANK = CellValue(CellKind.BLANK)


def cell_from_excel(value: Any, data_type: Optional[str] = None) -> CellValue:
    """
    Classify an openpyxl cell value.

    Args:
        value: ``cell.value`` as loaded with ``data_only=False``
        data_type: ``cell.data_type`` ('s', 'n', 'b', 'f', 'd', 'e', ...)

    Returns:
        CellValue
    """
    if value is None:
        return BLANK

    if data_type == "f":
        # Array formulas load as objects exposing their text
        return CellValue(CellKind.FORMULA, getattr(value, "text", value))
    if data_type == "e":
        return CellValue(CellKind.ERROR, value)

    # bool before numbers: bool is an int subclass
    if isinstance(value, bool):
        return CellValue(CellKind.BOOLEAN, value)
    if isinstance(value, (dt.datetime, dt.date, dt.time)):
        return CellValue(CellKind.DATE, value)
    if isinstance(value, (int, float)):
        return CellValue(CellKind.NUMBER, value)

    return CellValue(CellKind.TEXT, str(value))
