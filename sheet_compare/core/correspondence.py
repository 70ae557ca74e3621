"""
Column correspondence resolution.
Single responsibility: turn declared column names into ordered comparison pairs.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from ..errors import CorrespondenceError
from ..utils.normalizers import trim_cell


@dataclass(frozen=True)
class ColumnPair:
    """A column in the first dataset and its counterpart in the second."""

    first: str
    second: str


Correspondence = Tuple[ColumnPair, ...]


def resolve_correspondence(same_names: bool,
                           first_columns: Sequence[str],
                           second_columns: Optional[Sequence[str]] = None) -> Correspondence:
    """
    Build the ordered column correspondence.

    Position in the input lists is position in the result. When the names are
    declared identical the first list is used for both sides and
    ``second_columns`` is ignored.

    Args:
        same_names: Column names are the same in both sources
        first_columns: Column names in the first source
        second_columns: Column names in the second source

    Returns:
        Tuple of ColumnPair

    Raises:
        CorrespondenceError: Empty list, blank name or unequal list lengths
    """
    first = [trim_cell(name) for name in first_columns]
    if same_names:
        second = list(first)
    else:
        if second_columns is None:
            raise CorrespondenceError(
                "Column names for the second spreadsheet are required "
                "when names differ between spreadsheets"
            )
        second = [trim_cell(name) for name in second_columns]

    if not first:
        raise CorrespondenceError("At least one column pair is required")
    if len(first) != len(second):
        raise CorrespondenceError(
            f"Column count differs between spreadsheets: "
            f"{len(first)} vs {len(second)}"
        )

    for position, (left, right) in enumerate(zip(first, second), 1):
        if not left or not right:
            raise CorrespondenceError(f"Column {position} has a blank name")

    return tuple(ColumnPair(left, right) for left, right in zip(first, second))


def _unique(names: Iterable[str]) -> List[str]:
    seen = set()
    ordered = []
    for name in names:
        if name not in seen:
            seen.add(name)
            ordered.append(name)
    return ordered


def columns_first(pairs: Sequence[ColumnPair]) -> List[str]:
    """Value columns to extract from the first source."""
    return _unique(pair.first for pair in pairs)


def columns_second(pairs: Sequence[ColumnPair]) -> List[str]:
    """Value columns to extract from the second source."""
    return _unique(pair.second for pair in pairs)
