"""
Core reconciliation logic.
Single responsibility: compare two keyed datasets and classify discrepancies.
"""

from dataclasses import dataclass, field
from typing import List, Mapping, Sequence

from ..errors import ContractViolation
from ..utils.logger import get_logger
from .correspondence import ColumnPair


logger = get_logger()


Record = Mapping[str, str]
Dataset = Mapping[str, Record]


@dataclass(frozen=True)
class FieldMismatch:
    """One corresponding column pair whose values differ."""

    column_a: str
    column_b: str
    value_a: str
    value_b: str


@dataclass
class MismatchEntry:
    """Every differing column pair for one key present in both datasets."""

    key: str
    fields: List[FieldMismatch] = field(default_factory=list)


@dataclass
class ComparisonResult:
    """Results from dataset reconciliation."""

    missing_in_b: List[str] = field(default_factory=list)
    missing_in_a: List[str] = field(default_factory=list)
    mismatches: List[MismatchEntry] = field(default_factory=list)
    total_first: int = 0
    total_second: int = 0
    matched: int = 0

    @property
    def all_match(self) -> bool:
        """True when no key is missing on either side and nothing differs."""
        return not (self.missing_in_b or self.missing_in_a or self.mismatches)


def _lookup(record: Record, column: str, key: str, side: str) -> str:
    try:
        value = record[column]
    except KeyError:
        raise ContractViolation(
            f"Record for key {key!r} in the {side} dataset has no column {column!r}"
        ) from None
    return value.strip()


def compare_records(key: str, record_a: Record, record_b: Record,
                    correspondence: Sequence[ColumnPair]) -> List[FieldMismatch]:
    """
    Compare one key's records across every correspondence pair.

    Values are compared as exact strings after trimming: case-sensitive and
    without numeric coercion. All differing pairs are returned, in
    correspondence order.

    Args:
        key: Identifier shared by both records
        record_a: Record from the first dataset
        record_b: Record from the second dataset
        correspondence: Ordered column pairs

    Returns:
        Differing pairs (empty when the records agree)
    """
    differences = []
    for pair in correspondence:
        value_a = _lookup(record_a, pair.first, key, "first")
        value_b = _lookup(record_b, pair.second, key, "second")
        if value_a != value_b:
            differences.append(
                FieldMismatch(pair.first, pair.second, value_a, value_b)
            )
    return differences


def reconcile(dataset_a: Dataset, dataset_b: Dataset,
              correspondence: Sequence[ColumnPair]) -> ComparisonResult:
    """
    Reconcile two keyed datasets.

    Keys of the first dataset are visited in iteration order: keys absent
    from the second dataset are reported as missing there, the rest are
    compared pair by pair. A second pass over the second dataset reports the
    keys absent from the first. Inputs are never modified.

    Args:
        dataset_a: key -> record for the first source
        dataset_b: key -> record for the second source
        correspondence: Non-empty ordered column pairs

    Returns:
        ComparisonResult
    """
    logger.debug("reconciler.starting",
                 first_keys=len(dataset_a),
                 second_keys=len(dataset_b),
                 pairs=len(correspondence))

    result = ComparisonResult(total_first=len(dataset_a),
                              total_second=len(dataset_b))

    for key, record_a in dataset_a.items():
        record_b = dataset_b.get(key)
        if record_b is None:
            result.missing_in_b.append(key)
            continue

        differences = compare_records(key, record_a, record_b, correspondence)
        if differences:
            result.mismatches.append(MismatchEntry(key, differences))
        else:
            result.matched += 1

    for key in dataset_b:
        if key not in dataset_a:
            result.missing_in_a.append(key)

    logger.info("reconciler.completed",
                matched=result.matched,
                mismatched=len(result.mismatches),
                missing_in_second=len(result.missing_in_b),
                missing_in_first=len(result.missing_in_a))

    return result
