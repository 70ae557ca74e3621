"""
Unit tests for the reconciliation engine.
"""

import pytest
from pathlib import Path
import sys

# Add project root to path for imports
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from sheet_compare.core.correspondence import ColumnPair
from sheet_compare.core.reconciler import (
    ComparisonResult,
    FieldMismatch,
    MismatchEntry,
    compare_records,
    reconcile
)
from sheet_compare.errors import ContractViolation


NAME = (ColumnPair("Name", "Name"),)


class TestReconcileScenarios:
    """Reference scenarios for key-set differences and field mismatches."""

    def test_single_field_mismatch(self):
        first = {"1": {"Name": "Alice"}, "2": {"Name": "Bob"}}
        second = {"1": {"Name": "Alice"}, "2": {"Name": "Robert"}}

        result = reconcile(first, second, NAME)

        assert result.mismatches == [
            MismatchEntry("2", [FieldMismatch("Name", "Name", "Bob", "Robert")])
        ]
        assert result.missing_in_a == []
        assert result.missing_in_b == []
        assert result.matched == 1
        assert not result.all_match

    def test_key_missing_in_second(self):
        result = reconcile({"1": {"Name": "Alice"}}, {}, NAME)

        assert result.missing_in_b == ["1"]
        assert result.mismatches == []
        assert result.missing_in_a == []
        assert not result.all_match

    def test_identical_datasets_match(self):
        data = {"1": {"Name": "Alice"}, "2": {"Name": "Bob"}}

        result = reconcile(data, dict(data), NAME)

        assert result.missing_in_b == []
        assert result.missing_in_a == []
        assert result.mismatches == []
        assert result.all_match
        assert result.matched == 2

    def test_both_sides_have_unmatched_keys(self):
        first = {"1": {"Name": "A"}, "2": {"Name": "B"}}
        second = {"2": {"Name": "B"}, "3": {"Name": "C"}}

        result = reconcile(first, second, NAME)

        assert result.missing_in_b == ["1"]
        assert result.missing_in_a == ["3"]
        assert result.mismatches == []

    def test_empty_datasets_match(self):
        assert reconcile({}, {}, NAME).all_match


class TestReconcileProperties:
    """Structural guarantees of the engine."""

    def setup_method(self):
        self.pairs = (
            ColumnPair("Name", "Full Name"),
            ColumnPair("Dept", "Department"),
            ColumnPair("Salary", "Pay"),
        )
        self.first = {
            "10": {"Name": "Ann", "Dept": "Ops", "Salary": "100"},
            "11": {"Name": "Ben", "Dept": "IT", "Salary": "200"},
            "12": {"Name": "Cat", "Dept": "HR", "Salary": "300"},
        }
        self.second = {
            "10": {"Full Name": "Ann", "Department": "Ops", "Pay": "100"},
            "11": {"Full Name": "Benjamin", "Department": "IT", "Pay": "250"},
            "13": {"Full Name": "Dan", "Department": "IT", "Pay": "400"},
        }

    def test_collects_every_differing_pair(self):
        result = reconcile(self.first, self.second, self.pairs)

        assert len(result.mismatches) == 1
        entry = result.mismatches[0]
        assert entry.key == "11"
        assert entry.fields == [
            FieldMismatch("Name", "Full Name", "Ben", "Benjamin"),
            FieldMismatch("Salary", "Pay", "200", "250"),
        ]

    def test_all_pairs_differ(self):
        second = {"10": {"Full Name": "x", "Department": "y", "Pay": "z"}}

        result = reconcile({"10": self.first["10"]}, second, self.pairs)

        assert len(result.mismatches[0].fields) == 3

    def test_swapping_arguments_swaps_missing_sides(self):
        same = (ColumnPair("v", "v"),)
        first = {"a": {"v": "1"}, "b": {"v": "2"}}
        second = {"b": {"v": "2"}, "c": {"v": "3"}}

        forward = reconcile(first, second, same)
        backward = reconcile(second, first, same)

        assert forward.missing_in_b == backward.missing_in_a
        assert forward.missing_in_a == backward.missing_in_b

    def test_categories_are_disjoint(self):
        result = reconcile(self.first, self.second, self.pairs)

        mismatched = {entry.key for entry in result.mismatches}
        missing = set(result.missing_in_a) | set(result.missing_in_b)
        assert not mismatched & missing
        assert set(result.missing_in_b) == {"12"}
        assert set(result.missing_in_a) == {"13"}
        # "10" is matched and so appears nowhere
        assert "10" not in mismatched | missing

    def test_running_twice_gives_identical_results(self):
        once = reconcile(self.first, self.second, self.pairs)
        twice = reconcile(self.first, self.second, self.pairs)

        assert once == twice

    def test_inputs_are_not_modified(self):
        before = {k: dict(v) for k, v in self.first.items()}

        reconcile(self.first, self.second, self.pairs)

        assert self.first == before

    def test_report_order_follows_first_dataset(self):
        first = {"z": {"v": "1"}, "a": {"v": "1"}, "m": {"v": "1"}}

        result = reconcile(first, {}, (ColumnPair("v", "v"),))

        assert result.missing_in_b == ["z", "a", "m"]


class TestCompareRecords:
    """Value comparison rules."""

    def test_comparison_is_case_sensitive(self):
        diffs = compare_records("1", {"v": "abc"}, {"v": "ABC"}, (ColumnPair("v", "v"),))

        assert diffs == [FieldMismatch("v", "v", "abc", "ABC")]

    def test_no_numeric_coercion(self):
        diffs = compare_records("1", {"v": "1"}, {"v": "1.0"}, (ColumnPair("v", "v"),))

        assert len(diffs) == 1

    def test_values_are_trimmed(self):
        diffs = compare_records("1", {"v": " x "}, {"v": "x"}, (ColumnPair("v", "v"),))

        assert diffs == []

    def test_empty_string_is_a_value(self):
        diffs = compare_records("1", {"v": ""}, {"v": "x"}, (ColumnPair("v", "v"),))

        assert diffs == [FieldMismatch("v", "v", "", "x")]

    def test_missing_column_is_contract_violation(self):
        with pytest.raises(ContractViolation):
            compare_records("1", {"other": "x"}, {"v": "x"}, (ColumnPair("v", "v"),))

    def test_same_first_column_compared_twice(self):
        pairs = (ColumnPair("v", "a"), ColumnPair("v", "b"))

        diffs = compare_records("1", {"v": "1"}, {"a": "1", "b": "2"}, pairs)

        assert diffs == [FieldMismatch("v", "b", "1", "2")]


class TestComparisonResult:
    """Derived facts."""

    def test_empty_result_matches(self):
        assert ComparisonResult().all_match

    def test_any_finding_breaks_match(self):
        assert not ComparisonResult(missing_in_b=["1"]).all_match
        assert not ComparisonResult(missing_in_a=["1"]).all_match
        assert not ComparisonResult(
            mismatches=[MismatchEntry("2", [FieldMismatch("a", "b", "x", "y")])]
        ).all_match
