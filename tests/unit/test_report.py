"""
Unit tests for report rendering and findings export.
"""

import io
from pathlib import Path
import sys

import pandas as pd
from rich.console import Console

# Add project root to path for imports
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from sheet_compare.adapters.row_loader import LoadedDataset, LoadWarning
from sheet_compare.core.reconciler import ComparisonResult, FieldMismatch, MismatchEntry
from sheet_compare.ui.report import (
    ALL_MATCH,
    EXPORT_COLUMNS,
    ReportPrinter,
    export_findings,
    findings_frame,
    render_lines
)


def sample_result() -> ComparisonResult:
    return ComparisonResult(
        missing_in_b=["4"],
        missing_in_a=["9"],
        mismatches=[MismatchEntry("2", [
            FieldMismatch("Name", "Full Name", "Bob", "Robert"),
            FieldMismatch("Salary", "Pay", "100", "[120]"),
        ])],
        total_first=3,
        total_second=3,
        matched=1
    )


class TestRenderLines:
    """Report text and ordering."""

    def test_order_and_format(self):
        assert list(render_lines(sample_result())) == [
            "ID 4 is missing in the second spreadsheet.",
            "Mismatch found for ID 2:",
            "  Name vs Full Name: Bob vs Robert",
            "  Salary vs Pay: 100 vs [120]",
            "ID 9 is missing in the first spreadsheet.",
        ]

    def test_all_match(self):
        assert list(render_lines(ComparisonResult())) == [ALL_MATCH]
        assert ALL_MATCH == "All information matches."


class TestReportPrinter:
    """Terminal output through Rich."""

    def setup_method(self):
        self.buffer = io.StringIO()
        self.printer = ReportPrinter(Console(file=self.buffer, width=200))

    def test_values_are_printed_verbatim(self):
        self.printer.print_result(sample_result())

        output = self.buffer.getvalue()
        # Square brackets must not be read as markup
        assert "  Salary vs Pay: 100 vs [120]" in output

    def test_emoji_codes_are_not_replaced(self):
        result = ComparisonResult(mismatches=[MismatchEntry(":id:", [
            FieldMismatch("Dept", "Dept", "Sales:a:East", "Sales:b:East"),
        ])])

        self.printer.print_result(result)

        lines = self.buffer.getvalue().splitlines()
        assert lines == [
            "Mismatch found for ID :id::",
            "  Dept vs Dept: Sales:a:East vs Sales:b:East",
        ]

    def test_summary_table(self):
        self.printer.print_result(sample_result(), summary=True)

        output = self.buffer.getvalue()
        assert "Reconciliation Summary" in output
        assert "Missing in first spreadsheet" in output

    def test_warnings(self):
        dataset = LoadedDataset(source="a.xlsx", key_column="ID",
                                warnings=[LoadWarning(3, "Empty ID found in the spreadsheet, skipping row.")])

        self.printer.print_warnings(dataset)

        assert "Warning: Empty ID found in the spreadsheet, skipping row. (a.xlsx, row 3)" \
            in self.buffer.getvalue()


class TestExportFindings:
    """CSV export with pandas."""

    def test_one_row_per_finding(self):
        df = findings_frame(sample_result())

        assert list(df.columns) == EXPORT_COLUMNS
        assert df["status"].tolist() == [
            "missing_in_second", "mismatch", "mismatch", "missing_in_first"
        ]
        assert df.loc[0, "column_first"] == ""

    def test_empty_result(self):
        df = findings_frame(ComparisonResult())

        assert df.empty
        assert list(df.columns) == EXPORT_COLUMNS

    def test_written_csv(self, tmp_path):
        path = export_findings(sample_result(), tmp_path / "reports" / "findings.csv")

        df = pd.read_csv(path, dtype=str, keep_default_na=False)
        assert len(df) == 4
        assert df.loc[1].to_dict() == {
            "status": "mismatch", "key": "2",
            "column_first": "Name", "column_second": "Full Name",
            "value_first": "Bob", "value_second": "Robert",
        }
