"""
Result presentation.
Single responsibility: render comparison results for people and files.
"""

from pathlib import Path
from typing import Iterator, Optional, Union

import pandas as pd
from rich import box
from rich.console import Console
from rich.table import Table

from ..adapters.row_loader import LoadedDataset
from ..core.reconciler import ComparisonResult
from ..utils.logger import get_logger


logger = get_logger()


ALL_MATCH = "All information matches."

EXPORT_COLUMNS = ["status", "key", "column_first", "column_second",
                  "value_first", "value_second"]


def render_lines(result: ComparisonResult) -> Iterator[str]:
    """
    Yield the report lines: keys missing in the second source, then
    mismatches, then keys missing in the first source.

    Args:
        result: Reconciliation result

    Yields:
        One line of text per call
    """
    for key in result.missing_in_b:
        yield f"ID {key} is missing in the second spreadsheet."

    for entry in result.mismatches:
        yield f"Mismatch found for ID {entry.key}:"
        for f in entry.fields:
            yield f"  {f.column_a} vs {f.column_b}: {f.value_a} vs {f.value_b}"

    for key in result.missing_in_a:
        yield f"ID {key} is missing in the first spreadsheet."

    if result.all_match:
        yield ALL_MATCH


class ReportPrinter:
    """
    Print comparison results to the terminal.
    """

    def __init__(self, console: Optional[Console] = None):
        """
        Initialize report printer.

        Args:
            console: Rich console (stdout by default)
        """
        self.console = console or Console(emoji=False)

    def print_result(self, result: ComparisonResult, summary: bool = False):
        """
        Print the report lines and optionally a summary table.

        Args:
            result: Reconciliation result
            summary: Also print the counts table
        """
        for line in render_lines(result):
            self.console.print(line, markup=False, emoji=False, highlight=False,
                               soft_wrap=True)

        if summary:
            self.console.print()
            self.console.print(self.summary_table(result))

    def print_warnings(self, dataset: LoadedDataset):
        """Print the non-fatal issues found while loading a source."""
        for warning in dataset.warnings:
            self.console.print(
                f"Warning: {warning.message} ({dataset.source}, row {warning.row_number})",
                markup=False, emoji=False, highlight=False, soft_wrap=True,
                style="yellow"
            )

    @staticmethod
    def summary_table(result: ComparisonResult) -> Table:
        """Counts per outcome category."""
        table = Table(title="Reconciliation Summary", box=box.ROUNDED)

        table.add_column("Metric", style="cyan", no_wrap=True)
        table.add_column("Value", style="magenta", justify="right")

        rows = [
            ("Rows in first spreadsheet", result.total_first),
            ("Rows in second spreadsheet", result.total_second),
            ("Matched", result.matched),
            ("Mismatched", len(result.mismatches)),
            ("Missing in second spreadsheet", len(result.missing_in_b)),
            ("Missing in first spreadsheet", len(result.missing_in_a)),
        ]
        for metric, value in rows:
            table.add_row(metric, f"{value:,}")

        return table


def findings_frame(result: ComparisonResult) -> pd.DataFrame:
    """
    One row per finding, in report order.

    Mismatches produce one row per differing column pair.
    """
    records = []
    for key in result.missing_in_b:
        records.append({"status": "missing_in_second", "key": key})
    for entry in result.mismatches:
        for f in entry.fields:
            records.append({
                "status": "mismatch",
                "key": entry.key,
                "column_first": f.column_a,
                "column_second": f.column_b,
                "value_first": f.value_a,
                "value_second": f.value_b,
            })
    for key in result.missing_in_a:
        records.append({"status": "missing_in_first", "key": key})

    return pd.DataFrame.from_records(records, columns=EXPORT_COLUMNS).fillna("")


def export_findings(result: ComparisonResult, output_path: Union[str, Path]) -> Path:
    """
    Write every finding to CSV.

    Args:
        result: Reconciliation result
        output_path: Destination CSV file

    Returns:
        Path written
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    df = findings_frame(result)
    df.to_csv(output_path, index=False, encoding="utf-8")

    logger.info("report.exported", file=str(output_path), rows=len(df))
    return output_path
