"""User interface: prompts, report rendering and progress monitoring."""

from .progress import (
    ProgressMonitor,
    RichProgressMonitor,
    get_progress_monitor
)
from .prompts import (
    InteractiveSession,
    parse_column_count,
    parse_yes_no,
    require_text
)
from .report import ReportPrinter, render_lines, export_findings, findings_frame

__all__ = [
    "ProgressMonitor",
    "RichProgressMonitor",
    "get_progress_monitor",
    "InteractiveSession",
    "parse_column_count",
    "parse_yes_no",
    "require_text",
    "ReportPrinter",
    "render_lines",
    "export_findings",
    "findings_frame",
]
