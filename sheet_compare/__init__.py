"""
Sheet Compare - reconcile two spreadsheets keyed by an identifier column.
"""

__version__ = "1.0.0"

from .core.reconciler import reconcile, ComparisonResult, MismatchEntry, FieldMismatch
from .core.correspondence import ColumnPair, resolve_correspondence
from .config.manager import ConfigManager, RunConfig, SourceConfig
from .adapters.row_loader import RowLoader, LoadedDataset
from .pipeline.runner import ReconciliationPipeline, RunOutcome
from .ui.report import ReportPrinter, render_lines, export_findings
from .utils.logger import get_logger

__all__ = [
    "reconcile",
    "ComparisonResult",
    "MismatchEntry",
    "FieldMismatch",
    "ColumnPair",
    "resolve_correspondence",
    "ConfigManager",
    "RunConfig",
    "SourceConfig",
    "RowLoader",
    "LoadedDataset",
    "ReconciliationPipeline",
    "RunOutcome",
    "ReportPrinter",
    "render_lines",
    "export_findings",
    "get_logger",
]
