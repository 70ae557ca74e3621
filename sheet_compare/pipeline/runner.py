"""
Reconciliation pipeline.
Single responsibility: load both sources, then reconcile them.
"""

from dataclasses import dataclass
from typing import Optional

from ..adapters.row_loader import LoadedDataset, RowLoader
from ..config.manager import RunConfig
from ..core.correspondence import columns_first, columns_second
from ..core.reconciler import ComparisonResult, reconcile
from ..ui.progress import ProgressMonitor
from ..utils.logger import get_logger


logger = get_logger()


@dataclass
class RunOutcome:
    """Result of one pipeline run and the datasets it compared."""

    result: ComparisonResult
    first: LoadedDataset
    second: LoadedDataset


class ReconciliationPipeline:
    """
    Main pipeline orchestrator.
    """

    def __init__(self, config: RunConfig,
                 loader: Optional[RowLoader] = None,
                 progress=None):
        """
        Initialize pipeline.

        Args:
            config: Run configuration
            loader: Row loader (built from config.max_file_size if omitted)
            progress: Object exposing task_context(name, description)
        """
        self.config = config
        self.loader = loader or RowLoader(max_file_size=config.max_file_size)
        self.progress = progress or ProgressMonitor(verbose=False)

    def run(self) -> RunOutcome:
        """
        Run the complete pipeline.

        Both sources must load before anything is compared; any load failure
        propagates to the caller.

        Returns:
            RunOutcome
        """
        logger.info("pipeline.starting",
                    first=self.config.first.path,
                    second=self.config.second.path,
                    pairs=len(self.config.correspondence))

        pairs = self.config.correspondence

        with self.progress.task_context("load_first",
                                        f"Loading {self.config.first.path}"):
            first = self.loader.load(self.config.first.path,
                                     self.config.first.key_column,
                                     columns_first(pairs))

        with self.progress.task_context("load_second",
                                        f"Loading {self.config.second.path}"):
            second = self.loader.load(self.config.second.path,
                                      self.config.second.key_column,
                                      columns_second(pairs))

        with self.progress.task_context("reconcile", "Comparing spreadsheets"):
            result = reconcile(first.records, second.records, pairs)

        logger.info("pipeline.completed", all_match=result.all_match)

        return RunOutcome(result=result, first=first, second=second)
