"""
Progress monitoring.
Single responsibility: provide user feedback while sources load.
"""

import time
from contextlib import contextmanager
from typing import Optional

from rich.console import Console
from rich.markup import escape

from ..utils.logger import get_logger


logger = get_logger()


class ProgressMonitor:
    """
    Simple progress monitoring for console output.
    """

    def __init__(self, verbose: bool = True):
        """
        Initialize progress monitor.

        Args:
            verbose: Whether to show progress lines
        """
        self.verbose = verbose

    @contextmanager
    def task_context(self, name: str, description: str):
        """
        Context manager for task tracking.

        Args:
            name: Task name
            description: Task description
        """
        start = time.time()
        if self.verbose:
            print(f"[START] {description}")
        try:
            yield self
        except Exception as e:
            logger.debug("progress.task.failed", name=name, error=str(e))
            if self.verbose:
                print(f"[FAILED] {description}")
            raise
        if self.verbose:
            print(f"[DONE] {description} ({time.time() - start:.1f}s)")


class RichProgressMonitor:
    """
    Spinner-based progress monitoring using Rich.
    """

    def __init__(self, console: Optional[Console] = None):
        """
        Initialize Rich progress monitor.

        Args:
            console: Console to draw on (stderr by default)
        """
        self.console = console or Console(stderr=True)

    @contextmanager
    def task_context(self, name: str, description: str):
        """
        Show a spinner while the task runs and a check mark when it ends.

        Args:
            name: Task name
            description: Task description
        """
        start = time.time()
        try:
            with self.console.status(f"[bold blue]{escape(description)}"):
                yield self
        except Exception as e:
            logger.debug("progress.task.failed", name=name, error=str(e))
            self.console.print(f"[red]✗[/red] {escape(description)}")
            raise
        self.console.print(
            f"[green]✓[/green] {escape(description)} [dim]({time.time() - start:.1f}s)[/dim]"
        )


def get_progress_monitor(use_rich: bool = True, verbose: bool = True):
    """
    Get appropriate progress monitor.

    Args:
        use_rich: Use Rich spinners
        verbose: Show plain progress lines when not using Rich

    Returns:
        Progress monitor instance
    """
    if use_rich:
        return RichProgressMonitor()
    return ProgressMonitor(verbose=verbose)
