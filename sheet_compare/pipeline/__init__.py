"""Run orchestration."""

from .runner import ReconciliationPipeline, RunOutcome

__all__ = [
    "ReconciliationPipeline",
    "RunOutcome",
]
