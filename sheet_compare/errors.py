"""
Error taxonomy.
Single responsibility: typed failures raised by loaders, configuration and prompts.
"""

from typing import Optional


class SheetCompareError(Exception):
    """Base class for every recoverable-at-the-boundary failure."""
    pass


class SourceError(SheetCompareError):
    """A tabular source could not be loaded."""

    def __init__(self, source, message: str):
        self.source = str(source)
        super().__init__(message)


class ColumnNotFoundError(SourceError):
    """Key or value column absent from a source's header row."""

    def __init__(self, source, column: str):
        self.column = column
        super().__init__(source, f"Column '{column}' not found in {source}")


class SourceTooLargeError(SourceError):
    """Source exceeds the configured size guard."""

    def __init__(self, source, size: int, limit: int):
        self.size = size
        self.limit = limit
        super().__init__(
            source,
            f"File size exceeds the maximum limit of {limit / (1024 * 1024):g} MB: {source}"
        )


class SourceUnreadableError(SourceError):
    """Underlying I/O or container failure (missing file, corrupt workbook)."""

    def __init__(self, source, reason: Optional[str] = None):
        self.reason = reason
        message = f"Error reading spreadsheet: {source}"
        if reason:
            message += f" ({reason})"
        super().__init__(source, message)


class CorrespondenceError(SheetCompareError, ValueError):
    """Column correspondence is empty, uneven or has blank names."""
    pass


class ConfigError(SheetCompareError):
    """Run configuration file is missing or malformed."""
    pass


class InvalidUserInput(SheetCompareError, ValueError):
    """Interactive answer rejected; the prompt is asked again."""
    pass


class ContractViolation(AssertionError):
    """A record lacks a column the loader guaranteed to extract."""
    pass


class SessionCancelled(SheetCompareError):
    """Interactive session ended by EOF or Ctrl-C."""
    pass
