"""
Structured logging utility.
Single responsibility: provide consistent logging across application.
"""

import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional
import json


class StructuredLogger:
    """
    Structured logger for consistent application logging.
    """
    
    def __init__(self, name: str = "sheet-compare",
                 log_file: Optional[Path] = None,
                 verbose: bool = False):
        """
        Initialize logger.
        
        Args:
            name: Logger name
            log_file: Optional file path for logging
            verbose: Emit DEBUG entries when True
        """
        self.name = name
        self.log_file = Path(log_file) if log_file else None
        self.verbose = verbose
        
    def _format_message(self, level: str, message: str, 
                       **kwargs) -> Dict[str, Any]:
        """
        Format log message with metadata.
        
        Args:
            level: Log level (INFO, DEBUG, ERROR, etc.)
            message: Dotted event name
            **kwargs: Additional context fields
            
        Returns:
            Formatted log entry
        """
        entry = {
            "timestamp": datetime.now().isoformat(),
            "level": level,
            "logger": self.name,
            "message": message
        }
        
        if kwargs:
            entry["context"] = kwargs
            
        return entry
    
    def _output(self, entry: Dict[str, Any]):
        """
        Output log entry to console and optionally file.
        
        Args:
            entry: Log entry dictionary
        """
        if entry["level"] == "DEBUG" and not self.verbose:
            return
        
        # Console output - human readable
        timestamp = entry["timestamp"].split("T")[1][:8]
        level = entry["level"]
        msg = entry["message"]
        
        print(f"[{timestamp}] {level:5} | {msg}", file=sys.stderr)
        
        if "context" in entry:
            for key, value in entry["context"].items():
                print(f"  {key}={value}", file=sys.stderr)
        
        # File output - JSON for parsing
        if self.log_file:
            with open(self.log_file, "a", encoding="utf-8") as f:
                f.write(json.dumps(entry, default=str) + "\n")
    
    def info(self, message: str, **kwargs):
        """Log info message."""
        self._output(self._format_message("INFO", message, **kwargs))
    
    def debug(self, message: str, **kwargs):
        """Log debug message."""
        self._output(self._format_message("DEBUG", message, **kwargs))
    
    def warning(self, message: str, **kwargs):
        """Log warning message."""
        self._output(self._format_message("WARN", message, **kwargs))
    
    def error(self, message: str, **kwargs):
        """Log error message."""
        self._output(self._format_message("ERROR", message, **kwargs))
    
    def critical(self, message: str, **kwargs):
        """Log critical message."""
        self._output(self._format_message("CRITICAL", message, **kwargs))


# Global logger instance
_logger: Optional[StructuredLogger] = None


def get_logger(name: str = "sheet-compare") -> StructuredLogger:
    """
    Get or create logger instance.
    
    Args:
        name: Logger name
        
    Returns:
        Logger instance
    """
    global _logger
    if _logger is None:
        _logger = StructuredLogger(name)
    return _logger


def configure_logger(log_file: Optional[Path] = None,
                     verbose: bool = False) -> StructuredLogger:
    """
    Point the shared logger at a JSON log file and set verbosity.
    
    Args:
        log_file: File receiving one JSON entry per line (None disables)
        verbose: Emit DEBUG entries
        
    Returns:
        The shared logger
    """
    logger = get_logger()
    logger.log_file = Path(log_file) if log_file else None
    logger.verbose = verbose
    return logger
