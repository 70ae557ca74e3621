"""
Configuration management.
Single responsibility: load, validate, and save reconciliation run files.
"""

import math
import yaml
from pathlib import Path
from typing import Dict, Any, Optional, List, Tuple
from dataclasses import dataclass, field

from ..adapters.row_loader import DEFAULT_MAX_FILE_SIZE
from ..core.correspondence import ColumnPair, resolve_correspondence
from ..errors import ConfigError, CorrespondenceError
from ..utils.logger import get_logger


logger = get_logger()


MIB = 1024 * 1024


def size_from_mb(value: Any) -> int:
    """
    Convert a size in MiB to bytes.

    Raises:
        ConfigError: Value is not a positive finite number
    """
    try:
        megabytes = float(value)
    except (TypeError, ValueError) as e:
        raise ConfigError("max_file_size_mb must be a number") from e
    if not math.isfinite(megabytes) or megabytes <= 0:
        raise ConfigError(f"max_file_size_mb must be a positive finite number, got {value}")
    return int(megabytes * MIB)


@dataclass
class SourceConfig:
    """One spreadsheet and its identifier column."""

    path: str
    key_column: str

    def __post_init__(self):
        """Validate configuration after initialization."""
        self.path = str(self.path or "").strip()
        self.key_column = str(self.key_column or "").strip()
        if not self.path:
            raise ConfigError("Source path is required")
        if not self.key_column:
            raise ConfigError(f"Key column is required for {self.path}")


@dataclass
class RunConfig:
    """Configuration for a single reconciliation run."""

    first: SourceConfig
    second: SourceConfig
    correspondence: Tuple[ColumnPair, ...]
    same_column_names: bool = False
    max_file_size: int = DEFAULT_MAX_FILE_SIZE
    output: Optional[str] = None

    def __post_init__(self):
        if not self.correspondence:
            raise ConfigError("At least one column pair is required")
        if self.max_file_size <= 0:
            raise ConfigError("max_file_size must be positive")


SAMPLE_CONFIG = """# Spreadsheet reconciliation run
# =============================

first:
  path: "spreadsheets/spreadsheet1.xlsx"
  key_column: "Employee ID"

second:
  path: "spreadsheets/spreadsheet2.xlsx"
  key_column: "ID"

# true: every entry under columns is one name used in both spreadsheets
same_column_names: false

columns:
  - first: "Name"
    second: "Full Name"
  - first: "Salary"
    second: "Annual Salary"

max_file_size_mb: 10

# Optional CSV export of every finding
output: null
"""


class ConfigManager:
    """
    Manage run configuration files.
    """

    def __init__(self, config_path: Optional[Path] = None):
        """
        Initialize config manager.

        Args:
            config_path: Path to configuration file
        """
        self.config_path = Path(config_path or "reconcile.yaml")
        self.config: Dict[str, Any] = {}
        self.run: Optional[RunConfig] = None

    def load(self) -> RunConfig:
        """
        Load configuration from file.

        Returns:
            Parsed run configuration

        Raises:
            ConfigError: Missing file, invalid YAML or invalid values
        """
        if not self.config_path.exists():
            raise ConfigError(f"Config not found: {self.config_path}")

        logger.info("config.loading", file=str(self.config_path))

        try:
            with open(self.config_path, encoding="utf-8") as f:
                self.config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {self.config_path}: {e}") from e

        if not isinstance(self.config, dict):
            raise ConfigError(f"Config must be a mapping: {self.config_path}")

        try:
            self.run = self.from_dict(self.config)
        except ConfigError as e:
            logger.error("config.invalid",
                         file=str(self.config_path),
                         error=str(e))
            raise

        logger.info("config.loaded",
                    pairs=len(self.run.correspondence),
                    same_column_names=self.run.same_column_names)

        return self.run

    @staticmethod
    def from_dict(cfg: Dict[str, Any]) -> RunConfig:
        """
        Build a run configuration from a parsed mapping.

        Args:
            cfg: Mapping in the run file layout

        Returns:
            RunConfig
        """
        first = ConfigManager._parse_source(cfg, "first")
        second = ConfigManager._parse_source(cfg, "second")
        same_names = bool(cfg.get("same_column_names", False))

        first_columns, second_columns = ConfigManager._parse_columns(
            cfg.get("columns") or [], same_names
        )

        try:
            correspondence = resolve_correspondence(
                same_names, first_columns, second_columns
            )
        except CorrespondenceError as e:
            raise ConfigError(str(e)) from e

        max_file_size = size_from_mb(cfg.get("max_file_size_mb", 10))

        return RunConfig(
            first=first,
            second=second,
            correspondence=correspondence,
            same_column_names=same_names,
            max_file_size=max_file_size,
            output=cfg.get("output")
        )

    @staticmethod
    def _parse_source(cfg: Dict[str, Any], side: str) -> SourceConfig:
        section = cfg.get(side)
        if not isinstance(section, dict):
            raise ConfigError(f"Missing '{side}' section")
        return SourceConfig(path=section.get("path", ""),
                            key_column=section.get("key_column", ""))

    @staticmethod
    def _parse_columns(entries: List[Any],
                       same_names: bool) -> Tuple[List[str], Optional[List[str]]]:
        """
        Split column entries into per-side name lists.

        A plain string names the same column on both sides; a mapping names
        each side. With same_column_names only the first name is used.
        """
        if not isinstance(entries, list):
            raise ConfigError("'columns' must be a list")

        first_columns, second_columns = [], []
        for entry in entries:
            if isinstance(entry, dict):
                left = entry.get("first", "")
                right = entry.get("second", left)
            elif isinstance(entry, str):
                left = right = entry
            else:
                raise ConfigError(f"Invalid column entry: {entry!r}")
            first_columns.append(str(left))
            second_columns.append(str(right))

        return first_columns, (None if same_names else second_columns)

    @staticmethod
    def to_dict(run: RunConfig) -> Dict[str, Any]:
        """Convert a run configuration back to the file layout."""
        if run.same_column_names:
            columns: List[Any] = [pair.first for pair in run.correspondence]
        else:
            columns = [{"first": pair.first, "second": pair.second}
                       for pair in run.correspondence]

        return {
            "first": {"path": run.first.path, "key_column": run.first.key_column},
            "second": {"path": run.second.path, "key_column": run.second.key_column},
            "same_column_names": run.same_column_names,
            "columns": columns,
            "max_file_size_mb": run.max_file_size / MIB,
            "output": run.output,
        }

    def save(self, run: Optional[RunConfig] = None, path: Optional[Path] = None) -> Path:
        """
        Save configuration to file.

        Args:
            run: Configuration to save (defaults to the loaded one)
            path: Output path (uses original path if not specified)

        Returns:
            Path written

        Raises:
            ConfigError: Nothing to save or the file cannot be written
        """
        run = run or self.run
        if run is None:
            raise ConfigError("No configuration to save")

        output_path = Path(path or self.config_path)

        logger.info("config.saving", file=str(output_path))

        try:
            with open(output_path, "w", encoding="utf-8") as f:
                yaml.dump(self.to_dict(run), f, default_flow_style=False,
                          sort_keys=False, allow_unicode=True)
        except OSError as e:
            logger.error("config.save_failed", file=str(output_path), error=str(e))
            raise ConfigError(f"Could not write config {output_path}: {e}") from e

        logger.info("config.saved", file=str(output_path))
        return output_path


def create_sample_config(output_path: Path) -> Path:
    """
    Create a sample configuration file.

    Args:
        output_path: Where to save the config

    Returns:
        Path written
    """
    output_path = Path(output_path)
    output_path.write_text(SAMPLE_CONFIG, encoding="utf-8")
    return output_path
