"""Configuration management."""

from .manager import ConfigManager, RunConfig, SourceConfig, create_sample_config, size_from_mb

__all__ = ["ConfigManager", "RunConfig", "SourceConfig", "create_sample_config",
           "size_from_mb"]
