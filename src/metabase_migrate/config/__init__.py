"""Configuration management."""

from .config import Config, ExportConfig, LoggingConfig, MetabaseInstanceConfig

__all__ = ['Config', 'ExportConfig', 'LoggingConfig', 'MetabaseInstanceConfig']
