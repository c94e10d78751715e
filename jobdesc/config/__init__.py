"""Configuration management for the description pipeline."""

from .duration import DurationParseError, parse_duration
from .environment import DEFAULT_DATABASE_URL, EnvironmentConfig, load_environment_config
from .exceptions import ConfigurationError
from .loader import load_config, parse_config, validate_config_file
from .models import (
    DEFAULT_THRESHOLD,
    BatchConfig,
    FormattingConfig,
    LogFormat,
    LogLevel,
    LoggingConfig,
    MaintenanceOperation,
    PipelineConfig,
    ScheduleConfig,
    ScoringConfig,
)

__all__ = [
    # Loader functions
    "load_config",
    "parse_config",
    "validate_config_file",
    "load_environment_config",
    "parse_duration",
    # Configuration models
    "PipelineConfig",
    "FormattingConfig",
    "ScoringConfig",
    "BatchConfig",
    "ScheduleConfig",
    "LoggingConfig",
    "EnvironmentConfig",
    # Enums and defaults
    "MaintenanceOperation",
    "LogLevel",
    "LogFormat",
    "DEFAULT_THRESHOLD",
    "DEFAULT_DATABASE_URL",
    # Exceptions
    "ConfigurationError",
    "DurationParseError",
]
