"""Configuration schema models using Pydantic."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from jobdesc.formatting.patterns import HEADER_MAX_LENGTH, MAX_LENGTH, WORDS_PER_MINUTE
from jobdesc.scoring.signals import ScoringWeights

from .duration import DurationParseError, parse_duration, validate_duration_range

DEFAULT_THRESHOLD = 30


class MaintenanceOperation(str, Enum):
    """Maintenance jobs that can run over the stored descriptions."""

    FORMAT = "format"
    HUMANIZE = "humanize"


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""

    JSON = "json"
    KEY_VALUE = "key-value"


class FormattingConfig(BaseModel):
    """Settings for sanitizing and rendering descriptions."""

    words_per_minute: int = Field(
        WORDS_PER_MINUTE, ge=50, le=1000, description="Reading speed for reading-time estimates"
    )
    header_max_length: int = Field(
        HEADER_MAX_LENGTH, ge=10, le=200, description="Longest line still treated as a header"
    )
    max_length: int = Field(
        MAX_LENGTH, ge=1000, le=1_000_000, description="Formatted descriptions longer than this are truncated"
    )
    highlight_salary: bool = Field(False, description="Bold salary figures in formatted output")


class ScoringConfig(BaseModel):
    """AI-likelihood scoring and the humanization gate."""

    threshold: int = Field(
        DEFAULT_THRESHOLD, ge=0, le=100, description="Score at or above which text is humanized"
    )
    weights: ScoringWeights = Field(default_factory=ScoringWeights)


class BatchConfig(BaseModel):
    """Defaults for maintenance runs; CLI flags override them."""

    limit: Optional[int] = Field(None, ge=1, description="Documents fetched per run (None = all)")
    concurrency: int = Field(4, ge=1, le=64, description="Worker threads per run")
    source_filter: Optional[str] = Field(None, description="Only process this source")

    @field_validator("source_filter")
    @classmethod
    def normalize_source(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        stripped = v.strip().lower()
        return stripped or None


class ScheduleConfig(BaseModel):
    """Interval scheduling of maintenance runs."""

    enabled: bool = Field(False, description="Run maintenance on an interval")
    interval: str = Field("6h", description="Interval between runs, e.g. '6h' or 'PT30M'")
    operations: List[MaintenanceOperation] = Field(
        default_factory=lambda: [MaintenanceOperation.FORMAT, MaintenanceOperation.HUMANIZE],
        description="Operations to run, in order",
    )
    dry_run: bool = Field(False, description="Report changes without saving them")

    # Computed field
    interval_seconds: Optional[int] = None

    @field_validator("interval")
    @classmethod
    def validate_interval(cls, v: str) -> str:
        try:
            validate_duration_range(parse_duration(v))
        except DurationParseError as e:
            raise ValueError(str(e)) from e
        return v

    @field_validator("operations")
    @classmethod
    def deduplicate_operations(cls, v: List[MaintenanceOperation]) -> List[MaintenanceOperation]:
        if not v:
            raise ValueError("At least one operation must be scheduled")
        return list(dict.fromkeys(v))

    @model_validator(mode="after")
    def compute_interval_seconds(self):
        self.interval_seconds = parse_duration(self.interval)
        return self


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(LogLevel.INFO, description="Log level")
    format: LogFormat = Field(
        LogFormat.KEY_VALUE, description="Log output format (json or key-value)"
    )

    model_config = {"use_enum_values": True}


class PipelineConfig(BaseModel):
    """Root configuration object. Every section has defaults."""

    formatting: FormattingConfig = Field(default_factory=FormattingConfig)
    scoring: ScoringConfig = Field(default_factory=ScoringConfig)
    batch: BatchConfig = Field(default_factory=BatchConfig)
    schedule: ScheduleConfig = Field(default_factory=ScheduleConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
