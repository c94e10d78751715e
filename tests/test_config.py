"""Tests for configuration loading and validation."""

from pathlib import Path

import pytest

from jobdesc.config import (
    ConfigurationError,
    MaintenanceOperation,
    PipelineConfig,
    load_config,
    parse_config,
    validate_config_file,
)
from jobdesc.config.duration import (
    DurationParseError,
    describe_seconds,
    parse_duration,
    validate_duration_range,
)
from jobdesc.config.environment import DEFAULT_DATABASE_URL, load_environment_config
from jobdesc.config.validators import check_for_warnings

EXAMPLE_CONFIG = Path(__file__).parent.parent / "config.example.yaml"

VALID_CONFIG = """
formatting:
  words_per_minute: 250
scoring:
  threshold: 40
  weights:
    buzzword: 10
batch:
  limit: 100
  concurrency: 2
  source_filter: Greenhouse
schedule:
  enabled: true
  interval: 15m
  operations:
    - humanize
logging:
  level: DEBUG
  format: json
"""


def write_config(tmp_path, content: str) -> Path:
    config_file = tmp_path / "config.yaml"
    config_file.write_text(content)
    return config_file


class TestConfigurationLoading:
    """Test configuration loading from YAML files."""

    def test_load_valid_config(self, tmp_path, mock_env_vars):
        pipeline_config, env_config = load_config(write_config(tmp_path, VALID_CONFIG))

        assert pipeline_config.formatting.words_per_minute == 250
        assert pipeline_config.formatting.header_max_length == 60
        assert pipeline_config.formatting.max_length == 15000
        assert pipeline_config.formatting.highlight_salary is False
        assert pipeline_config.scoring.threshold == 40
        assert pipeline_config.scoring.weights.buzzword == 10
        assert pipeline_config.scoring.weights.filler == 10
        assert pipeline_config.batch.limit == 100
        assert pipeline_config.batch.source_filter == "greenhouse"
        assert pipeline_config.schedule.enabled is True
        assert pipeline_config.schedule.interval_seconds == 900
        assert pipeline_config.schedule.operations == [MaintenanceOperation.HUMANIZE]
        assert pipeline_config.logging.level == "DEBUG"
        assert pipeline_config.logging.format == "json"

        assert env_config.database_url == "sqlite:///:memory:"
        assert env_config.environment == "test"

    def test_example_config_is_valid(self, mock_env_vars):
        pipeline_config, _ = load_config(EXAMPLE_CONFIG)
        assert pipeline_config.scoring.threshold == 30
        assert pipeline_config.schedule.interval_seconds == 6 * 3600

    def test_defaults_without_config_file(self, tmp_path, monkeypatch, mock_env_vars):
        monkeypatch.chdir(tmp_path)

        pipeline_config, _ = load_config()

        assert pipeline_config == PipelineConfig()
        assert pipeline_config.schedule.operations == [
            MaintenanceOperation.FORMAT,
            MaintenanceOperation.HUMANIZE,
        ]

    def test_config_in_current_directory_is_found(self, tmp_path, monkeypatch, mock_env_vars):
        write_config(tmp_path, "scoring:\n  threshold: 55\n")
        monkeypatch.chdir(tmp_path)

        pipeline_config, _ = load_config()

        assert pipeline_config.scoring.threshold == 55

    def test_empty_file_uses_defaults(self, tmp_path, mock_env_vars):
        pipeline_config, _ = load_config(write_config(tmp_path, ""))
        assert pipeline_config == PipelineConfig()

    def test_config_file_not_found(self, mock_env_vars):
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(Path("nonexistent.yaml"))

        assert "not found" in str(exc_info.value)
        assert exc_info.value.suggestions

    def test_invalid_yaml_syntax(self, tmp_path, mock_env_vars):
        config_file = write_config(tmp_path, "scoring: [unclosed\n")

        with pytest.raises(ConfigurationError) as exc_info:
            load_config(config_file)

        assert "Failed to parse YAML" in str(exc_info.value)

    def test_top_level_must_be_mapping(self, tmp_path, mock_env_vars):
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(write_config(tmp_path, "- format\n- humanize\n"))

        assert "mapping" in str(exc_info.value)


class TestConfigurationValidation:
    """Test validation errors are collected and described."""

    def test_threshold_out_of_range(self):
        with pytest.raises(ConfigurationError) as exc_info:
            parse_config({"scoring": {"threshold": 150}})

        assert any("scoring -> threshold" in error for error in exc_info.value.errors)

    def test_wrong_type_described(self):
        with pytest.raises(ConfigurationError) as exc_info:
            parse_config({"batch": {"concurrency": "many"}})

        assert exc_info.value.errors == [
            "Invalid type for 'batch -> concurrency': expected int, got 'many'"
        ]

    def test_unknown_operation(self):
        with pytest.raises(ConfigurationError) as exc_info:
            parse_config({"schedule": {"operations": ["reformat"]}})

        assert exc_info.value.errors[0].startswith("Invalid value for 'schedule -> operations -> 0'")

    def test_empty_operations_rejected(self):
        with pytest.raises(ConfigurationError):
            parse_config({"schedule": {"operations": []}})

    def test_duplicate_operations_collapsed(self):
        config = parse_config({"schedule": {"operations": ["format", "format", "humanize"]}})
        assert config.schedule.operations == [MaintenanceOperation.FORMAT, MaintenanceOperation.HUMANIZE]

    def test_interval_too_short(self):
        with pytest.raises(ConfigurationError) as exc_info:
            parse_config({"schedule": {"interval": "30s"}})

        assert "too short" in exc_info.value.errors[0]

    def test_max_length_too_small(self):
        with pytest.raises(ConfigurationError) as exc_info:
            parse_config({"formatting": {"max_length": 10}})

        assert any("formatting -> max_length" in error for error in exc_info.value.errors)

    def test_negative_weight_rejected(self):
        with pytest.raises(ConfigurationError):
            parse_config({"scoring": {"weights": {"buzzword": -1}}})

    def test_error_rendering(self):
        error = ConfigurationError("Broken", errors=["a", "b"], suggestions=["fix it"])
        rendered = str(error)

        assert rendered.startswith("Broken")
        assert "  1. a" in rendered
        assert "  2. b" in rendered
        assert "  - fix it" in rendered


class TestConfigurationWarnings:
    """Test non-fatal warnings."""

    def test_threshold_zero_warns(self, tmp_path, mock_env_vars):
        config_file = write_config(tmp_path, "scoring:\n  threshold: 0\n")

        with pytest.warns(UserWarning, match="threshold 0"):
            load_config(config_file)

    def test_check_for_warnings(self):
        messages = check_for_warnings(
            {
                "batch": {"limit": 50000, "concurrency": 64},
                "schedule": {"enabled": True, "dry_run": True},
            }
        )
        assert len(messages) == 3

    def test_no_warnings_for_defaults(self):
        assert check_for_warnings({}) == []


class TestDurationParsing:
    """Test duration string parsing."""

    @pytest.mark.parametrize(
        "value,seconds",
        [
            ("90s", 90),
            ("15m", 900),
            ("6h", 21600),
            ("1d", 86400),
            ("1w", 604800),
            ("1h30m", 5400),
            ("1H 30M", 5400),
            ("PT15M", 900),
            ("PT6H", 21600),
            ("P1D", 86400),
            ("P1DT12H", 129600),
            ("pt1h", 3600),
        ],
    )
    def test_parse(self, value, seconds):
        assert parse_duration(value) == seconds

    @pytest.mark.parametrize("value", ["", "   ", "6", "six hours", "6x", "P", "PT", "P1DT", "0m"])
    def test_parse_invalid(self, value):
        with pytest.raises(DurationParseError):
            parse_duration(value)

    def test_validate_duration_range(self):
        validate_duration_range(3600)

        with pytest.raises(DurationParseError, match="too short"):
            validate_duration_range(30)
        with pytest.raises(DurationParseError, match="too long"):
            validate_duration_range(2 * 604800)

    @pytest.mark.parametrize(
        "seconds,text",
        [(1, "1 second"), (90, "90 seconds"), (60, "1 minute"), (21600, "6 hours"), (1209600, "2 weeks")],
    )
    def test_describe_seconds(self, seconds, text):
        assert describe_seconds(seconds) == text


class TestEnvironmentVariables:
    """Test environment variable loading."""

    def test_load_environment_config(self, mock_env_vars):
        env_config = load_environment_config()

        assert env_config.database_url == "sqlite:///:memory:"
        assert env_config.log_level is None
        assert env_config.log_format is None
        assert env_config.environment == "test"

    def test_defaults_when_unset(self, monkeypatch):
        for name in ("DATABASE_URL", "LOG_LEVEL", "LOG_FORMAT", "ENVIRONMENT"):
            monkeypatch.delenv(name, raising=False)

        env_config = load_environment_config()

        assert env_config.database_url == DEFAULT_DATABASE_URL
        assert env_config.environment == "local"

    def test_overrides_are_normalized(self, monkeypatch, mock_env_vars):
        monkeypatch.setenv("LOG_LEVEL", "debug")
        monkeypatch.setenv("LOG_FORMAT", "JSON")

        env_config = load_environment_config()

        assert env_config.log_level == "DEBUG"
        assert env_config.log_format == "json"

    def test_invalid_values_collected(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "not-a-url")
        monkeypatch.setenv("LOG_LEVEL", "LOUD")
        monkeypatch.setenv("LOG_FORMAT", "xml")

        with pytest.raises(ConfigurationError) as exc_info:
            load_environment_config()

        assert len(exc_info.value.errors) == 3


class TestConfigurationHelpers:
    """Test helper utilities."""

    def test_validate_config_file_utility(self, tmp_path, capsys):
        assert validate_config_file(EXAMPLE_CONFIG) is True
        assert "is valid" in capsys.readouterr().out

        broken = write_config(tmp_path, "scoring:\n  threshold: high\n")
        assert validate_config_file(broken) is False
        assert "validation failed" in capsys.readouterr().out
