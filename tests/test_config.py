"""Tests for tech_health/config.py."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from tech_health.config import (
    AppConfig,
    ComplexityThresholds,
    CoverageThresholds,
    LoggingConfig,
    RecommendationThresholds,
    StalenessThresholds,
    load_config,
)

PROJECT_DEFAULT_TOML = Path(__file__).parent.parent / "config" / "default.toml"


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    monkeypatch.delenv("TECH_HEALTH_LOG_LEVEL", raising=False)
    monkeypatch.delenv("TECH_HEALTH_DEBUG", raising=False)


class TestDefaults:
    def test_threshold_defaults(self):
        t = RecommendationThresholds()
        assert t.complexity.average_max == 15
        assert t.complexity.average_escalate == 20
        assert t.complexity.high_complexity_files_max == 10
        assert t.coverage.minimum == 70
        assert t.coverage.escalate_below == 50
        assert t.documentation.minimum_score == 60
        assert t.documentation.description_min_length == 50
        assert t.staleness.max_days == 90
        assert t.vulnerabilities.max_total == 10
        assert t.dependencies.max_outdated == 10
        assert t.failure_rate.max_pct == 15
        assert t.health_score.overall_min == 70
        assert t.health_score.performance_min == 80

    def test_committed_toml_matches_builtin_defaults(self):
        config = load_config(PROJECT_DEFAULT_TOML)
        assert config.thresholds == RecommendationThresholds()

    def test_frozen(self):
        with pytest.raises(ValidationError):
            AppConfig().debug = True


class TestValidation:
    def test_negative_threshold_rejected(self):
        with pytest.raises(ValidationError, match="non-negative"):
            StalenessThresholds(max_days=-1)

    def test_complexity_escalation_must_not_be_looser(self):
        with pytest.raises(ValidationError, match="average_escalate"):
            ComplexityThresholds(average_max=25, average_escalate=20)

    def test_coverage_escalation_must_not_be_looser(self):
        with pytest.raises(ValidationError, match="escalate_below"):
            CoverageThresholds(minimum=60, escalate_below=65)

    def test_coverage_above_100_rejected(self):
        with pytest.raises(ValidationError, match="<= 100"):
            CoverageThresholds(minimum=120)

    def test_log_level_normalized(self):
        assert LoggingConfig(level="debug").level == "DEBUG"

    def test_bad_log_level_rejected(self):
        with pytest.raises(ValidationError, match="Log level"):
            LoggingConfig(level="LOUD")


class TestLoadConfig:
    def test_missing_explicit_path_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nope.toml")

    def test_partial_toml_keeps_other_defaults(self, tmp_path):
        path = tmp_path / "custom.toml"
        path.write_text("[thresholds.coverage]\nminimum = 80.0\n", encoding="utf-8")
        config = load_config(path)
        assert config.thresholds.coverage.minimum == 80
        assert config.thresholds.coverage.escalate_below == 50
        assert config.thresholds.staleness.max_days == 90

    def test_local_toml_overrides(self, tmp_path):
        path = tmp_path / "default.toml"
        path.write_text("[thresholds.staleness]\nmax_days = 60.0\n", encoding="utf-8")
        (tmp_path / "local.toml").write_text(
            "[thresholds.staleness]\nmax_days = 30.0\n", encoding="utf-8"
        )
        assert load_config(path).thresholds.staleness.max_days == 30

    def test_env_overrides(self, tmp_path, monkeypatch):
        path = tmp_path / "default.toml"
        path.write_text('[logging]\nlevel = "INFO"\n', encoding="utf-8")
        monkeypatch.setenv("TECH_HEALTH_LOG_LEVEL", "error")
        monkeypatch.setenv("TECH_HEALTH_DEBUG", "yes")
        config = load_config(path)
        assert config.logging.level == "ERROR"
        assert config.debug is True

    def test_invalid_toml_value_raises(self, tmp_path):
        path = tmp_path / "bad.toml"
        path.write_text("[thresholds.vulnerabilities]\nmax_total = -5\n", encoding="utf-8")
        with pytest.raises(ValidationError):
            load_config(path)
