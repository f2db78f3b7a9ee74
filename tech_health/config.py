"""
Application configuration management.

Load order (each layer overrides the previous):
  1. ``config/default.toml``      — committed static defaults
  2. ``config/local.toml``        — optional local overrides (gitignored)
  3. ``.env``                     — local env overrides (gitignored)
  4. Environment variables        — ``TECH_HEALTH_*`` prefix

Entry point: ``load_config(config_path=None) -> AppConfig``

The recommendation engine never calls ``load_config`` itself. It receives a
``RecommendationThresholds`` (or uses the built-in defaults), so embedding it
in a request handler involves no file or environment access.

Rule thresholds are grouped by domain so each group can be tuned and tested
independently of the generator logic that reads it.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator, model_validator

# ── Threshold groups ──────────────────────────────────────────────────────────


class _ThresholdGroup(BaseModel):
    """Common base: frozen, and every numeric threshold is non-negative."""

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def validate_non_negative(self) -> "_ThresholdGroup":
        for name, value in self:
            if value < 0:
                raise ValueError(f"{name} must be non-negative, got {value}.")
        return self


class ComplexityThresholds(_ThresholdGroup):
    """Cyclomatic complexity triggers."""

    average_max: float = 15.0
    average_escalate: float = 20.0      # above this → High instead of Medium
    high_complexity_files_max: int = 10

    @model_validator(mode="after")
    def validate_escalation(self) -> "ComplexityThresholds":
        if self.average_escalate < self.average_max:
            raise ValueError(
                f"average_escalate ({self.average_escalate}) must be >= "
                f"average_max ({self.average_max})."
            )
        return self


class CoverageThresholds(_ThresholdGroup):
    """Test coverage triggers (percent)."""

    minimum: float = 70.0
    escalate_below: float = 50.0        # below this → High instead of Medium

    @model_validator(mode="after")
    def validate_escalation(self) -> "CoverageThresholds":
        if self.escalate_below > self.minimum:
            raise ValueError(
                f"escalate_below ({self.escalate_below}) must be <= "
                f"minimum ({self.minimum})."
            )
        if self.minimum > 100:
            raise ValueError(f"minimum must be <= 100, got {self.minimum}.")
        return self


class DocumentationThresholds(_ThresholdGroup):
    """In-code documentation score and repository description length."""

    minimum_score: float = 60.0
    description_min_length: int = 50


class StalenessThresholds(_ThresholdGroup):
    """Repository activity."""

    max_days: float = 90.0


class VulnerabilityThresholds(_ThresholdGroup):
    """Total vulnerability count that signals a process problem."""

    max_total: int = 10


class DependencyThresholds(_ThresholdGroup):
    """Outdated dependency count."""

    max_outdated: int = 10


class FailureRateThresholds(_ThresholdGroup):
    """DORA change failure rate (percent)."""

    max_pct: float = 15.0


class HealthScoreThresholds(_ThresholdGroup):
    """Overall tech-health composite score (0–100)."""

    overall_min: float = 70.0
    performance_min: float = 80.0


class RecommendationThresholds(BaseModel):
    """Every rule threshold used by the recommendation generators."""

    model_config = ConfigDict(frozen=True)

    complexity: ComplexityThresholds = ComplexityThresholds()
    coverage: CoverageThresholds = CoverageThresholds()
    documentation: DocumentationThresholds = DocumentationThresholds()
    staleness: StalenessThresholds = StalenessThresholds()
    vulnerabilities: VulnerabilityThresholds = VulnerabilityThresholds()
    dependencies: DependencyThresholds = DependencyThresholds()
    failure_rate: FailureRateThresholds = FailureRateThresholds()
    health_score: HealthScoreThresholds = HealthScoreThresholds()


# ── Other sections ────────────────────────────────────────────────────────────


class LoggingConfig(BaseModel):
    """Logging output settings."""

    model_config = ConfigDict(frozen=True)

    level: str = "INFO"
    log_file: str = ""
    json_format: bool = False

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid:
            raise ValueError(f"Log level must be one of {sorted(valid)}, got '{v}'.")
        return v.upper()


class AppConfig(BaseModel):
    """Complete application configuration.

    Constructed by ``load_config()`` which merges TOML + .env + environment.
    """

    model_config = ConfigDict(frozen=True)

    thresholds: RecommendationThresholds = RecommendationThresholds()
    logging: LoggingConfig = LoggingConfig()
    debug: bool = False


# ── Loader ────────────────────────────────────────────────────────────────────

_PROJECT_ROOT = Path(__file__).parent.parent


def _find_project_root() -> Path:
    """Walk up from this file to find the project root (contains pyproject.toml)."""
    candidate = Path(__file__).parent
    for _ in range(5):
        if (candidate / "pyproject.toml").exists():
            return candidate
        candidate = candidate.parent
    return _PROJECT_ROOT


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """Load and merge application configuration.

    Args:
        config_path: Explicit path to a TOML config file. Defaults to
            ``<project_root>/config/default.toml``; when that default file
            does not exist the built-in defaults are used.

    Returns:
        Fully validated ``AppConfig`` instance.

    Raises:
        FileNotFoundError: If an explicit ``config_path`` does not exist.
        pydantic.ValidationError: If merged config values fail validation.
    """
    root = _find_project_root()

    # 1. Load .env file (silently skip if missing)
    load_dotenv(dotenv_path=root / ".env", override=False)

    # 2. Load TOML config
    raw: dict[str, Any] = {}
    if config_path is None:
        default_path = root / "config" / "default.toml"
        if default_path.exists():
            raw = _read_toml(default_path)
            config_path = default_path
    else:
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        raw = _read_toml(config_path)

    # Also merge local.toml if present (gitignored local overrides)
    if config_path is not None:
        local_config_path = config_path.parent / "local.toml"
        if local_config_path.exists():
            raw = _deep_merge(raw, _read_toml(local_config_path))

    # 3. Apply TECH_HEALTH_* environment variable overrides
    raw = _apply_env_overrides(raw)

    # 4. Build and validate AppConfig
    return AppConfig.model_validate(raw)


def _read_toml(path: Path) -> dict[str, Any]:
    with open(path, "rb") as f:
        return tomllib.load(f)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge ``override`` into ``base``."""
    result = dict(base)
    for key, val in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(val, dict):
            result[key] = _deep_merge(result[key], val)
        else:
            result[key] = val
    return result


def _apply_env_overrides(raw: dict[str, Any]) -> dict[str, Any]:
    """Apply TECH_HEALTH_* env vars to the raw config dict.

    Supported overrides:
      TECH_HEALTH_LOG_LEVEL  → raw["logging"]["level"]
      TECH_HEALTH_DEBUG      → raw["debug"]
    """
    if log_level := os.environ.get("TECH_HEALTH_LOG_LEVEL"):
        raw.setdefault("logging", {})["level"] = log_level

    if debug := os.environ.get("TECH_HEALTH_DEBUG"):
        raw["debug"] = debug.lower() in ("1", "true", "yes")

    return raw
