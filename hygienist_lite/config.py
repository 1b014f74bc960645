"""
Application configuration management.

Load order (each layer overrides the previous):
  1. ``config/default.toml``      - committed static defaults
  2. ``config/local.toml``        - optional local overrides (gitignored)
  3. ``.env``                     - local overrides (gitignored)
  4. Environment variables        - ``HYGIENIST_LITE_*`` prefix

Entry point: ``load_config(config_path=None) -> AppConfig``

CLI commands receive an ``AppConfig`` instance: never raw dicts or
individual env var lookups scattered through the codebase. The analytics and
recommendation cores take plain arguments and never read config themselves.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator

# ── Sub-config models ─────────────────────────────────────────────────────────


class QuestionnaireConfig(BaseModel):
    """Location of the questionnaire decision tree."""

    model_config = ConfigDict(frozen=True)

    rules_file: str = "config/questionnaire/toothbrush_rules.json"


class AnalyticsConfig(BaseModel):
    """Adherence analysis windows and roster thresholds."""

    model_config = ConfigDict(frozen=True)

    window_days: int = 30
    low_achievement_threshold: float = 0.40

    @field_validator("window_days")
    @classmethod
    def validate_window(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"Analysis windows must be >= 1 day, got {v}.")
        return v

    @field_validator("low_achievement_threshold")
    @classmethod
    def validate_threshold(cls, v: float) -> float:
        if not 0.0 <= v <= 1.0:
            raise ValueError(f"low_achievement_threshold must be in [0.0, 1.0], got {v}.")
        return v


class StorageConfig(BaseModel):
    """Clinic bundle location."""

    model_config = ConfigDict(frozen=True)

    bundle_path: str = "data/clinic_bundle.json"


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
    """Complete application configuration - the single source of truth.

    Constructed by ``load_config()`` which merges TOML + .env + environment.
    """

    model_config = ConfigDict(frozen=True)

    questionnaire: QuestionnaireConfig = QuestionnaireConfig()
    analytics: AnalyticsConfig = AnalyticsConfig()
    storage: StorageConfig = StorageConfig()
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


def resolve_path(value: str) -> Path:
    """Resolve a config path; relative paths are taken from the project root."""
    path = Path(value)
    if path.is_absolute():
        return path
    return _find_project_root() / path


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """Load and merge application configuration.

    Args:
        config_path: Explicit path to a TOML config file. Defaults to
            ``<project_root>/config/default.toml``.

    Returns:
        Fully validated ``AppConfig`` instance.

    Raises:
        FileNotFoundError: If the specified ``config_path`` does not exist.
        pydantic.ValidationError: If merged config values fail validation.
    """
    root = _find_project_root()

    # 1. Load .env file (silently skip if missing)
    load_dotenv(dotenv_path=root / ".env", override=False)

    # 2. Load TOML config
    if config_path is None:
        config_path = root / "config" / "default.toml"

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(
            f"Config file not found: {config_path}\n"
            "Create config/default.toml or pass --config."
        )

    with open(config_path, "rb") as f:
        raw: dict[str, Any] = tomllib.load(f)

    # Also merge local.toml if present (gitignored local overrides)
    local_config_path = config_path.parent / "local.toml"
    if local_config_path.exists():
        with open(local_config_path, "rb") as f:
            local_raw: dict[str, Any] = tomllib.load(f)
        raw = _deep_merge(raw, local_raw)

    # 3. Apply HYGIENIST_LITE_* environment variable overrides
    raw = _apply_env_overrides(raw)

    # 4. Build and validate AppConfig
    return _build_app_config(raw)


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
    """Apply HYGIENIST_LITE_* env vars to the raw config dict.

    Supported overrides:
      HYGIENIST_LITE_BUNDLE_PATH  → raw["storage"]["bundle_path"]
      HYGIENIST_LITE_RULES_FILE   → raw["questionnaire"]["rules_file"]
      HYGIENIST_LITE_LOG_LEVEL    → raw["logging"]["level"]
      HYGIENIST_LITE_DEBUG        → raw["debug"]
    """
    if bundle_path := os.environ.get("HYGIENIST_LITE_BUNDLE_PATH"):
        raw.setdefault("storage", {})["bundle_path"] = bundle_path

    if rules_file := os.environ.get("HYGIENIST_LITE_RULES_FILE"):
        raw.setdefault("questionnaire", {})["rules_file"] = rules_file

    if log_level := os.environ.get("HYGIENIST_LITE_LOG_LEVEL"):
        raw.setdefault("logging", {})["level"] = log_level

    if debug := os.environ.get("HYGIENIST_LITE_DEBUG"):
        raw["debug"] = debug.lower() in ("1", "true", "yes")

    return raw


def _build_app_config(raw: dict[str, Any]) -> AppConfig:
    """Map raw TOML dict to ``AppConfig`` model structure."""
    project = raw.pop("project", {})

    return AppConfig(
        questionnaire=QuestionnaireConfig(**raw.get("questionnaire", {})),
        analytics=AnalyticsConfig(**raw.get("analytics", {})),
        storage=StorageConfig(**raw.get("storage", {})),
        logging=LoggingConfig(**raw.get("logging", {})),
        debug=raw.get("debug", project.get("debug", False)),
    )
