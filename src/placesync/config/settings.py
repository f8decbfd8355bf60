"""Configuration management built on top of the policy primitives."""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Literal

import yaml
from pydantic import BaseModel, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .policies import Policies, load_policies

PROJECT_ROOT = Path(__file__).resolve().parents[3]
DEFAULT_CONFIG_DIR = PROJECT_ROOT / "config"
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "default.yaml"


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge two dictionaries."""

    result = dict(base)
    for key, value in override.items():
        if (
            key in result
            and isinstance(result[key], dict)
            and isinstance(value, dict)
        ):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _load_yaml_file(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as handle:
        return yaml.safe_load(handle) or {}


def _apply_env_overrides(base: Dict[str, Any]) -> Dict[str, Any]:
    """Apply overrides from PLACESYNC_SETTINGS__* environment variables."""

    prefix = "PLACESYNC_SETTINGS__"
    result = dict(base)
    for key, value in os.environ.items():
        if not key.startswith(prefix):
            continue
        path = key[len(prefix) :].lower().split("__")
        cursor = result
        for part in path[:-1]:
            cursor = cursor.setdefault(part, {})
        cursor[path[-1]] = value
    return result


def _apply_notion_credentials(base: Dict[str, Any]) -> Dict[str, Any]:
    """Fill Notion credentials from the conventional NOTION_* variables."""

    notion = dict(base.get("notion") or {})
    api_key = os.getenv("NOTION_API_KEY")
    database_id = os.getenv("NOTION_DATABASE_ID")
    if api_key and not notion.get("api_key"):
        notion["api_key"] = api_key
    if database_id and not notion.get("database_id"):
        notion["database_id"] = database_id
    if notion:
        base = dict(base)
        base["notion"] = notion
    return base


class PathsConfig(BaseModel):
    """Filesystem layout for local artefacts such as logs."""

    logs_dir: Path = Field(default=PROJECT_ROOT / "logs")

    def ensure_exists(self) -> None:
        """Create directories backing every configured path if they are missing."""
        for field_name in type(self).model_fields:
            value = getattr(self, field_name)
            path = Path(value)
            if not path.is_absolute():
                path = PROJECT_ROOT / path
            path.mkdir(parents=True, exist_ok=True)
            object.__setattr__(self, field_name, path)


class NotionSettings(BaseModel):
    """Connection details for the Notion places database."""

    api_key: str | None = Field(default=None, repr=False)
    database_id: str | None = Field(default=None)
    base_url: str = Field(default="https://api.notion.com/v1")
    api_version: str = Field(default="2022-06-28")
    timeout_seconds: float = Field(default=30.0, gt=0.0)
    request_interval_seconds: float = Field(
        default=0.35,
        ge=0.0,
        description="Minimum spacing between consecutive API requests.",
    )

    @property
    def configured(self) -> bool:
        return bool(self.api_key and self.database_id)


class Settings(BaseSettings):
    """Primary configuration object for placesync.

    Precedence (highest first): explicit kwargs, environment variables prefixed
    with ``PLACESYNC_`` (handled by :class:`BaseSettings`), nested overrides via
    ``PLACESYNC_SETTINGS__`` variables, environment-specific YAML (e.g.
    ``production.yaml``), the default YAML file, and finally the class defaults.
    ``NOTION_API_KEY`` and ``NOTION_DATABASE_ID`` fill the Notion credentials
    when no other layer provides them.
    """

    model_config = SettingsConfigDict(
        env_prefix="PLACESYNC_",
        validate_assignment=True,
        extra="allow",
    )

    environment: Literal["development", "testing", "production"] = Field(
        default="development",
        description="Active runtime environment",
    )
    config_dir: Path = Field(default=DEFAULT_CONFIG_DIR)
    paths: PathsConfig = Field(default_factory=PathsConfig)
    create_dirs: bool = Field(
        default=True,
        description="Create filesystem directories declared in `paths` during initialisation.",
    )
    log_level: str = Field(default="INFO")
    notion: NotionSettings = Field(default_factory=NotionSettings)
    policies: Policies

    @model_validator(mode="before")
    @classmethod
    def _bootstrap_from_files(cls, values: Dict[str, Any]) -> Dict[str, Any]:
        """Load YAML files and merge with provided overrides."""

        config_dir = Path(values.get("config_dir") or DEFAULT_CONFIG_DIR)
        environment = values.get("environment") or os.getenv("PLACESYNC_ENV", "development")
        base_config = _load_yaml_file(config_dir / "default.yaml")
        env_config = _load_yaml_file(config_dir / f"{environment}.yaml")
        merged = _deep_merge(base_config, env_config)
        hydrated = _apply_notion_credentials(_apply_env_overrides(merged))

        combined = _deep_merge(hydrated, {k: v for k, v in values.items() if v is not None})

        policies_data = combined.pop("policies", None)
        if isinstance(policies_data, Policies):
            combined["policies"] = policies_data
            return combined
        combined["policies"] = load_policies(policies_data or {})
        return combined

    @model_validator(mode="after")
    def _ensure_paths(self) -> "Settings":
        """Ensure filesystem paths exist when directory creation is enabled."""

        if self.create_dirs:
            self.paths.ensure_exists()
        return self

    @property
    def policy_version(self) -> str:
        return self.policies.policy_version

    @property
    def log_file(self) -> Path:
        return self.paths.logs_dir / "placesync.log"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a singleton settings instance."""

    return Settings()


__all__ = ["Settings", "get_settings", "PathsConfig", "NotionSettings"]
