"""Tests for configuration loading and validation."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from placesync.config.policies import DeduplicationPolicy, Policies, load_policies
from placesync.config.settings import Settings


def test_default_policies_match_documented_weights():
    policy = DeduplicationPolicy()

    assert policy.match_threshold == 50
    assert policy.name_weight == 50
    assert policy.url_match_score == 40
    assert (policy.same_location_km, policy.same_location_score) == (0.1, 30)
    assert (policy.nearby_km, policy.nearby_score) == (1.0, 15)
    assert policy.address_weight == 20
    assert policy.max_score == 100


def test_policy_rejects_inverted_radii():
    with pytest.raises(ValidationError):
        DeduplicationPolicy(same_location_km=2.0, nearby_km=1.0)


def test_load_policies_from_yaml(tmp_path: Path):
    path = tmp_path / "policies.yaml"
    path.write_text(
        yaml.safe_dump({"policy_version": "test", "deduplication": {"match_threshold": 65}}),
        encoding="utf-8",
    )

    policies = load_policies(path)

    assert isinstance(policies, Policies)
    assert policies.policy_version == "test"
    assert policies.deduplication.match_threshold == 65
    assert policies.enrichment.default_status == "Want to go"


def test_load_policies_missing_file(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        load_policies(tmp_path / "absent.yaml")


def test_policy_env_overrides(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("PLACESYNC_POLICY__DEDUPLICATION__NEARBY_SCORE", "20")
    monkeypatch.setenv("PLACESYNC_POLICY__ENRICHMENT__TEXT_IMPORT_SOURCE", "Notes App")

    policies = load_policies({})

    assert policies.deduplication.nearby_score == 20
    assert policies.enrichment.text_import_source == "Notes App"


def test_settings_load_default_yaml(tmp_path: Path):
    settings = Settings()

    assert settings.environment == "development"
    assert settings.policy_version == "2025-11-02"
    assert settings.notion.api_version == "2022-06-28"
    assert settings.paths.logs_dir == tmp_path / "logs"
    assert settings.paths.logs_dir.exists()
    assert settings.log_file == tmp_path / "logs" / "placesync.log"


def test_settings_layer_environment_yaml_and_kwargs(tmp_path: Path):
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    (config_dir / "default.yaml").write_text(
        yaml.safe_dump({"log_level": "INFO", "policies": {"deduplication": {"match_threshold": 55}}}),
        encoding="utf-8",
    )
    (config_dir / "testing.yaml").write_text(
        yaml.safe_dump({"log_level": "DEBUG", "notion": {"timeout_seconds": 5}}),
        encoding="utf-8",
    )

    settings = Settings(
        config_dir=config_dir,
        environment="testing",
        create_dirs=False,
        policies={"deduplication": {"nearby_km": 2.0}},
    )

    assert settings.log_level == "DEBUG"
    assert settings.notion.timeout_seconds == 5
    assert settings.policies.deduplication.match_threshold == 55
    assert settings.policies.deduplication.nearby_km == 2.0


def test_notion_credentials_from_conventional_variables(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("NOTION_API_KEY", "secret-token")
    monkeypatch.setenv("NOTION_DATABASE_ID", "db-123")

    settings = Settings(create_dirs=False)

    assert settings.notion.configured
    assert settings.notion.database_id == "db-123"
    assert "secret-token" not in repr(settings.notion)


def test_nested_settings_env_override_wins_over_notion_variables(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("NOTION_DATABASE_ID", "db-from-notion-var")
    monkeypatch.setenv("PLACESYNC_SETTINGS__NOTION__DATABASE_ID", "db-from-settings")

    settings = Settings(create_dirs=False)

    assert settings.notion.database_id == "db-from-settings"
