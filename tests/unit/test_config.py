"""Unit tests for config.py"""

import pytest

from mdblog.config import Settings, load_config


@pytest.fixture(autouse=True)
def isolated(tmp_path, monkeypatch):
    """Run from an empty directory with no MDBLOG_* variables set."""
    monkeypatch.chdir(tmp_path)
    for name in ("SITE_TITLE", "OUTPUT_DIR", "BULLETS", "ASSET_WORKERS", "WRITE_SIDECAR"):
        monkeypatch.delenv(f"MDBLOG_{name}", raising=False)


def test_load_config_defaults():
    settings = load_config()
    assert settings.output_dir == "dist"
    assert settings.bullets == "-+"
    assert settings.asset_workers == 4
    assert settings.write_sidecar is True


def test_settings_fields_are_all_used():
    assert set(Settings.model_fields) == {"site_title", "output_dir", "bullets", "asset_workers", "write_sidecar"}


def test_load_config_reads_config_yaml(tmp_path):
    (tmp_path / "config.yaml").write_text("site_title: 'Notes'\nbullets: '-+*'\n")
    settings = load_config()
    assert settings.site_title == "Notes"
    assert settings.bullets == "-+*"


def test_load_config_env_overrides_config_yaml(tmp_path, monkeypatch):
    (tmp_path / "config.yaml").write_text("output_dir: 'public'\n")
    monkeypatch.setenv("MDBLOG_OUTPUT_DIR", "site")
    assert load_config().output_dir == "site"


def test_load_config_cli_overrides_env(monkeypatch):
    monkeypatch.setenv("MDBLOG_OUTPUT_DIR", "site")
    settings = load_config(overrides={"output_dir": "cli-out", "site_title": None})
    assert settings.output_dir == "cli-out"
    assert settings.site_title == "Blog"


def test_load_config_env_coerces_types(monkeypatch):
    monkeypatch.setenv("MDBLOG_ASSET_WORKERS", "8")
    monkeypatch.setenv("MDBLOG_WRITE_SIDECAR", "false")
    settings = load_config()
    assert settings.asset_workers == 8
    assert settings.write_sidecar is False


def test_load_config_invalid_yaml(tmp_path):
    (tmp_path / "config.yaml").write_text("key: [unclosed\n")
    with pytest.raises(ValueError, match="Invalid config.yaml"):
        load_config()


def test_load_config_non_mapping_yaml(tmp_path):
    (tmp_path / "config.yaml").write_text("- a\n- b\n")
    with pytest.raises(ValueError, match="expected a mapping"):
        load_config()


def test_load_config_rejects_bad_bullets():
    """Pydantic validation errors surface as ValueError."""
    with pytest.raises(ValueError):
        load_config(overrides={"bullets": "#"})
