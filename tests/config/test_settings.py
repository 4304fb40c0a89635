"""Tests for AnimStateSettings and the animstate.yaml source."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from animstate.config.settings import AnimStateSettings, RunnerConfig, YamlConfigSource


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch):
    """Run each test in an empty directory with no ANIMSTATE_ variables."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("ANIMSTATE_CONFIG", raising=False)
    monkeypatch.delenv("ANIMSTATE_DEBUG", raising=False)
    monkeypatch.delenv("ANIMSTATE_LOADER__VALIDATE_TARGETS", raising=False)
    return tmp_path


class TestDefaults:
    def test_defaults(self):
        settings = AnimStateSettings()

        assert settings.debug is False
        assert settings.log_level == "INFO"
        assert settings.loader.validate_targets is True
        assert settings.loader.dialect == "auto"
        assert settings.runner.frame_rate == 60

    def test_timestep(self):
        assert RunnerConfig(frame_rate=50).timestep == pytest.approx(0.02)

    def test_frame_rate_must_be_positive(self):
        with pytest.raises(ValidationError):
            RunnerConfig(frame_rate=0)

    def test_create_loader(self):
        settings = AnimStateSettings(loader={"validate_targets": False, "dialect": "foreign"})

        loader = settings.create_loader()

        assert loader.validate_targets is False
        assert loader.dialect == "foreign"


class TestYamlConfig:
    def test_flat_keys(self, isolated_env: Path):
        path = isolated_env / "custom.yaml"
        path.write_text(
            "log_level: DEBUG\nvalidate_targets: false\ndialect: native\nframe_rate: 30\n"
        )

        settings = AnimStateSettings(_config_path=str(path))

        assert settings.log_level == "DEBUG"
        assert settings.loader.validate_targets is False
        assert settings.loader.dialect == "native"
        assert settings.runner.frame_rate == 30

    def test_nested_sections(self, isolated_env: Path):
        (isolated_env / "animstate.yaml").write_text(
            "loader:\n  validate_targets: false\nrunner:\n  frame_rate: 120\n"
        )

        settings = AnimStateSettings()

        assert settings.loader.validate_targets is False
        assert settings.runner.frame_rate == 120

    def test_config_env_var_discovery(self, isolated_env: Path, monkeypatch):
        path = isolated_env / "elsewhere.yml"
        path.write_text("debug: true\n")
        monkeypatch.setenv("ANIMSTATE_CONFIG", str(path))

        settings = AnimStateSettings()

        assert settings.debug is True

    def test_missing_config_file(self):
        settings = AnimStateSettings(_config_path="/nonexistent/animstate.yaml")

        assert settings.loader.validate_targets is True

    def test_unknown_keys_ignored(self):
        source = YamlConfigSource.__new__(YamlConfigSource)
        source._yaml_data = {"frame_rate": 24, "theme": "dark"}

        assert source._map_to_settings() == {"runner": {"frame_rate": 24}}

    def test_init_beats_yaml(self, isolated_env: Path):
        (isolated_env / "animstate.yaml").write_text("debug: false\n")

        settings = AnimStateSettings(debug=True)

        assert settings.debug is True


class TestEnvironment:
    def test_nested_env_var(self, monkeypatch):
        monkeypatch.setenv("ANIMSTATE_LOADER__VALIDATE_TARGETS", "false")

        settings = AnimStateSettings()

        assert settings.loader.validate_targets is False

    def test_yaml_beats_env(self, isolated_env: Path, monkeypatch):
        (isolated_env / "animstate.yaml").write_text("debug: false\n")
        monkeypatch.setenv("ANIMSTATE_DEBUG", "true")

        settings = AnimStateSettings()

        assert settings.debug is False
