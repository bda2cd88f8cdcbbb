"""Tests for DigraphSettings — unified settings with TOML source."""

from pathlib import Path

import pytest

from digraphkit.config.discovery import CONFIG_ENV_VAR, CONFIG_FILENAME
from digraphkit.config.settings import ConfigError, DigraphSettings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    monkeypatch.delenv("DIGRAPHKIT_ALGORITHMS__CONNECTIVITY_METHOD", raising=False)
    monkeypatch.delenv("DIGRAPHKIT_TELEMETRY__ENABLED", raising=False)


class TestDefaults:
    def test_all_defaults(self, tmp_path: Path) -> None:
        settings = DigraphSettings.load(start=tmp_path)
        assert settings.config_path is None
        assert settings.logging.verbose is False
        assert settings.algorithms.connectivity_method == "dfs"
        assert settings.algorithms.validate_weights is True
        assert settings.telemetry.enabled is False

    def test_frozen(self, tmp_path: Path) -> None:
        settings = DigraphSettings.load(start=tmp_path)
        with pytest.raises(Exception):
            settings.config_path = tmp_path  # type: ignore[misc]


class TestTomlSource:
    def test_loads_discovered_toml(self, tmp_path: Path) -> None:
        toml = tmp_path / CONFIG_FILENAME
        toml.write_text('[algorithms]\nconnectivity_method = "kosaraju"\n')
        settings = DigraphSettings.load(start=tmp_path)
        assert settings.config_path == toml
        assert settings.algorithms.connectivity_method == "kosaraju"
        assert settings.algorithms.validate_weights is True  # default preserved

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        custom = tmp_path / "custom" / "graph.toml"
        custom.parent.mkdir(parents=True)
        custom.write_text("[telemetry]\nenabled = true\n")
        settings = DigraphSettings.load(config_path=custom)
        assert settings.telemetry.enabled is True
        assert settings.config_path == custom

    def test_missing_explicit_path_uses_defaults(self, tmp_path: Path) -> None:
        settings = DigraphSettings.load(config_path=tmp_path / "nope.toml")
        assert settings.config_path is None
        assert settings.algorithms.connectivity_method == "dfs"

    def test_invalid_toml(self, tmp_path: Path) -> None:
        (tmp_path / CONFIG_FILENAME).write_text("[algorithms\n")
        with pytest.raises(ConfigError, match="Invalid TOML"):
            DigraphSettings.load(start=tmp_path)


class TestPriority:
    def test_env_overrides_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / CONFIG_FILENAME).write_text('[algorithms]\nconnectivity_method = "dfs"\n')
        monkeypatch.setenv("DIGRAPHKIT_ALGORITHMS__CONNECTIVITY_METHOD", "kosaraju")
        settings = DigraphSettings.load(start=tmp_path)
        assert settings.algorithms.connectivity_method == "kosaraju"

    def test_init_overrides_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DIGRAPHKIT_TELEMETRY__ENABLED", "true")
        settings = DigraphSettings.load(start=tmp_path, telemetry={"enabled": False})
        assert settings.telemetry.enabled is False
