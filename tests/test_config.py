"""Tests for settings loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from cassini_mcp.config import ConfigError, Settings, SettingsLoader


class TestSettingsLoader:
    def test_defaults_without_file(self) -> None:
        settings = SettingsLoader().load()
        assert settings == Settings()
        assert settings.server.name == "cassini-mcp-server"
        assert settings.server.version == "1.0.0"
        assert settings.http.path == "/mcp"
        assert settings.database.path == Path("Data/master_plan.db")

    def test_partial_file(self, tmp_path: Path) -> None:
        f = tmp_path / "settings.yaml"
        f.write_text("logging:\n  level: DEBUG\nhttp:\n  port: 9000\n")

        settings = SettingsLoader(f).load()

        assert settings.logging.level == "DEBUG"
        assert settings.http.port == 9000
        assert settings.http.host == "127.0.0.1"

    def test_env_expansion(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CASSINI_DATA", "/srv/cassini")
        f = tmp_path / "settings.yaml"
        f.write_text("database:\n  path: ${CASSINI_DATA}/master_plan.db\n")

        settings = SettingsLoader(f).load()

        assert settings.database.path == Path("/srv/cassini/master_plan.db")

    def test_empty_file(self, tmp_path: Path) -> None:
        f = tmp_path / "settings.yaml"
        f.write_text("")
        assert SettingsLoader(f).load() == Settings()

    def test_not_a_mapping(self, tmp_path: Path) -> None:
        f = tmp_path / "settings.yaml"
        f.write_text("- a\n- b\n")
        with pytest.raises(ConfigError, match="mapping"):
            SettingsLoader(f).load()

    def test_yaml_error(self, tmp_path: Path) -> None:
        f = tmp_path / "settings.yaml"
        f.write_text("http: [unclosed\n")
        with pytest.raises(ConfigError, match="YAML parse error"):
            SettingsLoader(f).load()

    def test_validation_error(self, tmp_path: Path) -> None:
        f = tmp_path / "settings.yaml"
        f.write_text("logging:\n  level: LOUD\n")
        with pytest.raises(ConfigError):
            SettingsLoader(f).load()

    def test_unreadable(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="Cannot read"):
            SettingsLoader(tmp_path / "missing.yaml").load()
