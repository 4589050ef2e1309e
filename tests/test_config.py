"""Tests für das Konfigurationssystem (Schema, Defaults, YAML-Manager)."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from config.defaults import default_engine_config
from config.manager import ConfigManager
from config.schema import EngineConfig, ExportConfig, PlacementConfig


# ─── SCHEMA ───────────────────────────────────────────────────────────────────

class TestSchema:
    def test_defaults(self):
        """Standard-Konfiguration: alles aktiv, alle Druckdaten."""
        config = default_engine_config()
        assert config.placement.block_absences
        assert config.placement.possible_slots
        assert config.placement.different_days
        assert config.export.print_tables == [
            "Class", "Teacher", "Room",
            "Class_overview", "Teacher_overview", "Room_overview",
        ]
        assert config.log_level == "INFO"

    def test_empty_config_is_default(self):
        assert EngineConfig() == default_engine_config()

    def test_overview_suffix_allowed(self):
        ec = ExportConfig(print_tables=["Class_overview", "Teacher"])
        assert ec.print_tables == ["Class_overview", "Teacher"]

    def test_unknown_print_table(self):
        with pytest.raises(ValidationError):
            ExportConfig(print_tables=["Schüler"])

    def test_log_level_normalized(self):
        assert EngineConfig(log_level="debug").log_level == "DEBUG"
        with pytest.raises(ValidationError):
            EngineConfig(log_level="laut")


# ─── MANAGER ──────────────────────────────────────────────────────────────────

class TestConfigManager:
    def test_save_and_load(self, tmp_path: Path):
        """Speichern + Laden ergibt dieselbe Konfiguration."""
        mgr = ConfigManager()
        path = tmp_path / "engine_config.yaml"
        config = EngineConfig(
            placement=PlacementConfig(possible_slots=False),
            export=ExportConfig(output_dir="druck", print_tables=["Room_overview"]),
            log_level="WARNING",
        )
        mgr.save(config, path)
        assert mgr.load(path) == config

    def test_yaml_has_comments(self, tmp_path: Path):
        mgr = ConfigManager()
        path = tmp_path / "engine_config.yaml"
        mgr.save(default_engine_config(), path)
        text = path.read_text(encoding="utf-8")
        assert text.startswith("# ===")
        assert "─── Platzierung ───" in text
        assert "relativ zum Arbeitsverzeichnis" in text

    def test_load_missing(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            ConfigManager().load(tmp_path / "fehlt.yaml")

    def test_load_invalid(self, tmp_path: Path):
        path = tmp_path / "engine_config.yaml"
        path.write_text("export:\n  print_tables: [Schüler]\n", encoding="utf-8")
        with pytest.raises(ValueError):
            ConfigManager().load(path)

    def test_partial_file_uses_defaults(self, tmp_path: Path):
        path = tmp_path / "engine_config.yaml"
        path.write_text("log_level: error\n", encoding="utf-8")
        config = ConfigManager().load(path)
        assert config.log_level == "ERROR"
        assert config.placement.block_absences

    def test_load_or_default(self, tmp_path: Path):
        config = ConfigManager().load_or_default(tmp_path / "fehlt.yaml")
        assert config == default_engine_config()

    def test_first_run_check(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        mgr = ConfigManager()
        assert mgr.first_run_check()
        mgr.save(default_engine_config())
        assert not mgr.first_run_check()
