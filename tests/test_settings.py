"""Tests for persisted settings."""

import json

import pytest

from config import settings_manager as settings_module
from config.settings_manager import Settings, SettingsManager


@pytest.fixture(autouse=True)
def no_system_poppler(monkeypatch):
    """Hide any Poppler install on the test machine."""
    monkeypatch.setattr(settings_module.shutil, "which", lambda name: None)
    monkeypatch.setattr(settings_module, "DEFAULT_POPPLER_PATHS", [])


class TestSettings:
    """Tests for the Settings dataclass."""

    def test_empty_path_is_invalid(self) -> None:
        assert not Settings().is_valid()

    def test_existing_directory_is_valid(self, tmp_path) -> None:
        assert Settings(poppler_path=str(tmp_path)).is_valid()

    def test_file_path_is_invalid(self, tmp_path) -> None:
        target = tmp_path / "pdftoppm"
        target.write_text("")
        assert not Settings(poppler_path=str(target)).is_valid()


class TestSettingsManager:
    """Tests for SettingsManager persistence."""

    def test_creates_settings_file(self, tmp_path) -> None:
        manager = SettingsManager(settings_dir=tmp_path)

        assert manager.settings_path.exists()
        assert json.loads(manager.settings_path.read_text()) == {
            "poppler_path": "",
            "last_output_dir": "",
        }

    def test_update_persists(self, tmp_path) -> None:
        SettingsManager(settings_dir=tmp_path).update(last_output_dir="/decks")

        reloaded = SettingsManager(settings_dir=tmp_path)
        assert reloaded.settings.last_output_dir == "/decks"

    def test_loads_existing_poppler_path(self, tmp_path) -> None:
        poppler_dir = tmp_path / "poppler"
        poppler_dir.mkdir()
        (tmp_path / "settings.json").write_text(
            json.dumps({"poppler_path": str(poppler_dir), "window_theme": "dark"})
        )

        manager = SettingsManager(settings_dir=tmp_path)

        assert manager.settings.poppler_path == str(poppler_dir)
        assert manager.settings.is_valid()

    def test_corrupt_file_falls_back_to_defaults(self, tmp_path) -> None:
        (tmp_path / "settings.json").write_text("{not json")

        manager = SettingsManager(settings_dir=tmp_path)

        assert manager.settings == Settings()

    def test_detects_poppler_on_path(self, tmp_path, monkeypatch) -> None:
        bin_dir = tmp_path / "bin"
        bin_dir.mkdir()
        monkeypatch.setattr(
            settings_module.shutil, "which", lambda name: str(bin_dir / name)
        )

        manager = SettingsManager(settings_dir=tmp_path)

        assert manager.settings.poppler_path == str(bin_dir)

    def test_unknown_update_key_ignored(self, tmp_path) -> None:
        manager = SettingsManager(settings_dir=tmp_path)
        manager.update(colour="blue")
        assert not hasattr(manager.settings, "colour")
