"""
Settings management class
- Save/load settings in JSON format
- Auto-detect the Poppler bin directory
"""
from __future__ import annotations
import json
import shutil
import logging
from pathlib import Path
from dataclasses import dataclass, asdict, fields
from typing import Optional

from utils.system import get_app_data_dir
from .defaults import (
    SETTINGS_FILENAME,
    DEFAULT_POPPLER_PATHS,
)

logger = logging.getLogger(__name__)

@dataclass
class Settings:
    """Application settings"""
    poppler_path: str = ""
    last_output_dir: str = ""

    def is_valid(self) -> bool:
        """Check that the Poppler directory exists"""
        return bool(self.poppler_path) and Path(self.poppler_path).is_dir()


class SettingsManager:
    """Manages settings reading, writing, and auto-detection"""

    def __init__(self, settings_dir: Optional[Path] = None):
        self._settings_path = (settings_dir or get_app_data_dir()) / SETTINGS_FILENAME
        self._settings: Settings = Settings()
        self._load()

        # Auto-detect Poppler if not set or missing
        if not self._settings.is_valid():
            detected = self._detect_poppler()
            if detected:
                self._settings.poppler_path = str(detected)

        self._save()

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def settings_path(self) -> Path:
        return self._settings_path

    def update(self, **kwargs) -> None:
        """Update settings and save"""
        for key, value in kwargs.items():
            if hasattr(self._settings, key):
                setattr(self._settings, key, value)
            else:
                logger.warning(f"Ignoring unknown setting: {key}")
        self._save()

    def _load(self) -> None:
        """Load settings from file"""
        if not self._settings_path.exists():
            return
        try:
            with open(self._settings_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            known = {f.name for f in fields(Settings)}
            self._settings = Settings(**{k: v for k, v in data.items() if k in known})
        except (json.JSONDecodeError, TypeError, AttributeError) as e:
            logger.warning(f"Settings file unreadable, using defaults: {e}")
            self._settings = Settings()

    def _save(self) -> None:
        """Save settings to file"""
        try:
            with open(self._settings_path, 'w', encoding='utf-8') as f:
                json.dump(asdict(self._settings), f, indent=2, ensure_ascii=False)
        except (IOError, OSError) as e:
            logger.error(f"Failed to save settings: {e}")

    def _detect_poppler(self) -> Optional[Path]:
        """Auto-detect Poppler"""
        # Search for pdftoppm using shutil.which
        which_result = shutil.which("pdftoppm")
        if which_result:
            return Path(which_result).parent

        # Check default paths
        for path in DEFAULT_POPPLER_PATHS:
            if path.exists():
                return path

        # Search for versioned installs (Windows)
        program_files = Path(r"C:\Program Files")
        if program_files.exists():
            for poppler_dir in program_files.glob("poppler-*"):
                for bin_path in ["Library/bin", "bin"]:
                    candidate = poppler_dir / bin_path
                    if candidate.exists():
                        return candidate

        return None
