"""
Filesystem location helpers for bundled resources and per-user data
"""
import sys
import os
from pathlib import Path

APP_DATA_DIRNAME = 'PdfSlideDeck'


def resource_path(relative_path: str) -> Path:
    """
    Resolve a bundled resource for both PyInstaller --onefile builds
    and source checkouts

    Args:
        relative_path: Relative path from project root

    Returns:
        Path: Absolute path
    """
    bundle_dir = getattr(sys, '_MEIPASS', None)
    if bundle_dir:
        base_path = Path(bundle_dir)
    else:
        base_path = Path(__file__).parent.parent

    return base_path / relative_path


def get_app_data_dir() -> Path:
    """
    Get (and create) the per-user settings directory
    Windows: %APPDATA%/PdfSlideDeck
    Others: ~/.config/PdfSlideDeck

    Returns:
        Path: Application data directory
    """
    if sys.platform == 'win32':
        base = Path(os.environ.get('APPDATA', Path.home()))
    else:
        base = Path(os.environ.get('XDG_CONFIG_HOME', Path.home() / '.config'))

    app_dir = base / APP_DATA_DIRNAME
    app_dir.mkdir(parents=True, exist_ok=True)
    return app_dir
