"""Configuration package: rendering constants and persisted user settings"""
from .defaults import APP_NAME, APP_VERSION, RENDER_SCALE
from .settings_manager import Settings, SettingsManager

__all__ = ['APP_NAME', 'APP_VERSION', 'RENDER_SCALE', 'Settings', 'SettingsManager']
