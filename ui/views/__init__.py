"""
Home (conversion) and settings screens.
"""
from .home_view import ConversionWorker, create_home_view
from .settings_view import create_settings_view

__all__ = [
    "ConversionWorker",
    "create_home_view",
    "create_settings_view",
]
