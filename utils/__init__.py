"""Platform and filesystem helpers"""
from .system import get_app_data_dir, resource_path

__all__ = ["get_app_data_dir", "resource_path"]
