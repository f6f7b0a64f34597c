"""
UI package for the Flet desktop front-end.

Contains the main layout, views, and the log forwarding handler.
"""
from .log_handler import PubSubLogHandler, setup_logger

__all__ = [
    "PubSubLogHandler",
    "setup_logger",
]
