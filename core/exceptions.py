"""
Conversion error taxonomy.

Every failure the conversion pipeline can report is one of these classes.
The UI shows ``message`` to the user and logs the chained cause.
"""
from __future__ import annotations

from typing import Optional


class ConversionError(Exception):
    """Base exception for all conversion failures."""

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    @property
    def default_message(self) -> str:
        return "An unknown conversion error occurred."

    @property
    def kind(self) -> str:
        """Short classification name, e.g. ``"DecodeError"``."""
        return type(self).__name__


class DecodeError(ConversionError):
    """Raised when the input buffer is not a readable PDF."""

    @property
    def default_message(self) -> str:
        return "The file is not a valid or supported PDF document."


class RenderError(ConversionError):
    """Raised when a page cannot be rasterized."""

    def __init__(self, message: str = "", page_number: Optional[int] = None) -> None:
        self.page_number = page_number
        super().__init__(message)

    @property
    def default_message(self) -> str:
        if self.page_number is not None:
            return f"Page {self.page_number} could not be rendered."
        return "A page could not be rendered."


class StateError(ConversionError):
    """Raised when a component is used out of order or concurrently."""

    @property
    def default_message(self) -> str:
        return "Conversion components were used in an invalid order."


class EmptyDeckError(ConversionError):
    """Raised when a deck with no slides is finalized."""

    @property
    def default_message(self) -> str:
        return "The document has no pages to convert."


class Cancelled(ConversionError):
    """Raised when the caller abandons a conversion."""

    @property
    def default_message(self) -> str:
        return "Conversion cancelled."
