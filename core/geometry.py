"""
Coordinate conversion utilities.

Derives rendering viewports from PDF page sizes and converts rasterized
pixel dimensions back into physical slide dimensions.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

from config.defaults import POINTS_PER_INCH, RENDER_SCALE

if TYPE_CHECKING:
    from .document import PageHandle

# Constants
EMU_PER_INCH = 914400  # 1 inch = 914400 EMU

# PowerPoint slide size limits (1 to 56 inches)
MIN_SLIDE_EMU = 914400
MAX_SLIDE_EMU = 51206400


@dataclass(frozen=True)
class Viewport:
    """Pixel-space rendering target for one page."""

    pixel_width: int
    pixel_height: int
    scale: float


@dataclass(frozen=True)
class SlideCanvasSize:
    """Physical slide dimensions in inches."""

    width: float
    height: float

    @property
    def width_emu(self) -> int:
        return inches_to_emu(self.width)

    @property
    def height_emu(self) -> int:
        return inches_to_emu(self.height)

    def is_valid(self) -> bool:
        return self.width > 0 and self.height > 0

    def fits_slide_limits(self) -> bool:
        """Check both sides are within the 1-56 inch PowerPoint range."""
        return all(
            MIN_SLIDE_EMU <= emu <= MAX_SLIDE_EMU
            for emu in (self.width_emu, self.height_emu)
        )


def compute_viewport(page: PageHandle, scale: float = RENDER_SCALE) -> Viewport:
    """
    Compute the rendering viewport for a page.

    Each intrinsic dimension is multiplied by ``scale`` and rounded up
    to a whole pixel.

    Args:
        page: Page to render.
        scale: Oversampling factor (default: 2.0).

    Returns:
        Viewport with integer pixel dimensions.

    Example:
        >>> compute_viewport(letter_page, 2.0)  # 612x792 pt
        Viewport(pixel_width=1224, pixel_height=1584, scale=2.0)
    """
    if scale <= 0:
        raise ValueError("Scale must be positive")
    return Viewport(
        pixel_width=math.ceil(page.width * scale),
        pixel_height=math.ceil(page.height * scale),
        scale=scale,
    )


def resolve_canvas_size(viewport: Viewport, scale: float = RENDER_SCALE) -> SlideCanvasSize:
    """
    Convert a viewport back into slide dimensions in inches.

    Divides out the oversampling scale and the 72 points-per-inch
    factor. Pure function: identical inputs give identical results.

    Args:
        viewport: Viewport of the first page.
        scale: Scale the viewport was computed with.

    Returns:
        SlideCanvasSize in inches.

    Example:
        >>> resolve_canvas_size(Viewport(1224, 1584, 2.0), 2.0)
        SlideCanvasSize(width=8.5, height=11.0)
    """
    divisor = POINTS_PER_INCH * scale
    return SlideCanvasSize(
        width=viewport.pixel_width / divisor,
        height=viewport.pixel_height / divisor,
    )


def inches_to_emu(inches: float) -> int:
    """
    Convert inches to EMU (English Metric Units).

    Example:
        >>> inches_to_emu(8.5)
        7772400
    """
    return int(inches * EMU_PER_INCH)


def get_aspect_ratio(width: float, height: float) -> float:
    """
    Calculate aspect ratio (width / height).

    Raises:
        ValueError: If height is zero.
    """
    if height == 0:
        raise ValueError("Height cannot be zero")
    return width / height
