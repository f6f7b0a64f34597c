"""
PowerPoint deck generation module.

Accumulates one full-canvas picture slide per rendered page and
serializes the result to PPTX bytes.
"""
from __future__ import annotations

import io
import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional

from pptx import Presentation
from pptx.util import Emu

from .exceptions import EmptyDeckError, StateError
from .geometry import SlideCanvasSize
from .rasterizer import RasterImage

logger = logging.getLogger(__name__)


class BuilderState(Enum):
    """Lifecycle of a DeckBuilder."""

    NEW = "new"
    INITIALIZED = "initialized"
    FINALIZED = "finalized"


@dataclass(frozen=True)
class Slide:
    """Record of one appended slide."""

    index: int
    left: int
    top: int
    width: int
    height: int
    image_width: int
    image_height: int


class DeckBuilder:
    """
    Builds a PowerPoint deck from rendered page images.

    The deck canvas is fixed once by ``initialize``. Every slide holds a
    single picture placed at the origin and stretched to the canvas, so
    pages whose aspect ratio differs from the first page are distorted.

    Operations are guarded by an ownership token: a call made while
    another is in progress raises StateError instead of waiting.
    """

    def __init__(self):
        self.prs: Optional[Presentation] = None
        self._state = BuilderState.NEW
        self._canvas_size: Optional[SlideCanvasSize] = None
        self._slides: List[Slide] = []
        self._owner = threading.Lock()

    @property
    def state(self) -> BuilderState:
        return self._state

    @property
    def canvas_size(self) -> Optional[SlideCanvasSize]:
        return self._canvas_size

    @property
    def slides(self) -> List[Slide]:
        return list(self._slides)

    @property
    def slide_count(self) -> int:
        """Get the number of slides appended so far."""
        return len(self._slides)

    @contextmanager
    def _exclusive(self) -> Iterator[None]:
        if not self._owner.acquire(blocking=False):
            raise StateError("Deck builder is in use by another caller")
        try:
            yield
        finally:
            self._owner.release()

    def initialize(self, canvas_size: SlideCanvasSize) -> None:
        """
        Create the presentation with a fixed canvas size.

        Args:
            canvas_size: Slide dimensions in inches.

        Raises:
            StateError: If already initialized, or the size is not positive or
                falls outside the 1-56 inch slide range.
        """
        with self._exclusive():
            if self._state is not BuilderState.NEW:
                raise StateError(
                    f"Cannot initialize a deck builder in state '{self._state.value}'"
                )
            if not canvas_size.is_valid():
                raise StateError(
                    f"Canvas size must be positive, got "
                    f"{canvas_size.width}x{canvas_size.height}in"
                )
            if not canvas_size.fits_slide_limits():
                raise StateError(
                    f"Slide size must be between 1 and 56 inches, got "
                    f"{canvas_size.width:.2f}x{canvas_size.height:.2f}in"
                )

            self.prs = Presentation()
            self.prs.slide_width = Emu(canvas_size.width_emu)
            self.prs.slide_height = Emu(canvas_size.height_emu)
            self._canvas_size = canvas_size
            self._state = BuilderState.INITIALIZED

            logger.info(
                f"Presentation created: {canvas_size.width:.2f}x"
                f"{canvas_size.height:.2f}in -> "
                f"{canvas_size.width_emu}x{canvas_size.height_emu} EMU"
            )

    def append_slide(self, raster: RasterImage) -> Slide:
        """
        Append a slide showing one page image across the whole canvas.

        Args:
            raster: Encoded page image.

        Returns:
            Record describing the new slide.

        Raises:
            StateError: If not initialized or already finalized.
        """
        with self._exclusive():
            if self._state is not BuilderState.INITIALIZED:
                raise StateError(
                    f"Cannot append a slide in state '{self._state.value}'"
                )

            width = self._canvas_size.width_emu
            height = self._canvas_size.height_emu

            slide = self.prs.slides.add_slide(self._get_blank_layout())
            slide.shapes.add_picture(raster.open(), Emu(0), Emu(0), Emu(width), Emu(height))

            record = Slide(
                index=len(self._slides),
                left=0,
                top=0,
                width=width,
                height=height,
                image_width=raster.width,
                image_height=raster.height,
            )
            self._slides.append(record)
            logger.debug(f"Added slide {record.index + 1}")
            return record

    def finalize(self) -> bytes:
        """
        Serialize the deck to PPTX bytes.

        Returns:
            The PPTX file contents.

        Raises:
            EmptyDeckError: If no slides were appended.
            StateError: If already finalized.
        """
        with self._exclusive():
            if self._state is BuilderState.FINALIZED:
                raise StateError("Deck has already been finalized")
            if not self._slides:
                self._state = BuilderState.FINALIZED
                raise EmptyDeckError()

            stream = io.BytesIO()
            self.prs.save(stream)
            self._state = BuilderState.FINALIZED
            self.prs = None

            blob = stream.getvalue()
            logger.info(f"Deck serialized: {len(self._slides)} slides, {len(blob)} bytes")
            return blob

    def discard(self) -> None:
        """Drop any partial deck state without serializing it."""
        with self._exclusive():
            self.prs = None
            self._state = BuilderState.FINALIZED

    def _get_blank_layout(self):
        """
        Get a blank slide layout.

        Tries index 6 first (standard blank), falls back to last layout.
        """
        if len(self.prs.slide_layouts) > 6:
            return self.prs.slide_layouts[6]
        return self.prs.slide_layouts[-1]
