"""
Page rasterization module.

Renders single PDF pages to lossless PNG images with Poppler
(via pdf2image) at a fixed oversampling scale.
"""
from __future__ import annotations

import io
import logging
import threading
from dataclasses import dataclass
from typing import Optional

from pdf2image import convert_from_path
from pdf2image.exceptions import (
    PDFInfoNotInstalledError,
    PDFPageCountError,
    PDFPopplerTimeoutError,
    PDFSyntaxError,
)
from PIL import Image

from config.defaults import (
    POINTS_PER_INCH,
    POPPLER_TIMEOUT_SECONDS,
    RASTER_FORMAT,
    RENDER_SCALE,
)

from .document import PageHandle
from .exceptions import RenderError, StateError
from .geometry import Viewport, compute_viewport

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RasterImage:
    """Encoded pixel buffer for one page."""

    width: int
    height: int
    data: bytes
    format: str = RASTER_FORMAT

    @classmethod
    def from_image(cls, image: Image.Image, fmt: str = RASTER_FORMAT) -> "RasterImage":
        """
        Encode a PIL image for embedding.

        Args:
            image: Rendered page image.
            fmt: Pillow format name (default: PNG).

        Returns:
            RasterImage holding the encoded bytes.
        """
        image_stream = io.BytesIO()
        image.save(image_stream, format=fmt)
        return cls(
            width=image.width,
            height=image.height,
            data=image_stream.getvalue(),
            format=fmt,
        )

    def open(self) -> io.BytesIO:
        """Return a fresh readable stream over the encoded bytes."""
        return io.BytesIO(self.data)


class PageRasterizer:
    """
    Base rasterizer.

    Subclasses implement ``_render_image``. The public ``render`` method
    computes the viewport, guards the working surface against concurrent
    use and encodes the result.
    """

    def __init__(self, scale: float = RENDER_SCALE):
        self.scale = scale
        self._surface_lock = threading.Lock()

    def render(self, page: PageHandle) -> RasterImage:
        """
        Rasterize a page at the configured scale.

        Args:
            page: Page to render.

        Returns:
            RasterImage whose size equals the page viewport.

        Raises:
            RenderError: If the page cannot be rendered or encoded.
            StateError: If another render is already in progress.
        """
        if not self._surface_lock.acquire(blocking=False):
            raise StateError("Rasterizer is already rendering another page")

        try:
            viewport = compute_viewport(page, self.scale)
            logger.debug(
                f"Rendering page {page.number}: "
                f"{viewport.pixel_width}x{viewport.pixel_height}px"
            )

            image = self._render_image(page, viewport)
            try:
                if image.size != (viewport.pixel_width, viewport.pixel_height):
                    logger.debug(
                        f"Page {page.number} rendered at {image.size}, "
                        f"resizing to viewport"
                    )
                    resized = image.resize(
                        (viewport.pixel_width, viewport.pixel_height),
                        Image.Resampling.LANCZOS,
                    )
                    image.close()
                    image = resized
                return RasterImage.from_image(image)
            except (OSError, ValueError) as e:
                raise RenderError(
                    f"Failed to encode page {page.number}: {e}",
                    page_number=page.number,
                ) from e
            finally:
                image.close()
        finally:
            self._surface_lock.release()

    def _render_image(self, page: PageHandle, viewport: Viewport) -> Image.Image:
        raise NotImplementedError


class PdfRasterizer(PageRasterizer):
    """Rasterizer backed by Poppler's pdftoppm."""

    def __init__(
        self,
        poppler_path: Optional[str] = None,
        scale: float = RENDER_SCALE,
        timeout: Optional[int] = POPPLER_TIMEOUT_SECONDS,
    ):
        """
        Initialize the rasterizer.

        Args:
            poppler_path: Directory holding the Poppler binaries.
                None uses the system PATH.
            scale: Oversampling factor (default: 2.0).
            timeout: Seconds allowed for a single page render.
        """
        super().__init__(scale)
        self.poppler_path = poppler_path or None
        self.timeout = timeout

    def _render_image(self, page: PageHandle, viewport: Viewport) -> Image.Image:
        try:
            images = convert_from_path(
                page.path,
                dpi=POINTS_PER_INCH * self.scale,
                first_page=page.number,
                last_page=page.number,
                size=(viewport.pixel_width, viewport.pixel_height),
                use_cropbox=True,
                poppler_path=self.poppler_path,
                timeout=self.timeout,
            )
        except PDFInfoNotInstalledError as e:
            raise RenderError(
                "Poppler is not installed or the configured path is wrong",
                page_number=page.number,
            ) from e
        except (PDFPageCountError, PDFSyntaxError) as e:
            raise RenderError(
                f"Poppler could not read page {page.number}: {e}",
                page_number=page.number,
            ) from e
        except PDFPopplerTimeoutError as e:
            raise RenderError(
                f"Rendering page {page.number} timed out",
                page_number=page.number,
            ) from e
        except (OSError, ValueError) as e:
            raise RenderError(
                f"Failed to render page {page.number}: {e}",
                page_number=page.number,
            ) from e

        if not images:
            raise RenderError(
                f"Poppler returned no image for page {page.number}",
                page_number=page.number,
            )

        for extra in images[1:]:
            extra.close()
        return images[0]
