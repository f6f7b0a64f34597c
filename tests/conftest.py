"""Shared fixtures for the conversion tests."""
from __future__ import annotations

import io
from typing import Iterable, List, Optional, Tuple

import pytest
from PIL import Image
from pypdf import PdfWriter

from core.document import PageHandle
from core.exceptions import RenderError
from core.geometry import Viewport
from core.rasterizer import PageRasterizer

LETTER = (612, 792)


def build_pdf(sizes: Iterable[Tuple[float, float]], rotate: int = 0) -> bytes:
    """Build an in-memory PDF with one blank page per (width, height)."""
    writer = PdfWriter()
    for width, height in sizes:
        page = writer.add_blank_page(width=width, height=height)
        if rotate:
            page.rotate(rotate)
    stream = io.BytesIO()
    writer.write(stream)
    return stream.getvalue()


class FakeRasterizer(PageRasterizer):
    """Draws a solid colour image of the viewport size without Poppler."""

    def __init__(self, fail_on: Optional[int] = None, size_error: int = 0):
        super().__init__()
        self.fail_on = fail_on
        self.size_error = size_error
        self.rendered: List[int] = []

    def _render_image(self, page: PageHandle, viewport: Viewport) -> Image.Image:
        if page.number == self.fail_on:
            raise RenderError("simulated failure", page_number=page.number)
        self.rendered.append(page.number)
        shade = (page.number * 40) % 256
        return Image.new(
            "RGB",
            (viewport.pixel_width + self.size_error, viewport.pixel_height),
            (shade, shade, 255 - shade),
        )


@pytest.fixture
def make_pdf():
    """Factory fixture returning PDF bytes for the given page sizes."""
    return build_pdf


@pytest.fixture
def letter_pdf() -> bytes:
    """Three US Letter pages."""
    return build_pdf([LETTER] * 3)


@pytest.fixture
def fake_rasterizer() -> FakeRasterizer:
    return FakeRasterizer()


@pytest.fixture
def rasterizer_factory():
    """Build FakeRasterizer instances with custom behaviour."""
    return FakeRasterizer
