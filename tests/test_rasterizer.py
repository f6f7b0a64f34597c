"""Tests for page rasterization."""

import io
import shutil

import pytest
from PIL import Image

from core import rasterizer as rasterizer_module
from core.document import load_document
from core.exceptions import RenderError, StateError
from core.rasterizer import PdfRasterizer, RasterImage


class TestRasterImage:
    """Tests for RasterImage encoding."""

    def test_from_image_encodes_png(self) -> None:
        """Test that images are encoded losslessly as PNG."""
        raster = RasterImage.from_image(Image.new("RGB", (30, 20), "white"))

        assert (raster.width, raster.height) == (30, 20)
        assert raster.format == "PNG"
        assert raster.data.startswith(b"\x89PNG\r\n\x1a\n")

    def test_open_returns_fresh_stream(self) -> None:
        raster = RasterImage.from_image(Image.new("L", (4, 4)))
        assert raster.open().read() == raster.open().read() == raster.data


class TestPageRasterizer:
    """Tests for the shared render logic."""

    def test_output_matches_viewport(self, make_pdf, fake_rasterizer) -> None:
        """Test the raster is exactly ceil(size * 2) pixels."""
        with load_document(make_pdf([(612, 792), (100.3, 50)])) as document:
            letter = fake_rasterizer.render(document.page(1))
            odd = fake_rasterizer.render(document.page(2))

        assert (letter.width, letter.height) == (1224, 1584)
        assert (odd.width, odd.height) == (201, 100)

    def test_backend_size_mismatch_is_corrected(self, make_pdf, rasterizer_factory) -> None:
        """Test that an off-by-one backend image is resized to the viewport."""
        rasterizer = rasterizer_factory(size_error=1)
        with load_document(make_pdf([(200, 100)])) as document:
            raster = rasterizer.render(document.page(1))

        with Image.open(raster.open()) as image:
            assert image.size == (400, 200)

    def test_concurrent_render_fails_fast(self, make_pdf, fake_rasterizer) -> None:
        """Test that the working surface cannot be shared."""
        with load_document(make_pdf([(200, 100)])) as document:
            page = document.page(1)
            fake_rasterizer._surface_lock.acquire()
            try:
                with pytest.raises(StateError, match="already rendering"):
                    fake_rasterizer.render(page)
            finally:
                fake_rasterizer._surface_lock.release()

            # Lock is released again after a failure
            assert fake_rasterizer.render(page).width == 400

    def test_render_error_releases_surface(self, make_pdf, rasterizer_factory) -> None:
        rasterizer = rasterizer_factory(fail_on=1)
        with load_document(make_pdf([(200, 100)])) as document:
            with pytest.raises(RenderError) as excinfo:
                rasterizer.render(document.page(1))
        assert excinfo.value.page_number == 1
        assert not rasterizer._surface_lock.locked()


class TestPdfRasterizer:
    """Tests for the Poppler-backed rasterizer."""

    def test_missing_poppler_raises_render_error(self, make_pdf) -> None:
        """Test that a wrong Poppler path is reported as a RenderError."""
        rasterizer = PdfRasterizer(poppler_path="/nonexistent/poppler/bin")
        with load_document(make_pdf([(200, 100)])) as document:
            with pytest.raises(RenderError, match="Poppler") as excinfo:
                rasterizer.render(document.page(1))
        assert excinfo.value.page_number == 1

    def test_pages_render_from_one_spooled_file(self, make_pdf, monkeypatch) -> None:
        """Test that Poppler reads every page from the same file."""
        calls = []

        def fake_convert(pdf_path, **kwargs):
            calls.append((pdf_path, kwargs["first_page"], kwargs["last_page"]))
            return [Image.new("RGB", kwargs["size"], "white")]

        monkeypatch.setattr(rasterizer_module, "convert_from_path", fake_convert)
        rasterizer = PdfRasterizer()
        with load_document(make_pdf([(200, 100)] * 3)) as document:
            rasters = [rasterizer.render(page) for page in document.pages()]
            spooled = document.page(1).path

        assert calls == [(spooled, 1, 1), (spooled, 2, 2), (spooled, 3, 3)]
        assert [(r.width, r.height) for r in rasters] == [(400, 200)] * 3

    @pytest.mark.skipif(shutil.which("pdftoppm") is None, reason="Poppler not installed")
    def test_renders_requested_page(self, make_pdf) -> None:
        """Test rendering a real page through pdftoppm."""
        rasterizer = PdfRasterizer()
        with load_document(make_pdf([(612, 792), (300, 150)])) as document:
            raster = rasterizer.render(document.page(2))

        assert (raster.width, raster.height) == (600, 300)
        with Image.open(io.BytesIO(raster.data)) as image:
            assert image.format == "PNG"
            assert image.size == (600, 300)
