"""Tests for viewport and canvas size derivation."""

import pytest

from core.document import PageHandle
from core.geometry import (
    EMU_PER_INCH,
    SlideCanvasSize,
    Viewport,
    compute_viewport,
    get_aspect_ratio,
    inches_to_emu,
    resolve_canvas_size,
)


def _page(width: float, height: float) -> PageHandle:
    return PageHandle(document=None, number=1, width=width, height=height)


class TestComputeViewport:
    """Tests for compute_viewport."""

    def test_us_letter_at_double_scale(self) -> None:
        """Test the 612x792pt page renders at 1224x1584px."""
        viewport = compute_viewport(_page(612, 792), 2.0)
        assert viewport == Viewport(pixel_width=1224, pixel_height=1584, scale=2.0)

    def test_fractional_size_rounds_up(self) -> None:
        """Test fractional pixel sizes are rounded up."""
        viewport = compute_viewport(_page(100.2, 50.01), 2.0)
        assert (viewport.pixel_width, viewport.pixel_height) == (201, 101)

    def test_non_positive_scale_rejected(self) -> None:
        """Test that a zero scale raises."""
        with pytest.raises(ValueError, match="positive"):
            compute_viewport(_page(612, 792), 0)


class TestResolveCanvasSize:
    """Tests for resolve_canvas_size."""

    def test_letter_viewport_gives_letter_inches(self) -> None:
        """Test 1224x1584px at scale 2 resolves to 8.5x11in."""
        canvas = resolve_canvas_size(Viewport(1224, 1584, 2.0), 2.0)
        assert canvas == SlideCanvasSize(width=8.5, height=11.0)

    def test_repeated_resolution_is_identical(self) -> None:
        """Test the resolver is a pure function."""
        viewport = Viewport(1191, 1684, 2.0)
        first = resolve_canvas_size(viewport, 2.0)
        second = resolve_canvas_size(viewport, 2.0)
        assert first == second
        assert first.width.hex() == second.width.hex()
        assert first.height.hex() == second.height.hex()

    def test_canvas_emu_conversion(self) -> None:
        """Test canvas dimensions convert to python-pptx EMU."""
        canvas = SlideCanvasSize(width=8.5, height=11.0)
        assert canvas.width_emu == 7772400
        assert canvas.height_emu == 10058400

    def test_validity(self) -> None:
        """Test canvas validity requires positive dimensions."""
        assert SlideCanvasSize(1.0, 1.0).is_valid()
        assert not SlideCanvasSize(0.0, 1.0).is_valid()
        assert not SlideCanvasSize(1.0, -2.0).is_valid()

    def test_slide_limits(self) -> None:
        """Test the 1-56 inch PowerPoint range, inclusive at both ends."""
        assert SlideCanvasSize(1.0, 56.0).fits_slide_limits()
        assert SlideCanvasSize(8.5, 11.0).fits_slide_limits()
        assert not SlideCanvasSize(0.5, 0.5).fits_slide_limits()
        assert not SlideCanvasSize(60.0, 41.67).fits_slide_limits()


class TestUnitHelpers:
    """Tests for unit helpers."""

    def test_inches_to_emu(self) -> None:
        assert inches_to_emu(1) == EMU_PER_INCH
        assert inches_to_emu(10) == 9144000

    def test_aspect_ratio(self) -> None:
        assert get_aspect_ratio(1224, 1584) == pytest.approx(8.5 / 11)

    def test_aspect_ratio_zero_height(self) -> None:
        with pytest.raises(ValueError, match="zero"):
            get_aspect_ratio(10, 0)
