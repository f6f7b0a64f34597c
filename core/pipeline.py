"""
PDF to PPTX conversion pipeline.

Runs the page-by-page cycle: rasterize, resolve the canvas size from
the first page, append a slide, report progress. After the last page the
deck is serialized. One pipeline instance performs one conversion.
"""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from enum import Enum
from pathlib import PurePath
from typing import Callable, Iterator, List, Optional

from config.defaults import DECK_EXTENSION

from .document import SourceDocument, load_document
from .exceptions import Cancelled, ConversionError, StateError
from .geometry import Viewport, get_aspect_ratio, resolve_canvas_size
from .progress import ProgressCallback, ProgressReporter
from .rasterizer import PageRasterizer, PdfRasterizer, RasterImage
from .slide_builder import BuilderState, DeckBuilder

logger = logging.getLogger(__name__)

DocumentLoader = Callable[[bytes], SourceDocument]

# Relative aspect ratio difference tolerated before warning about stretching
ASPECT_RATIO_TOLERANCE = 0.01


class PipelineState(Enum):
    """States a conversion passes through."""

    IDLE = "idle"
    LOADING = "loading"
    RASTERIZING = "rasterizing"
    RESOLVING = "resolving"
    APPENDING = "appending"
    REPORTING = "reporting"
    FINALIZING = "finalizing"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(frozen=True)
class ConversionResult:
    """Terminal outcome of one conversion: a PPTX blob or an error."""

    blob: Optional[bytes] = None
    error: Optional[ConversionError] = None

    @property
    def succeeded(self) -> bool:
        return self.error is None and self.blob is not None

    @property
    def kind(self) -> Optional[str]:
        """Error classification, or None on success."""
        return self.error.kind if self.error is not None else None


class ConversionPipeline:
    """
    Converts one PDF buffer into one PPTX deck.

    Pages are processed strictly in order. ``cancel()`` may be called
    from another thread; it takes effect before the next page starts.

    Example:
        ```python
        pipeline = ConversionPipeline(PdfRasterizer(poppler_path))
        result = pipeline.run(pdf_bytes, on_progress=print)
        if result.succeeded:
            Path("deck.pptx").write_bytes(result.blob)
        ```
    """

    def __init__(
        self,
        rasterizer: Optional[PageRasterizer] = None,
        loader: DocumentLoader = load_document,
    ):
        self.rasterizer = rasterizer or PdfRasterizer()
        self.scale = self.rasterizer.scale
        self.builder = DeckBuilder()
        self.history: List[PipelineState] = [PipelineState.IDLE]
        self.error: Optional[ConversionError] = None
        self._loader = loader
        self._stop_event = threading.Event()
        self._blob: Optional[bytes] = None

    @property
    def state(self) -> PipelineState:
        return self.history[-1]

    @property
    def cancel_requested(self) -> bool:
        return self._stop_event.is_set()

    def cancel(self) -> None:
        """Request abandonment before the next page cycle."""
        self._stop_event.set()
        logger.info("Cancellation requested")

    def run(
        self,
        data: bytes,
        on_progress: Optional[ProgressCallback] = None,
    ) -> ConversionResult:
        """
        Convert a PDF buffer to a PPTX deck.

        Args:
            data: Raw PDF bytes.
            on_progress: Called with an integer percentage after each page.

        Returns:
            ConversionResult with either the PPTX bytes or the error.

        Raises:
            StateError: If this pipeline has already been run.
        """
        self._ensure_idle()
        try:
            for _ in self.steps(data, on_progress):
                pass
        except ConversionError as e:
            logger.error(f"Conversion failed ({e.kind}): {e.message}")
            return ConversionResult(error=e)

        return ConversionResult(blob=self._blob)

    def steps(
        self,
        data: bytes,
        on_progress: Optional[ProgressCallback] = None,
    ) -> Iterator[int]:
        """
        Run the conversion one page at a time.

        Yields the completion percentage after each page. Closing the
        generator early abandons the conversion as cancelled. The blob is
        available from ``result()`` once the generator is exhausted.

        Raises:
            ConversionError: Any failure, after the pipeline has moved to
                FAILED and released its resources. Errors outside the
                ConversionError family are wrapped in a plain ConversionError.
        """
        self._ensure_idle()
        self._enter(PipelineState.LOADING)

        document: Optional[SourceDocument] = None
        try:
            document = self._loader(data)
            yield from self._convert_pages(document, on_progress)

            self._check_cancelled()
            self._enter(PipelineState.FINALIZING)
            self._blob = self.builder.finalize()
            self._enter(PipelineState.COMPLETED)
            logger.info("Conversion completed successfully")
        except GeneratorExit:
            self._fail(Cancelled("Conversion abandoned by caller"))
            raise
        except ConversionError as e:
            self._fail(e)
            raise
        except Exception as e:
            error = ConversionError(f"Unexpected error: {e}")
            logger.exception("Unexpected failure during conversion")
            self._fail(error)
            raise error from e
        finally:
            if document is not None:
                document.close()

    def result(self) -> ConversionResult:
        """
        Terminal result of a finished conversion.

        Raises:
            StateError: If the conversion has not finished.
        """
        if self.state is PipelineState.COMPLETED:
            return ConversionResult(blob=self._blob)
        if self.state is PipelineState.FAILED:
            return ConversionResult(error=self.error)
        raise StateError(f"Conversion has not finished (state '{self.state.value}')")

    def _convert_pages(
        self,
        document: SourceDocument,
        on_progress: Optional[ProgressCallback],
    ) -> Iterator[int]:
        total = document.page_count
        logger.info(f"Found {total} pages")
        reporter = ProgressReporter(on_progress, total) if total else None
        canvas_ratio: Optional[float] = None

        for page in document.pages():
            self._check_cancelled()
            logger.info(f"Processing page {page.number}/{total}")

            self._enter(PipelineState.RASTERIZING)
            raster = self.rasterizer.render(page)

            if page.number == 1:
                self._enter(PipelineState.RESOLVING)
                viewport = Viewport(raster.width, raster.height, self.scale)
                self.builder.initialize(resolve_canvas_size(viewport, self.scale))
                canvas_ratio = get_aspect_ratio(raster.width, raster.height)
            else:
                self._warn_if_stretched(page.number, raster, canvas_ratio)

            self._enter(PipelineState.APPENDING)
            self.builder.append_slide(raster)

            self._enter(PipelineState.REPORTING)
            yield reporter.advance()

    def _warn_if_stretched(
        self, number: int, raster: RasterImage, canvas_ratio: float
    ) -> None:
        ratio = get_aspect_ratio(raster.width, raster.height)
        if abs(ratio - canvas_ratio) > ASPECT_RATIO_TOLERANCE * canvas_ratio:
            logger.warning(
                f"Page {number} aspect ratio {ratio:.3f} differs from the "
                f"slide canvas {canvas_ratio:.3f}; image is stretched to fill"
            )

    def _check_cancelled(self) -> None:
        if self._stop_event.is_set():
            logger.info("Conversion cancelled by user")
            raise Cancelled()

    def _ensure_idle(self) -> None:
        if self.state is not PipelineState.IDLE:
            raise StateError(
                "A pipeline runs only once; create a new instance to convert again"
            )

    def _enter(self, state: PipelineState) -> None:
        logger.debug(f"Pipeline state: {self.state.value} -> {state.value}")
        self.history.append(state)

    def _fail(self, error: ConversionError) -> None:
        self.error = error
        if self.builder.state is not BuilderState.FINALIZED:
            self.builder.discard()
        self._enter(PipelineState.FAILED)


def convert_pdf_to_pptx(
    data: bytes,
    on_progress: Optional[ProgressCallback] = None,
    poppler_path: Optional[str] = None,
) -> ConversionResult:
    """
    Convert a PDF buffer to PPTX bytes with a fresh pipeline.

    Args:
        data: Raw PDF bytes.
        on_progress: Optional per-page percentage callback.
        poppler_path: Optional Poppler bin directory.

    Returns:
        ConversionResult for the conversion.
    """
    pipeline = ConversionPipeline(PdfRasterizer(poppler_path=poppler_path))
    return pipeline.run(data, on_progress)


def deck_filename(source_name: str) -> str:
    """
    Name the output deck after its source document.

    Example:
        >>> deck_filename("slides.pdf")
        'slides.pptx'
    """
    return PurePath(source_name).stem + DECK_EXTENSION
