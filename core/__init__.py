"""
Core business logic package.

Contains PDF decoding, page rasterization and PPTX generation modules.
"""
from .document import PageHandle, SourceDocument, load_document
from .exceptions import (
    Cancelled,
    ConversionError,
    DecodeError,
    EmptyDeckError,
    RenderError,
    StateError,
)
from .geometry import (
    EMU_PER_INCH,
    SlideCanvasSize,
    Viewport,
    compute_viewport,
    get_aspect_ratio,
    inches_to_emu,
    resolve_canvas_size,
)
from .pipeline import (
    ConversionPipeline,
    ConversionResult,
    PipelineState,
    convert_pdf_to_pptx,
    deck_filename,
)
from .progress import ProgressReporter, completion_percentage
from .rasterizer import PageRasterizer, PdfRasterizer, RasterImage
from .slide_builder import BuilderState, DeckBuilder, Slide

__all__ = [
    # Document
    "load_document",
    "SourceDocument",
    "PageHandle",
    # Errors
    "ConversionError",
    "DecodeError",
    "RenderError",
    "StateError",
    "EmptyDeckError",
    "Cancelled",
    # Geometry
    "Viewport",
    "SlideCanvasSize",
    "compute_viewport",
    "resolve_canvas_size",
    "inches_to_emu",
    "get_aspect_ratio",
    "EMU_PER_INCH",
    # Rasterizer
    "PageRasterizer",
    "PdfRasterizer",
    "RasterImage",
    # Deck Builder
    "DeckBuilder",
    "BuilderState",
    "Slide",
    # Progress
    "ProgressReporter",
    "completion_percentage",
    # Pipeline
    "ConversionPipeline",
    "ConversionResult",
    "PipelineState",
    "convert_pdf_to_pptx",
    "deck_filename",
]
