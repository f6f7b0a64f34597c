"""
PDF document loading.

Decodes an in-memory PDF buffer with pypdf and exposes page count and
per-page geometry to the conversion pipeline.
"""
from __future__ import annotations

import io
import logging
import os
import tempfile
from dataclasses import dataclass
from typing import Iterator, Optional

from pypdf import PdfReader
from pypdf.errors import PyPdfError

from config.defaults import SOURCE_EXTENSION

from .exceptions import DecodeError, StateError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PageHandle:
    """
    One page of a SourceDocument.

    ``width`` and ``height`` are the visible size in PDF points, after
    applying the page rotation.
    """

    document: "SourceDocument"
    number: int
    width: float
    height: float

    @property
    def data(self) -> bytes:
        """Raw bytes of the owning document."""
        return self.document.data

    @property
    def path(self) -> str:
        """On-disk copy of the owning document, shared by all its pages."""
        return self.document.path


class SourceDocument:
    """
    Decoded PDF owned by a single conversion.

    Use as a context manager, or call ``close()`` when done. Pages are
    not accessible after close.

    External renderers read the document from ``path``, a temporary file
    written on first access and removed by ``close()``.
    """

    def __init__(self, reader: PdfReader, data: bytes, stream: io.BytesIO):
        self._reader: Optional[PdfReader] = reader
        self._data: Optional[bytes] = data
        self._stream: Optional[io.BytesIO] = stream
        self._path: Optional[str] = None
        self._page_count = len(reader.pages)

    @property
    def page_count(self) -> int:
        return self._page_count

    @property
    def closed(self) -> bool:
        return self._reader is None

    @property
    def data(self) -> bytes:
        self._ensure_open()
        return self._data

    @property
    def path(self) -> str:
        self._ensure_open()
        if self._path is None:
            fd, path = tempfile.mkstemp(suffix=SOURCE_EXTENSION)
            with os.fdopen(fd, "wb") as f:
                f.write(self._data)
            self._path = path
            logger.debug(f"Source document spooled to {path}")
        return self._path

    def page(self, number: int) -> PageHandle:
        """
        Get a page by its 1-based number.

        Raises:
            StateError: If the document has been closed.
            IndexError: If the number is out of range.
        """
        self._ensure_open()
        if not 1 <= number <= self._page_count:
            raise IndexError(
                f"Page {number} out of range (1-{self._page_count})"
            )

        try:
            pdf_page = self._reader.pages[number - 1]
            box = pdf_page.cropbox
            width = abs(float(box.width))
            height = abs(float(box.height))
            rotation = pdf_page.rotation
        except (PyPdfError, KeyError, TypeError, ValueError) as e:
            raise DecodeError(f"Page {number} has an unreadable page box: {e}") from e

        # Quarter turns swap the visible width and height
        if rotation % 180 == 90:
            width, height = height, width

        if width <= 0 or height <= 0:
            raise DecodeError(f"Page {number} has an empty page box")

        return PageHandle(document=self, number=number, width=width, height=height)

    def pages(self) -> Iterator[PageHandle]:
        """Iterate over all pages in order."""
        for number in range(1, self._page_count + 1):
            yield self.page(number)

    def close(self) -> None:
        """Release decoder resources. Safe to call more than once."""
        if self._reader is None:
            return
        self._stream.close()
        if self._path is not None:
            try:
                os.remove(self._path)
            except OSError as e:
                logger.warning(f"Could not remove temporary file {self._path}: {e}")
            self._path = None
        self._reader = None
        self._stream = None
        self._data = None
        logger.debug("Source document released")

    def _ensure_open(self) -> None:
        if self._reader is None:
            raise StateError("Source document has been closed")

    def __enter__(self) -> "SourceDocument":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def load_document(data: bytes) -> SourceDocument:
    """
    Decode a PDF byte buffer.

    Args:
        data: Raw PDF bytes.

    Returns:
        Open SourceDocument. May contain zero pages.

    Raises:
        DecodeError: If the buffer is empty, corrupt, truncated,
            or encrypted with a non-empty password.
    """
    if not data:
        raise DecodeError("Empty document buffer")

    stream = io.BytesIO(data)
    try:
        reader = PdfReader(stream)
        if reader.is_encrypted and not reader.decrypt(""):
            raise DecodeError("PDF is password protected")
        document = SourceDocument(reader, bytes(data), stream)
    except DecodeError:
        stream.close()
        raise
    except (PyPdfError, KeyError, TypeError, ValueError, NotImplementedError) as e:
        stream.close()
        logger.error(f"Failed to decode PDF: {e}")
        raise DecodeError(f"Corrupted or invalid PDF: {e}") from e

    logger.info(f"Loaded PDF: {document.page_count} pages, {len(data)} bytes")
    return document
