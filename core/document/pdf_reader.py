"""
PDF document loading and page rendering.
"""
import logging
from typing import Optional, Tuple

import fitz  # PyMuPDF
from PyQt5.QtGui import QImage, QPixmap

from core.errors import RenderError

logger = logging.getLogger(__name__)


class PDFDocumentReader:
    """Handles PDF document loading and page rendering."""

    def __init__(self, dpi_scale: float = 1.0):
        self.doc: Optional[fitz.Document] = None
        self.total_pages: int = 0
        self.dpi_scale = dpi_scale
        self.source: Optional[str] = None

    def load_bytes(self, data: bytes, source: Optional[str] = None) -> Tuple[bool, int]:
        """
        Load a PDF document from memory.

        Args:
            data: Raw PDF bytes
            source: URL or path the bytes came from, for diagnostics

        Returns:
            Tuple of (success flag, number of pages)
        """
        return self._open(lambda: fitz.open(stream=data, filetype="pdf"), source)

    def load_pdf(self, file_path: str) -> Tuple[bool, int]:
        """
        Load a PDF document from disk.

        Args:
            file_path: Path to the PDF file

        Returns:
            Tuple of (success flag, number of pages)
        """
        return self._open(lambda: fitz.open(file_path), file_path)

    def _open(self, opener, source: Optional[str]) -> Tuple[bool, int]:
        # Close existing document if any
        if self.doc:
            self.close_document()
        try:
            self.doc = opener()
        except Exception as e:
            logger.error("Error loading PDF %s: %s", source, e)
            return False, 0

        self.total_pages = self.doc.page_count
        self.source = source
        logger.info("Loaded %s (%d pages)", source or "document", self.total_pages)
        return True, self.total_pages

    def close_document(self) -> None:
        """Close the current PDF document and clear all state."""
        if self.doc:
            self.doc.close()
            self.doc = None
        self.total_pages = 0
        self.source = None

    def render_page(self, page_index: int, zoom_level: float) -> QPixmap:
        """
        Render a single page of the PDF to a pixmap.

        Args:
            page_index: 0-based index of the page to render
            zoom_level: Zoom factor for rendering

        Returns:
            The rendered pixmap

        Raises:
            RenderError: No document is loaded or PyMuPDF failed
        """
        if not self.doc or not (0 <= page_index < self.total_pages):
            raise RenderError(f"Page {page_index + 1} is not available")

        try:
            page = self.doc.load_page(page_index)
            scale = zoom_level * self.dpi_scale
            pix = page.get_pixmap(matrix=fitz.Matrix(scale, scale), alpha=False)
            img = QImage(
                pix.samples, pix.width, pix.height, pix.stride, QImage.Format_RGB888
            )
            # QImage does not own the samples buffer
            return QPixmap.fromImage(img.copy())
        except Exception as e:
            raise RenderError(f"Error rendering page {page_index + 1}: {e}") from e

    def get_page_size(self, page_index: int) -> Tuple[float, float]:
        """
        Get the size of a page in points.

        Args:
            page_index: 0-based index of the page

        Returns:
            Tuple of (width, height) in points, (0, 0) if unavailable
        """
        if not self.doc or not (0 <= page_index < self.total_pages):
            return 0.0, 0.0
        rect = self.doc.load_page(page_index).rect
        return rect.width, rect.height

    def is_loaded(self) -> bool:
        """Check if a document is currently loaded."""
        return self.doc is not None

    def get_page_count(self) -> int:
        """Get the total number of pages."""
        return self.total_pages
