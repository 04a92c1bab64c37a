"""
Viewer state: zoom, view mode, page navigation and the current page pixel size.
"""
import logging
import math
from enum import Enum
from typing import Optional

from core.fields import UNKNOWN_PAGE_SIZE, PagePixelSize

logger = logging.getLogger(__name__)


class ViewMode(Enum):
    DESKTOP = "desktop"
    MOBILE = "mobile"


class ViewState:
    """
    Tracks how the document is displayed.

    The page pixel size is the denominator for every field transform. It is
    replaced whenever the renderer reports a new page box (first render,
    zoom, viewport resize, page change); fields are never migrated.
    """

    def __init__(self, default_zoom: float = 1.0, min_zoom: float = 0.5,
                 max_zoom: float = 2.0, zoom_step: float = 0.1,
                 desktop_max_width: int = 900, mobile_max_width: int = 420):
        self.min_zoom = min_zoom
        self.max_zoom = max_zoom
        self.zoom_step = zoom_step
        self.default_zoom = default_zoom
        self.zoom: float = self._clamp_zoom(default_zoom)
        self.view_mode = ViewMode.DESKTOP
        self._max_widths = {
            ViewMode.DESKTOP: desktop_max_width,
            ViewMode.MOBILE: mobile_max_width,
        }

        self.num_pages: Optional[int] = None
        self.current_page: int = 1  # 1-based
        self._page_pixel_size = UNKNOWN_PAGE_SIZE

    @classmethod
    def from_config(cls, config) -> "ViewState":
        return cls(
            default_zoom=config.default_zoom,
            min_zoom=config.min_zoom,
            max_zoom=config.max_zoom,
            zoom_step=config.zoom_step,
            desktop_max_width=config.desktop_max_width,
            mobile_max_width=config.mobile_max_width,
        )

    # ===== Page geometry =====

    @property
    def page_pixel_size(self) -> PagePixelSize:
        return self._page_pixel_size

    def get_page_pixel_size(self) -> PagePixelSize:
        """Provider for CoordinateTransform."""
        return self._page_pixel_size

    def update_page_pixel_size(self, width: float, height: float) -> bool:
        """
        Record the pixel box of the page that was just rendered.

        Non-positive or non-finite dimensions mark the size as unknown.

        Returns:
            True if the size changed
        """
        if not (math.isfinite(width) and math.isfinite(height)) or width <= 0 or height <= 0:
            new_size = UNKNOWN_PAGE_SIZE
        else:
            new_size = PagePixelSize(float(width), float(height))
        if new_size == self._page_pixel_size:
            return False
        logger.debug("Page pixel size %s -> %s", self._page_pixel_size, new_size)
        self._page_pixel_size = new_size
        return True

    def invalidate_page_size(self) -> None:
        self._page_pixel_size = UNKNOWN_PAGE_SIZE

    # ===== Document and navigation =====

    @property
    def page_index(self) -> int:
        """0-based index of the displayed page."""
        return self.current_page - 1

    @property
    def has_document(self) -> bool:
        return bool(self.num_pages)

    def set_page_count(self, num_pages: int) -> None:
        self.num_pages = max(0, int(num_pages))
        self.current_page = min(max(1, self.current_page), max(1, self.num_pages))

    def reset_for_new_document(self) -> None:
        """Back to page 1 with an unknown page count and page size."""
        self.num_pages = None
        self.current_page = 1
        self.invalidate_page_size()

    def can_go_previous(self) -> bool:
        return self.has_document and self.current_page > 1

    def can_go_next(self) -> bool:
        return self.has_document and self.current_page < self.num_pages

    def go_to_page(self, page_num: int) -> bool:
        """
        Jump to a specific page.

        Args:
            page_num: 1-based page number, clamped to the document

        Returns:
            True if the displayed page changed
        """
        if not self.has_document:
            return False
        target = max(1, min(self.num_pages, int(page_num)))
        if target == self.current_page:
            return False
        self.current_page = target
        return True

    def next_page(self) -> bool:
        return self.go_to_page(self.current_page + 1)

    def previous_page(self) -> bool:
        return self.go_to_page(self.current_page - 1)

    # ===== Zoom =====

    def _clamp_zoom(self, zoom: float) -> float:
        return round(max(self.min_zoom, min(self.max_zoom, zoom)), 2)

    def set_zoom(self, zoom: float) -> bool:
        """
        Set the zoom factor, clamped to the allowed range.

        Returns:
            True if the zoom changed
        """
        new_zoom = self._clamp_zoom(zoom)
        if new_zoom == self.zoom:
            return False
        self.zoom = new_zoom
        return True

    def zoom_in(self) -> bool:
        return self.set_zoom(self.zoom + self.zoom_step)

    def zoom_out(self) -> bool:
        return self.set_zoom(self.zoom - self.zoom_step)

    def get_zoom_percent(self) -> int:
        return int(round(self.zoom * 100))

    # ===== View mode =====

    def set_view_mode(self, mode: ViewMode) -> bool:
        if mode is self.view_mode:
            return False
        self.view_mode = mode
        return True

    @property
    def max_viewer_width(self) -> int:
        return self._max_widths[self.view_mode]

    def render_scale(self, page_width_points: float, viewport_width: float,
                     inset: float = 0) -> float:
        """
        Pixels per PDF point for a fit-to-width render.

        The page fills the viewer column (capped by the view mode width,
        minus the inset on both sides) and is then multiplied by the zoom.

        Args:
            page_width_points: Page width in PDF points
            viewport_width: Width available in the window, in pixels
            inset: Padding between the container and the page surface

        Returns:
            Scale factor, 0.0 if nothing can be rendered
        """
        if page_width_points <= 0:
            return 0.0
        column = min(self.max_viewer_width, viewport_width) - 2 * inset
        if column <= 0:
            return 0.0
        return self.zoom * column / page_width_points
