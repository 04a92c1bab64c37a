"""
Controller for zoom, view mode, page navigation and page geometry.
"""
from PyQt5.QtCore import QObject, pyqtSignal

from core.document import ViewMode, ViewState


class ViewController(QObject):
    """Manages view state for the page viewer and announces changes."""

    # Signals
    page_changed = pyqtSignal(int)  # 1-based page number
    page_count_changed = pyqtSignal(int)
    zoom_changed = pyqtSignal(float)
    view_mode_changed = pyqtSignal(object)  # ViewMode
    page_size_changed = pyqtSignal(object)  # PagePixelSize

    def __init__(self, view_state: ViewState, parent: QObject = None):
        super().__init__(parent)
        self.state = view_state

    # ===== Renderer callbacks =====

    def set_document_info(self, total_pages: int) -> None:
        """
        Set document information after a successful load.

        Args:
            total_pages: Total number of pages in the document
        """
        self.state.set_page_count(total_pages)
        self.page_count_changed.emit(self.state.num_pages)
        self.page_changed.emit(self.state.current_page)

    def on_page_rendered(self, width: float, height: float) -> None:
        """
        Record the pixel box of the rendered page.

        Args:
            width: Page width in pixels
            height: Page height in pixels
        """
        if self.state.update_page_pixel_size(width, height):
            self.page_size_changed.emit(self.state.page_pixel_size)

    def reset(self) -> None:
        self.state.reset_for_new_document()
        self.page_count_changed.emit(0)
        self.page_changed.emit(self.state.current_page)
        self.page_size_changed.emit(self.state.page_pixel_size)

    # ===== Navigation =====

    def next_page(self) -> None:
        if self.state.next_page():
            self.page_changed.emit(self.state.current_page)

    def previous_page(self) -> None:
        if self.state.previous_page():
            self.page_changed.emit(self.state.current_page)

    def jump_to_page(self, page_num: int) -> None:
        """
        Jump to a specific page.

        Args:
            page_num: 1-based page number
        """
        if self.state.go_to_page(page_num):
            self.page_changed.emit(self.state.current_page)

    # ===== Zoom and view mode =====

    def zoom_in(self) -> None:
        if self.state.zoom_in():
            self.zoom_changed.emit(self.state.zoom)

    def zoom_out(self) -> None:
        if self.state.zoom_out():
            self.zoom_changed.emit(self.state.zoom)

    def set_zoom(self, zoom: float) -> None:
        if self.state.set_zoom(zoom):
            self.zoom_changed.emit(self.state.zoom)

    def get_zoom_percent(self) -> int:
        """
        Get current zoom as percentage.

        Returns:
            Zoom percentage
        """
        return self.state.get_zoom_percent()

    def set_view_mode(self, mode: ViewMode) -> None:
        if self.state.set_view_mode(mode):
            self.view_mode_changed.emit(mode)
