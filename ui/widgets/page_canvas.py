"""
Page surface: the rendered page with its fields painted on top.
"""
import logging
from typing import List

from PyQt5.QtCore import QPointF, QRectF, Qt, pyqtSignal
from PyQt5.QtGui import QBrush, QColor, QFont, QPainter, QPen, QPixmap
from PyQt5.QtWidgets import QLabel

from core.fields import FieldType, FieldView
from core.interaction import FIELD_TYPE_MIME

logger = logging.getLogger(__name__)


class PageCanvas(QLabel):
    """
    Displays one rendered page and the fields placed on it.

    Positions handed to the field controller are relative to this widget,
    whose size always equals the rendered page, except pointer sessions
    which use global screen positions so a drag can leave the page.
    """

    # Signals
    page_resized = pyqtSignal(float, float)  # width, height in px

    def __init__(self, field_controller, parent=None):
        super().__init__(parent)
        self.field_controller = field_controller
        self.page_index = 0
        self.selection_color = QColor("#ffd43b")

        self.setAcceptDrops(True)
        self.setMouseTracking(True)
        self.setFocusPolicy(Qt.ClickFocus)
        self.setAlignment(Qt.AlignLeft | Qt.AlignTop)

        self.field_controller.fields_changed.connect(self.update)

    # ===== Page content =====

    def set_page(self, pixmap: QPixmap, page_index: int) -> None:
        """Show a freshly rendered page."""
        self.page_index = page_index
        self.setPixmap(pixmap)
        size = pixmap.size() / pixmap.devicePixelRatio()
        self.setFixedSize(size)
        self.page_resized.emit(float(size.width()), float(size.height()))
        self.update()

    def clear_page(self) -> None:
        self.clear()
        self.setFixedSize(0, 0)
        self.page_resized.emit(0.0, 0.0)

    def set_selection_color(self, color: str) -> None:
        self.selection_color = QColor(color)
        self.update()

    def _views(self) -> List[FieldView]:
        return self.field_controller.views_for_page(self.page_index)

    # ===== Painting =====

    def paintEvent(self, event):
        super().paintEvent(event)
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing)
        try:
            for view in self._views():
                self._paint_field(painter, view)
        finally:
            painter.end()

    def _paint_field(self, painter: QPainter, view: FieldView):
        rect = QRectF(view.rect.left, view.rect.top, view.rect.width, view.rect.height)
        color = QColor(view.color)

        fill = QColor(color)
        fill.setAlpha(40)
        painter.setBrush(QBrush(fill))
        if view.selected:
            painter.setPen(QPen(self.selection_color, 2, Qt.SolidLine))
        else:
            painter.setPen(QPen(color, 1.5, Qt.DashLine))
        painter.drawRoundedRect(rect, 3, 3)

        painter.setPen(QPen(color))
        font = QFont(painter.font())
        font.setPointSizeF(max(6.0, min(11.0, view.rect.height * 0.35)))
        painter.setFont(font)

        text_rect = rect.adjusted(6, 0, -6, 0)
        if view.field_type is FieldType.RADIO:
            radius = min(rect.height() * 0.25, 7.0)
            center = QPointF(rect.left() + 6 + radius, rect.center().y())
            painter.setBrush(Qt.NoBrush)
            painter.drawEllipse(center, radius, radius)
            if view.checked:
                painter.setBrush(QBrush(color))
                painter.drawEllipse(center, radius * 0.5, radius * 0.5)
            text_rect = rect.adjusted(12 + radius * 2, 0, -6, 0)
            painter.drawText(text_rect, Qt.AlignVCenter | Qt.AlignLeft, view.label)
        elif view.field_type.accepts_text and view.value:
            painter.setPen(QPen(QColor("#1f2937")))
            painter.drawText(text_rect, Qt.AlignVCenter | Qt.AlignLeft, view.value)
        else:
            painter.drawText(text_rect, Qt.AlignCenter, view.label)

        # Every field carries a live resize handle
        handle = view.resize_handle
        painter.setPen(Qt.NoPen)
        painter.setBrush(QBrush(self.selection_color if view.selected else color))
        painter.drawRect(QRectF(handle.left, handle.top, handle.width, handle.height))

    # ===== Pointer =====

    def mousePressEvent(self, event):
        if event.button() != Qt.LeftButton:
            super().mousePressEvent(event)
            return

        pos = event.pos()
        view, on_handle = self.field_controller.field_at(self.page_index, pos.x(), pos.y())
        if view is None:
            self.field_controller.select(None)
            event.accept()
            return

        global_pos = event.globalPos()
        self.field_controller.press_field(view.id, (global_pos.x(), global_pos.y()), on_handle)
        event.accept()

    def mouseMoveEvent(self, event):
        # Session moves are fed by the application-wide filter
        if not self.field_controller.is_interacting:
            pos = event.pos()
            view, on_handle = self.field_controller.field_at(self.page_index, pos.x(), pos.y())
            if view is None:
                self.unsetCursor()
            elif on_handle:
                self.setCursor(Qt.SizeFDiagCursor)
            else:
                self.setCursor(Qt.SizeAllCursor)
        super().mouseMoveEvent(event)

    # ===== Drop target =====

    def dragEnterEvent(self, event):
        if event.mimeData().hasFormat(FIELD_TYPE_MIME):
            event.acceptProposedAction()
        else:
            event.ignore()

    def dragMoveEvent(self, event):
        if event.mimeData().hasFormat(FIELD_TYPE_MIME):
            event.acceptProposedAction()
        else:
            event.ignore()

    def dropEvent(self, event):
        mime = event.mimeData()
        if not mime.hasFormat(FIELD_TYPE_MIME):
            event.ignore()
            return

        raw = bytes(mime.data(FIELD_TYPE_MIME))
        pos = event.pos()
        field = self.field_controller.drop(raw, (pos.x(), pos.y()), self.page_index)
        if field is None:
            logger.debug("Drop ignored at (%d, %d)", pos.x(), pos.y())
            event.ignore()
            return
        event.acceptProposedAction()
        self.setFocus()
