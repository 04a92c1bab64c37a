"""
Palette of field types that can be dragged onto the page.
"""
from PyQt5.QtCore import QByteArray, QMimeData, Qt
from PyQt5.QtGui import QDrag, QPixmap
from PyQt5.QtWidgets import QApplication, QFrame, QLabel, QVBoxLayout

from core.fields import PALETTE, FieldType
from core.interaction import FIELD_TYPE_MIME


class PaletteItem(QLabel):
    """A draggable palette entry for one field type."""

    def __init__(self, field_type: FieldType, field_controller, parent=None):
        super().__init__(field_type.label, parent)
        self.field_type = field_type
        self.field_controller = field_controller
        self._drag_start_pos = None

        self.setObjectName("PaletteItem")
        self.setCursor(Qt.OpenHandCursor)
        self.setToolTip(f"Drag onto the page to add a {field_type.label.lower()} field")
        self.setStyleSheet(f"border-left: 4px solid {field_type.color};")

    def mousePressEvent(self, event):
        if event.button() == Qt.LeftButton:
            self._drag_start_pos = event.pos()
        super().mousePressEvent(event)

    def mouseMoveEvent(self, event):
        if not (event.buttons() & Qt.LeftButton) or self._drag_start_pos is None:
            return
        if (event.pos() - self._drag_start_pos).manhattanLength() < QApplication.startDragDistance():
            return

        token = self.field_controller.start_palette_drag(self.field_type)
        drag = QDrag(self)
        mime_data = QMimeData()
        mime_data.setData(FIELD_TYPE_MIME, QByteArray(token.encode('utf-8')))
        drag.setMimeData(mime_data)

        pixmap = QPixmap(self.size())
        self.render(pixmap)
        drag.setPixmap(pixmap)
        drag.setHotSpot(event.pos())

        try:
            drag.exec_(Qt.CopyAction)
        finally:
            self._drag_start_pos = None
            self.field_controller.end_palette_drag()


class FieldPalette(QFrame):
    """Lists every field type and shows the active drag preview."""

    def __init__(self, field_controller, parent=None):
        super().__init__(parent)
        self.field_controller = field_controller
        self.items = []

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(6)

        title = QLabel("Fields", self)
        title.setObjectName("sectionLabel")
        layout.addWidget(title)

        for field_type in PALETTE:
            item = PaletteItem(field_type, field_controller, self)
            layout.addWidget(item)
            self.items.append(item)

        hint = QLabel("Drag a field onto the page", self)
        hint.setObjectName("hintLabel")
        hint.setWordWrap(True)
        layout.addWidget(hint)

        self.preview_label = QLabel("", self)
        self.preview_label.setObjectName("DragPreview")
        self.preview_label.hide()
        layout.addWidget(self.preview_label)

        field_controller.preview_changed.connect(self.show_preview)

    def show_preview(self, preview):
        """Show or hide the drag indicator."""
        if preview is None:
            self.preview_label.hide()
            return
        self.preview_label.setText(f"Placing: {preview.label}")
        self.preview_label.show()
