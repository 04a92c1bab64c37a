from PyQt5.QtCore import Qt, pyqtSignal
from PyQt5.QtGui import QIntValidator
from PyQt5.QtWidgets import (
    QButtonGroup,
    QFrame,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QSizePolicy,
    QSpacerItem,
    QToolButton,
)

from core.document import ViewMode


class ViewerToolbar(QFrame):
    """Top bar with view mode, zoom, page navigation and the sign action."""

    view_mode_requested = pyqtSignal(object)  # ViewMode
    zoom_in_requested = pyqtSignal()
    zoom_out_requested = pyqtSignal()
    previous_page_requested = pyqtSignal()
    next_page_requested = pyqtSignal()
    page_requested = pyqtSignal(int)  # 1-based
    sign_requested = pyqtSignal()
    theme_toggle_requested = pyqtSignal()

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setObjectName("TopFrame")
        self.setup_ui()

    def _tool_button(self, text, tooltip, checkable=False):
        btn = QToolButton(self)
        btn.setText(text)
        btn.setToolTip(tooltip)
        btn.setCheckable(checkable)
        btn.setMinimumHeight(32)
        return btn

    def _separator(self):
        separator = QFrame(self)
        separator.setFrameShape(QFrame.VLine)
        separator.setFrameShadow(QFrame.Sunken)
        separator.setStyleSheet("background-color: #555555; max-width: 1px;")
        return separator

    def setup_ui(self):
        layout = QHBoxLayout(self)
        layout.setContentsMargins(10, 8, 10, 8)
        layout.setSpacing(8)

        # View mode
        self.desktop_button = self._tool_button("Desktop", "Desktop width", checkable=True)
        self.mobile_button = self._tool_button("Mobile", "Mobile width", checkable=True)
        self.desktop_button.setChecked(True)
        self.mode_group = QButtonGroup(self)
        self.mode_group.setExclusive(True)
        self.mode_group.addButton(self.desktop_button)
        self.mode_group.addButton(self.mobile_button)
        self.desktop_button.clicked.connect(lambda: self.view_mode_requested.emit(ViewMode.DESKTOP))
        self.mobile_button.clicked.connect(lambda: self.view_mode_requested.emit(ViewMode.MOBILE))
        layout.addWidget(self.desktop_button)
        layout.addWidget(self.mobile_button)

        layout.addWidget(self._separator())

        # Zoom controls
        self.zoom_out_button = self._tool_button("-", "Zoom Out (Ctrl+-)")
        self.zoom_out_button.clicked.connect(self.zoom_out_requested.emit)
        layout.addWidget(self.zoom_out_button)

        self.zoom_label = QLabel("100%", self)
        self.zoom_label.setFixedWidth(48)
        self.zoom_label.setAlignment(Qt.AlignCenter)
        layout.addWidget(self.zoom_label)

        self.zoom_in_button = self._tool_button("+", "Zoom In (Ctrl++)")
        self.zoom_in_button.clicked.connect(self.zoom_in_requested.emit)
        layout.addWidget(self.zoom_in_button)

        layout.addSpacerItem(QSpacerItem(40, 20, QSizePolicy.Expanding, QSizePolicy.Minimum))

        # Page controls
        self.prev_button = self._tool_button("◀", "Previous Page (PgUp)")
        self.prev_button.clicked.connect(self.previous_page_requested.emit)
        layout.addWidget(self.prev_button)

        self.page_edit = QLineEdit("1", self)
        self.page_edit.setObjectName("page_input")
        self.page_edit.setAlignment(Qt.AlignCenter)
        self.page_edit.setValidator(QIntValidator(1, 9999, self))
        self.page_edit.returnPressed.connect(self._on_page_entered)
        layout.addWidget(self.page_edit)

        self.total_page_label = QLabel("/ 0", self)
        layout.addWidget(self.total_page_label)

        self.next_button = self._tool_button("▶", "Next Page (PgDown)")
        self.next_button.clicked.connect(self.next_page_requested.emit)
        layout.addWidget(self.next_button)

        layout.addSpacerItem(QSpacerItem(40, 20, QSizePolicy.Expanding, QSizePolicy.Minimum))

        self.status_label = QLabel("", self)
        self.status_label.setObjectName("statusLabel")
        layout.addWidget(self.status_label)

        self.theme_button = self._tool_button("◐", "Toggle Dark Mode")
        self.theme_button.clicked.connect(self.theme_toggle_requested.emit)
        layout.addWidget(self.theme_button)

        self.sign_button = QPushButton("Sign & Generate PDF", self)
        self.sign_button.setObjectName("SignButton")
        self.sign_button.clicked.connect(self.sign_requested.emit)
        layout.addWidget(self.sign_button)

    def _on_page_entered(self):
        text = self.page_edit.text()
        if text:
            self.page_requested.emit(int(text))

    # ===== State updates =====

    def set_zoom_percent(self, percent: int):
        self.zoom_label.setText(f"{percent}%")

    def set_page(self, current: int, total):
        """Show the current page; total is None or 0 without a document."""
        total = total or 0
        self.page_edit.setText(str(current) if total else "1")
        self.total_page_label.setText(f"/ {total}")
        self.prev_button.setEnabled(total > 0 and current > 1)
        self.next_button.setEnabled(total > 0 and current < total)
        self.page_edit.setEnabled(total > 0)

    def set_view_mode(self, mode: ViewMode):
        button = self.desktop_button if mode is ViewMode.DESKTOP else self.mobile_button
        button.setChecked(True)

    def set_sign_state(self, enabled: bool, busy: bool):
        self.sign_button.setEnabled(enabled and not busy)
        self.sign_button.setText("Signing..." if busy else "Sign & Generate PDF")

    def set_status(self, message: str):
        self.status_label.setText(message)
