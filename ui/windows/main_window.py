import logging

from PyQt5.QtCore import Qt, QTimer, QUrl
from PyQt5.QtGui import QDesktopServices
from PyQt5.QtWidgets import (
    QApplication,
    QFileDialog,
    QFrame,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QScrollArea,
    QVBoxLayout,
    QWidget,
)

from config import AppConfig
from controllers import (
    DocumentController,
    FieldController,
    PointerSessionFilter,
    UserInputHandler,
    ViewController,
)
from core.document import DocumentSession, ViewState
from core.document.pdf_reader import PDFDocumentReader
from core.errors import RenderError
from core.fields import CoordinateTransform, FieldStore
from core.interaction import CreationProtocol, PointerInteractionController
from core.signing import create_client
from styles.theme_manager import ThemeManager, apply_style
from ui.toolbars.viewer_toolbar import ViewerToolbar
from ui.widgets.field_editor import FieldEditor
from ui.widgets.field_palette import FieldPalette
from ui.widgets.page_canvas import PageCanvas
from utils.notification_manager import NotificationType, notification_manager

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    def __init__(self, config: AppConfig = None, file_path=None):
        super().__init__()
        self.config = config or AppConfig()
        self.setWindowTitle("Signet")
        self.dark_mode = True

        # Core state
        self.view_state = ViewState.from_config(self.config)
        self.transform = CoordinateTransform(self.view_state.get_page_pixel_size)
        self.store = FieldStore(self.transform)
        self.session = DocumentSession(self.store, self.view_state, self.config.signature_formats)
        self.pdf_reader = PDFDocumentReader(self.config.render_dpi_scale)

        # Controllers
        self.field_controller = FieldController(
            self.store,
            PointerInteractionController(self.store, self.transform),
            CreationProtocol(self.store),
            self,
        )
        self.view_controller = ViewController(self.view_state, self)
        self.document_controller = DocumentController(
            self.session,
            create_client(self.config),
            self.pdf_reader,
            self.field_controller,
            self.view_controller,
            self,
        )
        self.input_handler = UserInputHandler(self)

        # Release anywhere in the application ends a drag or resize
        self.pointer_filter = PointerSessionFilter(self.field_controller, self)
        QApplication.instance().installEventFilter(self.pointer_filter)

        # Coalesce re-renders while the window is being resized
        self._render_timer = QTimer(self)
        self._render_timer.setSingleShot(True)
        self._render_timer.setInterval(50)
        self._render_timer.timeout.connect(self.render_current_page)

        self.setup_ui()
        self.connect_signals()
        self.apply_style()
        self._update_sign_button()
        self._update_page_controls()

        if file_path:
            QTimer.singleShot(0, lambda: self.document_controller.upload(file_path))

    # ===== Layout =====

    def setup_ui(self):
        # TOP TOOLBAR
        self.toolbar = ViewerToolbar(self)
        self.toolbar.set_zoom_percent(self.view_state.get_zoom_percent())

        # SIDEBAR
        self.sidebar = QFrame(self)
        self.sidebar.setObjectName("Sidebar")
        self.sidebar.setFixedWidth(240)
        sidebar_layout = QVBoxLayout(self.sidebar)
        sidebar_layout.setContentsMargins(12, 12, 12, 12)
        sidebar_layout.setSpacing(12)

        document_title = QLabel("Document", self.sidebar)
        document_title.setObjectName("sectionLabel")
        sidebar_layout.addWidget(document_title)

        self.upload_button = QPushButton("Upload PDF", self.sidebar)
        self.upload_button.setToolTip("Upload a PDF (Ctrl+O)")
        self.upload_button.clicked.connect(self.open_pdf)
        sidebar_layout.addWidget(self.upload_button)

        self.document_label = QLabel("No PDF uploaded", self.sidebar)
        self.document_label.setObjectName("statusLabel")
        self.document_label.setWordWrap(True)
        sidebar_layout.addWidget(self.document_label)

        self.palette = FieldPalette(self.field_controller, self.sidebar)
        sidebar_layout.addWidget(self.palette)

        signature_title = QLabel("Signature", self.sidebar)
        signature_title.setObjectName("sectionLabel")
        sidebar_layout.addWidget(signature_title)

        self.signature_button = QPushButton("Choose Signature Image", self.sidebar)
        self.signature_button.clicked.connect(self.choose_signature_image)
        sidebar_layout.addWidget(self.signature_button)

        self.signature_label = QLabel("No signature image", self.sidebar)
        self.signature_label.setObjectName("statusLabel")
        self.signature_label.setWordWrap(True)
        sidebar_layout.addWidget(self.signature_label)

        self.field_editor = FieldEditor(self.field_controller, self.sidebar)
        sidebar_layout.addWidget(self.field_editor)
        sidebar_layout.addStretch()

        # PAGE DISPLAY AREA
        inset = self.config.page_inset
        self.page_backdrop = QWidget()
        self.page_backdrop.setObjectName("PageBackdrop")
        backdrop_layout = QVBoxLayout(self.page_backdrop)
        backdrop_layout.setContentsMargins(inset, inset, inset, inset)
        backdrop_layout.setAlignment(Qt.AlignHCenter | Qt.AlignTop)

        self.page_canvas = PageCanvas(self.field_controller, self.page_backdrop)
        backdrop_layout.addWidget(self.page_canvas, 0, Qt.AlignHCenter | Qt.AlignTop)

        self.empty_label = QLabel("Upload a PDF to start placing fields", self.page_backdrop)
        self.empty_label.setObjectName("hintLabel")
        self.empty_label.setAlignment(Qt.AlignCenter)
        backdrop_layout.addWidget(self.empty_label, 0, Qt.AlignHCenter | Qt.AlignTop)

        self.scroll_area = QScrollArea()
        self.scroll_area.setWidgetResizable(True)
        self.scroll_area.setWidget(self.page_backdrop)

        # MAIN LAYOUT
        content_layout = QHBoxLayout()
        content_layout.setSpacing(0)
        content_layout.setContentsMargins(0, 0, 0, 0)
        content_layout.addWidget(self.sidebar)
        content_layout.addWidget(self.scroll_area)

        content_widget = QWidget()
        content_widget.setLayout(content_layout)

        main_layout = QVBoxLayout()
        main_layout.setSpacing(0)
        main_layout.setContentsMargins(0, 0, 0, 0)
        main_layout.addWidget(self.toolbar)
        main_layout.addWidget(content_widget)

        container = QWidget()
        container.setLayout(main_layout)
        self.setCentralWidget(container)

    def connect_signals(self):
        # Toolbar -> controllers
        self.toolbar.view_mode_requested.connect(self.view_controller.set_view_mode)
        self.toolbar.zoom_in_requested.connect(self.view_controller.zoom_in)
        self.toolbar.zoom_out_requested.connect(self.view_controller.zoom_out)
        self.toolbar.previous_page_requested.connect(self.view_controller.previous_page)
        self.toolbar.next_page_requested.connect(self.view_controller.next_page)
        self.toolbar.page_requested.connect(self.view_controller.jump_to_page)
        self.toolbar.sign_requested.connect(self.document_controller.sign)
        self.toolbar.theme_toggle_requested.connect(self.toggle_mode)

        # View changes re-render the page
        self.view_controller.page_changed.connect(self._on_page_changed)
        self.view_controller.page_count_changed.connect(lambda _count: self._update_page_controls())
        self.view_controller.zoom_changed.connect(self._on_zoom_changed)
        self.view_controller.view_mode_changed.connect(self._on_view_mode_changed)
        self.page_canvas.page_resized.connect(self.view_controller.on_page_rendered)
        self.view_controller.page_size_changed.connect(lambda _size: self.page_canvas.update())

        # Documents and signing
        self.document_controller.document_loaded.connect(self._on_document_loaded)
        self.document_controller.upload_failed.connect(self._on_upload_failed)
        self.document_controller.signed.connect(self._on_signed)
        self.document_controller.sign_failed.connect(self._on_sign_failed)
        self.document_controller.sign_rejected.connect(self._on_sign_rejected)
        self.document_controller.file_rejected.connect(self._on_file_rejected)
        self.document_controller.signature_changed.connect(self.signature_label.setText)
        self.document_controller.busy_changed.connect(self._on_busy_changed)
        self.document_controller.status_message.connect(self.toolbar.set_status)

    # ===== Rendering =====

    def render_current_page(self):
        """Render the displayed page to fit the viewer column."""
        if not self.pdf_reader.is_loaded():
            self.page_canvas.clear_page()
            self.page_canvas.hide()
            self.empty_label.show()
            return

        page_index = self.view_state.page_index
        page_width, _ = self.pdf_reader.get_page_size(page_index)
        viewport_width = self.scroll_area.viewport().width()
        scale = self.view_state.render_scale(page_width, viewport_width, self.config.page_inset)
        if scale <= 0:
            self.page_canvas.clear_page()
            return

        try:
            pixmap = self.pdf_reader.render_page(page_index, scale)
        except RenderError as e:
            self.page_canvas.clear_page()
            notification_manager.error(self, NotificationType.RENDER_FAILED, "Render Failed", str(e))
            return

        pixmap.setDevicePixelRatio(self.pdf_reader.dpi_scale)
        self.empty_label.hide()
        self.page_canvas.show()
        self.page_canvas.set_page(pixmap, page_index)

    def schedule_render(self):
        self._render_timer.start()

    def resizeEvent(self, event):
        super().resizeEvent(event)
        self.schedule_render()

    def _on_page_changed(self, _page):
        self._update_page_controls()
        self.render_current_page()

    def _on_zoom_changed(self, _zoom):
        self.toolbar.set_zoom_percent(self.view_state.get_zoom_percent())
        self.render_current_page()

    def _on_view_mode_changed(self, mode):
        self.toolbar.set_view_mode(mode)
        self.render_current_page()

    def _update_page_controls(self):
        self.toolbar.set_page(self.view_state.current_page, self.view_state.num_pages)

    # ===== Documents =====

    def open_pdf(self):
        file_path, _ = QFileDialog.getOpenFileName(self, "Upload PDF", "", "PDF Files (*.pdf)")
        if file_path:
            self.document_controller.upload(file_path)

    def choose_signature_image(self):
        patterns = " ".join(f"*.{fmt}" for fmt in self.session.signature_formats)
        file_path, _ = QFileDialog.getOpenFileName(
            self, "Choose Signature Image", "", f"Images ({patterns})"
        )
        if file_path:
            self.document_controller.set_signature_image(file_path)

    def _on_document_loaded(self, handle):
        self.document_label.setText(f"Document {handle.short_id}")
        self._update_sign_button()
        self.render_current_page()

    def _on_upload_failed(self, message):
        if not self.session.is_loaded:
            self.document_label.setText("No PDF uploaded")
        self.render_current_page()
        notification_manager.error(self, NotificationType.UPLOAD_FAILED, "Upload Failed", message)

    def _on_signed(self, url):
        notification_manager.info(
            self, NotificationType.SIGNED, "PDF Signed",
            f"The signed PDF is ready and will open in your browser.\n{url}"
        )
        if not QDesktopServices.openUrl(QUrl(url)):
            logger.warning("Could not open %s", url)

    def _on_sign_failed(self, message):
        notification_manager.error(self, NotificationType.SIGN_FAILED, "Signing Failed", message)

    def _on_sign_rejected(self, message):
        notification_manager.warning(
            self, NotificationType.SIGN_PRECONDITION, "Cannot Sign Yet", message
        )

    def _on_file_rejected(self, message):
        notification_manager.warning(
            self, NotificationType.UNSUPPORTED_FILE, "Unsupported File", message
        )

    def _on_busy_changed(self, operation, busy):
        if operation == DocumentController.UPLOAD:
            self.upload_button.setEnabled(not busy)
            self.upload_button.setText("Uploading..." if busy else "Upload PDF")
        self._update_sign_button()
        if not busy:
            self.toolbar.set_status("")

    def _update_sign_button(self):
        dc = self.document_controller
        self.toolbar.set_sign_state(
            self.session.is_loaded and not dc.is_uploading, dc.is_signing
        )

    # ===== Input and style =====

    def keyPressEvent(self, event):
        self.input_handler.handle_key_press(event)
        if not event.isAccepted():
            super().keyPressEvent(event)

    def toggle_mode(self):
        self.dark_mode = not self.dark_mode
        self.apply_style()

    def apply_style(self):
        apply_style(self, self.dark_mode)
        self.page_canvas.set_selection_color(ThemeManager.get_selection_color(self.dark_mode))

    def closeEvent(self, event):
        QApplication.instance().removeEventFilter(self.pointer_filter)
        self.pdf_reader.close_document()
        event.accept()
