from PyQt5.QtCore import QEvent, QObject, Qt
from PyQt5.QtGui import QKeySequence
from PyQt5.QtWidgets import QAbstractSpinBox, QApplication, QLineEdit, QPlainTextEdit, QTextEdit


class UserInputHandler:
    """
    Handles keyboard shortcuts for the signing window.
    """
    def __init__(self, main_window):
        """
        Initializes the handler with a reference to the main window.

        Args:
            main_window (MainWindow): A reference to the main application window.
        """
        self.main_window = main_window

    def handle_key_press(self, event):
        """
        Handles key press events for the main window.
        """
        if event.matches(QKeySequence.Open):
            self.main_window.open_pdf()
            event.accept()
        elif event.matches(QKeySequence.ZoomIn) or (
                event.modifiers() & Qt.ControlModifier and event.key() == Qt.Key_Equal):
            self.main_window.view_controller.zoom_in()
            event.accept()
        elif event.matches(QKeySequence.ZoomOut):
            self.main_window.view_controller.zoom_out()
            event.accept()
        elif event.key() == Qt.Key_PageDown:
            self.main_window.view_controller.next_page()
            event.accept()
        elif event.key() == Qt.Key_PageUp:
            self.main_window.view_controller.previous_page()
            event.accept()
        elif event.key() in (Qt.Key_Delete, Qt.Key_Backspace):
            if self._editing_text():
                event.ignore()
            elif self.main_window.field_controller.delete_selected():
                event.accept()
            else:
                event.ignore()
        elif event.key() == Qt.Key_Escape:
            self.main_window.field_controller.select(None)
            event.accept()
        else:
            event.ignore()

    def _editing_text(self):
        """
        Checks whether keyboard focus is in a text input.

        Returns:
            bool: True if Delete/Backspace belongs to the focused editor.
        """
        focus = QApplication.focusWidget()
        return isinstance(focus, (QLineEdit, QTextEdit, QPlainTextEdit, QAbstractSpinBox))


class PointerSessionFilter(QObject):
    """
    Application-wide event filter that feeds pointer moves and releases to
    the field controller while a drag or resize session is active.

    Installing it on the QApplication makes a release outside the page (or
    outside the window) end the session.
    """
    def __init__(self, field_controller, parent=None):
        super().__init__(parent)
        self.field_controller = field_controller

    def eventFilter(self, obj, event):
        if not self.field_controller.is_interacting:
            return False

        event_type = event.type()
        if event_type == QEvent.MouseMove:
            pos = event.globalPos()
            self.field_controller.move_pointer((pos.x(), pos.y()))
            return False
        if event_type == QEvent.MouseButtonRelease and event.button() == Qt.LeftButton:
            self.field_controller.release_pointer()
            return False
        if event_type == QEvent.ApplicationDeactivate:
            self.field_controller.release_pointer()
        return False
