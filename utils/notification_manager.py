"""
Notification manager for user-facing status and error messages.
"""
import logging
from enum import Enum
from typing import Optional, Set

from PyQt5.QtCore import Qt
from PyQt5.QtWidgets import QCheckBox, QMessageBox, QWidget

logger = logging.getLogger(__name__)


class NotificationType(Enum):
    """Categories of notifications that can be suppressed."""
    UPLOAD_FAILED = "upload_failed"
    SIGN_FAILED = "sign_failed"
    SIGN_PRECONDITION = "sign_precondition"
    RENDER_FAILED = "render_failed"
    UNSUPPORTED_FILE = "unsupported_file"
    SIGNED = "signed"


class NotificationManager:
    """
    Shows notifications and remembers which ones the user silenced.
    Singleton pattern to maintain state across the application.
    """

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if self._initialized:
            return

        self._initialized = True
        self._suppressed: Set[NotificationType] = set()
        self._open_boxes = []

    def should_show(self, notification_type: NotificationType) -> bool:
        return notification_type not in self._suppressed

    def suppress(self, notification_type: NotificationType) -> None:
        """
        Suppress a notification for the rest of the session.

        Args:
            notification_type: Type of notification to suppress
        """
        self._suppressed.add(notification_type)

    def reset(self, notification_type: NotificationType) -> None:
        self._suppressed.discard(notification_type)

    def notify(self, parent: Optional[QWidget], notification_type: NotificationType,
               title: str, message: str, icon=QMessageBox.Information,
               show_dont_show: bool = True) -> Optional[QMessageBox]:
        """
        Show a non-modal message box.

        Args:
            parent: Parent widget
            notification_type: Type of notification
            title: Dialog title
            message: Message text
            icon: QMessageBox icon
            show_dont_show: Whether to offer a "don't show again" checkbox

        Returns:
            The message box, or None if the notification is suppressed
        """
        log = logger.warning if icon in (QMessageBox.Warning, QMessageBox.Critical) else logger.info
        log("%s: %s", title, message)

        if not self.should_show(notification_type):
            return None

        msg_box = QMessageBox(parent)
        msg_box.setIcon(icon)
        msg_box.setWindowTitle(title)
        msg_box.setText(message)
        msg_box.setStandardButtons(QMessageBox.Ok)
        msg_box.setWindowModality(Qt.NonModal)
        msg_box.setAttribute(Qt.WA_DeleteOnClose)

        if show_dont_show:
            checkbox = QCheckBox("Don't show again this session")
            msg_box.setCheckBox(checkbox)

            def on_finished(_result, box=msg_box, check=checkbox, kind=notification_type):
                if check.isChecked():
                    self.suppress(kind)
                if box in self._open_boxes:
                    self._open_boxes.remove(box)

            msg_box.finished.connect(on_finished)
        else:
            msg_box.finished.connect(
                lambda _result, box=msg_box: box in self._open_boxes and self._open_boxes.remove(box)
            )

        # Keep a reference until the box is closed
        self._open_boxes.append(msg_box)
        msg_box.show()
        return msg_box

    def info(self, parent: Optional[QWidget], notification_type: NotificationType,
             title: str, message: str) -> Optional[QMessageBox]:
        return self.notify(parent, notification_type, title, message, QMessageBox.Information)

    def warning(self, parent: Optional[QWidget], notification_type: NotificationType,
                title: str, message: str) -> Optional[QMessageBox]:
        return self.notify(parent, notification_type, title, message, QMessageBox.Warning)

    def error(self, parent: Optional[QWidget], notification_type: NotificationType,
              title: str, message: str) -> Optional[QMessageBox]:
        return self.notify(parent, notification_type, title, message, QMessageBox.Critical)


# Global instance for easy access
notification_manager = NotificationManager()
