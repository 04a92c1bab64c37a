"""
Editor for the currently selected field.
"""
from PyQt5.QtWidgets import QCheckBox, QFrame, QLabel, QLineEdit, QPushButton, QVBoxLayout

from core.fields import FieldType

FILLED_BY_SIGNATURE = (FieldType.SIGNATURE, FieldType.IMAGE)


class FieldEditor(QFrame):
    """Shows the selected field and lets the user edit its value."""

    def __init__(self, field_controller, parent=None):
        super().__init__(parent)
        self.field_controller = field_controller
        self.field_id = None
        self.setup_ui()
        self.show_field(None)

        field_controller.selection_changed.connect(self.show_field)
        field_controller.fields_changed.connect(self.refresh)

    def setup_ui(self):
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(6)

        title = QLabel("Selected Field", self)
        title.setObjectName("sectionLabel")
        layout.addWidget(title)

        self.type_label = QLabel("", self)
        layout.addWidget(self.type_label)

        self.value_edit = QLineEdit(self)
        self.value_edit.textEdited.connect(self._on_value_edited)
        layout.addWidget(self.value_edit)

        self.checked_box = QCheckBox("Checked", self)
        self.checked_box.toggled.connect(self._on_checked_toggled)
        layout.addWidget(self.checked_box)

        self.info_label = QLabel("", self)
        self.info_label.setObjectName("hintLabel")
        self.info_label.setWordWrap(True)
        layout.addWidget(self.info_label)

        self.geometry_label = QLabel("", self)
        self.geometry_label.setObjectName("statusLabel")
        layout.addWidget(self.geometry_label)

        self.delete_button = QPushButton("Delete Field", self)
        self.delete_button.setToolTip("Delete the selected field (Del)")
        self.delete_button.clicked.connect(self._on_delete_clicked)
        layout.addWidget(self.delete_button)

        self.empty_label = QLabel("Click a field on the page to edit it", self)
        self.empty_label.setObjectName("hintLabel")
        self.empty_label.setWordWrap(True)
        layout.addWidget(self.empty_label)

    def show_field(self, field):
        """Switch the editor to a field, or to the empty state for None."""
        self.field_id = field.id if field is not None else None
        has_field = field is not None

        for widget in (self.type_label, self.geometry_label, self.delete_button):
            widget.setVisible(has_field)
        self.empty_label.setVisible(not has_field)
        self.value_edit.setVisible(has_field and field.field_type.accepts_text)
        self.checked_box.setVisible(has_field and field.field_type.is_checkable)
        self.info_label.setVisible(has_field and field.field_type in FILLED_BY_SIGNATURE)

        if not has_field:
            return

        self.type_label.setText(f"{field.field_type.label} on page {field.page_index + 1}")
        self.info_label.setText("Filled with the signature image when the PDF is signed")
        placeholder = "YYYY-MM-DD" if field.field_type is FieldType.DATE else "Enter text"
        self.value_edit.setPlaceholderText(placeholder)
        self._sync(field)

    def refresh(self):
        if self.field_id is None:
            return
        field = self.field_controller.store.get(self.field_id)
        if field is None:
            self.show_field(None)
            return
        self._sync(field)

    def _sync(self, field):
        if self.value_edit.text() != field.value:
            self.value_edit.blockSignals(True)
            self.value_edit.setText(field.value)
            self.value_edit.blockSignals(False)
        if self.checked_box.isChecked() != field.checked:
            self.checked_box.blockSignals(True)
            self.checked_box.setChecked(field.checked)
            self.checked_box.blockSignals(False)

        c = field.coordinate
        self.geometry_label.setText(
            f"x {c.x_rel:.3f}  y {c.y_rel:.3f}\nw {c.w_rel:.3f}  h {c.h_rel:.3f}"
        )

    def _on_value_edited(self, text):
        if self.field_id is not None:
            self.field_controller.set_value(self.field_id, text)

    def _on_checked_toggled(self, checked):
        if self.field_id is not None:
            self.field_controller.set_checked(self.field_id, checked)

    def _on_delete_clicked(self):
        if self.field_id is not None:
            self.field_controller.delete_field(self.field_id)
