"""
Controller for field creation, editing and pointer interaction.
"""
from typing import List, Optional, Tuple

from PyQt5.QtCore import QObject, pyqtSignal

from core.fields import Field, FieldStore, FieldType, FieldView, render_fields
from core.fields.render_contract import hit_test
from core.interaction import CreationProtocol, PointerInteractionController


class FieldController(QObject):
    """Routes UI requests to the field store and emits change signals."""

    # Signals
    fields_changed = pyqtSignal()  # Emitted when any field changes
    selection_changed = pyqtSignal(object)  # Field or None
    preview_changed = pyqtSignal(object)  # DragPreview or None

    def __init__(self, store: FieldStore, pointer: PointerInteractionController,
                 creation: CreationProtocol, parent: QObject = None):
        super().__init__(parent)
        self.store = store
        self.pointer = pointer
        self.creation = creation

    # ===== Queries =====

    @property
    def transform(self):
        return self.store.transform

    def views_for_page(self, page_index: int) -> List[FieldView]:
        """Pixel views of the fields on a page at the current page size."""
        return render_fields(self.store, self.transform, page_index)

    def field_at(self, page_index: int, x: float, y: float) -> Tuple[Optional[FieldView], bool]:
        """
        Find the field under a page position.

        Returns:
            Tuple of (FieldView or None, whether the point is on the resize handle)
        """
        return hit_test(self.views_for_page(page_index), x, y)

    @property
    def selected_field(self) -> Optional[Field]:
        return self.store.selected_field

    # ===== Palette drag and drop =====

    def start_palette_drag(self, field_type: FieldType) -> str:
        """
        Begin dragging a palette entry.

        Returns:
            The token to publish on the native drag channel
        """
        payload = self.creation.start_drag(field_type)
        self.preview_changed.emit(self.creation.preview)
        return payload.token

    def end_palette_drag(self) -> None:
        self.creation.end_drag()
        self.preview_changed.emit(None)

    def drop(self, payload, point: Tuple[float, float], page_index: int) -> Optional[Field]:
        """
        Create a field from a drop on the page surface.

        Args:
            payload: Drag data (payload object, token text or bytes)
            point: Drop position in page pixels
            page_index: 0-based displayed page

        Returns:
            The new field, or None if the drop was ignored
        """
        had_preview = self.creation.is_dragging
        field = self.creation.drop(payload, point, page_index)
        if had_preview and not self.creation.is_dragging:
            self.preview_changed.emit(None)
        if field is not None:
            self.fields_changed.emit()
            self.selection_changed.emit(field)
        return field

    # ===== Pointer sessions =====

    def press_field(self, field_id: str, pointer: Tuple[float, float],
                    on_resize_handle: bool) -> bool:
        """
        Start a drag or resize session on a field.

        Returns:
            True if a session started
        """
        previous = self.store.selected_id
        if on_resize_handle:
            started = self.pointer.begin_resize(field_id, pointer)
        else:
            started = self.pointer.begin_drag(field_id, pointer)
        if started and self.store.selected_id != previous:
            self.selection_changed.emit(self.store.selected_field)
            self.fields_changed.emit()
        return started

    def move_pointer(self, pointer: Tuple[float, float]) -> bool:
        was_active = not self.pointer.is_idle
        changed = self.pointer.pointer_move(pointer)
        if changed:
            self.fields_changed.emit()
        elif was_active and self.pointer.is_idle:
            # Session field vanished
            self.fields_changed.emit()
        return changed

    def release_pointer(self) -> None:
        self.pointer.pointer_up()

    @property
    def is_interacting(self) -> bool:
        return not self.pointer.is_idle

    # ===== Direct edits =====

    def select(self, field_id: Optional[str]) -> None:
        if field_id == self.store.selected_id:
            return
        self.store.select(field_id)
        self.selection_changed.emit(self.store.selected_field)
        self.fields_changed.emit()

    def set_value(self, field_id: str, value: str) -> None:
        self.store.update(field_id, value=value)
        self.fields_changed.emit()

    def set_checked(self, field_id: str, checked: bool) -> None:
        self.store.update(field_id, checked=checked)
        self.fields_changed.emit()

    def delete_field(self, field_id: str) -> bool:
        """
        Delete a field.

        Returns:
            True if the field was deleted
        """
        was_selected = self.store.selected_id == field_id
        if not self.store.delete(field_id):
            return False
        self.fields_changed.emit()
        if was_selected:
            self.selection_changed.emit(None)
        return True

    def delete_selected(self) -> bool:
        if self.store.selected_id is None:
            return False
        return self.delete_field(self.store.selected_id)

    def reset(self) -> None:
        """Drop every field, e.g. after a new document was uploaded."""
        self.pointer.cancel()
        self.store.clear()
        self.fields_changed.emit()
        self.selection_changed.emit(None)
