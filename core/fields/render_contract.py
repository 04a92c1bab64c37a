"""
Read-only view of fields for the presentation layer.
"""
from dataclasses import dataclass
from typing import List, Optional

from .models import Field, FieldType, PixelRect
from .store import FieldStore
from .transform import CoordinateTransform

RESIZE_HANDLE_SIZE = 12.0  # px, square on the bottom-right corner


@dataclass(frozen=True)
class FieldView:
    """What the presentation layer needs to draw one field."""
    id: str
    field_type: FieldType
    rect: PixelRect
    value: str
    checked: bool
    selected: bool

    @property
    def label(self) -> str:
        return self.field_type.label

    @property
    def color(self) -> str:
        return self.field_type.color

    @property
    def resize_handle(self) -> PixelRect:
        return PixelRect(
            self.rect.right - RESIZE_HANDLE_SIZE,
            self.rect.bottom - RESIZE_HANDLE_SIZE,
            RESIZE_HANDLE_SIZE,
            RESIZE_HANDLE_SIZE,
        )


def field_view(field: Field, transform: CoordinateTransform,
               selected_id: Optional[str]) -> Optional[FieldView]:
    """Derive the view of a single field, or None while geometry is unavailable."""
    rect = transform.normalized_to_pixel(field.coordinate)
    if rect is None:
        return None
    return FieldView(
        id=field.id,
        field_type=field.field_type,
        rect=rect,
        value=field.value,
        checked=field.checked,
        selected=field.id == selected_id,
    )


def render_fields(store: FieldStore, transform: CoordinateTransform,
                  page_index: int) -> List[FieldView]:
    """
    Derive pixel geometry for every field on a page.

    Args:
        store: Field store to read
        transform: Transform at the current page size
        page_index: 0-based page index

    Returns:
        Views in insertion order; empty while the page size is unknown
    """
    views = []
    for field in store.by_page(page_index):
        view = field_view(field, transform, store.selected_id)
        if view is not None:
            views.append(view)
    return views


def hit_test(views: List[FieldView], x: float, y: float):
    """
    Find the topmost field under a page pixel position.

    Returns:
        Tuple of (FieldView, on_resize_handle) or (None, False)
    """
    # Later fields are drawn on top
    for view in reversed(views):
        if view.resize_handle.contains_point(x, y):
            return view, True
        if view.rect.contains_point(x, y):
            return view, False
    return None, False
