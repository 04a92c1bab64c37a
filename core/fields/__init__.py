"""
Field model, coordinate transform and field store.
"""
from .models import (
    FIELD_COLORS,
    FIELD_LABELS,
    PALETTE,
    UNKNOWN_PAGE_SIZE,
    Field,
    FieldType,
    NormalizedRect,
    PagePixelSize,
    PixelRect,
)
from .render_contract import FieldView, hit_test, render_fields
from .store import FieldStore
from .transform import CoordinateTransform

__all__ = [
    "FIELD_COLORS",
    "FIELD_LABELS",
    "PALETTE",
    "UNKNOWN_PAGE_SIZE",
    "Field",
    "FieldType",
    "NormalizedRect",
    "PagePixelSize",
    "PixelRect",
    "FieldView",
    "hit_test",
    "render_fields",
    "FieldStore",
    "CoordinateTransform",
]
