"""
Custom widgets for placing and editing fields.
"""
from .field_editor import FieldEditor
from .field_palette import FieldPalette, PaletteItem
from .page_canvas import PageCanvas

__all__ = ['FieldEditor', 'FieldPalette', 'PaletteItem', 'PageCanvas']
