"""
Pointer interaction: drag/resize sessions and drag-and-drop field creation.
"""
from .creation import (
    FIELD_TYPE_MIME,
    CreationProtocol,
    DragPreview,
    FieldTypePayload,
    decode_payload,
)
from .pointer_controller import MIN_HEIGHT_PX, MIN_WIDTH_PX, PointerInteractionController
from .session import DraggingSession, IdleSession, ResizingSession, SessionKind

__all__ = [
    "FIELD_TYPE_MIME",
    "CreationProtocol",
    "DragPreview",
    "FieldTypePayload",
    "decode_payload",
    "MIN_HEIGHT_PX",
    "MIN_WIDTH_PX",
    "PointerInteractionController",
    "DraggingSession",
    "IdleSession",
    "ResizingSession",
    "SessionKind",
]
