"""Interaction session states for pointer drag and resize.

A single session object replaces separate drag/resize state flags, so only
one operation can be described at a time.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

Point = Tuple[float, float]


class SessionKind(Enum):
    IDLE = "idle"
    DRAGGING = "dragging"
    RESIZING = "resizing"


@dataclass(frozen=True)
class IdleSession:
    kind = SessionKind.IDLE
    field_id: Optional[str] = None


@dataclass(frozen=True)
class DraggingSession:
    field_id: str
    pointer_start: Point
    pixel_origin_start: Point  # (left, top)

    kind = SessionKind.DRAGGING


@dataclass(frozen=True)
class ResizingSession:
    field_id: str
    pointer_start: Point
    pixel_size_start: Tuple[float, float]  # (width, height)
    pixel_origin_start: Point

    kind = SessionKind.RESIZING


IDLE = IdleSession()
