"""
Drag and resize state machine for placed fields.
"""
import logging
from typing import Optional, Union

from core.fields import Field, FieldStore, CoordinateTransform
from .session import (
    IDLE,
    DraggingSession,
    IdleSession,
    Point,
    ResizingSession,
    SessionKind,
)

logger = logging.getLogger(__name__)

MIN_WIDTH_PX = 30.0
MIN_HEIGHT_PX = 20.0

Session = Union[IdleSession, DraggingSession, ResizingSession]


class PointerInteractionController:
    """
    Drives drag and resize of fields from pointer events.

    Exactly one session is active at a time. Begin requests are only
    honoured while idle; a release anywhere ends the session. All
    geometry is computed in pixels at the page size in effect for each
    event and written back normalized.
    """

    def __init__(self, store: FieldStore, transform: CoordinateTransform):
        self.store = store
        self.transform = transform
        self._session: Session = IDLE

    @property
    def session(self) -> Session:
        return self._session

    @property
    def state(self) -> SessionKind:
        return self._session.kind

    @property
    def is_idle(self) -> bool:
        return self._session.kind is SessionKind.IDLE

    @property
    def active_field_id(self) -> Optional[str]:
        return self._session.field_id

    # ===== Session start =====

    def begin_drag(self, field_id: str, pointer: Point) -> bool:
        """
        Start dragging a field body.

        Args:
            field_id: Field under the pointer
            pointer: Pointer position in screen pixels

        Returns:
            True if a drag session started
        """
        if not self.is_idle:
            logger.debug("Rejected drag of %s: %s session active",
                         field_id, self.state.value)
            return False
        rect = self._pixel_rect(field_id)
        if rect is None:
            return False

        self._session = DraggingSession(
            field_id=field_id,
            pointer_start=pointer,
            pixel_origin_start=rect.origin,
        )
        self.store.select(field_id)
        return True

    def begin_resize(self, field_id: str, pointer: Point) -> bool:
        """
        Start resizing a field from its resize handle. Selection is untouched.

        Args:
            field_id: Field owning the handle
            pointer: Pointer position in screen pixels

        Returns:
            True if a resize session started
        """
        if not self.is_idle:
            logger.debug("Rejected resize of %s: %s session active",
                         field_id, self.state.value)
            return False
        rect = self._pixel_rect(field_id)
        if rect is None:
            return False

        self._session = ResizingSession(
            field_id=field_id,
            pointer_start=pointer,
            pixel_size_start=rect.size,
            pixel_origin_start=rect.origin,
        )
        return True

    # ===== Session progress =====

    def pointer_move(self, pointer: Point) -> bool:
        """
        Apply a pointer move to the active session.

        Returns:
            True if the field geometry changed
        """
        session = self._session
        if session.kind is SessionKind.IDLE:
            return False

        field = self.store.get(session.field_id)
        if field is None:
            self._end_stale_session()
            return False

        dx = pointer[0] - session.pointer_start[0]
        dy = pointer[1] - session.pointer_start[1]

        if session.kind is SessionKind.DRAGGING:
            return self._apply_drag(session, field, dx, dy)
        return self._apply_resize(session, dx, dy)

    def pointer_up(self) -> None:
        """End the active session wherever the pointer was released."""
        if self._session.kind is not SessionKind.IDLE:
            if self._session.field_id not in self.store:
                logger.debug("Session field %s vanished before release",
                             self._session.field_id)
            self._session = IDLE

    def cancel(self) -> None:
        """Force the machine back to idle (document replaced, window lost focus)."""
        self._session = IDLE

    # ===== Internals =====

    def _apply_drag(self, session: DraggingSession, field: Field,
                    dx: float, dy: float) -> bool:
        # Size comes from the current coordinate so an intervening zoom keeps it
        current = self.transform.normalized_to_pixel(field.coordinate)
        if current is None:
            return False
        new_left = session.pixel_origin_start[0] + dx
        new_top = session.pixel_origin_start[1] + dy
        coordinate = self.transform.pixel_to_normalized(
            new_left, new_top, current.width, current.height
        )
        if coordinate is None:
            return False
        self.store.update(session.field_id, coordinate=coordinate)
        return True

    def _apply_resize(self, session: ResizingSession, dx: float, dy: float) -> bool:
        new_width = max(MIN_WIDTH_PX, session.pixel_size_start[0] + dx)
        new_height = max(MIN_HEIGHT_PX, session.pixel_size_start[1] + dy)
        left, top = session.pixel_origin_start
        coordinate = self.transform.pixel_to_normalized(left, top, new_width, new_height)
        if coordinate is None:
            return False
        self.store.update(session.field_id, coordinate=coordinate)
        return True

    def _pixel_rect(self, field_id: str):
        field = self.store.get(field_id)
        if field is None:
            return None
        return self.transform.normalized_to_pixel(field.coordinate)

    def _end_stale_session(self) -> None:
        logger.debug("Ending %s session for removed field %s",
                     self.state.value, self._session.field_id)
        self._session = IDLE
