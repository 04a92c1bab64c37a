"""
Palette drag / page drop protocol for creating fields.
"""
import logging
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from core.fields import Field, FieldStore, FieldType

logger = logging.getLogger(__name__)

# MIME type carrying the field type token on native drags
FIELD_TYPE_MIME = "application/x-field-type"


@dataclass(frozen=True)
class FieldTypePayload:
    """Drag payload published by a palette entry."""
    field_type: FieldType

    @property
    def token(self) -> str:
        return self.field_type.value


@dataclass(frozen=True)
class DragPreview:
    """Transient indicator shown while a palette entry is being dragged."""
    field_type: FieldType
    label: str


def decode_payload(raw: Union[str, bytes, None]) -> Optional[FieldTypePayload]:
    """
    Turn native drag data into a payload.

    Args:
        raw: Text or bytes found on the drag channel

    Returns:
        The payload, or None for absent or foreign data
    """
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8", errors="ignore")
    field_type = FieldType.from_token(raw)
    if field_type is None:
        return None
    return FieldTypePayload(field_type)


class CreationProtocol:
    """
    Two-phase handoff: a palette drag publishes a payload and a drop on the
    page surface turns it into a new field.
    """

    def __init__(self, store: FieldStore):
        self.store = store
        self.preview: Optional[DragPreview] = None

    @property
    def is_dragging(self) -> bool:
        return self.preview is not None

    def start_drag(self, field_type: FieldType) -> FieldTypePayload:
        """Publish the payload for a palette entry and raise the preview."""
        self.preview = DragPreview(field_type, field_type.label)
        return FieldTypePayload(field_type)

    def drop(self, payload: object, point: Tuple[float, float],
             page_index: int) -> Optional[Field]:
        """
        Handle a drop on the page surface.

        Args:
            payload: FieldTypePayload, raw drag text, or None
            point: Drop position in page-surface pixels
            page_index: 0-based page currently displayed

        Returns:
            The new field, or None if the drop was ignored
        """
        if not isinstance(payload, FieldTypePayload):
            payload = decode_payload(payload) if isinstance(payload, (str, bytes)) else None
        if payload is None:
            logger.debug("Ignoring drop without a field type payload")
            return None

        self.preview = None
        return self.store.create(payload.field_type, page_index, point)

    def end_drag(self) -> None:
        """Drag finished without a drop on the page (or after one)."""
        self.preview = None
