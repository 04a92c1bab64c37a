"""
Owned collection of placed fields and the current selection.
"""
import dataclasses
import logging
import uuid
from typing import Callable, List, Optional, Tuple

from .models import Field, FieldType, NormalizedRect
from .transform import CoordinateTransform

logger = logging.getLogger(__name__)

DEFAULT_WIDTH_RATIO = 0.2  # of page pixel width
DEFAULT_HEIGHT_PX = 40.0

_UNSET = object()


def _new_field_id() -> str:
    return uuid.uuid4().hex


class FieldStore:
    """
    Manages all fields placed on a document.

    Every mutation goes through a named command (create, update, delete,
    select, clear). Fields are immutable snapshots that get replaced on
    update, so views handed out earlier never change under the reader.
    """

    def __init__(self, transform: CoordinateTransform,
                 id_factory: Callable[[], str] = _new_field_id):
        self.transform = transform
        self._id_factory = id_factory
        self._fields: List[Field] = []
        self._selected_id: Optional[str] = None

    # ===== Queries =====

    @property
    def fields(self) -> Tuple[Field, ...]:
        return tuple(self._fields)

    @property
    def selected_id(self) -> Optional[str]:
        return self._selected_id

    @property
    def selected_field(self) -> Optional[Field]:
        if self._selected_id is None:
            return None
        return self.get(self._selected_id)

    def get(self, field_id: str) -> Optional[Field]:
        for field in self._fields:
            if field.id == field_id:
                return field
        return None

    def by_page(self, page_index: int) -> List[Field]:
        """
        Get all fields for a specific page.

        Args:
            page_index: 0-based page index

        Returns:
            Fields on the page, in insertion order
        """
        return [field for field in self._fields if field.page_index == page_index]

    def has_field_of_type(self, field_type: FieldType) -> bool:
        return any(field.field_type is field_type for field in self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __contains__(self, field_id: object) -> bool:
        return self.get(field_id) is not None

    # ===== Commands =====

    def create(self, field_type: FieldType, page_index: int,
               center: Tuple[float, float]) -> Optional[Field]:
        """
        Create a field of default size centred on a page pixel position.

        The new field becomes the selection.

        Args:
            field_type: Type of the new field
            page_index: 0-based page index
            center: (x, y) centre in page pixels

        Returns:
            The created field, or None if page geometry is unavailable
        """
        page_size = self.transform.page_size
        if not page_size.is_known:
            logger.debug("Ignoring create of %s: page size unknown", field_type.value)
            return None

        width = page_size.width * DEFAULT_WIDTH_RATIO
        height = DEFAULT_HEIGHT_PX
        cx, cy = center
        coordinate = self.transform.pixel_to_normalized(
            cx - width / 2, cy - height / 2, width, height
        )
        if coordinate is None:
            return None

        field = Field(
            id=self._id_factory(),
            field_type=field_type,
            page_index=page_index,
            coordinate=coordinate,
        )
        self._fields.append(field)
        self._selected_id = field.id
        logger.debug("Created %s field %s on page %d", field_type.value, field.id, page_index)
        return field

    def update(self, field_id: str, *, value=_UNSET, checked=_UNSET,
               coordinate=_UNSET) -> None:
        """
        Merge new values into a field. Unknown ids are ignored.

        Args:
            field_id: Field to update
            value: New text value
            checked: New checked state
            coordinate: New normalized rect
        """
        changes = {}
        if value is not _UNSET:
            changes["value"] = value if value is not None else ""
        if checked is not _UNSET:
            changes["checked"] = bool(checked)
        if coordinate is not _UNSET:
            if not isinstance(coordinate, NormalizedRect):
                raise TypeError("coordinate must be a NormalizedRect")
            changes["coordinate"] = coordinate
        if not changes:
            return

        for index, field in enumerate(self._fields):
            if field.id == field_id:
                self._fields[index] = dataclasses.replace(field, **changes)
                return

    def delete(self, field_id: str) -> bool:
        """
        Remove a field, clearing the selection if it was selected.

        Returns:
            True if the field was found and removed
        """
        for index, field in enumerate(self._fields):
            if field.id == field_id:
                del self._fields[index]
                if self._selected_id == field_id:
                    self._selected_id = None
                logger.debug("Deleted field %s", field_id)
                return True
        return False

    def select(self, field_id: Optional[str]) -> None:
        """Select a field by id, or clear the selection with None."""
        if field_id is not None and self.get(field_id) is None:
            return
        self._selected_id = field_id

    def clear(self) -> None:
        """Remove all fields and clear the selection."""
        self._fields.clear()
        self._selected_id = None
