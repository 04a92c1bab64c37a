"""
Data model for placed fields and page geometry.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class FieldType(Enum):
    """Types of fields that can be placed on a page."""
    TEXT = "text"
    SIGNATURE = "signature"
    IMAGE = "image"
    DATE = "date"
    RADIO = "radio"

    @property
    def label(self) -> str:
        return FIELD_LABELS[self]

    @property
    def color(self) -> str:
        return FIELD_COLORS[self]

    @property
    def accepts_text(self) -> bool:
        """Whether the field carries an editable text value."""
        return self in (FieldType.TEXT, FieldType.DATE)

    @property
    def is_checkable(self) -> bool:
        return self is FieldType.RADIO

    @classmethod
    def from_token(cls, token: Optional[str]) -> Optional["FieldType"]:
        """
        Look up a field type by its string token.

        Args:
            token: Token such as "text" or "signature"

        Returns:
            The matching FieldType, or None for unknown tokens
        """
        if not token:
            return None
        try:
            return cls(token.strip())
        except ValueError:
            return None


FIELD_LABELS = {
    FieldType.TEXT: "Text Box",
    FieldType.SIGNATURE: "Signature",
    FieldType.IMAGE: "Image Box",
    FieldType.DATE: "Date",
    FieldType.RADIO: "Radio",
}

FIELD_COLORS = {
    FieldType.TEXT: "#3B82F6",
    FieldType.SIGNATURE: "#10B981",
    FieldType.IMAGE: "#8B5CF6",
    FieldType.DATE: "#F59E0B",
    FieldType.RADIO: "#EC4899",
}

# Palette order
PALETTE = (
    FieldType.TEXT,
    FieldType.SIGNATURE,
    FieldType.IMAGE,
    FieldType.DATE,
    FieldType.RADIO,
)


@dataclass(frozen=True)
class PagePixelSize:
    """Pixel size of the rendered page content box. (0, 0) means unknown."""
    width: float = 0.0
    height: float = 0.0

    @property
    def is_known(self) -> bool:
        return self.width > 0 and self.height > 0


UNKNOWN_PAGE_SIZE = PagePixelSize(0.0, 0.0)


@dataclass(frozen=True)
class NormalizedRect:
    """Position and size as fractions of the page pixel size (not clamped)."""
    x_rel: float
    y_rel: float
    w_rel: float
    h_rel: float


@dataclass(frozen=True)
class PixelRect:
    """Position and size in page pixels, origin at the page's top-left."""
    left: float
    top: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height

    @property
    def origin(self) -> Tuple[float, float]:
        return self.left, self.top

    @property
    def size(self) -> Tuple[float, float]:
        return self.width, self.height

    def contains_point(self, x: float, y: float) -> bool:
        """Check if a point is within the rect bounds."""
        return self.left <= x <= self.right and self.top <= y <= self.bottom


@dataclass(frozen=True)
class Field:
    """A placed, typed region on a specific page."""
    id: str
    field_type: FieldType
    page_index: int  # 0-based page index
    coordinate: NormalizedRect
    value: str = ""
    checked: bool = False
