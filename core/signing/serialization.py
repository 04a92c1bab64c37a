"""
Wire format shared with the remote signing service.

The field shape is consumed by the remote service as-is; changing a key
or the meaning of a value breaks signing.
"""
import base64
import mimetypes
import os
from typing import Dict, Iterable, List

from core.fields import Field

_IMAGE_MIME_TYPES = {
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
}


def serialize_field(field: Field) -> Dict:
    """Convert a field to the service's JSON shape (raw, unclamped fractions)."""
    coordinate = field.coordinate
    return {
        "type": field.field_type.value,
        "pageIndex": field.page_index,
        "xRel": coordinate.x_rel,
        "yRel": coordinate.y_rel,
        "wRel": coordinate.w_rel,
        "hRel": coordinate.h_rel,
        "value": field.value or "",
        "checked": bool(field.checked),
    }


def serialize_fields(fields: Iterable[Field]) -> List[Dict]:
    return [serialize_field(field) for field in fields]


def image_mime_type(path: str) -> str:
    ext = os.path.splitext(path)[1].lower()
    if ext in _IMAGE_MIME_TYPES:
        return _IMAGE_MIME_TYPES[ext]
    guessed, _ = mimetypes.guess_type(path)
    return guessed or "application/octet-stream"


def file_to_data_url(path: str) -> str:
    """
    Read a file into a base64 data URL.

    Args:
        path: Path to the file (typically the signature image)

    Returns:
        A "data:<mime>;base64,..." string
    """
    with open(path, "rb") as f:
        encoded = base64.b64encode(f.read()).decode("ascii")
    return f"data:{image_mime_type(path)};base64,{encoded}"
