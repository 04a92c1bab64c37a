"""
Conversion between page pixels and normalized page fractions.
"""
from typing import Callable, Optional

from .models import NormalizedRect, PagePixelSize, PixelRect


class CoordinateTransform:
    """
    Converts rects between pixel space and normalized space.

    The page size is read from the provider on every call, so a rect is
    always interpreted against the page size in effect when it is read.
    Both conversions return None while the page size is unknown.
    """

    def __init__(self, page_size_provider: Callable[[], PagePixelSize]):
        self._page_size_provider = page_size_provider

    @property
    def page_size(self) -> PagePixelSize:
        return self._page_size_provider()

    @property
    def is_available(self) -> bool:
        return self.page_size.is_known

    def pixel_to_normalized(self, left: float, top: float,
                            width: float, height: float) -> Optional[NormalizedRect]:
        """
        Normalize a pixel rect against the current page size.

        Args:
            left: Left edge in page pixels
            top: Top edge in page pixels
            width: Width in pixels
            height: Height in pixels

        Returns:
            The normalized rect, or None if the page size is unknown
        """
        size = self.page_size
        if not size.is_known:
            return None
        return NormalizedRect(
            x_rel=left / size.width,
            y_rel=top / size.height,
            w_rel=width / size.width,
            h_rel=height / size.height,
        )

    def normalized_to_pixel(self, rect: NormalizedRect) -> Optional[PixelRect]:
        """
        Derive the pixel rect of a normalized rect at the current page size.

        Args:
            rect: Normalized rect

        Returns:
            The pixel rect, or None if the page size is unknown
        """
        size = self.page_size
        if not size.is_known:
            return None
        return PixelRect(
            left=rect.x_rel * size.width,
            top=rect.y_rel * size.height,
            width=rect.w_rel * size.width,
            height=rect.h_rel * size.height,
        )
