"""
Shared fixtures for Signet tests.

Provides a mutable page size, a transform reading it, and the field
store, pointer controller and creation protocol built on top.
"""
import os
import sys

import pytest

# Run Qt headless unless a platform is chosen explicitly
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

# Ensure the project root is on the path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from core.fields import CoordinateTransform, FieldStore, PagePixelSize
from core.interaction import CreationProtocol, PointerInteractionController


class PageSizeHolder:
    """Stands in for the renderer: tests set the page size directly."""

    def __init__(self, width=1000.0, height=1250.0):
        self.size = PagePixelSize(width, height)

    def set(self, width, height):
        self.size = PagePixelSize(width, height)

    def unknown(self):
        self.size = PagePixelSize(0, 0)

    def __call__(self):
        return self.size


class SequentialIds:
    def __init__(self):
        self.count = 0

    def __call__(self):
        self.count += 1
        return f"field-{self.count}"


@pytest.fixture
def page_size():
    return PageSizeHolder()


@pytest.fixture
def transform(page_size):
    return CoordinateTransform(page_size)


@pytest.fixture
def store(transform):
    return FieldStore(transform, id_factory=SequentialIds())


@pytest.fixture
def pointer(store, transform):
    return PointerInteractionController(store, transform)


@pytest.fixture
def creation(store):
    return CreationProtocol(store)
