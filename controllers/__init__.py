"""
Controllers connecting the core logic to the Qt widgets.
"""
from .document_controller import DocumentController
from .field_controller import FieldController
from .input_handler import PointerSessionFilter, UserInputHandler
from .view_controller import ViewController

__all__ = [
    'DocumentController',
    'FieldController',
    'PointerSessionFilter',
    'UserInputHandler',
    'ViewController',
]
