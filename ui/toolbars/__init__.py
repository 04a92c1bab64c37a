"""
Toolbar components for the viewer.
"""
from .viewer_toolbar import ViewerToolbar

__all__ = ['ViewerToolbar']
