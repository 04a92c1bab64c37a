"""
Application styling and themes.
"""
from .models import ThemeColors
from .theme_manager import ThemeManager, apply_style

__all__ = ['ThemeColors', 'ThemeManager', 'apply_style']
