"""
Theme management and styling for the application.
"""
from PyQt5.QtWidgets import QWidget

from .models import ThemeColors


class ThemeManager:
    """Manages application themes and styling."""

    DARK_THEME = ThemeColors(
        # Backgrounds
        bg_primary="#2e2e2e",
        bg_secondary="#3e3e3e",
        bg_tertiary="#4e4e4e",
        page_backdrop="#252525",

        # Text
        text_primary="#f0f0f0",
        text_secondary="#B5B5C5",
        text_muted="#8899AA",

        # Accent
        accent_primary="#4a9eff",
        accent_hover="#3a8eef",
        accent_active="#2a7edf",

        # Borders
        border_primary="#555555",
        border_secondary="#3e3e3e",

        # Special
        selection="#ffd43b",
        error="#ff6b6b",
        warning="#ffd43b",
        success="#51cf66"
    )

    LIGHT_THEME = ThemeColors(
        # Backgrounds
        bg_primary="#f0f0f0",
        bg_secondary="#ffffff",
        bg_tertiary="#e0e0e0",
        page_backdrop="#d8dce2",

        # Text
        text_primary="#2e2e2e",
        text_secondary="#7A899C",
        text_muted="#8899AA",

        # Accent
        accent_primary="#4a9eff",
        accent_hover="#3a8eef",
        accent_active="#2a7edf",

        # Borders
        border_primary="#cccccc",
        border_secondary="#e0e0e0",

        # Special
        selection="#0059c3",
        error="#ff6b6b",
        warning="#ffd43b",
        success="#51cf66"
    )

    @classmethod
    def apply_theme(cls, widget: QWidget, dark_mode: bool) -> None:
        """
        Apply theme to a widget and its children.

        Args:
            widget: Widget to style
            dark_mode: Whether to use dark theme
        """
        theme = cls.get_theme_colors(dark_mode)
        widget.setStyleSheet(cls._generate_stylesheet(theme))

    @classmethod
    def _generate_stylesheet(cls, theme: ThemeColors) -> str:
        """
        Generate a complete stylesheet from theme colors.

        Args:
            theme: Theme colors to use

        Returns:
            Complete CSS stylesheet string
        """
        return f"""
            /* --- GENERAL STYLES --- */
            QMainWindow, QWidget, QLineEdit, QLabel, QFrame {{
                background-color: {theme.bg_primary};
                color: {theme.text_primary};
                border: none;
            }}

            /* --- BUTTONS --- */
            QPushButton {{
                background-color: {theme.bg_tertiary};
                color: {theme.text_primary};
                border: none;
                border-radius: 6px;
                padding: 8px 16px;
                font-weight: bold;
            }}
            QPushButton:hover {{
                background-color: {theme.bg_secondary};
            }}
            QPushButton:disabled {{
                background-color: {theme.bg_secondary};
                color: {theme.text_muted};
            }}
            QPushButton#SignButton {{
                background-color: {theme.accent_primary};
                color: white;
            }}
            QPushButton#SignButton:hover {{
                background-color: {theme.accent_hover};
            }}
            QPushButton#SignButton:pressed {{
                background-color: {theme.accent_active};
            }}

            /* --- TOOL BUTTONS --- */
            QToolButton {{
                background-color: transparent;
                color: {theme.text_secondary};
                border: none;
                border-radius: 4px;
                padding: 4px 8px;
            }}
            QToolButton:hover {{
                background-color: {theme.bg_secondary};
            }}
            QToolButton:checked {{
                background-color: {theme.accent_primary};
                color: white;
            }}

            /* --- INPUTS --- */
            QLineEdit {{
                background-color: {theme.bg_secondary};
                border: 1px solid {theme.border_primary};
                border-radius: 6px;
                padding: 6px 10px;
            }}
            QLineEdit:focus {{
                border: 1px solid {theme.accent_primary};
            }}
            QLineEdit[objectName="page_input"] {{
                min-width: 50px;
                max-width: 50px;
            }}

            /* --- LABELS --- */
            QLabel {{
                background-color: transparent;
            }}
            QLabel#statusLabel, QLabel#hintLabel {{
                color: {theme.text_muted};
            }}
            QLabel#sectionLabel {{
                color: {theme.text_secondary};
                font-weight: bold;
            }}

            /* --- CHECKBOX --- */
            QCheckBox {{
                color: {theme.text_primary};
                spacing: 6px;
            }}
            QCheckBox::indicator {{
                width: 18px;
                height: 18px;
                border: 2px solid {theme.border_primary};
                border-radius: 3px;
                background-color: {theme.bg_secondary};
            }}
            QCheckBox::indicator:checked {{
                background-color: {theme.accent_primary};
                border-color: {theme.accent_primary};
            }}

            /* --- FRAMES --- */
            #TopFrame {{
                border-bottom: 1px solid {theme.border_secondary};
            }}
            #Sidebar {{
                border-right: 1px solid {theme.border_secondary};
            }}
            #PaletteItem {{
                background-color: {theme.bg_secondary};
                border: 1px solid {theme.border_primary};
                border-radius: 6px;
                padding: 8px;
            }}
            #PaletteItem:hover {{
                border-color: {theme.accent_primary};
            }}
            #DragPreview {{
                background-color: {theme.accent_primary};
                color: white;
                border-radius: 6px;
                padding: 6px;
            }}

            /* --- SCROLL AREA --- */
            QScrollArea, #PageBackdrop {{
                background-color: {theme.page_backdrop};
                border: none;
            }}
            QScrollBar:vertical {{
                background-color: {theme.bg_primary};
                width: 12px;
                border: none;
            }}
            QScrollBar::handle:vertical {{
                background-color: {theme.bg_tertiary};
                border-radius: 6px;
                min-height: 20px;
            }}
            QScrollBar::add-line:vertical,
            QScrollBar::sub-line:vertical {{
                background: none;
                height: 0px;
            }}

            /* --- MESSAGE BOX --- */
            QMessageBox {{
                background-color: {theme.bg_primary};
            }}
            QMessageBox QLabel {{
                color: {theme.text_primary};
            }}
        """

    @classmethod
    def get_theme_colors(cls, dark_mode: bool) -> ThemeColors:
        """
        Get theme colors for the current mode.

        Args:
            dark_mode: Whether to get dark theme colors

        Returns:
            ThemeColors object
        """
        return cls.DARK_THEME if dark_mode else cls.LIGHT_THEME

    @classmethod
    def get_selection_color(cls, dark_mode: bool) -> str:
        """Outline color for the selected field."""
        return cls.get_theme_colors(dark_mode).selection


def apply_style(widget: QWidget, dark_mode: bool) -> None:
    ThemeManager.apply_theme(widget, dark_mode)
