"""Styling module for Trivia Rush."""

from .color_palette import ColorPalette, Theme
from .styles import AnswerHighlight, Styles

__all__ = ["AnswerHighlight", "ColorPalette", "Styles", "Theme"]
