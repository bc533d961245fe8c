"""Color palette for Trivia Rush supporting light and dark themes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class Theme(Enum):
    """Application theme options."""
    LIGHT = auto()
    DARK = auto()


@dataclass(frozen=True)
class ThemeColors:
    """Color definitions for a specific theme."""
    light: str
    dark: str

    def get(self, theme: Theme) -> str:
        """Get color value for the specified theme."""
        return self.light if theme == Theme.LIGHT else self.dark


class ColorPalette:
    """Centralized color definitions for the application."""

    TEXT_PRIMARY = ThemeColors(
        light="#000000",      # Black
        dark="#F5F5F5"        # WhiteSmoke
    )

    BACKGROUND_PRIMARY = ThemeColors(
        light="#FFFFFF",      # White
        dark="#1E1E1E"        # Dark Gray
    )

    BORDER_PRIMARY = ThemeColors(
        light="#D1D1D1",      # Gray
        dark="#555555"        # Dark Gray
    )

    ACCENT_PRIMARY = ThemeColors(
        light="#0078D4",      # Blue
        dark="#4A9EFF"        # Lighter Blue
    )

    # Answer buttons
    ANSWER_NEUTRAL_BG = ThemeColors(
        light="#FFFFFF",      # White
        dark="#3A3A3A"        # Dark Gray
    )

    ANSWER_CORRECT_BG = ThemeColors(
        light="#99CC00",      # Holo green light
        dark="#6FCF6F"        # Light Green
    )

    ANSWER_WRONG_BG = ThemeColors(
        light="#FF4444",      # Holo red light
        dark="#FF6B6B"        # Light Red
    )

    # Countdown emphasis
    TIMER_URGENT = ThemeColors(
        light="#D13438",      # Red
        dark="#FF6B6B"        # Light Red
    )
