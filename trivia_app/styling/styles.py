"""Centralized styles for the game window."""

from .color_palette import ColorPalette, Theme


class AnswerHighlight:
    """Visual state of an answer button."""
    NEUTRAL = "neutral"
    CORRECT = "correct"
    WRONG = "wrong"


class Styles:
    """Helper class to generate Qt stylesheets based on the current theme."""

    @staticmethod
    def get_main_window_style(theme: Theme = Theme.LIGHT) -> str:
        return f"""
            QMainWindow, QWidget {{
                background-color: {ColorPalette.BACKGROUND_PRIMARY.get(theme)};
                color: {ColorPalette.TEXT_PRIMARY.get(theme)};
                font-family: 'Segoe UI', 'Roboto', sans-serif;
                font-size: 14px;
            }}
            QProgressBar {{
                border: 1px solid {ColorPalette.BORDER_PRIMARY.get(theme)};
                border-radius: 4px;
                height: 12px;
            }}
            QProgressBar::chunk {{
                background-color: {ColorPalette.ACCENT_PRIMARY.get(theme)};
            }}
        """

    @staticmethod
    def get_answer_button_style(highlight: str, theme: Theme = Theme.LIGHT) -> str:
        background = {
            AnswerHighlight.CORRECT: ColorPalette.ANSWER_CORRECT_BG,
            AnswerHighlight.WRONG: ColorPalette.ANSWER_WRONG_BG,
        }.get(highlight, ColorPalette.ANSWER_NEUTRAL_BG)
        return (
            f"QPushButton {{ background-color: {background.get(theme)};"
            f" color: {ColorPalette.TEXT_PRIMARY.get(theme)};"
            f" border: 1px solid {ColorPalette.BORDER_PRIMARY.get(theme)};"
            " border-radius: 6px; padding: 12px; font-size: 16px; }"
        )

    @staticmethod
    def get_timer_label_style(urgent: bool, theme: Theme = Theme.LIGHT) -> str:
        base_style = "padding: 2px 6px; border-radius: 4px;"
        if not urgent:
            return base_style
        return base_style + f" color: #fff; background-color: {ColorPalette.TIMER_URGENT.get(theme)};"

    @staticmethod
    def get_large_label_style() -> str:
        return "font-size: 16pt; font-weight: bold;"
