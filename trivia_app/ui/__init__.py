"""Qt UI components for the trivia game."""

from .dialog_helpers import confirm_abandon_game, show_info, show_warning
from .game_window import GameWindow
from .question_renderer import render_question_html
from .settings_dialog import SettingsDialog

__all__ = [
    "GameWindow",
    "SettingsDialog",
    "confirm_abandon_game",
    "render_question_html",
    "show_info",
    "show_warning",
]
