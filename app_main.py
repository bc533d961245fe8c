"""Application entry point for Trivia Rush."""

from __future__ import annotations

from pathlib import Path
import sys

from PySide6.QtCore import QSettings
from PySide6.QtWidgets import QApplication

from trivia_app.constants.about import APP_NAME, APP_ORGANIZATION, APP_VERSION
from trivia_app.core.game_manager import GameManager
from trivia_app.core.services.question_provider import FileQuestionProvider
from trivia_app.core.services.user_store import InMemoryUserStore
from trivia_app.core.settings import load_settings
from trivia_app.ui.game_window import GameWindow
from trivia_app.utils.logging_config import configure_logging

QUESTIONS_DIR = Path(__file__).resolve().parent / "trivia_app" / "data" / "questions"


def main() -> None:
    """Initialize logging, load preferences, and launch the game window."""
    logger = configure_logging()
    logger.info("Starting %s…", APP_NAME)

    app = QApplication(sys.argv)
    app.setOrganizationName(APP_ORGANIZATION)
    app.setApplicationName(APP_NAME)
    app.setApplicationVersion(APP_VERSION)

    settings_store = QSettings()
    settings = load_settings(settings_store)
    logger.info(
        "Player %s, language %s, categories %s",
        settings.username,
        settings.language,
        ",".join(sorted(settings.categories)),
    )

    provider = FileQuestionProvider(QUESTIONS_DIR, limit=settings.question_limit)
    game_manager = GameManager(provider, InMemoryUserStore(), settings)

    window = GameWindow(game_manager, settings_store)
    window.show()
    window.start_game()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
