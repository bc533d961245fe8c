"""Wires the question provider, game session and user store for one game view."""

from __future__ import annotations

import logging
import random

from PySide6.QtCore import QObject, Signal

from trivia_app.core.services.game_session import GameSession
from trivia_app.core.services.question_provider import QuestionProvider, QuestionProviderError
from trivia_app.core.services.scheduler import Scheduler
from trivia_app.core.services.user_store import InMemoryUserStore, UserStoreError
from trivia_app.core.settings import GameSettings

logger = logging.getLogger(__name__)


class GameManager(QObject):
    """Facade over the services: QuestionProvider, GameSession and UserStore.

    Every call to ``start_game`` replaces the previous session with a fresh
    one and announces it through ``session_created`` so views can connect to
    its signals before the first question is shown.
    """

    session_created = Signal(object)

    def __init__(
        self,
        provider: QuestionProvider,
        user_store: InMemoryUserStore,
        settings: GameSettings | None = None,
        scheduler: Scheduler | None = None,
        rng: random.Random | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._provider = provider
        self._user_store = user_store
        self._settings = settings or GameSettings()
        self._scheduler = scheduler
        self._rng = rng
        self._session: GameSession | None = None

    @property
    def settings(self) -> GameSettings:
        return self._settings

    @property
    def session(self) -> GameSession | None:
        return self._session

    @property
    def user_store(self) -> InMemoryUserStore:
        return self._user_store

    def update_settings(self, settings: GameSettings) -> None:
        """Apply new settings; they take effect with the next game."""
        self._settings = settings

    def start_game(self) -> bool:
        """Fetch a question set and start a new session. Returns False when empty."""
        self.shutdown()

        session = GameSession(self._settings, scheduler=self._scheduler, rng=self._rng, parent=self)
        session.session_ended.connect(self._handle_session_ended)
        self._session = session
        self.session_created.emit(session)

        try:
            questions = self._provider.fetch_questions(
                self._settings.categories, self._settings.language
            )
        except QuestionProviderError:
            logger.exception("Question fetch failed")
            questions = []
        return session.start(questions)

    def shutdown(self) -> None:
        if self._session is None:
            return
        self._session.shutdown()
        self._session.session_ended.disconnect(self._handle_session_ended)
        self._session.deleteLater()
        self._session = None

    def _handle_session_ended(self, score: int) -> None:
        try:
            self._user_store.record_final_score(self._settings.username, score)
        except (UserStoreError, ValueError):
            logger.exception("Could not record final score for %s", self._settings.username)
