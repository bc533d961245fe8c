"""Qt main window presenting a single-player trivia game."""

from __future__ import annotations

import logging
import math

from PySide6.QtCore import QPropertyAnimation, QSettings, Qt
from PySide6.QtGui import QCloseEvent
from PySide6.QtWidgets import (
    QGraphicsOpacityEffect,
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QProgressBar,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from trivia_app.constants.game_constants import PROGRESS_SCALE
from trivia_app.constants.ui_constants import (
    FLASH_DURATION_MS,
    GAME_OVER_TEMPLATE,
    GAME_OVER_TITLE,
    NO_QUESTIONS_MESSAGE,
    NO_QUESTIONS_TITLE,
    PLAY_AGAIN_BUTTON,
    QUESTION_COUNTER_TEMPLATE,
    SCORE_TEMPLATE,
    SETTINGS_BUTTON,
    TIME_REMAINING_TEMPLATE,
    WINDOW_TITLE,
)
from trivia_app.core.game_manager import GameManager
from trivia_app.core.models import SessionPhase, TriviaQuestion
from trivia_app.core.services.game_session import GameSession
from trivia_app.core.settings import save_settings
from trivia_app.styling.styles import AnswerHighlight, Styles
from trivia_app.ui.dialog_helpers import confirm_abandon_game, show_info, show_warning
from trivia_app.ui.question_renderer import render_question_html
from trivia_app.ui.settings_dialog import SettingsDialog
from trivia_app.ui.sound_effects import SoundBoard

logger = logging.getLogger(__name__)

# Seconds left at which the countdown label turns red.
URGENT_SECONDS = 3


class GameWindow(QMainWindow):
    """Main window rendering the signals of the active game session."""

    def __init__(
        self,
        game_manager: GameManager,
        settings_store: QSettings | None = None,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.setWindowTitle(WINDOW_TITLE)

        self.game_manager = game_manager
        self._settings_store = settings_store
        self._session: GameSession | None = None
        self._flash_animation: QPropertyAnimation | None = None

        self.sounds = SoundBoard(game_manager.settings.normalized_volume(), self)

        self._build_ui()
        self.setStyleSheet(Styles.get_main_window_style())
        self.game_manager.session_created.connect(self._attach_session)

    def _build_ui(self) -> None:
        central_widget = QWidget(self)
        self.setCentralWidget(central_widget)
        self._opacity_effect = QGraphicsOpacityEffect(central_widget)
        self._opacity_effect.setOpacity(1.0)
        central_widget.setGraphicsEffect(self._opacity_effect)

        root_layout = QVBoxLayout()
        central_widget.setLayout(root_layout)

        # Header: player, score, buttons
        header_row = QHBoxLayout()
        self.player_label = QLabel(self.game_manager.settings.username, self)
        self.player_label.setStyleSheet(Styles.get_large_label_style())
        header_row.addWidget(self.player_label)
        header_row.addStretch()
        self.score_label = QLabel(SCORE_TEMPLATE.format(score=0), self)
        self.score_label.setStyleSheet(Styles.get_large_label_style())
        header_row.addWidget(self.score_label)

        self.settings_button = QPushButton(SETTINGS_BUTTON, self)
        self.settings_button.clicked.connect(self._open_settings)
        header_row.addWidget(self.settings_button)

        self.play_again_button = QPushButton(PLAY_AGAIN_BUTTON, self)
        self.play_again_button.clicked.connect(self._handle_play_again)
        header_row.addWidget(self.play_again_button)
        root_layout.addLayout(header_row)

        self.counter_label = QLabel("", self)
        root_layout.addWidget(self.counter_label)

        self.question_label = QLabel("", self)
        self.question_label.setTextFormat(Qt.RichText)
        self.question_label.setWordWrap(True)
        self.question_label.setAlignment(Qt.AlignCenter)
        root_layout.addWidget(self.question_label, stretch=1)

        # Timer row
        timer_row = QHBoxLayout()
        self.timer_label = QLabel("", self)
        self.timer_label.setStyleSheet(Styles.get_timer_label_style(urgent=False))
        timer_row.addWidget(self.timer_label)

        self.timer_progress = QProgressBar(self)
        self.timer_progress.setRange(0, PROGRESS_SCALE)
        self.timer_progress.setValue(PROGRESS_SCALE)
        self.timer_progress.setTextVisible(False)
        timer_row.addWidget(self.timer_progress, stretch=1)
        root_layout.addLayout(timer_row)

        # Answers in a 2x2 grid
        answers_grid = QGridLayout()
        self.answer_buttons: list[QPushButton] = []
        for idx in range(4):
            button = QPushButton("", self)
            button.clicked.connect(lambda _checked=False, b=button: self._handle_answer_clicked(b))
            answers_grid.addWidget(button, idx // 2, idx % 2)
            self.answer_buttons.append(button)
        root_layout.addLayout(answers_grid)
        self._reset_answer_buttons(enabled=False)

    # --- Game lifecycle ---

    def start_game(self) -> bool:
        self.score_label.setText(SCORE_TEMPLATE.format(score=0))
        return self.game_manager.start_game()

    def _attach_session(self, session: GameSession) -> None:
        self._session = session
        session.connect_sink(session.question_displayed, self._show_question)
        session.connect_sink(session.answer_resolved, self._show_verdict)
        session.connect_sink(session.score_changed, self._show_score)
        session.connect_sink(session.timer_ticked, self._show_countdown)
        session.connect_sink(session.session_ended, self._show_game_over)
        session.connect_sink(session.no_questions_available, self._show_no_questions)

    def _handle_play_again(self) -> None:
        session = self._session
        if (
            session is not None
            and session.phase in (SessionPhase.AWAITING_ANSWER, SessionPhase.LOCKED)
            and not confirm_abandon_game(self)
        ):
            return
        self.start_game()

    def _handle_answer_clicked(self, button: QPushButton) -> None:
        if self._session is None:
            return
        self._session.submit_answer(button.text())

    # --- Session signal slots ---

    def _show_question(
        self, question: TriviaQuestion, options: list[str], index: int, total: int
    ) -> None:
        self.counter_label.setText(QUESTION_COUNTER_TEMPLATE.format(number=index + 1, total=total))
        self.question_label.setText(render_question_html(question.text))
        self._reset_answer_buttons(enabled=True)
        for button, option in zip(self.answer_buttons, options):
            button.setText(option)
            button.setVisible(True)
        self.timer_label.setVisible(True)
        self.timer_progress.setVisible(True)
        self.timer_progress.setValue(PROGRESS_SCALE)

    def _show_countdown(self, progress: int, remaining_ms: int) -> None:
        self.timer_progress.setValue(progress)
        seconds_left = math.ceil(remaining_ms / 1000)
        self.timer_label.setText(TIME_REMAINING_TEMPLATE.format(seconds=seconds_left))
        self.timer_label.setStyleSheet(
            Styles.get_timer_label_style(urgent=0 < seconds_left <= URGENT_SECONDS)
        )
        if remaining_ms > 0:
            self.sounds.start_ticking()
        else:
            self.sounds.stop_ticking()

    def _show_verdict(self, verdicts: dict[str, bool], selected: str | None) -> None:
        for button in self.answer_buttons:
            is_correct = verdicts.get(button.text(), False)
            highlight = AnswerHighlight.CORRECT if is_correct else AnswerHighlight.WRONG
            button.setStyleSheet(Styles.get_answer_button_style(highlight))
            button.setEnabled(False)
        answered_correctly = selected is not None and verdicts.get(selected, False)
        self.sounds.play_verdict(answered_correctly)
        if selected is None:
            self._flash()

    def _show_score(self, score: int) -> None:
        self.score_label.setText(SCORE_TEMPLATE.format(score=score))

    def _show_game_over(self, score: int) -> None:
        self.sounds.stop_all()
        for button in self.answer_buttons:
            button.setVisible(False)
        self.timer_label.setVisible(False)
        self.timer_progress.setVisible(False)
        show_info(self, GAME_OVER_TITLE, GAME_OVER_TEMPLATE.format(score=score))

    def _show_no_questions(self) -> None:
        self.question_label.setText("")
        self._reset_answer_buttons(enabled=False)
        show_warning(self, NO_QUESTIONS_TITLE, NO_QUESTIONS_MESSAGE)

    # --- Presentation helpers ---

    def _reset_answer_buttons(self, enabled: bool) -> None:
        for button in self.answer_buttons:
            button.setStyleSheet(Styles.get_answer_button_style(AnswerHighlight.NEUTRAL))
            button.setEnabled(enabled)

    def _flash(self) -> None:
        try:
            animation = QPropertyAnimation(self._opacity_effect, b"opacity", self)
            animation.setDuration(FLASH_DURATION_MS)
            animation.setStartValue(1.0)
            animation.setKeyValueAt(0.5, 0.0)
            animation.setEndValue(1.0)
            animation.start()
            self._flash_animation = animation
        except Exception:  # noqa: BLE001 - visual effects are best effort
            logger.exception("Timeout flash animation failed")

    def _open_settings(self) -> None:
        dialog = SettingsDialog(self.game_manager.settings, self)
        if not dialog.exec():
            return
        settings = dialog.get_settings()
        self.game_manager.update_settings(settings)
        self.player_label.setText(settings.username)
        self.sounds.set_volume(settings.normalized_volume())
        if self._settings_store is not None:
            save_settings(self._settings_store, settings)

    def closeEvent(self, event: QCloseEvent) -> None:  # noqa: N802 - Qt override
        self.sounds.stop_all()
        self.game_manager.shutdown()
        self._session = None
        super().closeEvent(event)
