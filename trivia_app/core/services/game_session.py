"""State machine driving a single-player timed trivia session."""

from __future__ import annotations

import logging
import random
from typing import Callable, Iterable

from PySide6.QtCore import QObject, Signal, SignalInstance

from trivia_app.core.answer_evaluator import evaluate, option_verdicts
from trivia_app.core.models import AnswerResult, SessionPhase, TriviaQuestion
from trivia_app.core.services.countdown_timer import CountdownTimer
from trivia_app.core.services.scheduler import QtScheduler, ScheduledCall, Scheduler
from trivia_app.core.services.score_tracker import ScoreTracker
from trivia_app.core.settings import GameSettings

logger = logging.getLogger(__name__)


class GameSession(QObject):
    """Sequences questions, runs their countdowns and scores the answers.

    The session moves through ``SessionPhase`` values: IDLE until started,
    AWAITING_ANSWER while a countdown runs, LOCKED between a verdict and the
    next question, and ENDED once the questions are exhausted. The phase is
    checked before any mutation, so a click racing the countdown expiry
    yields exactly one verdict per question.

    The signals form the presentation sink. Qt drops exceptions raised by
    slots on its own, so they never break a transition; slots attached with
    ``connect_sink`` additionally have their failures logged here.
    """

    question_displayed = Signal(object, list, int, int)  # question, options, index, total
    answer_resolved = Signal(dict, object)  # option -> is_correct, selected option or None
    score_changed = Signal(int)
    timer_ticked = Signal(int, int)  # progress 0..1000, remaining ms
    session_ended = Signal(int)
    no_questions_available = Signal()
    phase_changed = Signal(object)

    def __init__(
        self,
        settings: GameSettings | None = None,
        scheduler: Scheduler | None = None,
        rng: random.Random | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._settings = settings or GameSettings()
        self._scheduler: Scheduler = scheduler or QtScheduler(self)
        self._shuffle_rng = rng or random.Random()
        self._tracker = ScoreTracker()

        self._questions: tuple[TriviaQuestion, ...] = ()
        self._current_index: int = 0
        self._phase = SessionPhase.IDLE
        self._current_options: list[str] = []
        self._timer: CountdownTimer | None = None
        self._settle_call: ScheduledCall | None = None
        self._results: list[AnswerResult] = []

    # --- Lifecycle ---

    def start(self, questions: Iterable[TriviaQuestion]) -> bool:
        """Begin the session with the first question.

        Returns False, staying IDLE, when there is nothing to ask.
        """
        if self._phase is not SessionPhase.IDLE:
            raise RuntimeError("Session has already been started.")
        questions = tuple(questions)
        if not questions:
            logger.warning("No questions available; session not started")
            self.no_questions_available.emit()
            return False

        self._questions = questions
        self._current_index = 0
        self._tracker.reset()
        self._results = []
        logger.info("Session started with %d questions", len(self._questions))
        self._present_current_question(bonus_ms=0)
        return True

    def submit_answer(self, selected: str | None) -> None:
        """Resolve the current question with ``selected`` (None means no answer).

        Ignored unless a question is awaiting an answer.
        """
        if self._phase is not SessionPhase.AWAITING_ANSWER:
            logger.debug("Ignored answer %r in phase %s", selected, self._phase.name)
            return
        self._resolve(selected)

    def shutdown(self) -> None:
        """Tear the session down without signalling the end of the game."""
        self._cancel_timer()
        if self._settle_call is not None:
            self._settle_call.cancel()
            self._settle_call = None
        if self._phase is not SessionPhase.ENDED:
            logger.debug("Session shut down at question %d", self._current_index)
            self._set_phase(SessionPhase.ENDED)

    def connect_sink(self, signal: SignalInstance, slot: Callable[..., object]) -> None:
        """Connect ``slot`` to one of the sink signals, logging its failures."""

        def guarded(*args: object) -> None:
            try:
                slot(*args)
            except Exception:  # noqa: BLE001 - presentation failures must not stop the game
                logger.exception("Presentation handler %s failed", getattr(slot, "__name__", slot))

        signal.connect(guarded)

    def set_shuffle_seed(self, seed: int | None) -> None:
        self._shuffle_rng.seed(seed)

    # --- Read access ---

    @property
    def phase(self) -> SessionPhase:
        return self._phase

    @property
    def current_index(self) -> int:
        return self._current_index

    @property
    def question_count(self) -> int:
        return len(self._questions)

    @property
    def current_question(self) -> TriviaQuestion | None:
        if self._phase in (SessionPhase.AWAITING_ANSWER, SessionPhase.LOCKED):
            return self._questions[self._current_index]
        return None

    @property
    def current_options(self) -> list[str]:
        return list(self._current_options)

    @property
    def score(self) -> int:
        return self._tracker.score

    @property
    def consecutive_correct(self) -> int:
        return self._tracker.consecutive_correct

    @property
    def results(self) -> list[AnswerResult]:
        return list(self._results)

    @property
    def active_timer(self) -> CountdownTimer | None:
        return self._timer

    @property
    def settings(self) -> GameSettings:
        return self._settings

    # --- Transitions ---

    def _present_current_question(self, bonus_ms: int) -> None:
        question = self._questions[self._current_index]
        options = question.options()
        self._shuffle_rng.shuffle(options)
        self._current_options = options
        self._set_phase(SessionPhase.AWAITING_ANSWER)
        self.question_displayed.emit(
            question,
            list(options),
            self._current_index,
            len(self._questions),
        )
        if self._phase is SessionPhase.AWAITING_ANSWER:
            self._start_timer(self._settings.base_duration_ms + bonus_ms)

    def _start_timer(self, duration_ms: int) -> None:
        self._cancel_timer()
        timer = CountdownTimer(self._scheduler, self)
        timer.ticked.connect(self._handle_tick)
        timer.expired.connect(self._handle_expired)
        self._timer = timer
        logger.debug("Question %d countdown: %d ms", self._current_index, duration_ms)
        timer.start(duration_ms, self._settings.tick_interval_ms)

    def _cancel_timer(self) -> None:
        if self._timer is None:
            return
        self._timer.cancel()
        self._timer.ticked.disconnect(self._handle_tick)
        self._timer.expired.disconnect(self._handle_expired)
        self._timer.deleteLater()
        self._timer = None

    def _handle_tick(self, remaining_ms: int) -> None:
        if self._phase is not SessionPhase.AWAITING_ANSWER or self._timer is None:
            return
        self.timer_ticked.emit(self._timer.progress_remaining(), remaining_ms)

    def _handle_expired(self) -> None:
        if self._phase is not SessionPhase.AWAITING_ANSWER:
            logger.debug("Suppressed countdown expiry in phase %s", self._phase.name)
            return
        logger.debug("Question %d timed out", self._current_index)
        self.timer_ticked.emit(0, 0)
        self._resolve(None)

    def _resolve(self, selected: str | None) -> None:
        # Lock first so nothing triggered below can resolve this question again.
        self._set_phase(SessionPhase.LOCKED)
        progress = self._timer.progress_remaining() if self._timer is not None else 0
        if selected is None:
            progress = 0
        self._cancel_timer()

        question = self._questions[self._current_index]
        verdict = evaluate(selected, question.correct_answer)
        delta = 0
        if verdict.is_correct:
            delta = self._tracker.record_correct(progress)
        else:
            self._tracker.record_incorrect()

        self._results.append(
            AnswerResult(
                question_index=self._current_index,
                selected=selected,
                is_correct=verdict.is_correct,
                score_delta=delta,
                progress_remaining=progress,
                streak_after=self._tracker.consecutive_correct,
            )
        )
        logger.debug(
            "Question %d resolved: selected=%r correct=%s delta=%d streak=%d",
            self._current_index,
            selected,
            verdict.is_correct,
            delta,
            self._tracker.consecutive_correct,
        )

        self.answer_resolved.emit(
            option_verdicts(self._current_options, question.correct_answer),
            selected,
        )
        if verdict.is_correct:
            self.score_changed.emit(self._tracker.score)

        if self._phase is SessionPhase.LOCKED:
            self._settle_call = self._scheduler.call_later(
                self._settings.settle_delay_ms, self._advance
            )

    def _advance(self) -> None:
        self._settle_call = None
        if self._phase is not SessionPhase.LOCKED:
            return
        if self._current_index + 1 < len(self._questions):
            self._current_index += 1
            self._present_current_question(
                bonus_ms=self._tracker.bonus_ms(self._settings.streak_bonus_ms)
            )
            return

        self._current_options = []
        self._set_phase(SessionPhase.ENDED)
        logger.info(
            "Session ended: score=%d, %d/%d correct",
            self._tracker.score,
            self._tracker.correct_answers,
            len(self._questions),
        )
        self.session_ended.emit(self._tracker.score)

    def _set_phase(self, phase: SessionPhase) -> None:
        if phase is self._phase:
            return
        self._phase = phase
        self.phase_changed.emit(phase)
