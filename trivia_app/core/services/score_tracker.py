"""Service for tracking the score and answer streak of a session."""

from __future__ import annotations

from dataclasses import dataclass

from trivia_app.constants.game_constants import (
    BASE_CORRECT_POINTS,
    PROGRESS_POINTS_DIVISOR,
    PROGRESS_SCALE,
    STREAK_BONUS_MS,
)


@dataclass(frozen=True, slots=True)
class ScoreSnapshot:
    """Immutable snapshot returned to consumers."""

    score: int
    consecutive_correct: int
    correct_answers: int
    answered: int


class ScoreTracker:
    """Accumulates the score and the consecutive-correct streak."""

    def __init__(self) -> None:
        self._score: int = 0
        self._consecutive_correct: int = 0
        self._correct_answers: int = 0
        self._answered: int = 0

    @property
    def score(self) -> int:
        return self._score

    @property
    def consecutive_correct(self) -> int:
        return self._consecutive_correct

    @property
    def correct_answers(self) -> int:
        return self._correct_answers

    @property
    def answered(self) -> int:
        return self._answered

    @staticmethod
    def points_for(progress_remaining: int) -> int:
        """Points awarded for a correct answer given at ``progress_remaining``."""
        if not 0 <= progress_remaining <= PROGRESS_SCALE:
            raise ValueError(f"Progress must be between 0 and {PROGRESS_SCALE}.")
        return BASE_CORRECT_POINTS + progress_remaining // PROGRESS_POINTS_DIVISOR

    def record_correct(self, progress_remaining: int) -> int:
        """Add the points for a correct answer, extend the streak, return the delta."""
        delta = self.points_for(progress_remaining)
        self._score += delta
        self._consecutive_correct += 1
        self._correct_answers += 1
        self._answered += 1
        return delta

    def record_incorrect(self) -> None:
        """Break the streak; wrong answers and timeouts do not cost points."""
        self._consecutive_correct = 0
        self._answered += 1

    def bonus_ms(self, streak_bonus_ms: int = STREAK_BONUS_MS) -> int:
        """Extra countdown time granted to the next question."""
        return self._consecutive_correct * streak_bonus_ms

    def snapshot(self) -> ScoreSnapshot:
        return ScoreSnapshot(
            score=self._score,
            consecutive_correct=self._consecutive_correct,
            correct_answers=self._correct_answers,
            answered=self._answered,
        )

    def reset(self) -> None:
        self._score = 0
        self._consecutive_correct = 0
        self._correct_answers = 0
        self._answered = 0
