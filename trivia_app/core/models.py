"""Domain models for the trivia game."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from trivia_app.constants.game_constants import ANY_CATEGORY


@dataclass(frozen=True, slots=True)
class TriviaQuestion:
    """Multiple-choice trivia question with one correct and three wrong answers."""

    text: str
    correct_answer: str
    incorrect_answers: tuple[str, ...]
    category: str = ANY_CATEGORY

    def __post_init__(self) -> None:
        if len(self.incorrect_answers) != 3:
            raise ValueError("Each question must have exactly three incorrect answers.")
        # Lists passed by callers are frozen so the record stays immutable.
        object.__setattr__(self, "incorrect_answers", tuple(self.incorrect_answers))

    def options(self) -> list[str]:
        return [self.correct_answer, *self.incorrect_answers]


class SessionPhase(Enum):
    """Lifecycle of a game session."""

    IDLE = auto()
    AWAITING_ANSWER = auto()
    LOCKED = auto()
    ENDED = auto()


@dataclass(frozen=True, slots=True)
class AnswerVerdict:
    is_correct: bool


@dataclass(frozen=True, slots=True)
class AnswerResult:
    """Outcome of a single resolved question."""

    question_index: int
    selected: str | None  # None when the countdown ran out
    is_correct: bool
    score_delta: int
    progress_remaining: int
    streak_after: int

    @property
    def timed_out(self) -> bool:
        return self.selected is None


@dataclass(slots=True)
class TimerState:
    """Snapshot of a countdown timer."""

    total_duration_ms: int
    remaining_ms: int
    running: bool


@dataclass(slots=True)
class UserRecord:
    """Player profile as kept by the user store."""

    username: str
    score: int = 0
    games_played: int = 0
