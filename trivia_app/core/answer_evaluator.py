"""Pure answer evaluation helpers."""

from __future__ import annotations

from typing import Iterable

from trivia_app.core.models import AnswerVerdict


def evaluate(selected: str | None, correct: str) -> AnswerVerdict:
    """Return the verdict for ``selected`` against the correct answer text.

    ``None`` stands for "no answer" (the countdown ran out) and is never
    correct. Matching is exact and case-sensitive.
    """
    if selected is None:
        return AnswerVerdict(is_correct=False)
    return AnswerVerdict(is_correct=selected == correct)


def option_verdicts(options: Iterable[str], correct: str) -> dict[str, bool]:
    """Map every displayed option to whether it is the correct answer."""
    return {option: evaluate(option, correct).is_correct for option in options}
