"""Utilities for importing trivia questions from a human-friendly text file.

File format (repeat blocks separated by blank lines or '---'):

    Q: Question text (supports markdown). Additional lines until the next
       marker are treated as part of the question.
    CORRECT: The right answer
    WRONG: A wrong answer
    WRONG: Another wrong answer
    WRONG: A third wrong answer
    CATEGORY: science   (optional, defaults to "any")

Example:

    Q: Which planet is known as the Red Planet?
    CORRECT: Mars
    WRONG: Venus
    WRONG: Jupiter
    WRONG: Mercury
    CATEGORY: science

Answers are kept verbatim apart from surrounding whitespace, since the game
compares them with exact, case-sensitive matching.
"""

from __future__ import annotations

from pathlib import Path

from trivia_app.constants.game_constants import ANY_CATEGORY
from trivia_app.core.models import TriviaQuestion


class QuestionImportError(Exception):
    """Raised when a question file cannot be parsed."""


def load_questions_from_file(file_path: Path) -> list[TriviaQuestion]:
    text = file_path.read_text(encoding="utf-8")
    return parse_questions(text)


def parse_questions(text: str) -> list[TriviaQuestion]:
    blocks: list[str] = []
    current_block: list[str] = []
    for raw_line in text.splitlines():
        stripped = raw_line.strip()
        if stripped == "---":
            if current_block:
                blocks.append("\n".join(current_block).strip())
                current_block = []
            continue
        if stripped.startswith("#"):
            continue
        if stripped:
            current_block.append(raw_line)
        elif current_block:
            # Blank line encountered after content - finalize current block
            blocks.append("\n".join(current_block).strip())
            current_block = []
    if current_block:
        blocks.append("\n".join(current_block).strip())

    return [_parse_block(block) for block in blocks if block]


def _parse_block(block: str) -> TriviaQuestion:
    question_lines: list[str] = []
    correct: str | None = None
    wrong: list[str] = []
    category = ANY_CATEGORY
    in_question = False

    for raw_line in block.splitlines():
        line = raw_line.strip()
        if not line:
            continue

        upper = line.upper()
        if upper.startswith("Q:"):
            question_lines = [line[2:].strip()]
            in_question = True
            continue

        if upper.startswith("CORRECT:"):
            if correct is not None:
                raise QuestionImportError("CORRECT may only appear once per question.")
            correct = _value_after_marker(line, "CORRECT")
            in_question = False
            continue

        if upper.startswith("WRONG:"):
            wrong.append(_value_after_marker(line, "WRONG"))
            in_question = False
            continue

        if upper.startswith("CATEGORY:"):
            category = _value_after_marker(line, "CATEGORY").lower()
            in_question = False
            continue

        if in_question:
            question_lines.append(line)
        else:
            raise QuestionImportError(
                f"Encountered text outside of a known section: '{line}'."
            )

    question_text = "\n".join(question_lines).strip()
    if not question_text:
        raise QuestionImportError("Question text missing (Q: ...)")
    if correct is None:
        raise QuestionImportError(f"Question '{question_text}' has no CORRECT answer.")
    if len(wrong) != 3:
        raise QuestionImportError(
            f"Question '{question_text}' must define exactly three WRONG answers."
        )
    if len({correct, *wrong}) != 4:
        raise QuestionImportError(f"Question '{question_text}' repeats an answer.")

    return TriviaQuestion(
        text=question_text,
        correct_answer=correct,
        incorrect_answers=tuple(wrong),
        category=category,
    )


def _value_after_marker(line: str, marker: str) -> str:
    value = line.split(":", 1)[1].strip()
    if not value:
        raise QuestionImportError(f"{marker} must include a value.")
    return value
