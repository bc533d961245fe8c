"""Sources of trivia questions for a session."""

from __future__ import annotations

from abc import ABC, abstractmethod
import logging
from pathlib import Path
import random
from typing import Iterable

from trivia_app.constants.game_constants import (
    ANY_CATEGORY,
    DEFAULT_LANGUAGE,
    DEFAULT_QUESTION_LIMIT,
)
from trivia_app.core.models import TriviaQuestion
from trivia_app.core.question_importer import QuestionImportError, load_questions_from_file

logger = logging.getLogger(__name__)


class QuestionProviderError(Exception):
    """Raised when questions cannot be retrieved."""


class QuestionProvider(ABC):
    """Supplies an ordered question set for the requested categories and language."""

    @abstractmethod
    def fetch_questions(self, categories: Iterable[str], language: str) -> list[TriviaQuestion]:
        """Return questions to ask, possibly none."""


def _matches_categories(question: TriviaQuestion, categories: set[str]) -> bool:
    return ANY_CATEGORY in categories or question.category in categories


class StaticQuestionProvider(QuestionProvider):
    """Serves a fixed, in-memory list of questions in order."""

    def __init__(self, questions: Iterable[TriviaQuestion]) -> None:
        self._questions = list(questions)

    def fetch_questions(self, categories: Iterable[str], language: str) -> list[TriviaQuestion]:
        wanted = set(categories)
        return [q for q in self._questions if _matches_categories(q, wanted)]


class FileQuestionProvider(QuestionProvider):
    """Reads ``<directory>/<language>.txt`` question files.

    Falls back to the default language when no file exists for the requested
    one, and returns up to ``limit`` matching questions in random order.
    """

    def __init__(
        self,
        directory: Path,
        limit: int = DEFAULT_QUESTION_LIMIT,
        rng: random.Random | None = None,
        fallback_language: str = DEFAULT_LANGUAGE,
    ) -> None:
        if limit <= 0:
            raise ValueError("Question limit must be positive.")
        self._directory = directory
        self._limit = limit
        self._rng = rng or random.Random()
        self._fallback_language = fallback_language

    def fetch_questions(self, categories: Iterable[str], language: str) -> list[TriviaQuestion]:
        path = self._resolve_path(language)
        if path is None:
            logger.warning("No question file for language %r in %s", language, self._directory)
            return []
        try:
            questions = load_questions_from_file(path)
        except (OSError, QuestionImportError) as exc:
            raise QuestionProviderError(f"Could not load questions from {path}: {exc}") from exc

        wanted = set(categories)
        matching = [q for q in questions if _matches_categories(q, wanted)]
        count = min(self._limit, len(matching))
        selected = self._rng.sample(matching, count)
        logger.info(
            "Loaded %d of %d questions from %s (categories=%s)",
            len(selected),
            len(questions),
            path.name,
            ",".join(sorted(wanted)),
        )
        return selected

    def _resolve_path(self, language: str) -> Path | None:
        for candidate in (language, self._fallback_language):
            path = self._directory / f"{candidate}.txt"
            if path.is_file():
                return path
        return None
