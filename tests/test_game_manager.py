import random

import pytest

from trivia_app.core.game_manager import GameManager
from trivia_app.core.models import SessionPhase
from trivia_app.core.services.question_provider import (
    QuestionProvider,
    QuestionProviderError,
    StaticQuestionProvider,
)
from trivia_app.core.services.user_store import InMemoryUserStore
from trivia_app.core.settings import GameSettings


class FailingProvider(QuestionProvider):
    def fetch_questions(self, categories, language):
        raise QuestionProviderError("service unavailable")


@pytest.fixture()
def user_store():
    return InMemoryUserStore()


@pytest.fixture()
def manager_factory(scheduler, user_store):
    managers = []

    def factory(provider, settings=None):
        manager = GameManager(
            provider,
            user_store,
            settings or GameSettings(username="alice"),
            scheduler=scheduler,
            rng=random.Random(5),
        )
        managers.append(manager)
        return manager

    yield factory
    for manager in managers:
        manager.shutdown()


def test_start_game_runs_session_and_records_score(manager_factory, user_store, questions, scheduler):
    manager = manager_factory(StaticQuestionProvider(questions[:2]))
    sessions = []
    manager.session_created.connect(lambda session: sessions.append(session))

    assert manager.start_game() is True
    session = manager.session
    assert sessions == [session]

    session.submit_answer(session.current_question.correct_answer)
    scheduler.advance(1500)
    scheduler.advance(20000)
    scheduler.advance(1500)

    assert session.phase is SessionPhase.ENDED
    user = user_store.get_user_by_username("alice")
    assert (user.score, user.games_played) == (110, 1)


def test_category_filter_is_passed_to_provider(manager_factory, questions):
    settings = GameSettings(username="alice", categories={"science"})
    manager = manager_factory(StaticQuestionProvider(questions), settings)

    manager.start_game()

    assert manager.session.question_count == 2


def test_empty_fetch_reports_no_questions(manager_factory, record):
    manager = manager_factory(StaticQuestionProvider([]))
    recorders = []
    manager.session_created.connect(lambda session: recorders.append(record(session)))

    assert manager.start_game() is False

    assert recorders[0].names() == ["no_questions_available"]
    assert manager.session.phase is SessionPhase.IDLE


def test_provider_failure_is_treated_as_no_questions(manager_factory, record, caplog):
    manager = manager_factory(FailingProvider())
    recorders = []
    manager.session_created.connect(lambda session: recorders.append(record(session)))

    assert manager.start_game() is False
    assert recorders[0].names() == ["no_questions_available"]
    assert "Question fetch failed" in caplog.text


def test_restart_replaces_session_and_discards_old_one(manager_factory, user_store, questions, scheduler):
    manager = manager_factory(StaticQuestionProvider(questions))
    manager.start_game()
    first = manager.session
    first.submit_answer(first.current_question.correct_answer)

    manager.start_game()
    scheduler.advance(1500)

    assert first.phase is SessionPhase.ENDED
    assert manager.session is not first
    assert manager.session.phase is SessionPhase.AWAITING_ANSWER
    assert user_store.get_user_by_username("alice") is None


def test_settings_update_applies_to_next_game(manager_factory, questions):
    manager = manager_factory(StaticQuestionProvider(questions))
    manager.update_settings(GameSettings(username="bob", base_duration_ms=3000))

    manager.start_game()

    assert manager.session.active_timer.total_duration_ms == 3000
    assert manager.settings.username == "bob"
