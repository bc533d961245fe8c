import heapq
import itertools
import os
import random

import pytest

# Widgets are created in tests; no display is available on CI.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from trivia_app.core.models import TriviaQuestion  # noqa: E402
from trivia_app.core.services.game_session import GameSession  # noqa: E402
from trivia_app.core.services.scheduler import ScheduledCall  # noqa: E402
from trivia_app.core.settings import GameSettings  # noqa: E402


class ManualScheduler:
    """Scheduler driven by explicit calls to ``advance``."""

    def __init__(self):
        self.now = 0
        self._queue = []
        self._sequence = itertools.count()

    def call_later(self, delay_ms, callback):
        call = ScheduledCall(callback)
        heapq.heappush(self._queue, (self.now + delay_ms, next(self._sequence), call))
        return call

    def advance(self, ms):
        target = self.now + ms
        while self._queue and self._queue[0][0] <= target:
            due, _, call = heapq.heappop(self._queue)
            self.now = due
            call.run()
        self.now = target

    def pending_count(self):
        return sum(1 for _, _, call in self._queue if call.pending)


@pytest.fixture(autouse=True)
def _qt_application(qapp):
    # Every QObject under test lives on the application's thread.
    yield qapp


@pytest.fixture()
def scheduler():
    return ManualScheduler()


@pytest.fixture()
def questions():
    return [
        TriviaQuestion("Capital of France?", "Paris", ("Lyon", "Nice", "Lille"), "geography"),
        TriviaQuestion("2 + 2?", "4", ("3", "5", "22"), "general_knowledge"),
        TriviaQuestion("Red Planet?", "Mars", ("Venus", "Jupiter", "Mercury"), "science"),
        TriviaQuestion("Gold symbol?", "Au", ("Ag", "Gd", "Go"), "science"),
        TriviaQuestion("Wall fell in?", "1989", ("1987", "1991", "1985"), "history"),
    ]


@pytest.fixture()
def make_session(scheduler):
    created = []

    def factory(settings=None, seed=7):
        session = GameSession(settings or GameSettings(), scheduler=scheduler, rng=random.Random(seed))
        created.append(session)
        return session

    yield factory
    for session in created:
        session.shutdown()


class SignalRecorder:
    """Collects every emission of a session's presentation signals, in order."""

    def __init__(self, session):
        self.events = []
        session.question_displayed.connect(
            lambda question, options, index, total: self.events.append(
                ("question_displayed", question, options, index, total)
            )
        )
        session.answer_resolved.connect(
            lambda verdicts, selected: self.events.append(("answer_resolved", verdicts, selected))
        )
        session.score_changed.connect(lambda score: self.events.append(("score_changed", score)))
        session.timer_ticked.connect(
            lambda progress, remaining: self.events.append(("timer_ticked", progress, remaining))
        )
        session.session_ended.connect(lambda score: self.events.append(("session_ended", score)))
        session.no_questions_available.connect(lambda: self.events.append(("no_questions_available",)))

    def named(self, name):
        return [event for event in self.events if event[0] == name]

    def names(self, include_ticks=False):
        return [e[0] for e in self.events if include_ticks or e[0] != "timer_ticked"]


@pytest.fixture()
def record():
    return SignalRecorder
