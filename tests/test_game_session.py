import logging

import pytest

from trivia_app.core.models import SessionPhase
from trivia_app.core.services.game_session import GameSession
from trivia_app.core.services.scheduler import QtScheduler
from trivia_app.core.settings import GameSettings


def answer_correctly(session):
    session.submit_answer(session.current_question.correct_answer)


def answer_wrong(session):
    question = session.current_question
    session.submit_answer(question.incorrect_answers[0])


def test_start_displays_first_question_and_starts_countdown(make_session, record, questions):
    session = make_session()
    recorder = record(session)

    assert session.phase is SessionPhase.IDLE
    assert session.start(questions[:2]) is True

    assert session.phase is SessionPhase.AWAITING_ANSWER
    assert session.current_index == 0
    _, question, options, index, total = recorder.named("question_displayed")[0]
    assert question is questions[0]
    assert sorted(options) == sorted(questions[0].options())
    assert (index, total) == (0, 2)
    assert session.active_timer.total_duration_ms == 10000
    assert recorder.named("timer_ticked")[0] == ("timer_ticked", 1000, 10000)


def test_empty_question_set_does_not_start(make_session, record):
    session = make_session()
    recorder = record(session)

    assert session.start([]) is False

    assert session.phase is SessionPhase.IDLE
    assert session.current_question is None
    assert recorder.names() == ["no_questions_available"]


def test_start_twice_is_rejected(make_session, questions):
    session = make_session()
    session.start(questions)
    with pytest.raises(RuntimeError):
        session.start(questions)


def test_correct_answer_scores_and_locks(make_session, record, questions, scheduler):
    session = make_session()
    recorder = record(session)
    session.start(questions)
    scheduler.advance(3000)

    answer_correctly(session)

    assert session.phase is SessionPhase.LOCKED
    assert session.score == 10 + 700 // 10
    assert session.consecutive_correct == 1
    _, verdicts, selected = recorder.named("answer_resolved")[0]
    assert selected == "Paris"
    assert verdicts == {"Paris": True, "Lyon": False, "Nice": False, "Lille": False}
    assert recorder.named("score_changed") == [("score_changed", 80)]
    assert session.active_timer is None


def test_submit_answer_is_effective_once_per_question(make_session, record, questions, scheduler):
    session = make_session()
    recorder = record(session)
    session.start(questions)

    answer_correctly(session)
    score, streak = session.score, session.consecutive_correct
    answer_correctly(session)
    answer_wrong(session)

    assert (session.score, session.consecutive_correct) == (score, streak)
    assert len(recorder.named("answer_resolved")) == 1
    assert len(session.results) == 1


def test_streak_scoring_with_progress_700(make_session, questions, scheduler):
    session = make_session()
    session.start(questions)
    for _ in range(2):
        answer_correctly(session)
        scheduler.advance(1500)
    assert session.consecutive_correct == 2
    score_before = session.score

    # Third question runs 10000 + 2 * 2000 ms; 4200 ms in leaves 700/1000.
    assert session.active_timer.total_duration_ms == 14000
    scheduler.advance(4200)
    answer_correctly(session)

    assert session.score - score_before == 80
    assert session.consecutive_correct == 3
    assert session.results[-1].progress_remaining == 700


def test_bonus_time_after_three_correct_answers(make_session, questions, scheduler):
    session = make_session()
    session.start(questions)
    durations = [session.active_timer.total_duration_ms]
    for _ in range(3):
        answer_correctly(session)
        scheduler.advance(1500)
        durations.append(session.active_timer.total_duration_ms)

    assert durations == [10000, 12000, 14000, 16000]


def test_wrong_answer_resets_streak_and_bonus(make_session, questions, scheduler):
    session = make_session()
    session.start(questions)
    answer_correctly(session)
    scheduler.advance(1500)
    answer_correctly(session)
    scheduler.advance(1500)
    score = session.score

    answer_wrong(session)
    scheduler.advance(1500)

    assert session.score == score
    assert session.consecutive_correct == 0
    assert session.active_timer.total_duration_ms == 10000


def test_timeout_is_equivalent_to_no_answer(make_session, record, questions, scheduler):
    session = make_session()
    recorder = record(session)
    session.start(questions)
    answer_correctly(session)
    scheduler.advance(1500)
    score = session.score

    scheduler.advance(12000)

    assert session.phase is SessionPhase.LOCKED
    assert session.score == score
    assert session.consecutive_correct == 0
    assert recorder.named("answer_resolved")[-1][2] is None
    assert recorder.named("timer_ticked")[-1] == ("timer_ticked", 0, 0)
    result = session.results[-1]
    assert result.timed_out and not result.is_correct and result.score_delta == 0


def test_answer_after_timeout_is_ignored(make_session, questions, scheduler):
    session = make_session()
    session.start(questions)
    question = session.current_question
    scheduler.advance(10000)

    session.submit_answer(question.correct_answer)

    assert session.score == 0
    assert len(session.results) == 1


def test_answer_just_before_expiry_yields_single_verdict(make_session, record, questions, scheduler):
    session = make_session()
    recorder = record(session)
    session.start(questions)
    scheduler.advance(9990)

    answer_correctly(session)
    scheduler.advance(10)

    assert len(recorder.named("answer_resolved")) == 1
    assert session.results[0].is_correct
    assert session.score == 10 + 1 // 10


def test_end_to_end_two_questions(make_session, record, questions, scheduler):
    session = make_session()
    recorder = record(session)
    session.start(questions[:2])

    answer_correctly(session)  # progress still 1000
    scheduler.advance(1500)
    scheduler.advance(session.active_timer.total_duration_ms)
    scheduler.advance(1500)

    assert session.score == 10 + 1000 // 10 == 110
    assert session.phase is SessionPhase.ENDED
    assert recorder.named("session_ended") == [("session_ended", 110)]


def test_exhaustion_emits_each_question_then_one_end(make_session, record, questions, scheduler):
    session = make_session()
    recorder = record(session)
    session.start(questions)
    for _ in questions:
        scheduler.advance(1000)
        answer_wrong(session)
        scheduler.advance(1500)
    scheduler.advance(60000)

    names = recorder.names()
    assert names.count("question_displayed") == len(questions)
    assert names.count("session_ended") == 1
    assert names[-1] == "session_ended"
    indices = [event[3] for event in recorder.named("question_displayed")]
    assert indices == list(range(len(questions)))
    assert session.current_question is None
    assert session.current_options == []


def test_submit_after_end_is_ignored(make_session, questions, scheduler):
    session = make_session()
    session.start(questions[:1])
    answer_correctly(session)
    scheduler.advance(1500)
    assert session.phase is SessionPhase.ENDED

    session.submit_answer("Paris")
    scheduler.advance(5000)

    assert session.phase is SessionPhase.ENDED
    assert len(session.results) == 1


def test_shutdown_cancels_timer_and_pending_advance(make_session, record, questions, scheduler):
    session = make_session()
    recorder = record(session)
    session.start(questions)
    answer_correctly(session)

    session.shutdown()
    session.shutdown()
    scheduler.advance(60000)

    assert session.phase is SessionPhase.ENDED
    assert len(recorder.named("question_displayed")) == 1
    assert recorder.named("session_ended") == []
    assert scheduler.pending_count() == 0


def test_shutdown_while_awaiting_answer_stops_countdown(make_session, record, questions, scheduler):
    session = make_session()
    recorder = record(session)
    session.start(questions)
    scheduler.advance(100)
    ticks = len(recorder.named("timer_ticked"))

    session.shutdown()
    scheduler.advance(20000)

    assert len(recorder.named("timer_ticked")) == ticks
    assert recorder.named("answer_resolved") == []


@pytest.mark.qt_no_exception_capture
def test_raising_plain_slot_does_not_block_transitions(make_session, questions, scheduler):
    session = make_session()

    def broken_slot(*_args):
        raise RuntimeError("renderer crashed")

    session.question_displayed.connect(broken_slot)
    session.answer_resolved.connect(broken_slot)
    session.start(questions[:2])
    assert session.phase is SessionPhase.AWAITING_ANSWER
    assert session.active_timer is not None

    answer_correctly(session)
    scheduler.advance(1500)
    assert session.current_index == 1
    assert session.phase is SessionPhase.AWAITING_ANSWER


def test_sink_slot_failure_is_logged_and_session_continues(make_session, questions, scheduler, caplog):
    session = make_session()
    displayed = []

    def broken_slot(*_args):
        raise RuntimeError("renderer crashed")

    session.connect_sink(session.question_displayed, broken_slot)
    session.connect_sink(session.question_displayed, lambda *args: displayed.append(args[2]))
    with caplog.at_level(logging.ERROR, logger="trivia_app.core.services.game_session"):
        session.start(questions[:2])
        answer_correctly(session)
        scheduler.advance(1500)

    failures = [r for r in caplog.records if "Presentation handler broken_slot failed" in r.getMessage()]
    assert len(failures) == 2
    assert failures[0].exc_info[0] is RuntimeError
    assert displayed == [0, 1]
    assert session.current_index == 1
    assert session.phase is SessionPhase.AWAITING_ANSWER
    assert session.active_timer is not None


def test_phase_changes_follow_the_session_lifecycle(make_session, questions, scheduler):
    session = make_session()
    phases = []
    session.phase_changed.connect(lambda phase: phases.append(phase))

    session.start(questions[:2])
    answer_correctly(session)
    scheduler.advance(1500)
    scheduler.advance(session.active_timer.total_duration_ms)
    scheduler.advance(1500)
    session.shutdown()

    assert phases == [
        SessionPhase.AWAITING_ANSWER,
        SessionPhase.LOCKED,
        SessionPhase.AWAITING_ANSWER,
        SessionPhase.LOCKED,
        SessionPhase.ENDED,
    ]


def test_shutdown_reports_ended_phase_once(make_session, questions):
    session = make_session()
    phases = []
    session.phase_changed.connect(lambda phase: phases.append(phase))
    session.start(questions)

    session.shutdown()
    session.shutdown()

    assert phases == [SessionPhase.AWAITING_ANSWER, SessionPhase.ENDED]


def test_start_accepts_a_one_shot_iterator(make_session, record, questions):
    session = make_session()
    recorder = record(session)

    assert session.start(iter(questions[:2])) is True
    assert session.question_count == 2
    assert recorder.named("question_displayed")[0][1] is questions[0]


def test_empty_iterator_reports_no_questions(make_session, record):
    session = make_session()
    recorder = record(session)

    assert session.start(iter(())) is False

    assert session.phase is SessionPhase.IDLE
    assert recorder.names() == ["no_questions_available"]


def test_shuffle_seed_makes_option_order_reproducible(make_session, questions):
    first = make_session(seed=1)
    second = make_session(seed=99)
    second.set_shuffle_seed(1)
    first.start(questions)
    second.start(questions)
    assert first.current_options == second.current_options


def test_custom_settings_drive_durations(make_session, questions, scheduler):
    settings = GameSettings(base_duration_ms=5000, settle_delay_ms=200, streak_bonus_ms=1000)
    session = make_session(settings)
    session.start(questions)
    assert session.active_timer.total_duration_ms == 5000
    answer_correctly(session)
    scheduler.advance(199)
    assert session.current_index == 0
    scheduler.advance(1)
    assert session.current_index == 1
    assert session.active_timer.total_duration_ms == 6000


def test_session_on_qt_event_loop(qtbot, questions):
    settings = GameSettings(base_duration_ms=60, tick_interval_ms=10, settle_delay_ms=10)
    session = GameSession(settings, scheduler=QtScheduler())
    with qtbot.waitSignal(session.session_ended, timeout=5000) as blocker:
        session.start(questions[:2])
    assert blocker.args == [0]
    assert [r.timed_out for r in session.results] == [True, True]
