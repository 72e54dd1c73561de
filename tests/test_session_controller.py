import pytest

from app.errors import InvalidPassageError, SessionFinishedError
from app.state import PauseRecord, SessionStatus
from services.metrics_engine import ErrorRecord
from services.session_controller import SessionController

from conftest import type_text


def test_select_passage_resets_session(make_controller, clock):
    ctrl = make_controller("cat")
    ctrl.on_keystroke("c")
    clock.advance(900)
    ctrl.on_keystroke("ca")

    ctrl.select_passage("dog")
    s = ctrl.session
    assert s.target_text == "dog"
    assert s.current_input == ""
    assert s.start_time is None and s.last_event_time is None
    assert not s.started and not s.finished
    assert s.pause_log == []
    assert ctrl.status is SessionStatus.NOT_STARTED
    assert ctrl.get_live_snapshot() is None


def test_empty_input_before_start_does_nothing(make_controller):
    ctrl = make_controller("cat")
    result = ctrl.on_keystroke("")
    assert result.live is None
    assert not result.finished
    assert not ctrl.session.started


def test_first_keystroke_starts_session(make_controller, clock, scheduler):
    ctrl = make_controller("cat")
    result = ctrl.on_keystroke("c")
    assert ctrl.status is SessionStatus.STARTED
    assert ctrl.session.start_time == clock.now
    assert result.live is not None
    assert result.live.errors == (ErrorRecord(1, "a", ""), ErrorRecord(2, "t", ""))
    assert len(scheduler.active) == 1


def test_pause_threshold_is_exclusive(make_controller, clock):
    ctrl = make_controller("abcd")
    ctrl.on_keystroke("a")
    clock.advance(500)
    ctrl.on_keystroke("ab")
    assert ctrl.session.pause_log == []

    clock.advance(501)
    ctrl.on_keystroke("abc")
    assert ctrl.session.pause_log == [PauseRecord(2, 501, "c")]


def test_pause_after_clearing_input_has_no_character(make_controller, clock):
    ctrl = make_controller("abcd")
    ctrl.on_keystroke("a")
    clock.advance(800)
    ctrl.on_keystroke("")
    assert ctrl.session.pause_log == [PauseRecord(-1, 800, "")]


def test_pauses_reach_snapshot(make_controller, clock):
    ctrl = make_controller("abcd")
    ctrl.on_keystroke("a")
    clock.advance(1500)
    result = ctrl.on_keystroke("ab")
    assert result.live.pauses == (PauseRecord(1, 1500, "b"),)
    assert "Work on improving speed with characters: 'b'" in result.live.suggestions


def test_cat_typed_as_cbt(make_controller, clock):
    ctrl = make_controller("cat")
    result = type_text(ctrl, clock, "cbt", gap_ms=400)
    assert result.finished
    snap = result.final_snapshot
    assert snap.error_count == 1
    assert snap.errors == (ErrorRecord(1, "a", "b"),)
    assert snap.accuracy_pct == 67
    assert snap.pauses == ()


def test_short_input_does_not_finish(make_controller):
    ctrl = make_controller("ab")
    result = ctrl.on_keystroke("a")
    assert not result.finished
    assert result.final_snapshot is None
    assert result.live.errors == (ErrorRecord(1, "b", ""),)


def test_completion_triggers_exactly_at_target_length(make_controller, clock):
    text = "the cat"
    ctrl = make_controller(text)
    for i in range(1, len(text)):
        clock.advance(100)
        assert not ctrl.on_keystroke(text[:i]).finished
        assert ctrl.status is SessionStatus.STARTED
    clock.advance(100)
    result = ctrl.on_keystroke(text)
    assert result.finished
    assert ctrl.status is SessionStatus.FINISHED


def test_input_longer_than_target_finishes(make_controller):
    ctrl = make_controller("ab")
    result = ctrl.on_keystroke("abc")
    assert result.finished
    assert result.final_snapshot.error_count == 1


def test_speed_for_five_words_in_ten_seconds(make_controller, clock):
    text = "a b c d e"
    ctrl = make_controller(text)
    ctrl.on_keystroke("a")
    clock.advance(10_000)
    result = ctrl.on_keystroke(text)
    assert result.final_snapshot.speed_wpm == 30
    assert result.final_snapshot.elapsed_seconds == 10


def test_finished_session_rejects_input(make_controller, clock):
    ctrl = make_controller("ab")
    type_text(ctrl, clock, "ab")
    before = ctrl.session.current_input
    history = ctrl.get_history()

    with pytest.raises(SessionFinishedError):
        ctrl.on_keystroke("abc")
    assert ctrl.session.current_input == before
    assert ctrl.get_history() == history


def test_history_is_most_recent_first(make_controller, clock):
    ctrl = make_controller("ab")
    type_text(ctrl, clock, "ab")
    ctrl.select_passage("xy")
    type_text(ctrl, clock, "xz")

    history = ctrl.get_history()
    assert [h.source_text for h in history] == ["xy", "ab"]
    assert isinstance(history, tuple)


def test_select_passage_keeps_history(make_controller, clock):
    ctrl = make_controller("ab")
    type_text(ctrl, clock, "ab")
    ctrl.select_passage("cd")
    assert len(ctrl.get_history()) == 1


def test_live_snapshot_read_is_idempotent(make_controller, clock):
    ctrl = make_controller("cats")
    ctrl.on_keystroke("c")
    clock.advance(2_000)
    first = ctrl.get_live_snapshot()
    second = ctrl.get_live_snapshot()
    assert first == second


def test_tick_refreshes_elapsed_time(make_controller, clock, scheduler):
    ctrl = make_controller("cats")
    ctrl.on_keystroke("c")
    clock.advance(3_000)
    scheduler.active[0].callback()
    assert ctrl.get_live_snapshot().elapsed_seconds == 3


def test_tick_is_noop_before_start(make_controller):
    ctrl = make_controller("cats")
    assert ctrl.tick() is None


def test_ticker_interval(make_controller, scheduler):
    ctrl = make_controller("cats")
    ctrl.on_keystroke("c")
    assert scheduler.active[0].interval_ms == 500


def test_ticker_cancelled_on_finish(make_controller, clock, scheduler):
    ctrl = make_controller("ab")
    type_text(ctrl, clock, "ab")
    assert scheduler.active == []
    final = ctrl.get_live_snapshot()
    clock.advance(5_000)
    scheduler.fire_all()
    assert ctrl.get_live_snapshot() is final


def test_ticker_cancelled_on_reset(make_controller, scheduler):
    ctrl = make_controller("cats")
    ctrl.on_keystroke("c")
    ctrl.select_passage("dogs")
    assert scheduler.active == []


def test_stale_tick_does_not_touch_new_session(make_controller, clock, scheduler):
    ctrl = make_controller("cats")
    ctrl.on_keystroke("c")
    stale = scheduler.handles[0]

    ctrl.select_passage("dogs")
    ctrl.on_keystroke("d")
    live = ctrl.get_live_snapshot()
    clock.advance(4_000)
    stale.callback()
    assert ctrl.get_live_snapshot() is live


def test_close_cancels_ticker(make_controller, scheduler):
    ctrl = make_controller("cats")
    ctrl.on_keystroke("c")
    ctrl.close()
    assert scheduler.active == []


def test_controller_without_scheduler(clock):
    ctrl = SessionController(["cat"], clock=clock)
    ctrl.select_passage("cat")
    ctrl.on_keystroke("c")
    clock.advance(1_000)
    assert ctrl.tick().elapsed_seconds == 1


def test_new_passage_avoids_current(clock, scheduler):
    ctrl = SessionController(["one", "two"], scheduler=scheduler, clock=clock)
    first = ctrl.new_passage()
    for _ in range(10):
        nxt = ctrl.new_passage()
        assert nxt != first
        first = nxt


def test_new_passage_with_single_passage(clock):
    ctrl = SessionController(["only"], clock=clock)
    assert ctrl.new_passage() == "only"
    assert ctrl.new_passage() == "only"


def test_passages_are_validated(clock):
    with pytest.raises(InvalidPassageError):
        SessionController([], clock=clock)
    with pytest.raises(InvalidPassageError):
        SessionController(["   "], clock=clock)


def test_set_passages(clock):
    ctrl = SessionController(["one"], clock=clock)
    ctrl.set_passages(["two\nlines"])
    assert ctrl.passages == ["two lines"]
    with pytest.raises(InvalidPassageError):
        ctrl.set_passages([])


def test_cat_typed_as_cbt_with_short_pauses(make_controller, clock):
    ctrl = make_controller("cat")
    snap = type_text(ctrl, clock, "cbt", gap_ms=600).final_snapshot
    assert snap.error_count == 1
    assert snap.errors == (ErrorRecord(1, "a", "b"),)
    assert snap.accuracy_pct == 67
    assert snap.pauses == (PauseRecord(1, 600, "a"), PauseRecord(2, 600, "t"))
    assert not any(s.startswith("Work on improving speed") for s in snap.suggestions)


def test_select_passage_rejects_empty_text(make_controller):
    ctrl = make_controller("cat")
    with pytest.raises(InvalidPassageError):
        ctrl.select_passage("")
    assert ctrl.session.target_text == "cat"
