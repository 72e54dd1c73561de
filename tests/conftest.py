import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from services.session_controller import SessionController


class FakeClock:
    """Monotonic millisecond clock advanced by hand."""

    def __init__(self, start: int = 10_000):
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> int:
        self.now += ms
        return self.now


class FakeHandle:
    def __init__(self, interval_ms, callback):
        self.interval_ms = interval_ms
        self.callback = callback
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class FakeScheduler:
    def __init__(self):
        self.handles = []

    def every(self, interval_ms, callback):
        handle = FakeHandle(interval_ms, callback)
        self.handles.append(handle)
        return handle

    @property
    def active(self):
        return [h for h in self.handles if not h.cancelled]

    def fire_all(self):
        """Fire every handle ever scheduled, cancelled ones included."""
        for h in list(self.handles):
            h.callback()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def make_controller(clock, scheduler):
    def _make(text="cat", passages=None):
        ctrl = SessionController(passages or [text], scheduler=scheduler, clock=clock)
        ctrl.select_passage(text)
        return ctrl
    return _make


def type_text(ctrl, clock, text, gap_ms=100):
    """Feed `text` one character at a time, `gap_ms` apart."""
    result = None
    for i in range(1, len(text) + 1):
        if i > 1:
            clock.advance(gap_ms)
        result = ctrl.on_keystroke(text[:i])
    return result
