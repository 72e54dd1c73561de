# services/session_controller.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, List, Optional, Protocol, Sequence, Tuple
import logging
import random
import time

from app import config
from app.errors import InvalidPassageError, SessionFinishedError
from app.state import Session, SessionStatus
from app.validation import clean_passage
from services.metrics_engine import MetricsEngine, MetricsSnapshot

log = logging.getLogger(__name__)


class TickHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def every(self, interval_ms: int, callback: Callable[[], None]) -> TickHandle: ...


def monotonic_ms() -> int:
    return time.monotonic_ns() // 1_000_000


@dataclass(frozen=True)
class KeystrokeResult:
    live: Optional[MetricsSnapshot]
    finished: bool
    final_snapshot: Optional[MetricsSnapshot]


class SessionController:
    """
    Owns one typing session at a time plus the in-memory history.

    Each keystroke carries the whole input text. The controller logs pauses,
    detects completion and asks the MetricsEngine for a snapshot. While the
    session runs, a ticker from `scheduler` recomputes the live snapshot every
    LIVE_TICK_MS so elapsed time and speed keep moving between keystrokes.
    """

    def __init__(
        self,
        passages: Sequence[str],
        scheduler: Optional[Scheduler] = None,
        clock: Callable[[], int] = monotonic_ms,
        engine: Optional[MetricsEngine] = None,
        rng: Optional[random.Random] = None,
    ):
        self.passages: List[str] = [clean_passage(p) for p in passages]
        if not self.passages:
            raise InvalidPassageError("At least one passage is required")
        self.scheduler = scheduler
        self.clock = clock
        self.engine = engine or MetricsEngine()
        self._rng = rng or random.Random()
        self.session = Session()
        self._live: Optional[MetricsSnapshot] = None
        self._history: List[MetricsSnapshot] = []
        self._ticker: Optional[TickHandle] = None

    # ---------------- Lifecycle ----------------
    @property
    def status(self) -> SessionStatus:
        return self.session.status

    def select_passage(self, text: str) -> None:
        """Start a fresh session on `text`. Passages must be non-empty."""
        if not text:
            raise InvalidPassageError("Passage is empty")
        self._cancel_ticker()
        self.session.reset(text)
        self._live = None
        log.info("Passage selected (%d chars, generation %d)", len(text), self.session.generation)

    def new_passage(self) -> str:
        choices = [p for p in self.passages if p != self.session.target_text] or self.passages
        text = self._rng.choice(choices)
        self.select_passage(text)
        return text

    def set_passages(self, passages: Sequence[str]) -> None:
        cleaned = [clean_passage(p) for p in passages]
        if not cleaned:
            raise InvalidPassageError("At least one passage is required")
        self.passages = cleaned

    def close(self) -> None:
        self._cancel_ticker()

    # ---------------- Input ----------------
    def on_keystroke(self, new_input: str) -> KeystrokeResult:
        s = self.session
        if s.finished:
            raise SessionFinishedError("Session already finished; select a new passage first")

        now = self.clock()
        if not s.started and new_input:
            s.start(now)
            self._start_ticker()
        elif s.last_event_time is not None:
            gap = now - s.last_event_time
            if gap > config.PAUSE_THRESHOLD_MS:
                pause = s.log_pause(len(new_input) - 1, gap)
                log.debug("Pause of %d ms at position %d", pause.duration_ms, pause.position)

        s.last_event_time = now
        s.current_input = new_input

        if s.started and len(new_input) >= len(s.target_text):
            s.finish()
            self._cancel_ticker()
            final = self._compute(now)
            self._live = final
            self._history.insert(0, final)
            log.info(
                "Session finished: %d WPM, %d%% accuracy, %d errors",
                final.speed_wpm, final.accuracy_pct, final.error_count,
            )
            return KeystrokeResult(live=final, finished=True, final_snapshot=final)

        if s.is_running:
            self._live = self._compute(now)
        return KeystrokeResult(live=self._live, finished=False, final_snapshot=None)

    def tick(self) -> Optional[MetricsSnapshot]:
        """Periodic recomputation; a no-op unless the session is running."""
        if self.session.is_running:
            self._live = self._compute(self.clock())
        return self._live

    # ---------------- Reads ----------------
    def get_live_snapshot(self) -> Optional[MetricsSnapshot]:
        return self._live

    def get_history(self) -> Tuple[MetricsSnapshot, ...]:
        return tuple(self._history)

    # ---------------- Internals ----------------
    def _compute(self, now: int) -> MetricsSnapshot:
        s = self.session
        return self.engine.compute(
            s.target_text, s.current_input, s.start_time, s.pause_log, now
        )

    def _start_ticker(self):
        if self.scheduler is None:
            return
        self._cancel_ticker()
        generation = self.session.generation

        def on_tick():
            # a tick scheduled for an earlier session must not touch this one
            if generation != self.session.generation:
                log.debug("Dropping stale tick for generation %d", generation)
                return
            self.tick()

        self._ticker = self.scheduler.every(config.LIVE_TICK_MS, on_tick)

    def _cancel_ticker(self):
        if self._ticker is not None:
            self._ticker.cancel()
            self._ticker = None
