# services/metrics_engine.py
from collections import Counter
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple
import time

from app import config
from app.calculation import (
    accuracy_pct,
    compare_prefix,
    elapsed_seconds,
    speed_wpm,
    word_count,
)
from app.state import PauseRecord


@dataclass(frozen=True)
class ErrorRecord:
    position: int
    expected: str
    actual: str  # "" when the character is missing


@dataclass(frozen=True)
class MetricsSnapshot:
    speed_wpm: int
    accuracy_pct: int
    elapsed_seconds: int
    error_count: int
    pauses: Tuple[PauseRecord, ...]
    errors: Tuple[ErrorRecord, ...]
    suggestions: Tuple[str, ...]
    source_text: str
    created_at: float


class MetricsEngine:
    """
    Stateless scorer: (target, typed, start time, pause log, now) -> MetricsSnapshot.
    Thresholds are fixed at construction and default to app.config.
    """

    def __init__(
        self,
        long_pause_ms: int = config.LONG_PAUSE_MS,
        slow_wpm: int = config.SLOW_WPM,
        low_accuracy_pct: int = config.LOW_ACCURACY_PCT,
    ):
        self.long_pause_ms = long_pause_ms
        self.slow_wpm = slow_wpm
        self.low_accuracy_pct = low_accuracy_pct

    def compute(
        self,
        target: str,
        typed: str,
        start_time: int,
        pause_log: Sequence[PauseRecord],
        now: int,
        created_at: Optional[float] = None,
    ) -> MetricsSnapshot:
        elapsed_ms = now - start_time
        wpm = speed_wpm(word_count(target), elapsed_ms)

        correct, mismatches = compare_prefix(target, typed)
        errors = [ErrorRecord(pos, exp, act) for pos, exp, act in mismatches]
        # length difference is added on top of mismatches, not reconciled with them
        error_count = len(mismatches) + abs(len(target) - len(typed))
        for i in range(len(typed), len(target)):
            errors.append(ErrorRecord(i, target[i], ""))

        acc = accuracy_pct(correct, len(target))
        pauses = tuple(pause_log)

        return MetricsSnapshot(
            speed_wpm=wpm,
            accuracy_pct=acc,
            elapsed_seconds=elapsed_seconds(elapsed_ms),
            error_count=error_count,
            pauses=pauses,
            errors=tuple(errors),
            suggestions=tuple(self.suggestions(errors, pauses, wpm, acc)),
            source_text=target,
            created_at=time.time() if created_at is None else created_at,
        )

    def suggestions(
        self,
        errors: Sequence[ErrorRecord],
        pauses: Sequence[PauseRecord],
        wpm: int,
        acc: int,
    ) -> List[str]:
        out: List[str] = []

        pairs = Counter((e.expected, e.actual) for e in errors)
        if pairs:
            # most_common(1) keeps the first-seen pair on ties
            (expected, actual), _ = pairs.most_common(1)[0]
            out.append(
                f"Practice typing '{expected}' as you frequently mistype it as '{actual}'"
            )

        slow_chars: List[str] = []
        for p in pauses:
            if p.duration_ms > self.long_pause_ms and p.character not in slow_chars:
                slow_chars.append(p.character)
        if slow_chars:
            joined = "', '".join(slow_chars)
            out.append(f"Work on improving speed with characters: '{joined}'")

        if wpm < self.slow_wpm:
            out.append("Focus on accuracy first, then gradually increase your speed")
        elif acc < self.low_accuracy_pct:
            out.append("Slow down slightly to improve accuracy")

        return out
