from enum import Enum
from typing import List, Tuple
import math


class CharState(Enum):
    PENDING = "pending"
    CORRECT = "correct"
    INCORRECT = "incorrect"


def round_half_up(value: float) -> int:
    """Round .5 upwards (round() in Python rounds half to even)."""
    return int(math.floor(value + 0.5))


def word_count(text: str) -> int:
    """
    Naive word count: split on single spaces.
    Empty tokens (double spaces, leading or trailing space) are counted too.
    """
    return len(text.split(" "))


def elapsed_seconds(elapsed_ms: int) -> int:
    return round_half_up(max(0, elapsed_ms) / 1000.0)


def speed_wpm(words: int, elapsed_ms: int) -> int:
    """
    WPM = words in the passage / elapsed minutes.
    Zero elapsed time yields 0 instead of a division fault.
    """
    if elapsed_ms <= 0:
        return 0
    seconds = elapsed_ms / 1000.0
    return round_half_up((words / seconds) * 60.0)


def accuracy_pct(correct_chars: int, target_len: int) -> int:
    if target_len <= 0:
        return 0
    pct = round_half_up((correct_chars / target_len) * 100.0)
    return max(0, min(100, pct))


def compare_prefix(target: str, typed: str) -> Tuple[int, List[Tuple[int, str, str]]]:
    """
    Compare target and typed text index by index over their common length.
    Returns (correct_count, mismatches) where each mismatch is
    (position, expected, actual).
    """
    correct = 0
    mismatches: List[Tuple[int, str, str]] = []
    for i in range(min(len(target), len(typed))):
        if target[i] == typed[i]:
            correct += 1
        else:
            mismatches.append((i, target[i], typed[i]))
    return correct, mismatches


def character_states(target: str, typed: str) -> List[CharState]:
    """Per target character: not typed yet, typed correctly, or mistyped."""
    states = []
    for i, ch in enumerate(target):
        if i >= len(typed):
            states.append(CharState.PENDING)
        elif typed[i] == ch:
            states.append(CharState.CORRECT)
        else:
            states.append(CharState.INCORRECT)
    return states
