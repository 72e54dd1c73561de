# ui/formatting.py
from datetime import datetime
from typing import Dict

from app.calculation import CharState
from app.state import PauseRecord
from services.metrics_engine import ErrorRecord, MetricsSnapshot


def format_pause(pause: PauseRecord) -> str:
    return f"Paused for {pause.duration_ms / 1000.0:.1f}s at character '{pause.character}'"


def format_error(error: ErrorRecord) -> str:
    actual = error.actual or "nothing"
    return f"Position {error.position + 1}: Expected '{error.expected}' but got '{actual}'"


def format_timestamp(ts: float) -> str:
    return datetime.fromtimestamp(ts).strftime("%Y-%m-%d %H:%M:%S")


def stat_labels(snap: MetricsSnapshot) -> Dict[str, str]:
    return {
        "WPM": str(snap.speed_wpm),
        "Accuracy": f"{snap.accuracy_pct}%",
        "Errors": str(snap.error_count),
        "Time": f"{snap.elapsed_seconds}s",
    }


def passage_html(target: str, states, colors: Dict[CharState, str]) -> str:
    """Coloured rich-text rendering of the passage, one span per character."""
    parts = []
    for ch, state in zip(target, states):
        glyph = {"&": "&amp;", "<": "&lt;", ">": "&gt;", " ": "&nbsp;"}.get(ch, ch)
        parts.append(f'<span style="color:{colors[state]}">{glyph}</span>')
    return "".join(parts)
