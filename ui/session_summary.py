# ui/session_summary.py
from __future__ import annotations
from PySide6.QtWidgets import QDialog, QVBoxLayout, QHBoxLayout, QLabel, QPushButton, QGroupBox
import pyqtgraph as pg

from services.metrics_engine import MetricsSnapshot
from ui.formatting import format_error, format_pause, stat_labels
from utils.graph_helper import setup_pause_bars, update_bars


class SessionSummary(QDialog):
    """
    "Detailed Analysis" shown when a passage is completed: headline stats,
    pause analysis with a bar chart, error details and suggestions.
    Accepting the dialog means "try again".
    """

    def __init__(self, snapshot: MetricsSnapshot, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Detailed Analysis")
        self.resize(720, 560)
        self.snapshot = snapshot

        root = QVBoxLayout(self)

        stats = QHBoxLayout()
        for name, value in stat_labels(snapshot).items():
            stats.addWidget(QLabel(f"{name}: {value}", self))
        root.addLayout(stats)

        if snapshot.pauses:
            box = QGroupBox("Pause Analysis", self)
            lay = QVBoxLayout(box)
            for pause in snapshot.pauses:
                lay.addWidget(QLabel(format_pause(pause), box))

            plot = pg.PlotWidget()
            bars = setup_pause_bars(plot, "#a855f7")
            update_bars(
                bars,
                [p.position + 1 for p in snapshot.pauses],
                [p.duration_ms / 1000.0 for p in snapshot.pauses],
            )
            plot.setMinimumHeight(140)
            lay.addWidget(plot)
            root.addWidget(box)

        if snapshot.errors:
            box = QGroupBox("Error Details", self)
            lay = QVBoxLayout(box)
            for error in snapshot.errors:
                lay.addWidget(QLabel(format_error(error), box))
            root.addWidget(box)

        box = QGroupBox("Suggestions for Improvement", self)
        lay = QVBoxLayout(box)
        for suggestion in snapshot.suggestions:
            lbl = QLabel(f"• {suggestion}", box)
            lbl.setWordWrap(True)
            lay.addWidget(lbl)
        root.addWidget(box)

        root.addStretch(1)
        btn = QPushButton("Try Again", self)
        btn.clicked.connect(self.accept)
        root.addWidget(btn)
