# ui/history_dialog.py
from typing import Sequence

from PySide6.QtWidgets import (
    QDialog, QVBoxLayout, QLabel, QPushButton, QScrollArea, QWidget, QFrame
)
import pyqtgraph as pg

from services.metrics_engine import MetricsSnapshot
from ui.formatting import format_timestamp, stat_labels
from utils.graph_helper import setup_wpm_plot, update_curve


class HistoryDialog(QDialog):
    def __init__(self, history: Sequence[MetricsSnapshot], parent=None):
        """
        history: snapshots, most recent first (as returned by get_history()).
        """
        super().__init__(parent)
        self.setWindowTitle("Typing History")
        self.resize(760, 600)

        root = QVBoxLayout(self)

        if not history:
            root.addWidget(QLabel("No completed passages yet.", self))
        else:
            # plot oldest -> newest
            self.plot = pg.PlotWidget()
            curve = setup_wpm_plot(self.plot, "#eab308")
            update_curve(curve, [float(s.speed_wpm) for s in reversed(history)])
            self.plot.setMinimumHeight(160)
            root.addWidget(self.plot)

            body = QWidget()
            lay = QVBoxLayout(body)
            for snap in history:
                lay.addWidget(self._record_card(snap, body))
            lay.addStretch(1)

            scroll = QScrollArea(self)
            scroll.setWidgetResizable(True)
            scroll.setWidget(body)
            root.addWidget(scroll, stretch=1)

        btn = QPushButton("Back to Typing Test", self)
        btn.clicked.connect(self.accept)
        root.addWidget(btn)

    def _record_card(self, snap: MetricsSnapshot, parent) -> QFrame:
        card = QFrame(parent)
        card.setFrameShape(QFrame.StyledPanel)
        lay = QVBoxLayout(card)
        stats = "   ".join(f"{k}: {v}" for k, v in stat_labels(snap).items())
        lay.addWidget(QLabel(stats, card))
        lay.addWidget(QLabel(format_timestamp(snap.created_at), card))
        text = QLabel(f'"{snap.source_text}"', card)
        text.setWordWrap(True)
        lay.addWidget(text)
        for suggestion in snap.suggestions:
            lbl = QLabel(f"• {suggestion}", card)
            lbl.setWordWrap(True)
            lay.addWidget(lbl)
        return card
