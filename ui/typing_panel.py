from __future__ import annotations

from PySide6.QtCore import Qt, QTimer, Signal, Slot
from PySide6.QtWidgets import QWidget, QLabel, QLineEdit, QVBoxLayout, QHBoxLayout, QSizePolicy

from app.calculation import CharState, character_states
from app.errors import SessionFinishedError
from services.session_controller import SessionController
from ui.formatting import passage_html, stat_labels


class TypingPanel(QWidget):
    """Passage display, input box and live stats row for one controller."""

    finished = Signal(object)  # MetricsSnapshot

    def __init__(self, controller: SessionController, parent=None):
        super().__init__(parent)
        self.controller = controller

        root = QVBoxLayout(self)
        root.setContentsMargins(0, 30, 0, 30)
        root.setSpacing(28)

        self.lblLine = QLabel("", self)
        self.lblLine.setObjectName("lblLine")
        self.lblLine.setTextFormat(Qt.RichText)
        self.lblLine.setWordWrap(True)
        self.lblLine.setAlignment(Qt.AlignCenter)
        self.lblLine.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)
        self.lblLine.setMinimumWidth(700)
        self.lblLine.setStyleSheet("font-size: 26px; font-family: monospace;")
        root.addWidget(self.lblLine, stretch=1)

        self.input = QLineEdit(self)
        self.input.setObjectName("typingInput")
        self.input.setPlaceholderText("Start typing here...")
        self.input.setStyleSheet("font-size: 20px; padding: 10px;")
        self.input.textEdited.connect(self.on_text_edited)
        root.addWidget(self.input)

        stats = QHBoxLayout()
        stats.setSpacing(40)
        self.stat_values = {}
        for name in ("WPM", "Accuracy", "Errors", "Time"):
            lab = QLabel("", self)
            lab.setObjectName(f"lbl{name}")
            lab.setAlignment(Qt.AlignCenter)
            stats.addWidget(lab)
            self.stat_values[name] = lab
        root.addLayout(stats)

        self._colors = {
            CharState.PENDING: "#9aa1a9",
            CharState.CORRECT: "#22c55e",
            CharState.INCORRECT: "#ef4444",
        }

        # poll the live snapshot; the controller's own ticker keeps it fresh
        self._ui_tick = QTimer(self)
        self._ui_tick.setInterval(100)
        self._ui_tick.timeout.connect(self.refresh_metrics)
        self._ui_tick.start()

        self.reset_view()

    def reset_view(self):
        self.input.blockSignals(True)
        self.input.clear()
        self.input.blockSignals(False)
        self.input.setEnabled(True)
        self.input.setFocus()
        for lab in self.stat_values.values():
            lab.setVisible(False)
        self._render_line()

    @Slot(str)
    def on_text_edited(self, text: str):
        try:
            result = self.controller.on_keystroke(text)
        except SessionFinishedError:
            self.input.setEnabled(False)
            return
        self._render_line()
        if result.finished:
            self.input.setEnabled(False)
            self._show_stats(result.final_snapshot)
            self.finished.emit(result.final_snapshot)
        else:
            self.refresh_metrics()

    def refresh_metrics(self):
        # the final snapshot is shown once by on_text_edited
        if self.controller.session.finished:
            return
        snap = self.controller.get_live_snapshot()
        if snap is not None:
            self._show_stats(snap)

    def _show_stats(self, snap):
        for name, value in stat_labels(snap).items():
            lab = self.stat_values[name]
            lab.setText(f"{name}: {value}")
            lab.setVisible(True)

    def _render_line(self):
        s = self.controller.session
        states = character_states(s.target_text, s.current_input)
        self.lblLine.setText(passage_html(s.target_text, states, self._colors))
