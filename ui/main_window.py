# ui/main_window.py
import logging

from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout,
    QFileDialog, QMessageBox, QPushButton
)
from PySide6.QtCore import Qt

from app.config import APP_NAME
from core.chrono import QtScheduler
from core.threads import PassageLoadWorker, Workers
from services.session_controller import SessionController
from ui.history_dialog import HistoryDialog
from ui.session_summary import SessionSummary
from ui.typing_panel import TypingPanel
from utils.file_handler import load_passages

log = logging.getLogger(__name__)

STYLE = """
QWidget { background: #0f1115; color: #e5e7eb; }
QWidget#TopBar {
    background: rgba(255,255,255,0.04);
    border: 1px solid rgba(255,255,255,0.08);
    border-radius: 14px;
}
QPushButton#TopBtn {
    background: transparent;
    border: 1px solid rgba(255,255,255,0.10);
    border-radius: 9px;
    padding: 6px 12px;
}
QPushButton#TopBtn:hover {
    border-color: rgba(255,255,255,0.32);
    background: rgba(255,255,255,0.06);
}
QLabel#lblWPM { color: #eab308; }
"""


class MainWindow(QMainWindow):
    def __init__(self, controller: SessionController = None):
        super().__init__()
        self.setWindowTitle(APP_NAME)
        self.resize(1000, 600)

        self.controller = controller or SessionController(
            load_passages(), scheduler=QtScheduler(self)
        )
        self.controller.new_passage()

        root = QWidget(self)
        root_v = QVBoxLayout(root)
        root_v.setContentsMargins(16, 40, 16, 16)
        root_v.setSpacing(24)
        self._build_top_bar(root_v)

        self.panel = TypingPanel(self.controller, self)
        self.panel.finished.connect(self._on_finished)
        root_v.addWidget(self.panel, 1)

        btn_again = QPushButton("Try Again", root)
        btn_again.setObjectName("TopBtn")
        btn_again.setFocusPolicy(Qt.NoFocus)
        btn_again.clicked.connect(self._try_again)
        root_v.addWidget(btn_again, 0, Qt.AlignHCenter)

        self.setCentralWidget(root)
        self.setStyleSheet(STYLE)
        self.panel.input.setFocus()

    # ---------------- Top Bar ----------------
    def _build_top_bar(self, parent_layout):
        bar = QWidget(self)
        bar.setObjectName("TopBar")
        h = QHBoxLayout(bar)
        h.setContentsMargins(14, 16, 14, 16)
        h.setSpacing(10)

        for label, handler in [
            ("View history", self._open_history),
            ("Load passages…", self._on_load),
        ]:
            button = QPushButton(label, bar)
            button.clicked.connect(handler)
            button.setObjectName("TopBtn")
            # keep keyboard focus in the input box
            button.setFocusPolicy(Qt.NoFocus)
            h.addWidget(button)

        h.addStretch(1)
        parent_layout.addWidget(bar)

    # ---------------- Session ----------------
    def _try_again(self):
        self.controller.new_passage()
        self.panel.reset_view()

    def _on_finished(self, snapshot):
        self.setWindowTitle(f"{APP_NAME} — {snapshot.speed_wpm} WPM")
        if SessionSummary(snapshot, self).exec():
            self._try_again()

    def _open_history(self):
        HistoryDialog(self.controller.get_history(), self).exec()
        self.panel.input.setFocus()

    # ---------------- Passage Loading ----------------
    def _on_load(self):
        path, _ = QFileDialog.getOpenFileName(self, "Open passages", "", "Text (*.txt)")
        if not path:
            return
        worker = PassageLoadWorker(path)
        worker.signals.loaded.connect(self._on_loaded_passages)
        worker.signals.failed.connect(self._on_load_failed)
        Workers.pool.start(worker)

    def _on_loaded_passages(self, passages):
        log.info("Loaded %d passages", len(passages))
        self.controller.set_passages(passages)
        self._try_again()

    def _on_load_failed(self, msg):
        QMessageBox.warning(self, "Load passages", msg)

    def closeEvent(self, event):
        self.controller.close()
        super().closeEvent(event)
