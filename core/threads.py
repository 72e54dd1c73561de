# core/threads.py
import logging

from PySide6.QtCore import QObject, QRunnable, QThreadPool, Signal

from utils.file_handler import load_passages

log = logging.getLogger(__name__)

class PassageLoadWorkerSignals(QObject):
    loaded = Signal(list)
    failed = Signal(str)

class PassageLoadWorker(QRunnable):
    def __init__(self, path: str):
        super().__init__()
        self.path = path
        self.signals = PassageLoadWorkerSignals()

    def run(self):
        try:
            passages = load_passages(self.path)
        except Exception as e:
            log.exception("Loading passages from %s failed", self.path)
            self.signals.failed.emit(str(e))
            return
        self.signals.loaded.emit(passages)

class Workers:
    pool = QThreadPool.globalInstance()
