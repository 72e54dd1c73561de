from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class SessionStatus(Enum):
    NOT_STARTED = "not_started"
    STARTED = "started"
    FINISHED = "finished"


@dataclass(frozen=True)
class PauseRecord:
    position: int
    duration_ms: int
    character: str


@dataclass
class Session:
    target_text: str = ""
    current_input: str = ""
    start_time: Optional[int] = None  # monotonic ms
    last_event_time: Optional[int] = None
    started: bool = False
    finished: bool = False
    pause_log: List[PauseRecord] = field(default_factory=list)
    generation: int = 0

    def reset(self, text: str):
        self.target_text = text
        self.current_input = ""
        self.start_time = None
        self.last_event_time = None
        self.started = False
        self.finished = False
        self.pause_log.clear()
        self.generation += 1

    @property
    def status(self) -> SessionStatus:
        if self.finished:
            return SessionStatus.FINISHED
        if self.started:
            return SessionStatus.STARTED
        return SessionStatus.NOT_STARTED

    @property
    def is_running(self) -> bool:
        return self.started and not self.finished

    def start(self, now: int):
        if not self.started:
            self.started = True
            self.start_time = now
            self.last_event_time = now

    def finish(self):
        self.finished = True

    def character_at(self, index: int) -> str:
        if 0 <= index < len(self.target_text):
            return self.target_text[index]
        return ""

    def log_pause(self, position: int, duration_ms: int) -> PauseRecord:
        record = PauseRecord(position, duration_ms, self.character_at(position))
        self.pause_log.append(record)
        return record
