from enum import Enum
from typing import NamedTuple


class QuizPhase(str, Enum):
    CONFIGURING = "configuring"
    ACTIVE = "active"
    SUBMITTED = "submitted"


class SubmitReason(str, Enum):
    SUBMITTED = "submitted"  # user pressed submit
    TIMEOUT = "timeout"


class SessionEvent(str, Enum):
    STARTED = "started"
    TICK = "tick"
    ANSWER_SELECTED = "answer_selected"
    SUBMITTED = "submitted"
    TIMED_OUT = "timed_out"
    RESET = "reset"


class Score(NamedTuple):
    correct: int
    total: int

    @property
    def percentage(self) -> int:
        if self.total == 0:
            return 0
        return int(self.correct / self.total * 100)
