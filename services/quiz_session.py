from threading import RLock
from typing import Callable, Dict, List, Optional, Sequence
from uuid import UUID

from constants.messages import Messages
from core.exceptions import QuizStateError, ValidationError
from core.logger import logger
from models.session import QuizPhase, Score, SessionEvent, SubmitReason
from models.trivia import Question
from services.countdown import Countdown

SessionListener = Callable[[SessionEvent, "QuizSession"], None]


class QuizSession:
    """In-memory quiz state machine: configuring -> active -> submitted.

    Every transition runs under one re-entrant lock, so a countdown tick and a
    submit that arrive together resolve in arrival order and the loser is a
    no-op. Listeners get exactly one event per state change, after the lock
    is released.
    """

    def __init__(self, countdown: Optional[Countdown] = None):
        self._lock = RLock()
        self._countdown = countdown
        self._listeners: List[SessionListener] = []

        self._phase = QuizPhase.CONFIGURING
        self._questions: List[Question] = []
        self._by_id: Dict[UUID, Question] = {}
        self._timer_duration = 0
        self._time_remaining = 0
        self._score: Optional[Score] = None
        self._submit_reason: Optional[SubmitReason] = None

    # --- Observation ---

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        """Register a listener; returns a function that removes it."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit(self, event: SessionEvent):
        for listener in list(self._listeners):
            try:
                listener(event, self)
            except Exception:
                logger.exception("Session listener failed", session_event=event.value)

    @property
    def phase(self) -> QuizPhase:
        return self._phase

    @property
    def questions(self) -> List[Question]:
        with self._lock:
            return list(self._questions)

    @property
    def timer_duration_seconds(self) -> int:
        return self._timer_duration

    @property
    def time_remaining_seconds(self) -> int:
        return self._time_remaining

    @property
    def score(self) -> Optional[Score]:
        return self._score

    @property
    def submit_reason(self) -> Optional[SubmitReason]:
        return self._submit_reason

    @property
    def answered_count(self) -> int:
        with self._lock:
            return sum(1 for q in self._questions if q.is_answered)

    @property
    def unanswered_count(self) -> int:
        with self._lock:
            return len(self._questions) - self.answered_count

    def get_question(self, question_id: UUID) -> Optional[Question]:
        return self._by_id.get(question_id)

    # --- Transitions ---

    def start_quiz(self, questions: Sequence[Question], timer_duration_seconds: int):
        """Configuring -> Active with a fresh batch of questions."""
        if not questions:
            raise ValidationError(Messages.get("EMPTY_QUESTIONS"))
        if timer_duration_seconds <= 0:
            raise ValidationError(Messages.get("TIMER_NOT_POSITIVE"))

        with self._lock:
            if self._phase is not QuizPhase.CONFIGURING:
                raise QuizStateError(
                    Messages.get("INVALID_TRANSITION").format(action="start a quiz", phase=self._phase.value)
                )
            # Needs a running loop; nothing has changed yet if this raises
            if self._countdown is not None:
                self._countdown.start(self.tick)
            self._questions = list(questions)
            for question in self._questions:
                question.user_answer = None
            self._by_id = {q.id: q for q in self._questions}
            self._timer_duration = timer_duration_seconds
            self._time_remaining = timer_duration_seconds
            self._score = None
            self._submit_reason = None
            self._phase = QuizPhase.ACTIVE

        logger.info("Quiz started", questions=len(self._questions), timer=timer_duration_seconds)
        self._emit(SessionEvent.STARTED)

    def tick(self) -> bool:
        """One countdown second. Returns False once there is nothing left to count."""
        with self._lock:
            if self._phase is not QuizPhase.ACTIVE or self._time_remaining <= 0:
                return False
            self._time_remaining -= 1
            timed_out = self._time_remaining == 0
            if timed_out:
                self._finish(SubmitReason.TIMEOUT)
            score = self._score

        self._emit(SessionEvent.TICK)
        if timed_out:
            logger.info("Quiz timed out", score=score.correct, total=score.total)
            self._emit(SessionEvent.TIMED_OUT)
        return True

    def select_answer(self, question_id: UUID, answer: str) -> bool:
        """Record the user's pick. Ignored unless the quiz is active."""
        with self._lock:
            if self._phase is not QuizPhase.ACTIVE:
                logger.debug("Answer ignored", phase=self._phase.value)
                return False
            question = self._by_id.get(question_id)
            if question is None:
                logger.warning("Answer for unknown question ignored", question_id=str(question_id))
                return False
            question.user_answer = answer

        self._emit(SessionEvent.ANSWER_SELECTED)
        return True

    def submit_answers(self) -> bool:
        """Active -> Submitted on the user's request."""
        with self._lock:
            if self._phase is not QuizPhase.ACTIVE:
                return False
            self._finish(SubmitReason.SUBMITTED)
            score = self._score

        logger.info("Answers submitted", score=score.correct, total=score.total)
        self._emit(SessionEvent.SUBMITTED)
        return True

    def reset_session(self):
        """Back to configuring; drops questions, selections and score."""
        with self._lock:
            if self._countdown is not None:
                self._countdown.cancel()
            for question in self._questions:
                question.user_answer = None
            self._questions = []
            self._by_id = {}
            self._time_remaining = self._timer_duration
            self._score = None
            self._submit_reason = None
            self._phase = QuizPhase.CONFIGURING

        logger.info("Quiz session reset")
        self._emit(SessionEvent.RESET)

    def calculate_score(self) -> Score:
        with self._lock:
            correct = sum(1 for q in self._questions if q.is_correct)
            return Score(correct=correct, total=len(self._questions))

    def _finish(self, reason: SubmitReason):
        # Caller holds the lock and has checked the phase
        if self._countdown is not None:
            self._countdown.cancel()
        self._score = self.calculate_score()
        self._submit_reason = reason
        self._phase = QuizPhase.SUBMITTED
