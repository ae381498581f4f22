from typing import Optional, Union
from uuid import UUID

import httpx

from constants.messages import Messages
from core.config import settings
from core.exceptions import TriviaError, ValidationError
from core.logger import logger
from models.session import QuizPhase
from models.trivia import Difficulty, QuestionType
from services.countdown import Countdown
from services.quiz_session import QuizSession
from services.trivia_service import TriviaService


def validate_question_count(value: Union[int, str]) -> int:
    """Parse the "Number of Questions" field; must be an integer in range."""
    message = Messages.get("INVALID_QUESTION_COUNT").format(
        min=settings.MIN_QUESTIONS, max=settings.MAX_QUESTIONS
    )
    if isinstance(value, bool):
        raise ValidationError(message)
    if isinstance(value, str):
        value = value.strip()
        if not value.isdecimal():
            raise ValidationError(message)
        value = int(value)
    if not isinstance(value, int) or not settings.MIN_QUESTIONS <= value <= settings.MAX_QUESTIONS:
        raise ValidationError(message)
    return value


def validate_timer_duration(value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int) \
            or not settings.MIN_TIMER_SECONDS <= value <= settings.MAX_TIMER_SECONDS:
        raise ValidationError(
            Messages.get("INVALID_TIMER_DURATION").format(
                min=settings.MIN_TIMER_SECONDS, max=settings.MAX_TIMER_SECONDS
            )
        )
    return value


class QuizController:
    """The quiz screen's flow: validate the form, fetch, then run the session."""

    def __init__(self, trivia_service: TriviaService, session: QuizSession):
        self.trivia_service = trivia_service
        self.session = session
        self.error_message: Optional[str] = None

    @property
    def is_busy(self) -> bool:
        return self.trivia_service.is_loading_questions

    async def start_quiz(
        self,
        amount: Union[int, str] = None,
        category_id: int = 0,
        difficulty: Difficulty = Difficulty.ANY,
        question_type: QuestionType = QuestionType.ANY,
        timer_duration: int = None,
    ) -> bool:
        """Start a quiz. Returns False, with ``error_message`` set, if it could not."""
        if amount is None:
            amount = settings.DEFAULT_QUESTION_COUNT
        if timer_duration is None:
            timer_duration = settings.DEFAULT_TIMER_SECONDS

        try:
            amount = validate_question_count(amount)
            timer_duration = validate_timer_duration(timer_duration)
        except ValidationError as e:
            self.error_message = e.message
            logger.info("Quiz configuration rejected", error=e.message)
            return False

        if self.is_busy:
            self.error_message = Messages.get("FETCH_IN_PROGRESS")
            logger.warning("Quiz start ignored, fetch already pending")
            return False

        if self.session.phase is not QuizPhase.CONFIGURING:
            self.error_message = Messages.get("INVALID_TRANSITION").format(
                action="start a quiz", phase=self.session.phase.value
            )
            return False

        self.error_message = None
        try:
            questions = await self.trivia_service.fetch_questions(
                amount=amount,
                category_id=category_id,
                difficulty=difficulty,
                question_type=question_type,
            )
            self.session.start_quiz(questions, timer_duration)
        except TriviaError as e:
            self.error_message = e.message
            logger.warning("Quiz could not start", error=e.message, error_type=type(e).__name__)
            return False
        return True

    def select_answer(self, question_id: UUID, answer: str) -> bool:
        return self.session.select_answer(question_id, answer)

    def submit_answers(self) -> bool:
        return self.session.submit_answers()

    def reset(self):
        self.error_message = None
        self.session.reset_session()


def create_quiz_controller(client: Optional[httpx.AsyncClient] = None) -> QuizController:
    """Wire provider, session and a one-second countdown together."""
    return QuizController(TriviaService(client=client), QuizSession(countdown=Countdown()))
