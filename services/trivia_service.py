from enum import Enum
from typing import Any, Awaitable, Callable, Dict, List, Optional

import httpx
import pydantic

from constants.messages import Messages
from core.config import settings
from core.exceptions import ApiError, DecodeError, NetworkError, TriviaError, ValidationError
from core.logger import logger
from models.trivia import (
    Category,
    CategoryResponse,
    Difficulty,
    Question,
    QuestionType,
    RawQuestion,
    TriviaResponse,
)
from utils.html_text import decode_all, decode_or_raw

CompletionCallback = Callable[[bool], Awaitable[None]]


class ProviderEvent(str, Enum):
    LOADING_STARTED = "loading_started"
    LOADING_FINISHED = "loading_finished"
    CATEGORIES_UPDATED = "categories_updated"
    QUESTIONS_UPDATED = "questions_updated"
    ERROR = "error"


ProviderListener = Callable[[ProviderEvent, "TriviaService"], None]


def build_question_params(
    amount: int,
    category_id: int = 0,
    difficulty: Difficulty = Difficulty.ANY,
    question_type: QuestionType = QuestionType.ANY,
) -> Dict[str, str]:
    """Query for api.php. "Any" values are left out: the API reads absence as unrestricted."""
    if not isinstance(amount, int) or not settings.MIN_QUESTIONS <= amount <= settings.MAX_QUESTIONS:
        raise ValidationError(
            Messages.get("INVALID_QUESTION_COUNT").format(min=settings.MIN_QUESTIONS, max=settings.MAX_QUESTIONS)
        )

    params = {"amount": str(amount)}
    if category_id:
        params["category"] = str(category_id)
    difficulty = Difficulty(difficulty)
    if difficulty is not Difficulty.ANY:
        params["difficulty"] = difficulty.value
    question_type = QuestionType(question_type)
    if question_type is not QuestionType.ANY:
        params["type"] = question_type.value
    return params


def question_from_raw(raw: RawQuestion) -> Question:
    """Build a Question with decoded text; each field falls back to its raw value."""
    return Question(
        category=decode_or_raw(raw.category),
        type=raw.type,
        difficulty=raw.difficulty,
        prompt=decode_or_raw(raw.question),
        correct_answer=decode_or_raw(raw.correct_answer),
        incorrect_answers=decode_all(raw.incorrect_answers),
    )


class TriviaService:
    """Client for the Open Trivia DB plus the state the quiz screen observes.

    Exposes ``categories``, ``questions``, ``is_loading`` and
    ``error_message``. Callers must not start a second question fetch while
    one is pending (``is_loading_questions``); the service does not lock.
    """

    CATEGORY_PATH = "/api_category.php"
    QUESTIONS_PATH = "/api.php"

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self.base_url = (base_url or settings.OPENTDB_BASE_URL).rstrip("/")
        self.timeout = settings.HTTP_TIMEOUT_SECONDS if timeout is None else timeout
        self._client = client
        self._owns_client = client is None
        self._listeners: List[ProviderListener] = []

        self.categories: List[Category] = []
        self.questions: List[Question] = []
        self.error_message: Optional[str] = None
        self._pending = 0
        self._pending_questions = 0

    # --- Observable state ---

    @property
    def is_loading(self) -> bool:
        return self._pending > 0

    @property
    def is_loading_questions(self) -> bool:
        return self._pending_questions > 0

    def subscribe(self, listener: ProviderListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, event: ProviderEvent):
        for listener in list(self._listeners):
            try:
                listener(event, self)
            except Exception:
                logger.exception("Provider listener failed", provider_event=event.value)

    def _begin(self, questions: bool = False):
        self._pending += 1
        if questions:
            self._pending_questions += 1
        if self._pending == 1:
            self._notify(ProviderEvent.LOADING_STARTED)

    def _end(self, questions: bool = False):
        self._pending -= 1
        if questions:
            self._pending_questions -= 1
        if self._pending == 0:
            self._notify(ProviderEvent.LOADING_FINISHED)

    def _fail(self, error: TriviaError):
        self.error_message = error.message
        self._notify(ProviderEvent.ERROR)

    async def _complete(self, on_complete: Optional[CompletionCallback], success: bool):
        if on_complete is None:
            return
        try:
            await on_complete(success)
        except Exception:
            logger.exception("Completion callback failed", success=success)

    # --- HTTP ---

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
            self._owns_client = True
        return self._client

    async def _get_json(self, path: str, params: Optional[Dict[str, str]], failed_key: str,
                        no_data_key: str, decode_key: str) -> Any:
        url = f"{self.base_url}{path}"
        try:
            response = await self._get_client().get(url, params=params)
            response.raise_for_status()
        except httpx.InvalidURL as e:
            logger.error("Invalid trivia URL", url=url, error=str(e))
            raise NetworkError(Messages.get("INVALID_URL")) from e
        except httpx.HTTPError as e:
            logger.error("Trivia request failed", url=url, error=str(e))
            raise NetworkError(Messages.get(failed_key).format(error=str(e) or type(e).__name__)) from e

        if not response.content:
            logger.error("Trivia response was empty", url=url)
            raise NetworkError(Messages.get(no_data_key))

        try:
            return response.json()
        except ValueError as e:
            logger.error("Trivia response is not JSON", url=url, error=str(e))
            raise DecodeError(Messages.get(decode_key).format(error=str(e))) from e

    # --- Operations ---

    async def start(self) -> bool:
        """Initial category load. Failures stay on ``error_message``."""
        try:
            await self.fetch_categories()
        except TriviaError:
            return False
        return True

    async def fetch_categories(self, on_complete: Optional[CompletionCallback] = None) -> List[Category]:
        """Fetch the category list. The previous list is kept if this fails."""
        self._begin()
        success = False
        try:
            data = await self._get_json(
                self.CATEGORY_PATH, None,
                failed_key="CATEGORIES_FETCH_FAILED",
                no_data_key="CATEGORIES_NO_DATA",
                decode_key="CATEGORIES_DECODE_FAILED",
            )
            try:
                payload = CategoryResponse.model_validate(data)
            except pydantic.ValidationError as e:
                logger.error("Unexpected category payload", error=str(e))
                raise DecodeError(Messages.get("CATEGORIES_DECODE_FAILED").format(error=str(e))) from e

            self.categories = list(payload.trivia_categories)
            success = True
            logger.info("Categories fetched", count=len(self.categories))
            self._notify(ProviderEvent.CATEGORIES_UPDATED)
            return self.categories
        except TriviaError as e:
            self._fail(e)
            raise
        finally:
            self._end()
            await self._complete(on_complete, success)

    async def fetch_questions(
        self,
        amount: Optional[int] = None,
        category_id: int = 0,
        difficulty: Difficulty = Difficulty.ANY,
        question_type: QuestionType = QuestionType.ANY,
        on_complete: Optional[CompletionCallback] = None,
    ) -> List[Question]:
        """Fetch a fresh batch of questions, replacing the current one on success."""
        if amount is None:
            amount = settings.DEFAULT_QUESTION_COUNT

        self._begin(questions=True)
        self.error_message = None
        success = False
        try:
            params = build_question_params(amount, category_id, difficulty, question_type)
            data = await self._get_json(
                self.QUESTIONS_PATH, params,
                failed_key="QUESTIONS_FETCH_FAILED",
                no_data_key="QUESTIONS_NO_DATA",
                decode_key="QUESTIONS_DECODE_FAILED",
            )
            try:
                payload = TriviaResponse.model_validate(data)
            except pydantic.ValidationError as e:
                logger.error("Unexpected question payload", error=str(e))
                raise DecodeError(Messages.get("QUESTIONS_DECODE_FAILED").format(error=str(e))) from e

            if payload.response_code != 0:
                message = "{} ({})".format(
                    Messages.get("API_ERROR").format(code=payload.response_code),
                    Messages.describe_api_code(payload.response_code),
                )
                logger.warning("Trivia API returned an error", response_code=payload.response_code)
                raise ApiError(payload.response_code, message)

            questions = [question_from_raw(raw) for raw in payload.results]
            self.questions = questions
            success = True
            logger.info("Questions fetched", requested=amount, received=len(questions), **params)
            self._notify(ProviderEvent.QUESTIONS_UPDATED)
            return questions
        except TriviaError as e:
            self._fail(e)
            raise
        finally:
            self._end(questions=True)
            await self._complete(on_complete, success)

    async def aclose(self):
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.aclose()
