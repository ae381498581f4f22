import random
from enum import Enum
from typing import List, Optional, Tuple
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr


class Difficulty(str, Enum):
    ANY = "any"
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @property
    def display_name(self) -> str:
        if self is Difficulty.ANY:
            return "Any Difficulty"
        return self.value.capitalize()


class QuestionType(str, Enum):
    ANY = "any"
    MULTIPLE = "multiple"
    BOOLEAN = "boolean"

    @property
    def display_name(self) -> str:
        return {
            QuestionType.ANY: "Any Type",
            QuestionType.MULTIPLE: "Multiple Choice",
            QuestionType.BOOLEAN: "True/False",
        }[self]


class Category(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    name: str


class Question(BaseModel):
    """A trivia question with its answer order fixed at construction."""

    id: UUID = Field(default_factory=uuid4)
    category: str
    type: str
    difficulty: str
    prompt: str
    correct_answer: str
    incorrect_answers: List[str] = Field(default_factory=list)
    user_answer: Optional[str] = None

    _shuffled_answers: Tuple[str, ...] = PrivateAttr(default=())

    def model_post_init(self, __context) -> None:
        answers = list(self.incorrect_answers)
        answers.append(self.correct_answer)
        random.shuffle(answers)
        self._shuffled_answers = tuple(answers)

    @property
    def shuffled_answers(self) -> Tuple[str, ...]:
        return self._shuffled_answers

    @property
    def is_answered(self) -> bool:
        return self.user_answer is not None

    @property
    def is_correct(self) -> bool:
        return self.user_answer == self.correct_answer


# Wire format of the Open Trivia DB endpoints

class CategoryResponse(BaseModel):
    trivia_categories: List[Category]


class RawQuestion(BaseModel):
    category: str
    type: str
    difficulty: str
    question: str
    correct_answer: str
    incorrect_answers: List[str]


class TriviaResponse(BaseModel):
    response_code: int
    results: List[RawQuestion] = Field(default_factory=list)
