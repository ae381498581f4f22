from collections import Counter

import pytest

from models.session import Score
from models.trivia import Category, Difficulty, Question, QuestionType


def make_question(**overrides):
    data = dict(
        category="General Knowledge",
        type="multiple",
        difficulty="easy",
        prompt="Capital of France?",
        correct_answer="Paris",
        incorrect_answers=["London", "Berlin", "Madrid"],
    )
    data.update(overrides)
    return Question(**data)


def test_shuffled_answers_is_union_of_correct_and_incorrect():
    for _ in range(50):
        question = make_question()
        assert Counter(question.shuffled_answers) == Counter(["London", "Berlin", "Madrid", "Paris"])


def test_shuffled_answers_keeps_duplicates():
    question = make_question(correct_answer="A", incorrect_answers=["A", "B"])
    assert Counter(question.shuffled_answers) == Counter(["A", "A", "B"])


def test_shuffled_answers_fixed_after_construction():
    question = make_question()
    first = question.shuffled_answers
    assert question.shuffled_answers == first

    # Answering or mutating the source list must not reshuffle
    question.user_answer = "Paris"
    question.incorrect_answers.append("Rome")
    assert question.shuffled_answers == first


def test_shuffle_eventually_moves_correct_answer():
    positions = {make_question().shuffled_answers.index("Paris") for _ in range(200)}
    assert len(positions) > 1


def test_question_ids_are_unique():
    ids = {make_question().id for _ in range(100)}
    assert len(ids) == 100


def test_is_correct_uses_exact_match():
    question = make_question()
    assert not question.is_answered
    assert not question.is_correct

    question.user_answer = "paris"
    assert question.is_answered
    assert not question.is_correct

    question.user_answer = "Paris"
    assert question.is_correct


def test_category_is_immutable():
    category = Category(id=9, name="General Knowledge")
    with pytest.raises(Exception):
        category.name = "Other"


def test_enum_display_names():
    assert Difficulty.ANY.display_name == "Any Difficulty"
    assert Difficulty.HARD.display_name == "Hard"
    assert QuestionType.BOOLEAN.display_name == "True/False"
    assert QuestionType.MULTIPLE.display_name == "Multiple Choice"


@pytest.mark.parametrize("correct,total,percent", [(2, 3, 66), (0, 5, 0), (5, 5, 100), (0, 0, 0)])
def test_score_percentage(correct, total, percent):
    assert Score(correct, total).percentage == percent
