from typing import Optional, Tuple

from constants.messages import Messages
from models.session import Score, SubmitReason
from models.trivia import Difficulty, Question


def format_time(total_seconds: int) -> str:
    """Seconds as MM:SS."""
    total_seconds = max(0, int(total_seconds))
    minutes, seconds = divmod(total_seconds, 60)
    return f"{minutes:02d}:{seconds:02d}"


def timer_urgency(time_remaining: int, timer_duration: int) -> str:
    """'critical' under a quarter of the time, 'warning' under half, else 'normal'."""
    quarter_time = timer_duration // 4
    half_time = timer_duration // 2
    if time_remaining < quarter_time:
        return "critical"
    if time_remaining < half_time:
        return "warning"
    return "normal"


def timer_progress(time_remaining: int, timer_duration: int) -> float:
    if timer_duration <= 0:
        return 0.0
    return max(0.0, min(1.0, time_remaining / timer_duration))


def score_grade(score: Score) -> str:
    if score.total == 0:
        return "poor"
    ratio = score.correct / score.total
    if ratio >= 0.8:
        return "excellent"
    elif ratio >= 0.6:
        return "good"
    elif ratio >= 0.4:
        return "fair"
    return "poor"


def difficulty_from_slider(value: float) -> Difficulty:
    """The form's difficulty slider runs 0..2 (easy..hard)."""
    return {
        0: Difficulty.EASY,
        1: Difficulty.MEDIUM,
        2: Difficulty.HARD,
    }.get(int(value), Difficulty.ANY)


def answer_state(question: Question, answer: str, submitted: bool) -> str:
    """How one answer row should look.

    Before submitting: 'selected' or 'unselected'. After: the correct answer
    is 'correct', a wrong pick is 'incorrect', everything else 'unselected'.
    """
    picked = question.user_answer == answer
    if not submitted:
        return "selected" if picked else "unselected"
    if answer == question.correct_answer:
        return "correct"
    if picked:
        return "incorrect"
    return "unselected"


def result_summary(score: Score, lang: Optional[str] = None) -> str:
    lang = lang or Messages.DEFAULT_LANG
    return "{}\n{}".format(
        Messages.get("RESULTS_SUMMARY", lang).format(correct=score.correct, total=score.total),
        Messages.get("RESULTS_PERCENT", lang).format(percent=score.percentage),
    )


def completion_notice(reason: SubmitReason, score: Score, lang: Optional[str] = None) -> Tuple[str, str]:
    """Title and body of the popup shown when the quiz ends."""
    lang = lang or Messages.DEFAULT_LANG
    if reason is SubmitReason.TIMEOUT:
        return Messages.get("TIME_UP_TITLE", lang), Messages.get("TIME_UP_BODY", lang)
    return Messages.get("RESULTS_TITLE", lang), result_summary(score, lang)
