from .scheduler import EvaluationResult, apply_evaluation, select_next, is_due
from .quiz import QuizCard, build_quiz_card, correct_choice, grade_quiz_answer
from .stats import summarize

__all__ = [
    "EvaluationResult",
    "apply_evaluation",
    "select_next",
    "is_due",
    "QuizCard",
    "build_quiz_card",
    "correct_choice",
    "grade_quiz_answer",
    "summarize",
]
